"""
Hack Assembler - Main Interface
===============================

This module provides the main Assembler class, which is the primary
interface for assembling Hack source code. It coordinates the parser and
the code generator and writes the output files.

Example Usage
-------------
>>> from hackasm.assembler import Assembler
>>>
>>> asm = Assembler()
>>> asm.assemble_string('''
... (LOOP)
...     @LOOP
...     0;JMP
... ''')
['0000000000000000', '1110101010000111']
>>>
>>> asm.write_hack("Loop.hack")

Command-Line Usage
------------------
    $ hackasm Prog.asm                 # writes Prog.hack
    $ hackasm Prog.asm -l Prog.lst -s Prog.sym

Options:
    -o, --output FILE      Output .hack file
    -l, --listing FILE     Generate listing file
    -s, --symbols FILE     Generate symbol file
    --strict               Report malformed instructions as errors
    -v, --verbose          Verbose output
"""

import logging
from pathlib import Path
from typing import Optional

from hackasm.assembler.codegen import CodeGenerator
from hackasm.assembler.parser import parse_source

logger = logging.getLogger(__name__)

HACK_SUFFIX = ".hack"


def hack_output_path(source_path: str | Path) -> Path:
    """
    Derive the machine code path that sits next to a source file.

    ``Prog.asm`` becomes ``Prog.hack``; a path without a suffix gains one.
    """
    return Path(source_path).with_suffix(HACK_SUFFIX)


class Assembler:
    """
    Main Hack assembler class.

    The assembler supports:
    - A- and C-instructions, labels, and ``//`` comments
    - Predefined symbols (SP, LCL, ARG, THIS, THAT, R0-R15, SCREEN, KBD)
    - Automatic variable allocation from RAM[16]
    - Strict mode for reporting malformed instructions
    - Multiple output formats (.hack, listing, symbols)

    Attributes:
        verbose: If True, log progress at INFO level
        strict: If True, malformed lines and duplicate labels are errors
    """

    def __init__(self, verbose: bool = False, strict: bool = False):
        """
        Initialize the assembler.

        Args:
            verbose: Log progress messages at INFO level instead of DEBUG
            strict: Report unrecognized comp/dest/jump fields, missing
                    operands and duplicate labels as errors. The default is
                    to encode a fallback and carry on.
        """
        self._verbose = verbose
        self._strict = strict
        self._source_file: Optional[Path] = None
        self._codegen = CodeGenerator(strict=strict)

    def _log(self, message: str) -> None:
        logger.log(logging.INFO if self._verbose else logging.DEBUG, message)

    @property
    def verbose(self) -> bool:
        return self._verbose

    @property
    def strict(self) -> bool:
        return self._strict

    # =========================================================================
    # Assembly Methods
    # =========================================================================

    def assemble(self, source: str, filename: str = "<input>",
                 output_path: str | Path | None = None) -> list[str]:
        """
        Assemble source code, optionally writing the .hack file.

        Args:
            source: Assembly source code
            filename: Virtual filename for error messages
            output_path: Optional output file path

        Returns:
            Generated machine code words
        """
        result = self.assemble_string(source, filename)

        if output_path:
            self.write_hack(output_path)

        return result

    def assemble_string(self, source: str, filename: str = "<input>") -> list[str]:
        """
        Assemble source code from a string.

        The assembly pipeline is:
        1. Classify source lines (parser)
        2. Resolve labels (pass 1)
        3. Encode instructions (pass 2)

        Args:
            source: Assembly source code
            filename: Virtual filename for error messages

        Returns:
            One 16-character binary string per real instruction

        Raises:
            AssemblerError: In strict mode, if assembly finds errors
        """
        statements = parse_source(source, filename)
        self._log(f"Parsed {len(statements)} statements from {filename}")

        code = self._codegen.generate(statements)
        self._log(f"Generated {len(code)} instructions")

        return code

    def assemble_file(self, filepath: str | Path) -> list[str]:
        """
        Assemble source code from a file.

        Args:
            filepath: Path to assembly source file

        Returns:
            One 16-character binary string per real instruction

        Raises:
            AssemblerError: In strict mode, if assembly finds errors
            FileNotFoundError: If source file not found
        """
        filepath = Path(filepath)
        self._source_file = filepath

        self._log(f"Assembling {filepath}...")

        # newline="" keeps a lone '\r' inside its line
        with open(filepath, encoding="utf-8", newline="") as f:
            source = f.read()

        return self.assemble_string(source, str(filepath))

    # =========================================================================
    # Output Methods
    # =========================================================================

    def get_code(self) -> list[str]:
        """Get the generated machine code words."""
        return self._codegen.get_code()

    def get_symbols(self) -> dict[str, int]:
        """
        Get the symbol table.

        Returns:
            Dictionary mapping symbol names to addresses, including the
            predefined symbols and any variables allocated in pass 2
        """
        return self._codegen.get_symbols()

    def get_listing(self) -> str:
        """Get the assembly listing as a string."""
        return self._codegen.get_listing()

    def get_source_file(self) -> Optional[Path]:
        """Path of the last file assembled with assemble_file()."""
        return self._source_file

    def write_hack(self, filepath: str | Path) -> None:
        """
        Write the machine code file.

        Args:
            filepath: Output file path
        """
        self._codegen.write_hack(filepath)
        self._log(f"Wrote {filepath}")

    def write_listing(self, filepath: str | Path) -> None:
        """
        Write assembly listing file.

        The listing file shows ROM addresses, generated words, source lines
        and the symbol table.
        """
        self._codegen.write_listing(filepath)
        self._log(f"Wrote listing to {filepath}")

    def write_symbols(self, filepath: str | Path) -> None:
        """Write symbol table file."""
        self._codegen.write_symbols(filepath)
        self._log(f"Wrote symbols to {filepath}")

    # =========================================================================
    # Error Handling
    # =========================================================================

    def has_errors(self) -> bool:
        """
        Check if assembly produced errors.

        Always False in permissive mode.
        """
        return self._codegen.has_errors()

    def get_error_report(self) -> str:
        """Get formatted error report."""
        return self._codegen.get_error_report()


# =============================================================================
# Convenience Functions
# =============================================================================

def assemble(source: str, filename: str = "<input>", strict: bool = False) -> list[str]:
    """
    Convenience function to assemble source code.

    Args:
        source: Assembly source code
        filename: Virtual filename for errors
        strict: Enable strict mode

    Returns:
        Generated machine code words

    Raises:
        AssemblerError: In strict mode, if assembly finds errors
    """
    asm = Assembler(strict=strict)
    return asm.assemble_string(source, filename)


def assemble_file(filepath: str | Path, strict: bool = False) -> list[str]:
    """
    Convenience function to assemble a file.

    Args:
        filepath: Path to source file
        strict: Enable strict mode

    Returns:
        Generated machine code words

    Raises:
        AssemblerError: In strict mode, if assembly finds errors
    """
    asm = Assembler(strict=strict)
    return asm.assemble_file(filepath)
