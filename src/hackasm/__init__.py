"""
hackasm - Assembler for the Hack Computer
=========================================

This package translates Hack assembly language into Hack machine code.
The Hack computer is a 16-bit machine with two instruction formats:
A-instructions (``@value``) load an address, and C-instructions
(``dest=comp;jump``) compute, store, and branch.

Main Components
---------------
- **assembler**: two-pass Hack assembler (hackasm)
    Converts assembly source files (.asm) to machine code text (.hack)

- **cpu**: Hack instruction set definitions
    comp, dest and jump tables and the predefined symbols

Quick Start
-----------
Assemble a program:
    >>> from hackasm import Assembler
    >>> asm = Assembler()
    >>> words = asm.assemble_file("Add.asm")
    >>> asm.write_hack("Add.hack")

Or use the command-line tool:
    $ hackasm Add.asm

Reference Documentation
-----------------------
- Nisan & Schocken, "The Elements of Computing Systems", chapter 6

Version History
---------------
1.0.0 - Initial release with assembler, listing and symbol output
"""

__version__ = "1.0.0"

# =============================================================================
# Public API Exports
# =============================================================================

from hackasm.assembler import (
    Assembler,
    assemble,
    assemble_file,
    hack_output_path,
    SymbolTable,
    build_symbol_table,
)
from hackasm.errors import (
    HackError,
    AssemblerError,
    AssemblySyntaxError,
    DuplicateSymbolError,
    SourceLocation,
)

__all__ = [
    # Version info
    "__version__",
    # Assembler
    "Assembler",
    "assemble",
    "assemble_file",
    "hack_output_path",
    "SymbolTable",
    "build_symbol_table",
    # Exception hierarchy
    "HackError",
    "AssemblerError",
    "AssemblySyntaxError",
    "DuplicateSymbolError",
    "SourceLocation",
]
