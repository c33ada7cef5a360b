"""
Hack Code Generator
===================

This module generates Hack machine code from classified statements.

Two-Pass Assembly
-----------------
Pass 1 (``build_symbol_table``): bind every label to its ROM address, so
forward jumps such as ``@END`` before ``(END)`` resolve correctly.

Pass 2 (``CodeGenerator.encode``): emit one 16-character binary word per
real instruction, in source order. Unknown A-instruction symbols become
variables at RAM[16], RAM[17], ... in first-use order.

Fallback Encoding
-----------------
In the default (permissive) mode, nothing in pass 2 fails. An unrecognized
comp, dest or jump field encodes as all zeros. In strict mode the same
fields are collected as AssemblySyntaxError and the pass fails at the end,
after every line has been checked.

Example
-------
>>> from hackasm.assembler.parser import parse_source
>>> codegen = CodeGenerator()
>>> codegen.generate(parse_source("@2\\nD=A"))
['0000000000000010', '1110110000010000']
"""

import logging
from pathlib import Path
from typing import Mapping, Optional

from hackasm.assembler.parser import (
    AddressInstruction,
    ComputeInstruction,
    LabelDef,
    Statement,
)
from hackasm.assembler.symbols import SymbolTable, build_symbol_table
from hackasm.cpu import (
    C_INSTRUCTION_PREFIX,
    COMP_TABLE,
    DEST_TABLE,
    JUMP_TABLE,
    MAX_ADDRESS,
    comp_bits,
    dest_bits,
    is_valid_comp,
    is_valid_dest,
    is_valid_jump,
    jump_bits,
    to_binary,
)
from hackasm.errors import AssemblerError, AssemblySyntaxError, ErrorCollector

logger = logging.getLogger(__name__)


# =============================================================================
# Instruction Encoding
# =============================================================================

def encode_address(address: int) -> str:
    """Encode an A-instruction for a resolved address."""
    return to_binary(address)


def encode_compute(dest: str, comp: str, jump: str) -> str:
    """
    Encode a C-instruction from its three fields.

    Every input produces a 16-character word; unknown fields encode as
    zeros.
    """
    return C_INSTRUCTION_PREFIX + comp_bits(comp) + dest_bits(dest) + jump_bits(jump)


# =============================================================================
# Code Generator
# =============================================================================

class CodeGenerator:
    """
    Generates Hack machine code from parsed statements.

    The code generator maintains:
    - The symbol table from pass 1, extended with variables in pass 2
    - The output word list
    - Listing lines for every label and instruction
    - Error collection for strict-mode batch reporting

    Usage:
        codegen = CodeGenerator()
        codegen.generate(statements)
        words = codegen.get_code()
        codegen.write_hack("Prog.hack")
    """

    def __init__(self, strict: bool = False):
        """
        Initialize the code generator.

        Args:
            strict: Report unrecognized instruction fields and duplicate
                    labels as errors instead of encoding a fallback.
        """
        self._strict = strict
        self._code: list[str] = []
        self._symbols = SymbolTable()
        self._errors = ErrorCollector()
        self._listing_lines: list[str] = []

    def generate(self, statements: list[Statement]) -> list[str]:
        """
        Run both passes over the statements.

        Each call starts from a fresh symbol table, so generating the same
        statements twice gives the same words.

        Args:
            statements: Classified source lines, in order

        Returns:
            One 16-character binary string per real instruction

        Raises:
            AssemblerError: In strict mode, if either pass found errors
        """
        self._code = []
        self._listing_lines = []
        self._errors.clear()

        self._symbols = build_symbol_table(statements, self._strict, self._errors)
        return self.encode(statements, self._symbols)

    def encode(self, statements: list[Statement], symbols: SymbolTable) -> list[str]:
        """
        Pass 2: encode every real instruction using a resolved table.

        The table is extended in place with any variables encountered.

        Args:
            statements: Classified source lines, in order
            symbols: Table returned by build_symbol_table

        Returns:
            One 16-character binary string per real instruction
        """
        self._symbols = symbols
        self._code = []
        self._listing_lines = []
        pc = 0

        for stmt in statements:
            if isinstance(stmt, LabelDef):
                self._add_listing_line(pc, "", stmt)
                continue

            if isinstance(stmt, AddressInstruction):
                word = self._encode_address(stmt)
            elif isinstance(stmt, ComputeInstruction):
                word = self._encode_compute(stmt)
            else:
                continue

            self._code.append(word)
            self._add_listing_line(pc, word, stmt)
            pc += 1

        logger.debug(
            f"Pass 2: {len(self._code)} words, "
            f"next variable at RAM[{symbols.next_variable_address}]"
        )

        if self._strict and self._errors.has_errors():
            raise AssemblerError(
                f"Assembly failed with {self._errors.error_count()} errors:\n\n"
                f"{self._errors.report()}"
            )

        return list(self._code)

    def _encode_address(self, stmt: AddressInstruction) -> str:
        """Encode an A-instruction, allocating a variable if needed."""
        value = stmt.literal
        if value is None:
            if self._strict and not stmt.operand:
                self._errors.add(AssemblySyntaxError(
                    "missing operand after '@'",
                    location=stmt.location,
                    source_line=stmt.text,
                ))
            value = self._symbols.resolve(stmt.operand)
            if self._strict and value > MAX_ADDRESS:
                self._errors.add(AssemblySyntaxError(
                    f"address {value} of '{stmt.operand}' does not fit in 16 bits",
                    location=stmt.location,
                    source_line=stmt.text,
                ))
        return encode_address(value)

    def _encode_compute(self, stmt: ComputeInstruction) -> str:
        """Encode a C-instruction, checking fields in strict mode."""
        if self._strict:
            self._check_compute(stmt)
        return encode_compute(stmt.dest, stmt.comp, stmt.jump)

    def _check_compute(self, stmt: ComputeInstruction) -> None:
        if not is_valid_comp(stmt.comp):
            self._errors.add(AssemblySyntaxError(
                f"unknown comp '{stmt.comp}'",
                location=stmt.location,
                hint=_suggest(stmt.comp, COMP_TABLE),
                source_line=stmt.text,
            ))
        if not is_valid_dest(stmt.dest):
            self._errors.add(AssemblySyntaxError(
                f"unknown dest '{stmt.dest}'",
                location=stmt.location,
                hint=f"valid destinations: {', '.join(DEST_TABLE)}",
                source_line=stmt.text,
            ))
        if not is_valid_jump(stmt.jump):
            self._errors.add(AssemblySyntaxError(
                f"unknown jump '{stmt.jump}'",
                location=stmt.location,
                hint=f"valid jumps: {', '.join(JUMP_TABLE)}",
                source_line=stmt.text,
            ))

    def _add_listing_line(self, pc: int, word: str, stmt: Statement) -> None:
        self._listing_lines.append(
            f"{pc:5d}  {word:16s}  {stmt.location.line:5d}  {stmt.text.strip()}"
        )

    # =========================================================================
    # Results
    # =========================================================================

    def get_code(self) -> list[str]:
        """Return the generated words."""
        return list(self._code)

    def get_symbols(self) -> dict[str, int]:
        """Return the symbol table as a ``name -> address`` dict."""
        return self._symbols.as_dict()

    def get_symbol_table(self) -> SymbolTable:
        return self._symbols

    def has_errors(self) -> bool:
        """Check if any errors occurred during assembly."""
        return self._errors.has_errors()

    def get_error_report(self) -> str:
        """Get formatted error report."""
        return self._errors.report()

    def get_listing(self) -> str:
        """
        Get the assembly listing as a string.

        Returns:
            The listing showing ROM addresses, generated words, source line
            numbers and source text, followed by the symbol table.
        """
        lines = []
        lines.append("Hack Assembler Listing")
        lines.append("=" * 60)
        lines.append("")
        lines.append("  ROM  Code              Line  Source")
        lines.append("-" * 60)
        lines.extend(self._listing_lines)
        lines.append("")
        lines.append("Symbol Table")
        lines.append("-" * 30)
        for sym in sorted(self._symbols.symbols(), key=lambda s: s.name):
            lines.append(f"{sym.name:20s} = {sym.value:5d}  ({sym.kind})")
        return "\n".join(lines)

    # =========================================================================
    # Output File Writing
    # =========================================================================

    def write_hack(self, filepath: str | Path) -> None:
        """
        Write the machine code file.

        Format: one 16-character word per line, each line terminated by a
        newline.
        """
        with open(filepath, "w", encoding="utf-8", newline="\n") as f:
            for word in self._code:
                f.write(f"{word}\n")

    def write_listing(self, filepath: str | Path) -> None:
        """Write assembly listing file."""
        with open(filepath, "w", encoding="utf-8") as f:
            f.write(self.get_listing())
            f.write("\n")

    def write_symbols(self, filepath: str | Path) -> None:
        """
        Write symbol table file.

        Format: name address kind (one per line, sorted by name)
        """
        with open(filepath, "w", encoding="utf-8") as f:
            f.write("# Symbol table\n")
            f.write("# Generated by hackasm\n")
            for sym in sorted(self._symbols.symbols(), key=lambda s: s.name):
                f.write(f"{sym.name} {sym.value} {sym.kind}\n")


def _suggest(comp: str, table: Mapping[str, str]) -> Optional[str]:
    """Hint with comp expressions that differ from ``comp`` only in spacing or case."""
    squeezed = "".join(comp.split())
    candidates = [
        name for name in table
        if name == squeezed or name.upper() == squeezed.upper()
    ]
    if candidates:
        return f"did you mean '{candidates[0]}'?"
    return None
