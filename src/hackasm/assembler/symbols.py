"""
Hack Symbol Table and Label Resolution
======================================

This module holds the symbol table shared by both assembler passes, and
the first pass itself (label resolution).

Address Spaces
--------------
One table maps names to 16-bit addresses, filled by three different rules:

- **Predefined** symbols (SP, LCL, ARG, THIS, THAT, R0-R15, SCREEN, KBD)
  are inserted when the table is created. Only a label declaration of the
  same name can rebind one.
- **Labels** are ROM addresses. A label ``(NAME)`` is bound to the index of
  the next real instruction; it does not take an address of its own.
- **Variables** are RAM addresses. A symbol first seen as an A-instruction
  operand during the second pass gets the next free address, starting at 16.

Entries are never removed. Names are case-sensitive.

Example
-------
>>> from hackasm.assembler.parser import parse_source
>>> table = build_symbol_table(parse_source("(LOOP)\\n@LOOP\\n0;JMP"))
>>> table["LOOP"]
0
>>> table.resolve("counter")
16
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Iterator, Optional

from hackasm.assembler.parser import LabelDef, Statement
from hackasm.cpu import DATA_BASE_ADDRESS, PREDEFINED_SYMBOLS
from hackasm.errors import (
    AssemblerError,
    AssemblySyntaxError,
    DuplicateSymbolError,
    ErrorCollector,
    SourceLocation,
)

logger = logging.getLogger(__name__)


class SymbolKind(Enum):
    """Which rule put a symbol in the table."""
    PREDEFINED = "predefined"
    LABEL = "label"
    VARIABLE = "variable"

    def __str__(self) -> str:
        return self.value


@dataclass
class Symbol:
    """
    A symbol table entry.

    Attributes:
        name: Symbol name (case-sensitive)
        value: ROM or RAM address
        kind: How the symbol was defined
        location: Where a label was declared (None for other kinds)
    """
    name: str
    value: int
    kind: SymbolKind
    location: Optional[SourceLocation] = None


class SymbolTable:
    """
    Name to address mapping for one assembly run.

    Behaves like a read-only mapping of ``name -> address`` for lookups;
    entries are added through ``define_label`` and ``resolve``.
    """

    def __init__(self) -> None:
        self._symbols: dict[str, Symbol] = {}
        self._next_variable = DATA_BASE_ADDRESS
        for name, value in PREDEFINED_SYMBOLS.items():
            self._symbols[name] = Symbol(name, value, SymbolKind.PREDEFINED)

    # -------------------------------------------------------------------------
    # Mapping protocol
    # -------------------------------------------------------------------------

    def __contains__(self, name: object) -> bool:
        return name in self._symbols

    def __getitem__(self, name: str) -> int:
        return self._symbols[name].value

    def __iter__(self) -> Iterator[str]:
        return iter(self._symbols)

    def __len__(self) -> int:
        return len(self._symbols)

    def get(self, name: str, default: Optional[int] = None) -> Optional[int]:
        symbol = self._symbols.get(name)
        return symbol.value if symbol is not None else default

    def get_symbol(self, name: str) -> Optional[Symbol]:
        """Return the full entry for a name, or None."""
        return self._symbols.get(name)

    def symbols(self) -> list[Symbol]:
        """All entries in insertion order."""
        return list(self._symbols.values())

    def as_dict(self) -> dict[str, int]:
        """Snapshot of the table as a plain ``name -> address`` dict."""
        return {name: sym.value for name, sym in self._symbols.items()}

    @property
    def next_variable_address(self) -> int:
        """Address the next new variable will receive."""
        return self._next_variable

    # -------------------------------------------------------------------------
    # Definitions
    # -------------------------------------------------------------------------

    def define_label(
        self,
        name: str,
        address: int,
        location: Optional[SourceLocation] = None,
    ) -> None:
        """
        Bind a label to a ROM address.

        A label declared again overwrites the earlier binding. This also
        applies to predefined names: ``(SP)`` rebinds SP to a ROM address.

        Args:
            name: Label name
            address: ROM address of the instruction that follows the label
            location: Where the label is declared
        """
        existing = self._symbols.get(name)
        if existing is not None and existing.value != address:
            logger.debug(
                f"Label '{name}' redefined: {existing.value} -> {address}"
            )
        self._symbols[name] = Symbol(name, address, SymbolKind.LABEL, location)

    def resolve(self, name: str) -> int:
        """
        Look up a symbol, allocating a variable if it is not yet known.

        This never fails: unknown names get the next RAM address (16, 17,
        ...) in the order they are first resolved.

        Args:
            name: Symbol name from an A-instruction operand

        Returns:
            The symbol's address
        """
        symbol = self._symbols.get(name)
        if symbol is not None:
            return symbol.value

        address = self._next_variable
        self._next_variable += 1
        self._symbols[name] = Symbol(name, address, SymbolKind.VARIABLE)
        logger.debug(f"Allocated variable '{name}' at RAM[{address}]")
        return address


# =============================================================================
# Pass 1: Label Resolution
# =============================================================================

def build_symbol_table(
    statements: list[Statement],
    strict: bool = False,
    errors: Optional[ErrorCollector] = None,
) -> SymbolTable:
    """
    First pass: bind every label to the address of the next instruction.

    Every statement that is not a LabelDef is a real instruction and
    advances the ROM counter by one.

    In strict mode, redefinitions and empty label names are collected in
    ``errors`` and the pass fails with a single AssemblerError at the end.

    Args:
        statements: Classified source lines, in order
        strict: Report duplicate or empty labels instead of accepting them
        errors: Collector shared with the caller (a private one is used
                if omitted)

    Returns:
        A new table with the predefined symbols and all labels

    Raises:
        AssemblerError: In strict mode, if any label errors were found
    """
    if errors is None:
        errors = ErrorCollector()

    table = SymbolTable()
    rom_address = 0

    for stmt in statements:
        if not isinstance(stmt, LabelDef):
            rom_address += 1
            continue

        if strict:
            _check_label(stmt, table, errors)
        table.define_label(stmt.name, rom_address, stmt.location)

    logger.debug(
        f"Pass 1: {rom_address} instructions, "
        f"{sum(1 for s in table.symbols() if s.kind is SymbolKind.LABEL)} labels"
    )

    if strict and errors.has_errors():
        raise AssemblerError(
            f"Assembly failed with {errors.error_count()} errors:\n\n"
            f"{errors.report()}"
        )

    return table


def _check_label(stmt: LabelDef, table: SymbolTable, errors: ErrorCollector) -> None:
    """Collect strict-mode problems with a label declaration."""
    if not stmt.name:
        errors.add(AssemblySyntaxError(
            "empty label name",
            location=stmt.location,
            source_line=stmt.text,
        ))
        return

    existing = table.get_symbol(stmt.name)
    if existing is None:
        return

    errors.add(DuplicateSymbolError(
        stmt.name,
        location=stmt.location,
        original_location=existing.location,
        source_line=stmt.text,
        predefined=existing.kind is SymbolKind.PREDEFINED,
    ))
