"""
Hack Assembler Error Hierarchy
==============================

This module defines the exception hierarchy for the Hack assembler.
All exceptions inherit from HackError, allowing callers to catch every
assembler-related error with a single except clause if desired.

Exception Hierarchy
-------------------
HackError (base)
└── AssemblerError (assembler-related)
    ├── AssemblySyntaxError - unrecognized instruction field in source
    ├── DuplicateSymbolError - label defined multiple times
    └── TooManyErrors - error limit reached

Only strict mode raises these. The default (permissive) mode never fails on
bad assembly syntax; it falls back to an all-zero encoding instead.

Error messages follow this format:
    filename:line:column: error: description
        source_line_text
        ^ (pointer to error location)
    hint: suggestion for fixing (when available)
"""

from dataclasses import dataclass
from typing import Optional


# =============================================================================
# Base Exception Class
# =============================================================================

class HackError(Exception):
    """
    Base exception for all Hack assembler errors.

        try:
            assembler.assemble_file("Prog.asm")
        except HackError as e:
            print(f"Error: {e}")
    """
    pass


# =============================================================================
# Source Location Tracking
# =============================================================================

@dataclass(frozen=True)
class SourceLocation:
    """
    Represents a location in source code for error reporting.

    Attributes:
        filename: Name of the source file (or "<input>" for string input)
        line: Line number (1-indexed)
        column: Column number (1-indexed)
    """
    filename: str
    line: int
    column: int

    def __str__(self) -> str:
        """Format as 'filename:line:column' for error messages."""
        return f"{self.filename}:{self.line}:{self.column}"


# =============================================================================
# Assembler Exceptions
# =============================================================================

class AssemblerError(HackError):
    """
    Base exception for all assembler-related errors.

    Attributes:
        message: The error description
        location: Where in the source the error occurred (optional)
        hint: A suggestion for fixing the error (optional)
        source_line: The actual source text at the error location (optional)
    """

    def __init__(
        self,
        message: str,
        location: Optional[SourceLocation] = None,
        hint: Optional[str] = None,
        source_line: Optional[str] = None,
    ):
        self.message = message
        self.location = location
        self.hint = hint
        self.source_line = source_line
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """
        Format the error message with location, source context, and hint.

        Example output:
            Prog.asm:7:1: error: unknown comp 'D+2'
                D=D+2
                ^
            hint: valid comp expressions include D+1, D+A, D+M
        """
        parts = []

        if self.location:
            parts.append(f"{self.location}: error: {self.message}")
        else:
            parts.append(f"error: {self.message}")

        # Source context with caret pointer
        if self.source_line is not None and self.location is not None:
            parts.append(f"    {self.source_line}")
            if self.location.column > 0:
                padding = " " * (4 + self.location.column - 1)
                parts.append(f"{padding}^")

        if self.hint:
            parts.append(f"hint: {self.hint}")

        return "\n".join(parts)


class AssemblySyntaxError(AssemblerError):
    """
    Malformed instruction in assembly source code.

    Raised in strict mode when a C-instruction uses a comp, dest or jump
    mnemonic outside the Hack tables, or an A-instruction has no operand.
    """
    pass


class DuplicateSymbolError(AssemblerError):
    """
    Label defined multiple times.

    Raised in strict mode when a label is declared more than once, or when
    a label tries to redefine a predefined symbol such as SP or SCREEN.
    Includes the original definition location when it is known.
    """

    def __init__(
        self,
        symbol: str,
        location: Optional[SourceLocation] = None,
        original_location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
        predefined: bool = False,
    ):
        self.symbol = symbol
        self.original_location = original_location
        self.predefined = predefined

        hint = None
        if predefined:
            hint = f"'{symbol}' is a predefined symbol"
        elif original_location:
            hint = f"'{symbol}' was first defined at {original_location}"

        super().__init__(
            f"duplicate symbol '{symbol}'",
            location=location,
            hint=hint,
            source_line=source_line,
        )


# =============================================================================
# Error Collection for Multiple Error Reporting
# =============================================================================

class ErrorCollector:
    """
    Collects multiple errors for batch reporting.

    Each assembly pass adds to the collector instead of raising, so a
    single run reports every problem in the source.

    Example:
        collector = ErrorCollector(max_errors=100)
        collector.add(AssemblySyntaxError("unknown jump 'JMPP'", location))

        if collector.has_errors():
            print(collector.report())
    """

    def __init__(self, max_errors: int = 100):
        """
        Initialize the error collector.

        Args:
            max_errors: Maximum errors to collect before raising TooManyErrors
        """
        self.errors: list[AssemblerError] = []
        self.max_errors = max_errors

    def add(self, error: AssemblerError) -> None:
        """
        Add an error to the collection.

        Raises:
            TooManyErrors: If max_errors has been reached
        """
        self.errors.append(error)
        if len(self.errors) >= self.max_errors:
            raise TooManyErrors(f"Too many errors ({self.max_errors}), stopping")

    def has_errors(self) -> bool:
        return len(self.errors) > 0

    def error_count(self) -> int:
        return len(self.errors)

    def report(self) -> str:
        """Format every collected error, followed by an 'N errors' summary."""
        lines = []
        for error in self.errors:
            lines.append(str(error))
            lines.append("")

        error_word = "error" if len(self.errors) == 1 else "errors"
        lines.append(f"{len(self.errors)} {error_word}")
        return "\n".join(lines)

    def clear(self) -> None:
        self.errors.clear()


class TooManyErrors(AssemblerError):
    """Raised when the error collector reaches its limit."""

    def __init__(self, message: str = "Too many errors"):
        super().__init__(message)
