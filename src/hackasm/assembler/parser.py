"""
Hack Assembly Language Parser
=============================

This module classifies each line of Hack assembly source into exactly one
statement type. Classification is purely syntactic: it never consults the
symbol table, so both assembler passes see the same view of the source.

Statement Types
---------------
1. **Ignored**: blank line or full-line comment
   ```asm
   // Computes R2 = max(R0, R1)
   ```

2. **LabelDef**: label pseudo-instruction
   ```asm
   (LOOP)
   ```

3. **AddressInstruction**: A-instruction
   ```asm
   @21
   @LOOP
   @i          // variable
   ```

4. **ComputeInstruction**: C-instruction
   ```asm
   D=D+A
   0;JMP
   AM=M-1
   ```

Line Rules
----------
| Trimmed line                   | Statement           |
|--------------------------------|---------------------|
| empty, or starts with ``//``   | Ignored             |
| starts ``(`` and ends ``)``    | LabelDef            |
| payload starts with ``@``      | AddressInstruction  |
| anything else                  | ComputeInstruction  |

The *payload* is the trimmed line truncated at the first ``//`` and trimmed
again. A label followed by an inline comment does not end with ``)``, so
it is not a label.

C-instruction fields are taken from a split of the payload on both ``=``
and ``;``. Fields are not trimmed individually, so ``D = A`` produces the
unrecognized fields ``"D "`` and ``" A"``.
"""

import re
from dataclasses import dataclass
from typing import Optional

from hackasm.cpu import MAX_ADDRESS
from hackasm.errors import SourceLocation


COMMENT_MARKER = "//"

_FIELD_SEPARATORS = re.compile(r"[=;]")
_DECIMAL_LITERAL = re.compile(r"\+?[0-9]+")


# =============================================================================
# Statement Data Classes
# =============================================================================

@dataclass
class Statement:
    """
    Base class for all classified source lines.

    Attributes:
        location: Line and column of the first non-blank character
        text: The source line without its line terminator
    """
    location: SourceLocation
    text: str


@dataclass
class Ignored(Statement):
    """Blank line or full-line comment."""


@dataclass
class LabelDef(Statement):
    """
    Label declaration ``(name)``.

    Attributes:
        name: Text strictly between the parentheses
    """
    name: str


@dataclass
class AddressInstruction(Statement):
    """
    A-instruction ``@operand``.

    Attributes:
        operand: Everything after the ``@`` in the payload
    """
    operand: str

    @property
    def literal(self) -> Optional[int]:
        """The operand as a 16-bit constant, or None if it is a symbol."""
        return parse_literal(self.operand)


@dataclass
class ComputeInstruction(Statement):
    """
    C-instruction ``dest=comp;jump``.

    Attributes:
        dest: Destination field ("" when absent)
        comp: Computation field
        jump: Jump field ("" when absent)
    """
    dest: str
    comp: str
    jump: str


# =============================================================================
# Classification
# =============================================================================

def is_ignored(trimmed: str) -> bool:
    return not trimmed or trimmed.startswith(COMMENT_MARKER)


def is_label(trimmed: str) -> bool:
    return trimmed.startswith("(") and trimmed.endswith(")")


def strip_comment(trimmed: str) -> str:
    """Truncate a line at its first comment marker and trim the rest."""
    return trimmed.split(COMMENT_MARKER, 1)[0].strip()


def parse_literal(operand: str) -> Optional[int]:
    """
    Interpret an A-instruction operand as a decimal constant.

    The operand must be all ASCII digits (an optional leading ``+`` is
    accepted) and the value must fit in 16 bits. Anything else, including
    ``-1`` and ``65536``, is treated as a symbol name by the caller.

    Returns:
        The constant, or None if the operand is not a valid 16-bit number
    """
    if not _DECIMAL_LITERAL.fullmatch(operand):
        return None
    value = int(operand)
    if value > MAX_ADDRESS:
        return None
    return value


def split_compute(payload: str) -> tuple[str, str, str]:
    """
    Split a C-instruction payload into (dest, comp, jump).

    - dest is the text before the first ``=``, or "" if there is none
    - comp is the field after the first ``=``, or the first field otherwise
    - jump is the field after the last ``;``, or "" if there is none
    """
    parts = _FIELD_SEPARATORS.split(payload)
    has_dest = "=" in payload
    dest = parts[0] if has_dest else ""
    comp = parts[1] if has_dest else parts[0]
    jump = parts[-1] if ";" in payload else ""
    return dest, comp, jump


def parse_line(
    line: str,
    line_number: int = 1,
    filename: str = "<input>",
) -> Statement:
    """
    Classify one source line.

    Args:
        line: The raw line (line terminator optional)
        line_number: 1-based line number for the statement location
        filename: Source name for the statement location

    Returns:
        An Ignored, LabelDef, AddressInstruction or ComputeInstruction
    """
    text = line.rstrip("\r\n")
    trimmed = text.strip()
    column = len(text) - len(text.lstrip()) + 1
    location = SourceLocation(filename, line_number, column)

    if is_ignored(trimmed):
        return Ignored(location, text)

    if is_label(trimmed):
        return LabelDef(location, text, name=trimmed[1:-1])

    payload = strip_comment(trimmed)

    if payload.startswith("@"):
        return AddressInstruction(location, text, operand=payload[1:])

    dest, comp, jump = split_compute(payload)
    return ComputeInstruction(location, text, dest=dest, comp=comp, jump=jump)


def parse_source(source: str, filename: str = "<input>") -> list[Statement]:
    """
    Classify every line of a source text.

    Ignored lines are dropped; the returned list holds labels and real
    instructions in source order. Lines break only at ``\\n`` (a trailing
    ``\\r`` is removed by parse_line), so form feeds or Unicode separators
    inside a comment stay part of that comment.

    Args:
        source: Complete assembly source
        filename: Source name used in statement locations

    Returns:
        List of LabelDef, AddressInstruction and ComputeInstruction
    """
    statements: list[Statement] = []
    for line_number, line in enumerate(source.split("\n"), start=1):
        stmt = parse_line(line, line_number, filename)
        if not isinstance(stmt, Ignored):
            statements.append(stmt)
    return statements
