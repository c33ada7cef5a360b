"""
Hack Instruction Set Definition
===============================

This module defines the encoding tables for the Hack 16-bit computer.
The Hack CPU has exactly two instruction formats, both one word wide.

Instruction Formats
-------------------
1. **A-instruction** (address load): ``@value``
   - Bit 15 is 0, bits 14-0 hold the address or constant
   - Example: ``@21`` -> ``0000000000010101``

2. **C-instruction** (compute): ``dest=comp;jump``
   - ``111 a c1 c2 c3 c4 c5 c6 d1 d2 d3 j1 j2 j3``
   - The ``a`` bit selects M (memory at A) instead of A as the ALU's
     second operand; it is stored as the leading bit of the comp code
   - Example: ``D=D+A`` -> ``1110000010010000``

Memory Map
----------
- RAM[0..15]: virtual registers R0-R15 (R0-R4 double as SP, LCL, ARG,
  THIS and THAT)
- RAM[16..]: variables allocated by the assembler
- RAM[16384]: SCREEN memory map (8K words)
- RAM[24576]: KBD memory map (1 word)

Lookup Behaviour
----------------
The ``*_bits`` functions are total: a mnemonic that is not in its table
encodes as all zeros. For comp this means an unknown expression encodes as
``0000000``, which is *not* the same as the constant ``0`` (``0101010``).
Strict callers use the ``is_valid_*`` predicates to detect this case.

Reference
---------
- Nisan & Schocken, "The Elements of Computing Systems", chapter 6
"""

from types import MappingProxyType
from typing import Mapping


# =============================================================================
# Word Layout Constants
# =============================================================================

WORD_BITS = 16                 # Every instruction is one 16-bit word
MAX_ADDRESS = 0xFFFF           # Largest value an A-instruction operand may hold
DATA_BASE_ADDRESS = 16         # First RAM address handed out to variables
C_INSTRUCTION_PREFIX = "111"   # Fixed header of every C-instruction

COMP_BITS = 7
DEST_BITS = 3
JUMP_BITS = 3

DEFAULT_COMP = "0" * COMP_BITS
DEFAULT_DEST = "0" * DEST_BITS
DEFAULT_JUMP = "0" * JUMP_BITS


# =============================================================================
# Comp Table
# =============================================================================
# Key: comp mnemonic exactly as written in source
# Value: a-bit followed by c1..c6
# =============================================================================

COMP_TABLE: Mapping[str, str] = MappingProxyType({
    # Constants
    "0":   "0101010",
    "1":   "0111111",
    "-1":  "0111010",

    # Single register (a=0)
    "D":   "0001100",
    "A":   "0110000",
    "!D":  "0001101",
    "!A":  "0110001",
    "-D":  "0001111",
    "-A":  "0110011",
    "D+1": "0011111",
    "A+1": "0110111",
    "D-1": "0001110",
    "A-1": "0110010",

    # Single register (a=1)
    "M":   "1110000",
    "!M":  "1110001",
    "-M":  "1110011",
    "M+1": "1110111",
    "M-1": "1110010",

    # Two operands
    "D+A": "0000010",
    "D+M": "1000010",
    "D-A": "0010011",
    "D-M": "1010011",
    "A-D": "0000111",
    "M-D": "1000111",
    "D&A": "0000000",
    "D&M": "1000000",
    "D|A": "0010101",
    "D|M": "1010101",
})


# =============================================================================
# Dest Table
# =============================================================================
# Bits are d1 d2 d3 = A D M. The empty destination is not listed; it falls
# through to DEFAULT_DEST.
# =============================================================================

DEST_TABLE: Mapping[str, str] = MappingProxyType({
    "M":   "001",
    "D":   "010",
    "MD":  "011",
    "A":   "100",
    "AM":  "101",
    "AD":  "110",
    "AMD": "111",
})


# =============================================================================
# Jump Table
# =============================================================================

JUMP_TABLE: Mapping[str, str] = MappingProxyType({
    "JGT": "001",
    "JEQ": "010",
    "JGE": "011",
    "JLT": "100",
    "JNE": "101",
    "JLE": "110",
    "JMP": "111",
})


# =============================================================================
# Predefined Symbols
# =============================================================================

PREDEFINED_SYMBOLS: Mapping[str, int] = MappingProxyType({
    "SP": 0,
    "LCL": 1,
    "ARG": 2,
    "THIS": 3,
    "THAT": 4,
    **{f"R{n}": n for n in range(16)},
    "SCREEN": 16384,
    "KBD": 24576,
})


# =============================================================================
# Lookup Functions
# =============================================================================

def comp_bits(comp: str) -> str:
    """
    Encode a comp mnemonic as its 7-bit field (a-bit first).

    Unknown expressions encode as ``0000000``.
    """
    return COMP_TABLE.get(comp, DEFAULT_COMP)


def dest_bits(dest: str) -> str:
    """Encode a dest mnemonic; empty or unknown gives ``000``."""
    return DEST_TABLE.get(dest, DEFAULT_DEST)


def jump_bits(jump: str) -> str:
    """Encode a jump mnemonic; empty or unknown gives ``000``."""
    return JUMP_TABLE.get(jump, DEFAULT_JUMP)


def is_valid_comp(comp: str) -> bool:
    return comp in COMP_TABLE


def is_valid_dest(dest: str) -> bool:
    """Check a dest field. The empty destination is valid."""
    return dest == "" or dest in DEST_TABLE


def is_valid_jump(jump: str) -> bool:
    """Check a jump field. The empty jump is valid."""
    return jump == "" or jump in JUMP_TABLE


def to_binary(value: int) -> str:
    """
    Format a value as a zero-padded 16-bit binary word, MSB first.

    Only the low 16 bits are kept, so an address past MAX_ADDRESS wraps
    instead of widening the word.

    Args:
        value: Address or constant

    Returns:
        16-character string of '0' and '1'
    """
    return format(value & MAX_ADDRESS, f"0{WORD_BITS}b")
