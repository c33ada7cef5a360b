"""
Hack CPU Package
================

This package contains the Hack instruction set definitions used by the
assembler: the comp, dest and jump encoding tables, the predefined symbol
map, and the word layout constants.

Usage:
    from hackasm.cpu import (
        COMP_TABLE,
        comp_bits,
        PREDEFINED_SYMBOLS,
    )
"""

# =============================================================================
# Public API Exports
# =============================================================================

from hackasm.cpu.hack import (
    # Word layout
    WORD_BITS,
    MAX_ADDRESS,
    DATA_BASE_ADDRESS,
    C_INSTRUCTION_PREFIX,
    COMP_BITS,
    DEST_BITS,
    JUMP_BITS,
    DEFAULT_COMP,
    DEFAULT_DEST,
    DEFAULT_JUMP,
    # Encoding tables
    COMP_TABLE,
    DEST_TABLE,
    JUMP_TABLE,
    PREDEFINED_SYMBOLS,
    # Lookup functions
    comp_bits,
    dest_bits,
    jump_bits,
    is_valid_comp,
    is_valid_dest,
    is_valid_jump,
    to_binary,
)

__all__ = [
    # Word layout
    "WORD_BITS",
    "MAX_ADDRESS",
    "DATA_BASE_ADDRESS",
    "C_INSTRUCTION_PREFIX",
    "COMP_BITS",
    "DEST_BITS",
    "JUMP_BITS",
    "DEFAULT_COMP",
    "DEFAULT_DEST",
    "DEFAULT_JUMP",
    # Encoding tables
    "COMP_TABLE",
    "DEST_TABLE",
    "JUMP_TABLE",
    "PREDEFINED_SYMBOLS",
    # Lookup functions
    "comp_bits",
    "dest_bits",
    "jump_bits",
    "is_valid_comp",
    "is_valid_dest",
    "is_valid_jump",
    "to_binary",
]
