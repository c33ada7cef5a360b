"""
Hack Assembler
==============

This module provides the assembler for the Hack 16-bit computer. It turns
symbolic Hack assembly (.asm) into a text file of 16-character binary
words (.hack), one word per instruction.

Main Components
---------------
- **Assembler**: Main assembler class that orchestrates the assembly process
- **parse_source / parse_line**: Classify source lines into statements
- **SymbolTable / build_symbol_table**: Symbol table and label resolution
- **CodeGenerator**: Encodes instructions and writes output files

Assembly Process
----------------
1. **Parsing**: each line becomes one of Ignored, LabelDef,
   AddressInstruction or ComputeInstruction.

2. **Pass 1**: labels are bound to the ROM address of the next
   instruction.

3. **Pass 2**: every instruction is encoded; unknown symbols become
   variables starting at RAM[16].

Example Usage
-------------
>>> from hackasm.assembler import assemble
>>> assemble("@2\\nD=A\\n@3\\nD=D+A\\n@0\\nM=D")
['0000000000000010', '1110110000010000', '0000000000000011', \
'1110000010010000', '0000000000000000', '1110001100001000']
"""

from hackasm.assembler.assembler import (
    Assembler,
    assemble,
    assemble_file,
    hack_output_path,
)
from hackasm.assembler.parser import (
    Statement,
    Ignored,
    LabelDef,
    AddressInstruction,
    ComputeInstruction,
    parse_line,
    parse_source,
    parse_literal,
    split_compute,
)
from hackasm.assembler.symbols import (
    Symbol,
    SymbolKind,
    SymbolTable,
    build_symbol_table,
)
from hackasm.assembler.codegen import (
    CodeGenerator,
    encode_address,
    encode_compute,
)

__all__ = [
    # Main class and functions
    "Assembler",
    "assemble",
    "assemble_file",
    "hack_output_path",
    # Parser
    "Statement",
    "Ignored",
    "LabelDef",
    "AddressInstruction",
    "ComputeInstruction",
    "parse_line",
    "parse_source",
    "parse_literal",
    "split_compute",
    # Symbols
    "Symbol",
    "SymbolKind",
    "SymbolTable",
    "build_symbol_table",
    # Code generator
    "CodeGenerator",
    "encode_address",
    "encode_compute",
]
