"""
Hack Assembler
==============

This package translates Hack assembly source into Hack machine code,
one 16-character binary word per instruction.

Main Components
---------------
- **Assembler**: Main class that reads sources and writes output files
- **Parser**: Classifies source lines into statements
- **SymbolTable**: Predefined symbols, labels and variables
- **CodeGenerator**: Runs the two passes and encodes instructions

Assembly Process
----------------
1. **Classification (Parser)**:
   - Strip comments and whitespace
   - Classify each line as label, A-instruction or C-instruction

2. **Pass 1 (CodeGenerator)**:
   - Bind every label to the address of the next instruction

3. **Pass 2 (CodeGenerator)**:
   - Resolve symbols, allocating variables from address 16
   - Encode each instruction as a 16-bit word

Example Usage
-------------
>>> from hack_asm.assembler import assemble
>>> assemble(["@2", "D=A", "@3", "D=D+A", "@0", "M=D"])[1]
'1110110000010000'
"""

from hack_asm.assembler.assembler import Assembler, assemble, assemble_file
from hack_asm.assembler.parser import (
    Parser,
    Statement,
    LabelDef,
    AInstruction,
    CInstruction,
    parse_line,
    parse_source,
)
from hack_asm.assembler.symbols import Symbol, SymbolKind, SymbolTable
from hack_asm.assembler.codegen import CodeGenerator, ListingEntry
from hack_asm.assembler.opcodes import (
    COMP_TABLE,
    DEST_TABLE,
    JUMP_TABLE,
    PREDEFINED_SYMBOLS,
    encode_address,
    encode_comp,
    encode_dest,
    encode_jump,
)

__all__ = [
    # Main class and functions
    "Assembler",
    "assemble",
    "assemble_file",
    # Parser
    "Parser",
    "Statement",
    "LabelDef",
    "AInstruction",
    "CInstruction",
    "parse_line",
    "parse_source",
    # Symbols
    "Symbol",
    "SymbolKind",
    "SymbolTable",
    # Code generator
    "CodeGenerator",
    "ListingEntry",
    # Encoding tables
    "COMP_TABLE",
    "DEST_TABLE",
    "JUMP_TABLE",
    "PREDEFINED_SYMBOLS",
    "encode_address",
    "encode_comp",
    "encode_dest",
    "encode_jump",
]
