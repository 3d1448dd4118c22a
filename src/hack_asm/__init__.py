"""
hack_asm - Assembler for the Hack Computer
==========================================

This package translates assembly programs for the 16-bit Hack computer
into Hack machine code: text files holding one 16-character binary word
per instruction.

Main Components
---------------
- **assembler**: Parser, symbol table and two-pass code generator
- **config**: Output naming and file-level settings
- **cli**: The ``hackasm`` command-line tool

Quick Start
-----------
Assemble a program held in memory:
    >>> from hack_asm import assemble
    >>> assemble("@2\\nD=A\\n@3\\nD=D+A\\n@0\\nM=D")[0]
    '0000000000000010'

Assemble a file and write Prog.hack beside it:
    >>> from hack_asm import Assembler
    >>> asm = Assembler()
    >>> asm.assemble_file("Prog.asm")
    >>> asm.write_hack()

Or use the command-line tool:
    $ hackasm Prog.asm
"""

__version__ = "1.0.0"

# =============================================================================
# Public API Exports
# =============================================================================

from hack_asm.assembler import Assembler, SymbolTable, assemble, assemble_file
from hack_asm.config import AssemblerConfig
from hack_asm.errors import (
    HackError,
    AssemblerError,
    MalformedInstructionError,
    AddressRangeError,
    UnknownMnemonicError,
    SymbolConflictError,
    AssemblyFailedError,
    AssemblyIOError,
    SourceLocation,
)

__all__ = [
    "__version__",
    # Assembler
    "Assembler",
    "AssemblerConfig",
    "SymbolTable",
    "assemble",
    "assemble_file",
    # Exception hierarchy
    "HackError",
    "AssemblerError",
    "MalformedInstructionError",
    "AddressRangeError",
    "UnknownMnemonicError",
    "SymbolConflictError",
    "AssemblyFailedError",
    "AssemblyIOError",
    "SourceLocation",
]
