"""
Hack Instruction Set Definition
===============================

This module defines the encoding tables of the Hack computer's two
instruction formats. The tables are closed and fixed by the published
ISA; they are exposed as read-only mappings.

Instruction Formats
-------------------
1. **A-instruction**: ``@value``
   - ``0vvv vvvv vvvv vvvv``
   - Loads a 15-bit constant into the A register

2. **C-instruction**: ``dest=comp;jump``
   - ``111a cccc ccdd djjj``
   - ``a`` selects A (0) or M (1) as the ALU's second operand
   - ``cccccc`` are the six ALU control bits
   - ``ddd`` select the destination registers (A, D, M)
   - ``jjj`` select the jump condition

Memory Map
----------
| Range         | Use                  |
|---------------|----------------------|
| 0 - 15        | Virtual registers    |
| 16 - 16383    | Variables            |
| 16384 - 24575 | Screen memory map    |
| 24576         | Keyboard memory map  |

Reference
---------
- Nisan & Schocken, "The Elements of Computing Systems", chapter 6
"""

from types import MappingProxyType
from typing import Mapping, Optional

from hack_asm.errors import SourceLocation, UnknownMnemonicError


# =============================================================================
# Word Layout
# =============================================================================

WORD_BITS = 16
ADDRESS_BITS = 15
MAX_ADDRESS = (1 << ADDRESS_BITS) - 1      # 32767
C_INSTRUCTION_PREFIX = "111"


# =============================================================================
# Memory Map
# =============================================================================

VARIABLE_BASE = 16
SCREEN_ADDRESS = 16384
KEYBOARD_ADDRESS = 24576
ROM_SIZE = 1 << ADDRESS_BITS               # 32K instruction words


# =============================================================================
# Predefined Symbols
# =============================================================================

_PREDEFINED = {f"R{n}": n for n in range(16)}
_PREDEFINED.update({
    "SP": 0,
    "LCL": 1,
    "ARG": 2,
    "THIS": 3,
    "THAT": 4,
    "SCREEN": SCREEN_ADDRESS,
    "KBD": KEYBOARD_ADDRESS,
})

PREDEFINED_SYMBOLS: Mapping[str, int] = MappingProxyType(_PREDEFINED)


# =============================================================================
# Destination Field (ddd)
# =============================================================================
# Bit order is A, D, M. Permuted spellings of the same register set are
# accepted and encode identically.

DEST_TABLE: Mapping[str, str] = MappingProxyType({
    "": "000",
    "null": "000",
    "M": "001",
    "D": "010",
    "MD": "011",
    "DM": "011",
    "A": "100",
    "AM": "101",
    "MA": "101",
    "AD": "110",
    "DA": "110",
    "AMD": "111",
    "ADM": "111",
    "MAD": "111",
    "MDA": "111",
    "DAM": "111",
    "DMA": "111",
})


# =============================================================================
# Jump Field (jjj)
# =============================================================================

JUMP_TABLE: Mapping[str, str] = MappingProxyType({
    "": "000",
    "null": "000",
    "JGT": "001",
    "JEQ": "010",
    "JGE": "011",
    "JLT": "100",
    "JNE": "101",
    "JLE": "110",
    "JMP": "111",
})


# =============================================================================
# Computation Field (a cccccc)
# =============================================================================

_COMP_A0 = {
    "0": "101010",
    "1": "111111",
    "-1": "111010",
    "D": "001100",
    "A": "110000",
    "!D": "001101",
    "!A": "110001",
    "-D": "001111",
    "-A": "110011",
    "D+1": "011111",
    "A+1": "110111",
    "D-1": "001110",
    "A-1": "110010",
    "D+A": "000010",
    "D-A": "010011",
    "A-D": "000111",
    "D&A": "000000",
    "D|A": "010101",
}

# Commutative spellings accepted alongside the canonical ones.
_COMP_ALIASES = {
    "A+D": "D+A",
    "1+D": "D+1",
    "1+A": "A+1",
    "A&D": "D&A",
    "A|D": "D|A",
}


def _build_comp_table() -> dict[str, str]:
    table = {}
    for expr, bits in _COMP_A0.items():
        table[expr] = "0" + bits
        if "A" in expr:
            table[expr.replace("A", "M")] = "1" + bits
    for alias, canonical in _COMP_ALIASES.items():
        table[alias] = table[canonical]
        table[alias.replace("A", "M")] = table[canonical.replace("A", "M")]
    return table


COMP_TABLE: Mapping[str, str] = MappingProxyType(_build_comp_table())


# =============================================================================
# Lookup Functions
# =============================================================================

def _lookup(
    table: Mapping[str, str],
    field: str,
    mnemonic: str,
    location: Optional[SourceLocation],
    source_line: Optional[str],
) -> str:
    bits = table.get(mnemonic)
    if bits is None:
        raise UnknownMnemonicError(
            field,
            mnemonic,
            location=location,
            source_line=source_line,
            known=[k for k in table if k],
        )
    return bits


def encode_dest(
    mnemonic: Optional[str],
    location: Optional[SourceLocation] = None,
    source_line: Optional[str] = None,
) -> str:
    """
    Encode a destination mnemonic as its 3-bit pattern.

    A missing destination (None or "") encodes to "000".

    Raises:
        UnknownMnemonicError: If the mnemonic is not a valid destination
    """
    return _lookup(DEST_TABLE, "dest", mnemonic or "", location, source_line)


def encode_jump(
    mnemonic: Optional[str],
    location: Optional[SourceLocation] = None,
    source_line: Optional[str] = None,
) -> str:
    """
    Encode a jump mnemonic as its 3-bit pattern.

    A missing jump (None or "") encodes to "000".

    Raises:
        UnknownMnemonicError: If the mnemonic is not a valid jump condition
    """
    return _lookup(JUMP_TABLE, "jump", mnemonic or "", location, source_line)


def encode_comp(
    mnemonic: str,
    location: Optional[SourceLocation] = None,
    source_line: Optional[str] = None,
) -> str:
    """
    Encode a computation expression as its 7-bit pattern (a + cccccc).

    Raises:
        UnknownMnemonicError: If the expression is not an ALU operation
    """
    return _lookup(COMP_TABLE, "comp", mnemonic, location, source_line)


def encode_address(value: int) -> str:
    """Render a 15-bit address as a 16-character A-instruction word."""
    if not 0 <= value <= MAX_ADDRESS:
        raise ValueError(f"address {value} out of range 0..{MAX_ADDRESS}")
    return format(value, f"0{WORD_BITS}b")
