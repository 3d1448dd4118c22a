"""
Hack Symbol Table
=================

Maps symbol names to 15-bit addresses. A table starts out holding only
the predefined architecture symbols and grows while a program is being
assembled:

- Labels are bound to instruction addresses during pass 1
- Variables are allocated RAM addresses, from 16 upwards, during pass 2

Binding Policy
--------------
- Predefined symbols are immutable; declaring a label with their name
  is a SymbolConflictError.
- Re-declaring a label at the address it already has is a no-op.
- Re-declaring a label at a different address is a SymbolConflictError.
- A bound address never changes.
"""

from dataclasses import dataclass
from enum import Enum, auto
from typing import Iterator, Optional
import logging

from hack_asm.errors import AddressRangeError, SourceLocation, SymbolConflictError
from hack_asm.assembler.opcodes import (
    MAX_ADDRESS,
    PREDEFINED_SYMBOLS,
    SCREEN_ADDRESS,
    VARIABLE_BASE,
)

logger = logging.getLogger(__name__)

PREDEFINED_LOCATION = SourceLocation("<predefined>", 0)


class SymbolKind(Enum):
    """How a symbol came to be bound."""
    PREDEFINED = auto()
    LABEL = auto()
    VARIABLE = auto()


@dataclass(frozen=True)
class Symbol:
    """
    Symbol table entry.

    Attributes:
        name: Symbol name (case-sensitive)
        address: Bound address (0..32767)
        kind: PREDEFINED, LABEL or VARIABLE
        location: Where the symbol was declared or first referenced
    """
    name: str
    address: int
    kind: SymbolKind
    location: SourceLocation = PREDEFINED_LOCATION


class SymbolTable:
    """
    Symbol table for one assembly run.

    Usage:
        table = SymbolTable()
        table.bind_label("LOOP", 4)
        table.allocate_variable("i")    # -> 16
        table.lookup("LOOP")            # -> 4
    """

    def __init__(self, variable_base: int = VARIABLE_BASE,
                 variable_limit: int = SCREEN_ADDRESS):
        """
        Create a table seeded with the architecture constants.

        Args:
            variable_base: First RAM address handed out to variables
            variable_limit: First address that variables may not occupy
        """
        self._symbols: dict[str, Symbol] = {
            name: Symbol(name, address, SymbolKind.PREDEFINED)
            for name, address in PREDEFINED_SYMBOLS.items()
        }
        self._next_variable = variable_base
        self._variable_limit = variable_limit

    # =========================================================================
    # Queries
    # =========================================================================

    def lookup(self, name: str) -> Optional[int]:
        """Return the address bound to name, or None."""
        symbol = self._symbols.get(name)
        return symbol.address if symbol is not None else None

    def get(self, name: str) -> Optional[Symbol]:
        return self._symbols.get(name)

    def contains(self, name: str) -> bool:
        return name in self._symbols

    def __contains__(self, name: str) -> bool:
        return name in self._symbols

    def __len__(self) -> int:
        return len(self._symbols)

    def __iter__(self) -> Iterator[Symbol]:
        return iter(self._symbols.values())

    @property
    def next_variable_address(self) -> int:
        return self._next_variable

    def labels(self) -> list[Symbol]:
        return [s for s in self._symbols.values() if s.kind is SymbolKind.LABEL]

    def variables(self) -> list[Symbol]:
        return [s for s in self._symbols.values() if s.kind is SymbolKind.VARIABLE]

    def user_symbols(self) -> list[Symbol]:
        """Labels and variables, ordered by address then name."""
        return sorted(
            (s for s in self._symbols.values() if s.kind is not SymbolKind.PREDEFINED),
            key=lambda s: (s.address, s.name),
        )

    def as_dict(self) -> dict[str, int]:
        return {name: sym.address for name, sym in self._symbols.items()}

    # =========================================================================
    # Binding
    # =========================================================================

    def bind_label(self, name: str, address: int,
                   location: Optional[SourceLocation] = None,
                   source_line: Optional[str] = None) -> None:
        """
        Bind a label to an instruction address.

        Raises:
            SymbolConflictError: If name is predefined, a variable, or a
                label already bound to a different address
            AddressRangeError: If address does not fit in 15 bits
        """
        location = location or SourceLocation("<input>", 0)

        if not 0 <= address <= MAX_ADDRESS:
            raise AddressRangeError(
                f"label '{name}' address {address} is outside instruction memory",
                location,
                source_line=source_line,
            )

        existing = self._symbols.get(name)
        if existing is not None:
            if existing.kind is SymbolKind.PREDEFINED:
                raise SymbolConflictError(
                    name, "is predefined and cannot be redeclared",
                    location=location, source_line=source_line,
                )
            if existing.kind is SymbolKind.VARIABLE:
                raise SymbolConflictError(
                    name, "is already a variable",
                    location=location,
                    original_location=existing.location,
                    source_line=source_line,
                )
            if existing.address == address:
                return
            raise SymbolConflictError(
                name, f"redeclared at address {address} (was {existing.address})",
                location=location,
                original_location=existing.location,
                source_line=source_line,
            )

        self._symbols[name] = Symbol(name, address, SymbolKind.LABEL, location)
        logger.debug(f"Label {name} = {address}")

    def allocate_variable(self, name: str,
                          location: Optional[SourceLocation] = None,
                          source_line: Optional[str] = None) -> int:
        """
        Return the address of name, allocating a variable slot if unbound.

        Raises:
            AddressRangeError: If variable RAM is exhausted
        """
        existing = self._symbols.get(name)
        if existing is not None:
            return existing.address

        address = self._next_variable
        if address >= self._variable_limit:
            raise AddressRangeError(
                f"no RAM left for variable '{name}'",
                location,
                hint=f"variables occupy addresses {VARIABLE_BASE} to {self._variable_limit - 1}",
                source_line=source_line,
            )

        self._symbols[name] = Symbol(
            name, address, SymbolKind.VARIABLE,
            location or SourceLocation("<input>", 0),
        )
        self._next_variable += 1
        logger.debug(f"Variable {name} = {address}")
        return address
