"""
Hack Assembler Error Hierarchy
==============================

This module defines the exception hierarchy for the whole package.
All exceptions inherit from HackError, allowing callers to catch every
assembler-related error with a single except clause if desired.

Exception Hierarchy
-------------------
HackError (base)
├── AssemblerError (translation-related)
│   ├── MalformedInstructionError - line cannot be classified
│   │   └── AddressRangeError - address does not fit the target memory
│   ├── UnknownMnemonicError - dest/comp/jump token not in the ISA tables
│   ├── SymbolConflictError - label bound twice to different addresses
│   ├── AssemblyFailedError - aggregate of all errors from a failed run
│   └── TooManyErrors - error limit reached
└── AssemblyIOError - reading the source or writing output failed

Error messages follow this format:
    filename:line:column: error: description
        source_line_text
    hint: suggestion for fixing (when available)
"""

from dataclasses import dataclass
from difflib import get_close_matches
from typing import Iterable, Optional


# =============================================================================
# Base Exception Class
# =============================================================================

class HackError(Exception):
    """
    Base exception for all hack_asm errors.

        try:
            assemble_file("Prog.asm")
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
    A location in a source file, used for error reporting.

    Attributes:
        filename: Name of the source file (or "<input>" for string input)
        line: Line number (1-indexed)
        column: Column number (1-indexed, 0 when unknown)
    """
    filename: str
    line: int
    column: int = 0

    def __str__(self) -> str:
        if self.column > 0:
            return f"{self.filename}:{self.line}:{self.column}"
        return f"{self.filename}:{self.line}"


# =============================================================================
# Assembler Exceptions
# =============================================================================

class AssemblerError(HackError):
    """
    Base exception for all errors raised while translating source.

    Attributes:
        message: The error description
        location: Where in the source the error occurred (optional)
        hint: A suggestion for fixing the error (optional)
        source_line: The raw source text at the error location (optional)
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
            Max.asm:7: error: unknown comp mnemonic 'D+2'
                D=D+2
            hint: did you mean 'D+1', 'D+A'?
        """
        parts = []

        if self.location:
            parts.append(f"{self.location}: error: {self.message}")
        else:
            parts.append(f"error: {self.message}")

        if self.source_line is not None:
            parts.append(f"    {self.source_line}")

        if self.hint:
            parts.append(f"hint: {self.hint}")

        return "\n".join(parts)


class MalformedInstructionError(AssemblerError):
    """
    A source line cannot be classified as an instruction.

    Examples:
        - address instruction without operand: "@"
        - unterminated label declaration: "(LOOP"
        - invalid symbol characters: "@1abc"
        - empty dest or jump field: "=D", "D;"
    """
    pass


class AddressRangeError(MalformedInstructionError):
    """
    An address does not fit the target's memory.

    Raised for constants outside 0..32767, for programs longer than the
    32K-word instruction memory, and when variable allocation would run
    into the memory-mapped screen.
    """
    pass


class UnknownMnemonicError(AssemblerError):
    """
    A dest, comp or jump token is not part of the instruction set.

    The closest known spellings are offered as a hint when available.
    """

    def __init__(
        self,
        field: str,
        mnemonic: str,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
        known: Optional[Iterable[str]] = None,
    ):
        self.field = field
        self.mnemonic = mnemonic

        hint = None
        if known is not None:
            similar = get_close_matches(mnemonic, list(known), n=3, cutoff=0.5)
            if similar:
                hint = "did you mean " + ", ".join(f"'{s}'" for s in similar) + "?"

        super().__init__(
            f"unknown {field} mnemonic '{mnemonic}'",
            location=location,
            hint=hint,
            source_line=source_line,
        )


class SymbolConflictError(AssemblerError):
    """
    A symbol cannot be bound to the requested address.

    Raised when a label is declared twice at different program points,
    when a label reuses the name of a predefined symbol, or when a label
    collides with a variable.
    """

    def __init__(
        self,
        symbol: str,
        reason: str,
        location: Optional[SourceLocation] = None,
        original_location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ):
        self.symbol = symbol
        self.original_location = original_location

        hint = None
        if original_location:
            hint = f"'{symbol}' was first defined at {original_location}"

        super().__init__(
            f"symbol '{symbol}' {reason}",
            location=location,
            hint=hint,
            source_line=source_line,
        )


class AssemblyFailedError(AssemblerError):
    """
    Assembly failed; wraps every error collected during the run.

    Attributes:
        errors: The individual errors, in source order
    """

    def __init__(self, errors: list[AssemblerError], report: str):
        self.errors = list(errors)
        count = len(self.errors)
        word = "error" if count == 1 else "errors"
        super().__init__(f"assembly failed with {count} {word}:\n\n{report}")


class TooManyErrors(AssemblerError):
    """Raised when the error limit has been reached."""

    def __init__(self, message: str = "Too many errors"):
        super().__init__(message)


# =============================================================================
# I/O Exceptions
# =============================================================================

class AssemblyIOError(HackError):
    """
    Reading a source file or writing an output artifact failed.

    Attributes:
        path: The file involved
        reason: The underlying OS error message
    """

    def __init__(self, path, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"cannot access '{path}': {reason}")


# =============================================================================
# Error Collection for Multiple Error Reporting
# =============================================================================

class ErrorCollector:
    """
    Collects multiple errors for batch reporting.

    The code generator keeps processing after a bad line so that every
    problem in a pass is reported together.

    Example:
        collector = ErrorCollector(max_errors=100)
        collector.add(MalformedInstructionError(...))
        if collector.has_errors():
            print(collector.report())
    """

    def __init__(self, max_errors: int = 100):
        """
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

    def report(self) -> str:
        """Format all errors for display, followed by a count."""
        lines = []
        for error in self.errors:
            lines.append(str(error))
            lines.append("")

        error_word = "error" if len(self.errors) == 1 else "errors"
        lines.append(f"{len(self.errors)} {error_word}")
        return "\n".join(lines)

    def raise_if_errors(self) -> None:
        """Raise AssemblyFailedError if anything has been collected."""
        if self.errors:
            raise AssemblyFailedError(self.errors, self.report())
