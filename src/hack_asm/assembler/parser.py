"""
Hack Assembly Language Parser
=============================

This module classifies lines of Hack assembly source into statements
that the code generator can process. Hack assembly has exactly one
statement per line, so the parser works a line at a time.

Statement Types
---------------
1. **LabelDef**: Label declaration, binds a name to the next instruction
   ```asm
   (LOOP)
   ```

2. **AInstruction**: Address instruction, loads a constant or symbol into A
   ```asm
   @17          // constant
   @LOOP        // label or variable
   ```

3. **CInstruction**: Compute instruction with optional dest and jump
   ```asm
   D=M          // dest=comp
   0;JMP        // comp;jump
   AM=M-1;JNE   // dest=comp;jump
   ```

Lexical Rules
-------------
- ``//`` starts a comment that runs to the end of the line
- Whitespace is insignificant and removed before classification
- Symbols consist of letters, digits, ``_``, ``.``, ``$`` and ``:``
  and must not begin with a digit
"""

from dataclasses import dataclass
from typing import Iterable, Iterator, Optional
import re

from hack_asm.errors import (
    AddressRangeError,
    MalformedInstructionError,
    SourceLocation,
)
from hack_asm.assembler.opcodes import (
    MAX_ADDRESS,
    encode_comp,
    encode_dest,
    encode_jump,
    C_INSTRUCTION_PREFIX,
)


COMMENT_MARKER = "//"

SYMBOL_PATTERN = re.compile(r"[A-Za-z_.$:][A-Za-z0-9_.$:]*")
CONSTANT_PATTERN = re.compile(r"[0-9]+")


# =============================================================================
# Statement Data Classes
# =============================================================================

@dataclass
class Statement:
    """
    Base class for all parsed statements.

    Attributes:
        location: Where the statement appears in the source
        source_line: The raw source text, for error reporting and listings
    """
    location: SourceLocation
    source_line: str


@dataclass
class LabelDef(Statement):
    """
    Label declaration ``(NAME)``.

    Consumes no instruction slot.
    """
    name: str


@dataclass
class AInstruction(Statement):
    """
    Address instruction ``@operand``.

    Attributes:
        operand: The operand text (decimal digits or a symbol name)
        value: The constant value, or None when the operand is a symbol
    """
    operand: str
    value: Optional[int] = None

    @property
    def is_constant(self) -> bool:
        return self.value is not None


@dataclass
class CInstruction(Statement):
    """
    Compute instruction ``dest=comp;jump``.

    Attributes:
        comp: ALU expression (required)
        dest: Destination registers, None when absent
        jump: Jump condition, None when absent
    """
    comp: str
    dest: Optional[str] = None
    jump: Optional[str] = None

    def encode(self) -> str:
        """Return the 16-character word ``111`` + comp + dest + jump."""
        return (
            C_INSTRUCTION_PREFIX
            + encode_comp(self.comp, self.location, self.source_line)
            + encode_dest(self.dest, self.location, self.source_line)
            + encode_jump(self.jump, self.location, self.source_line)
        )


# =============================================================================
# Helpers
# =============================================================================

def strip_comment(text: str) -> str:
    """Remove a trailing ``//`` comment and surrounding whitespace."""
    return text.split(COMMENT_MARKER, 1)[0].strip()


def is_symbol(text: str) -> bool:
    return SYMBOL_PATTERN.fullmatch(text) is not None


def _first_column(text: str) -> int:
    stripped = text.lstrip()
    if not stripped:
        return 0
    return len(text) - len(stripped) + 1


# =============================================================================
# Parser Implementation
# =============================================================================

class Parser:
    """
    Classifies Hack assembly source lines into statements.

    Usage:
        parser = Parser("Prog.asm")
        stmt = parser.parse_line("D=M", 3)
        statements = parser.parse(lines)
    """

    def __init__(self, filename: str = "<input>"):
        self._filename = filename

    @property
    def filename(self) -> str:
        return self._filename

    def parse(self, lines: Iterable[str]) -> list[Statement]:
        """
        Classify every line, skipping blanks and comments.

        Raises:
            MalformedInstructionError: On the first line that cannot be classified
            UnknownMnemonicError: On the first invalid dest/comp/jump field
        """
        return list(self.iter_statements(lines))

    def iter_statements(self, lines: Iterable[str]) -> Iterator[Statement]:
        for line_number, text in enumerate(lines, start=1):
            stmt = self.parse_line(text, line_number)
            if stmt is not None:
                yield stmt

    def parse_line(self, text: str, line_number: int) -> Optional[Statement]:
        """
        Classify a single source line.

        Args:
            text: Raw source text (may include a comment and a newline)
            line_number: 1-indexed line number for error reporting

        Returns:
            The statement, or None for blank and comment-only lines
        """
        raw = text.rstrip("\r\n")
        code = "".join(strip_comment(raw).split())
        if not code:
            return None

        location = SourceLocation(self._filename, line_number, _first_column(raw))
        source_line = raw.strip()

        if code.startswith("("):
            return self._parse_label(code, location, source_line)
        if code.startswith("@"):
            return self._parse_address(code, location, source_line)
        return self._parse_compute(code, location, source_line)

    # =========================================================================
    # Statement Parsers
    # =========================================================================

    def _parse_label(self, code: str, location: SourceLocation, source_line: str) -> LabelDef:
        if not code.endswith(")"):
            raise MalformedInstructionError(
                "unterminated label declaration",
                location,
                hint="label declarations have the form (NAME)",
                source_line=source_line,
            )
        name = code[1:-1]
        if not name:
            raise MalformedInstructionError(
                "empty label declaration", location, source_line=source_line
            )
        if not is_symbol(name):
            raise MalformedInstructionError(
                f"invalid label name '{name}'",
                location,
                hint="symbols use letters, digits, '_', '.', '$', ':' and cannot start with a digit",
                source_line=source_line,
            )
        return LabelDef(location, source_line, name)

    def _parse_address(self, code: str, location: SourceLocation, source_line: str) -> AInstruction:
        operand = code[1:]
        if not operand:
            raise MalformedInstructionError(
                "address instruction without operand",
                location,
                hint="use @value or @symbol",
                source_line=source_line,
            )

        if CONSTANT_PATTERN.fullmatch(operand):
            value = int(operand)
            if value > MAX_ADDRESS:
                raise AddressRangeError(
                    f"constant {value} does not fit in 15 bits",
                    location,
                    hint=f"constants range from 0 to {MAX_ADDRESS}",
                    source_line=source_line,
                )
            return AInstruction(location, source_line, operand, value)

        if not is_symbol(operand):
            raise MalformedInstructionError(
                f"invalid address operand '{operand}'",
                location,
                hint="operands are non-negative decimal constants or symbols",
                source_line=source_line,
            )
        return AInstruction(location, source_line, operand)

    def _parse_compute(self, code: str, location: SourceLocation, source_line: str) -> CInstruction:
        if code.count("=") > 1 or code.count(";") > 1:
            raise MalformedInstructionError(
                "too many '=' or ';' separators",
                location,
                hint="compute instructions have the form dest=comp;jump",
                source_line=source_line,
            )

        dest = None
        jump = None
        rest = code

        if "=" in rest:
            dest, rest = rest.split("=", 1)
            if not dest:
                raise MalformedInstructionError(
                    "missing destination before '='", location, source_line=source_line
                )

        if ";" in rest:
            rest, jump = rest.split(";", 1)
            if not jump:
                raise MalformedInstructionError(
                    "missing jump after ';'", location, source_line=source_line
                )

        if not rest:
            raise MalformedInstructionError(
                "missing computation", location, source_line=source_line
            )

        # Validate eagerly so a bad mnemonic is reported while classifying.
        encode_comp(rest, location, source_line)
        encode_dest(dest, location, source_line)
        encode_jump(jump, location, source_line)

        return CInstruction(location, source_line, rest, dest, jump)


# =============================================================================
# Convenience Functions
# =============================================================================

def parse_line(text: str, line_number: int = 1, filename: str = "<input>") -> Optional[Statement]:
    """Classify a single line of source."""
    return Parser(filename).parse_line(text, line_number)


def parse_source(source: str, filename: str = "<input>") -> list[Statement]:
    """
    Parse assembly source text into statements.

    Args:
        source: Assembly source text
        filename: Source filename for error messages

    Returns:
        List of parsed statements
    """
    return Parser(filename).parse(source.splitlines())
