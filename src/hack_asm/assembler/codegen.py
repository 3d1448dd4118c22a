"""
Hack Code Generator
===================

This module turns classified statements into Hack machine words. It
implements the classic two-pass process:

Pass 1 (Label Resolution)
-------------------------
- Scan every statement in order with a program counter starting at 0
- Bind each label to the address of the next real instruction
- Advance the counter once per A- or C-instruction

Pass 2 (Code Generation)
------------------------
- Resolve A-instruction operands: constants directly, symbols through
  the symbol table, allocating variables from address 16 on first use
- Encode C-instructions as ``111`` + comp + dest + jump
- Emit one 16-character word per instruction, in source order

Pass 1 always completes before pass 2 starts, so labels may be used
before they are declared and variables never shadow a label.

Errors are collected rather than raised immediately, so that all bad
lines of a pass are reported together. A run with errors produces no
output.
"""

from dataclasses import dataclass
from typing import Iterable, Optional
import logging

from hack_asm.errors import (
    AddressRangeError,
    AssemblerError,
    ErrorCollector,
    TooManyErrors,
)
from hack_asm.assembler.opcodes import ROM_SIZE, encode_address
from hack_asm.assembler.parser import (
    AInstruction,
    CInstruction,
    LabelDef,
    Parser,
    Statement,
)
from hack_asm.assembler.symbols import SymbolTable

logger = logging.getLogger(__name__)


@dataclass
class ListingEntry:
    """
    One emitted word with its origin, for listing files.

    Attributes:
        address: Instruction address (ROM word index)
        word: The 16-character binary word
        statement: The statement that produced it
    """
    address: int
    word: str
    statement: Statement


class CodeGenerator:
    """
    Generates Hack machine words from assembly source.

    The code generator owns, for the duration of one run:
    - the symbol table
    - the program counter
    - the output word buffer
    - the error collector

    Usage:
        codegen = CodeGenerator()
        words = codegen.generate(lines, "Prog.asm")
        symbols = codegen.get_symbols()
    """

    def __init__(self, max_errors: int = 100):
        """
        Args:
            max_errors: Stop collecting after this many errors
        """
        self._max_errors = max_errors
        self._symbols = SymbolTable()
        self._statements: list[Statement] = []
        self._code: list[str] = []
        self._listing: list[ListingEntry] = []
        self._pc = 0
        self._errors = ErrorCollector(max_errors)

    # =========================================================================
    # Public Interface
    # =========================================================================

    def generate(self, lines: Iterable[str], filename: str = "<input>") -> list[str]:
        """
        Assemble source lines into machine words.

        Args:
            lines: Source lines (with or without trailing newlines)
            filename: Source filename for error messages

        Returns:
            One 16-character binary string per instruction

        Raises:
            AssemblyFailedError: If any line failed to classify, bind or encode
        """
        # Each run starts from the architecture constants only.
        self._symbols = SymbolTable()
        self._statements = []
        self._code = []
        self._listing = []
        self._pc = 0
        self._errors = ErrorCollector(self._max_errors)

        self._classify(lines, filename)
        self._errors.raise_if_errors()

        self._pass1()
        self._errors.raise_if_errors()

        self._pass2()
        if self._errors.has_errors():
            self._code = []
            self._listing = []
            self._errors.raise_if_errors()

        logger.debug(
            f"Assembled {filename}: {len(self._code)} words, "
            f"{len(self._symbols.labels())} labels, "
            f"{len(self._symbols.variables())} variables"
        )
        return list(self._code)

    def get_code(self) -> list[str]:
        return list(self._code)

    def get_statements(self) -> list[Statement]:
        return list(self._statements)

    def get_symbol_table(self) -> SymbolTable:
        return self._symbols

    def get_symbols(self) -> dict[str, int]:
        """Return a dictionary of symbol names to addresses."""
        return self._symbols.as_dict()

    def has_errors(self) -> bool:
        return self._errors.has_errors()

    def get_error_report(self) -> str:
        return self._errors.report()

    def get_listing(self) -> str:
        """
        Get the assembly listing as a string.

        Returns:
            The listing showing addresses, words and source lines,
            followed by the user symbol table.
        """
        lines = []
        lines.append("Hack Assembler Listing")
        lines.append("=" * 60)
        lines.append("")
        lines.append(" Addr  Word              Line  Source")
        lines.append("-" * 60)
        for entry in self._listing:
            stmt = entry.statement
            lines.append(
                f"{entry.address:5d}  {entry.word}  {stmt.location.line:4d}  {stmt.source_line}"
            )
        lines.append("")
        lines.append("Symbol Table")
        lines.append("-" * 30)
        for sym in self._symbols.user_symbols():
            lines.append(f"{sym.name:20s} = {sym.address:5d}  {sym.kind.name.lower()}")
        return "\n".join(lines) + "\n"

    def get_symbol_listing(self) -> str:
        """
        Symbol file contents.

        Format: name address (one per line), labels and variables only
        """
        lines = ["# Symbol table", "# Generated by hackasm"]
        for sym in self._symbols.user_symbols():
            lines.append(f"{sym.name} {sym.address}")
        return "\n".join(lines) + "\n"

    # =========================================================================
    # Classification
    # =========================================================================

    def _classify(self, lines: Iterable[str], filename: str) -> None:
        parser = Parser(filename)
        try:
            for line_number, text in enumerate(lines, start=1):
                try:
                    stmt = parser.parse_line(text, line_number)
                except AssemblerError as e:
                    self._errors.add(e)
                    continue
                if stmt is not None:
                    self._statements.append(stmt)
        except TooManyErrors:
            pass
        logger.debug(f"Classified {len(self._statements)} statements from {filename}")

    # =========================================================================
    # Pass 1: Label Resolution
    # =========================================================================

    def _pass1(self) -> None:
        """
        First pass: bind labels to instruction addresses.

        Only labels are entered here; variables are allocated in pass 2
        so they can never take an address before every label is known.
        """
        self._pc = 0

        try:
            for stmt in self._statements:
                try:
                    self._pass1_statement(stmt)
                except AssemblerError as e:
                    self._errors.add(e)

            if self._pc > ROM_SIZE:
                self._errors.add(AddressRangeError(
                    f"program has {self._pc} instructions, instruction memory holds {ROM_SIZE}"
                ))
        except TooManyErrors:
            pass

    def _pass1_statement(self, stmt: Statement) -> None:
        if isinstance(stmt, LabelDef):
            self._symbols.bind_label(stmt.name, self._pc, stmt.location, stmt.source_line)
        elif isinstance(stmt, (AInstruction, CInstruction)):
            self._pc += 1

    # =========================================================================
    # Pass 2: Code Generation
    # =========================================================================

    def _pass2(self) -> None:
        """
        Second pass: resolve operands and emit words.
        """
        self._pc = 0

        try:
            for stmt in self._statements:
                try:
                    word = self._pass2_statement(stmt)
                except AssemblerError as e:
                    self._errors.add(e)
                    self._pc += 1
                    continue
                if word is not None:
                    self._code.append(word)
                    self._listing.append(ListingEntry(self._pc, word, stmt))
                    self._pc += 1
        except TooManyErrors:
            pass

    def _pass2_statement(self, stmt: Statement) -> Optional[str]:
        if isinstance(stmt, AInstruction):
            return encode_address(self._resolve(stmt))
        if isinstance(stmt, CInstruction):
            return stmt.encode()
        return None

    def _resolve(self, inst: AInstruction) -> int:
        """Resolve an A-instruction operand to an address."""
        if inst.is_constant:
            return inst.value

        address = self._symbols.lookup(inst.operand)
        if address is None:
            address = self._symbols.allocate_variable(
                inst.operand, inst.location, inst.source_line
            )
        return address
