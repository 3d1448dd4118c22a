# =============================================================================
# test_parser.py - Line Classifier Unit Tests
# =============================================================================
# Tests for classifying Hack assembly lines into statements.
#
# Test coverage includes:
#   - Blank lines, comments and whitespace handling
#   - Label declarations
#   - A-instructions with constants and symbols
#   - C-instructions with optional dest and jump fields
#   - Malformed lines and unknown mnemonics
#   - Source location tracking
# =============================================================================

import pytest

from hack_asm.assembler.parser import (
    AInstruction,
    CInstruction,
    LabelDef,
    Parser,
    parse_line,
    parse_source,
    strip_comment,
)
from hack_asm.errors import (
    AddressRangeError,
    MalformedInstructionError,
    UnknownMnemonicError,
)


# =============================================================================
# Blank Lines and Comments
# =============================================================================

class TestNoInstruction:
    """Lines that carry no instruction classify to None."""

    def test_empty_line(self):
        assert parse_line("") is None

    def test_whitespace_only(self):
        assert parse_line("   \t  ") is None

    def test_comment_only(self):
        assert parse_line("// Computes R0 = 2 + 3") is None

    def test_indented_comment(self):
        assert parse_line("    // indented") is None

    def test_newline_terminated(self):
        assert parse_line("\n") is None

    def test_strip_comment(self):
        assert strip_comment("  D=M  // load") == "D=M"


# =============================================================================
# Label Declarations
# =============================================================================

class TestLabels:
    """Test (NAME) label declarations."""

    def test_simple_label(self):
        stmt = parse_line("(LOOP)")
        assert isinstance(stmt, LabelDef)
        assert stmt.name == "LOOP"

    def test_label_with_comment_and_spaces(self):
        stmt = parse_line("  (END)   // stop here")
        assert isinstance(stmt, LabelDef)
        assert stmt.name == "END"

    def test_label_with_symbol_punctuation(self):
        stmt = parse_line("(Ball.setX$if_true0:1)")
        assert stmt.name == "Ball.setX$if_true0:1"

    def test_unterminated_label(self):
        with pytest.raises(MalformedInstructionError):
            parse_line("(LOOP")

    def test_empty_label(self):
        with pytest.raises(MalformedInstructionError):
            parse_line("()")

    def test_label_starting_with_digit(self):
        with pytest.raises(MalformedInstructionError):
            parse_line("(1LOOP)")


# =============================================================================
# A-Instructions
# =============================================================================

class TestAddressInstructions:
    """Test @value and @symbol."""

    def test_constant(self):
        stmt = parse_line("@17")
        assert isinstance(stmt, AInstruction)
        assert stmt.is_constant
        assert stmt.value == 17
        assert stmt.operand == "17"

    def test_zero(self):
        stmt = parse_line("@0")
        assert stmt.value == 0

    def test_largest_constant(self):
        stmt = parse_line("@32767")
        assert stmt.value == 32767

    def test_constant_too_large(self):
        with pytest.raises(AddressRangeError):
            parse_line("@32768")

    def test_range_error_is_malformed_instruction(self):
        with pytest.raises(MalformedInstructionError):
            parse_line("@99999")

    def test_symbol(self):
        stmt = parse_line("@LOOP")
        assert isinstance(stmt, AInstruction)
        assert not stmt.is_constant
        assert stmt.value is None
        assert stmt.operand == "LOOP"

    def test_symbol_with_inner_whitespace_removed(self):
        stmt = parse_line("  @ sum  // total")
        assert stmt.operand == "sum"

    def test_missing_operand(self):
        with pytest.raises(MalformedInstructionError):
            parse_line("@")

    def test_missing_operand_with_comment(self):
        with pytest.raises(MalformedInstructionError):
            parse_line("@   // nothing")

    def test_negative_constant(self):
        with pytest.raises(MalformedInstructionError):
            parse_line("@-1")

    def test_symbol_starting_with_digit(self):
        with pytest.raises(MalformedInstructionError):
            parse_line("@1abc")


# =============================================================================
# C-Instructions
# =============================================================================

class TestComputeInstructions:
    """Test dest=comp;jump in all its forms."""

    def test_dest_and_comp(self):
        stmt = parse_line("D=M")
        assert isinstance(stmt, CInstruction)
        assert stmt.dest == "D"
        assert stmt.comp == "M"
        assert stmt.jump is None

    def test_comp_and_jump(self):
        stmt = parse_line("0;JMP")
        assert stmt.dest is None
        assert stmt.comp == "0"
        assert stmt.jump == "JMP"

    def test_all_fields(self):
        stmt = parse_line("AM=M-1;JNE")
        assert stmt.dest == "AM"
        assert stmt.comp == "M-1"
        assert stmt.jump == "JNE"

    def test_comp_only(self):
        stmt = parse_line("D+1")
        assert stmt.dest is None
        assert stmt.jump is None
        assert stmt.encode() == "1110011111000000"

    def test_whitespace_inside_instruction(self):
        stmt = parse_line("  D = D + A ; JGT  // add")
        assert stmt.dest == "D"
        assert stmt.comp == "D+A"
        assert stmt.jump == "JGT"

    def test_unknown_comp(self):
        with pytest.raises(UnknownMnemonicError) as excinfo:
            parse_line("D=D+2")
        assert excinfo.value.field == "comp"
        assert excinfo.value.mnemonic == "D+2"

    def test_unknown_dest(self):
        with pytest.raises(UnknownMnemonicError) as excinfo:
            parse_line("X=D")
        assert excinfo.value.field == "dest"

    def test_unknown_jump(self):
        with pytest.raises(UnknownMnemonicError) as excinfo:
            parse_line("0;JUMP")
        assert excinfo.value.field == "jump"

    def test_lowercase_mnemonic_rejected(self):
        with pytest.raises(UnknownMnemonicError):
            parse_line("d=m")

    def test_empty_dest(self):
        with pytest.raises(MalformedInstructionError):
            parse_line("=D")

    def test_empty_jump(self):
        with pytest.raises(MalformedInstructionError):
            parse_line("D;")

    def test_missing_comp(self):
        with pytest.raises(MalformedInstructionError):
            parse_line("D=;JMP")

    def test_two_jumps(self):
        with pytest.raises(MalformedInstructionError):
            parse_line("D;JGT;JMP")

    def test_two_assignments(self):
        with pytest.raises(MalformedInstructionError):
            parse_line("A=D=M")


# =============================================================================
# Source Locations
# =============================================================================

class TestLocations:
    """Statements and errors carry their position in the source."""

    def test_statement_location(self):
        stmt = Parser("Prog.asm").parse_line("   @5", 7)
        assert stmt.location.filename == "Prog.asm"
        assert stmt.location.line == 7
        assert stmt.location.column == 4

    def test_source_line_kept(self):
        stmt = parse_line("  D=M  // comment")
        assert stmt.source_line == "D=M  // comment"

    def test_error_location(self):
        with pytest.raises(MalformedInstructionError) as excinfo:
            Parser("Bad.asm").parse_line("@", 12)
        assert excinfo.value.location.line == 12
        assert "Bad.asm:12" in str(excinfo.value)

    def test_error_shows_source_line(self):
        with pytest.raises(UnknownMnemonicError) as excinfo:
            parse_line("D=D+2")
        assert "D=D+2" in str(excinfo.value)
        assert "did you mean" in str(excinfo.value)


# =============================================================================
# Whole Sources
# =============================================================================

class TestParseSource:
    """Test parsing multi-line sources."""

    def test_skips_blank_and_comment_lines(self):
        source = """
// Adds 2 and 3
@2
D=A

(END)
@END
0;JMP
"""
        statements = parse_source(source)
        kinds = [type(s) for s in statements]
        assert kinds == [
            AInstruction, CInstruction, LabelDef, AInstruction, CInstruction,
        ]

    def test_line_numbers(self):
        statements = parse_source("// header\n\n@1\nD=A")
        assert [s.location.line for s in statements] == [3, 4]

    def test_parse_stops_at_first_error(self):
        with pytest.raises(MalformedInstructionError):
            Parser().parse(["@1", "@", "D=X"])
