# =============================================================================
# test_symbols.py - Symbol Table Unit Tests
# =============================================================================
# Tests for predefined symbols, label binding and variable allocation.
# =============================================================================

import pytest

from hack_asm.assembler.symbols import SymbolKind, SymbolTable
from hack_asm.errors import AddressRangeError, SourceLocation, SymbolConflictError


class TestPredefined:
    """A fresh table holds only the architecture constants."""

    @pytest.mark.parametrize("name,address", [
        ("R0", 0), ("R1", 1), ("R7", 7), ("R15", 15),
        ("SP", 0), ("LCL", 1), ("ARG", 2), ("THIS", 3), ("THAT", 4),
        ("SCREEN", 16384), ("KBD", 24576),
    ])
    def test_lookup(self, name, address):
        assert SymbolTable().lookup(name) == address

    def test_unknown_symbol(self):
        assert SymbolTable().lookup("LOOP") is None

    def test_no_user_symbols(self):
        table = SymbolTable()
        assert table.labels() == []
        assert table.variables() == []
        assert table.user_symbols() == []

    def test_kind(self):
        assert SymbolTable().get("KBD").kind is SymbolKind.PREDEFINED

    def test_symbols_are_case_sensitive(self):
        assert SymbolTable().lookup("sp") is None


class TestLabels:
    """Test bind_label()."""

    def test_bind_and_lookup(self):
        table = SymbolTable()
        table.bind_label("LOOP", 4)
        assert table.lookup("LOOP") == 4
        assert "LOOP" in table
        assert table.contains("LOOP")
        assert table.get("LOOP").kind is SymbolKind.LABEL

    def test_redeclare_same_address_is_noop(self):
        table = SymbolTable()
        table.bind_label("LOOP", 4)
        table.bind_label("LOOP", 4)
        assert table.lookup("LOOP") == 4
        assert len(table.labels()) == 1

    def test_redeclare_different_address(self):
        table = SymbolTable()
        first = SourceLocation("Prog.asm", 3)
        table.bind_label("LOOP", 4, first)
        with pytest.raises(SymbolConflictError) as excinfo:
            table.bind_label("LOOP", 9, SourceLocation("Prog.asm", 20))
        assert excinfo.value.symbol == "LOOP"
        assert excinfo.value.original_location == first
        assert table.lookup("LOOP") == 4

    def test_predefined_cannot_be_rebound(self):
        table = SymbolTable()
        with pytest.raises(SymbolConflictError):
            table.bind_label("SCREEN", 5)
        assert table.lookup("SCREEN") == 16384

    def test_predefined_rejected_even_at_same_address(self):
        with pytest.raises(SymbolConflictError):
            SymbolTable().bind_label("R3", 3)

    def test_label_over_variable(self):
        table = SymbolTable()
        table.allocate_variable("x")
        with pytest.raises(SymbolConflictError):
            table.bind_label("x", 16)

    def test_label_out_of_range(self):
        with pytest.raises(AddressRangeError):
            SymbolTable().bind_label("FAR", 32768)


class TestVariables:
    """Test allocate_variable()."""

    def test_first_variable_at_16(self):
        assert SymbolTable().allocate_variable("i") == 16

    def test_sequential_allocation(self):
        table = SymbolTable()
        assert table.allocate_variable("i") == 16
        assert table.allocate_variable("sum") == 17
        assert table.allocate_variable("n") == 18
        assert table.next_variable_address == 19

    def test_stable_address(self):
        table = SymbolTable()
        table.allocate_variable("i")
        table.allocate_variable("sum")
        assert table.allocate_variable("i") == 16
        assert table.allocate_variable("sum") == 17
        assert table.next_variable_address == 18

    def test_existing_label_returned(self):
        table = SymbolTable()
        table.bind_label("END", 42)
        assert table.allocate_variable("END") == 42
        assert table.variables() == []

    def test_predefined_returned(self):
        table = SymbolTable()
        assert table.allocate_variable("R5") == 5
        assert table.next_variable_address == 16

    def test_kind(self):
        table = SymbolTable()
        table.allocate_variable("i")
        assert table.get("i").kind is SymbolKind.VARIABLE

    def test_exhausted(self):
        table = SymbolTable(variable_limit=18)
        table.allocate_variable("a")
        table.allocate_variable("b")
        with pytest.raises(AddressRangeError):
            table.allocate_variable("c")
        assert "c" not in table


class TestFreshTables:
    """Tables never share state."""

    def test_independent_tables(self):
        first = SymbolTable()
        first.allocate_variable("x")
        first.bind_label("LOOP", 2)

        second = SymbolTable()
        assert second.lookup("x") is None
        assert second.lookup("LOOP") is None
        assert second.allocate_variable("y") == 16

    def test_user_symbols_sorted_by_address(self):
        table = SymbolTable()
        table.bind_label("END", 20)
        table.allocate_variable("i")
        table.bind_label("LOOP", 2)
        assert [s.name for s in table.user_symbols()] == ["LOOP", "i", "END"]

    def test_as_dict(self):
        table = SymbolTable()
        table.bind_label("LOOP", 2)
        d = table.as_dict()
        assert d["LOOP"] == 2
        assert d["KBD"] == 24576
