"""
Tests for the static-analysis pass.
"""

import logging

import pytest

from tinypascal import SemanticError, VarSymbol, analyze, interpret, parse


def check(source: str):
    return analyze(parse(source), source)


class TestSymbolTable:
    """Tests for symbol table construction."""

    def test_records_declared_variables(self):
        table = check("PROGRAM p; VAR a, b : INTEGER; y : REAL; BEGIN END.")
        variables = table.variables()
        assert set(variables) == {"a", "b", "y"}
        assert variables["a"].type.name == "INTEGER"
        assert variables["y"].type.name == "REAL"

    def test_contains_builtin_types(self):
        table = check("PROGRAM p; BEGIN END.")
        assert "INTEGER" in table
        assert "REAL" in table
        assert table.variables() == {}

    def test_duplicate_declaration_last_type_wins(self, caplog):
        source = "PROGRAM p; VAR a : INTEGER; a : REAL; BEGIN a := 1 END."
        with caplog.at_level(logging.WARNING, logger="tinypascal.semantic"):
            table = check(source)
        assert isinstance(table.lookup("a"), VarSymbol)
        assert table.lookup("a").type.name == "REAL"
        assert "duplicate_variable_declaration" in caplog.messages


class TestDeclarationChecks:
    """Tests for undeclared variable detection."""

    def test_accepts_declared_uses(self):
        check("PROGRAM p; VAR x, y : INTEGER; BEGIN x := 1; y := x + 2 END.")

    def test_rejects_undeclared_assignment_target(self):
        with pytest.raises(SemanticError) as exc_info:
            check("PROGRAM p; VAR x : INTEGER; BEGIN z := 1 END.")
        assert "'z'" in exc_info.value.message

    def test_rejects_undeclared_variable_in_nested_expression(self):
        source = "PROGRAM p; VAR x : INTEGER; BEGIN BEGIN x := -(1 + q) END END."
        with pytest.raises(SemanticError) as exc_info:
            check(source)
        assert exc_info.value.position == source.index("q")

    def test_analysis_is_independent_of_evaluation(self):
        source = "PROGRAM p; BEGIN x := 1 END."
        with pytest.raises(SemanticError):
            check(source)
        assert interpret(source) == {"x": 1}
