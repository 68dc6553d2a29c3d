"""
Static-analysis pass over a parsed program.

Builds a symbol table from the VAR declarations and checks that every
variable read or assigned in the body has been declared. The evaluator never
consults the symbol table; running this pass is optional.
"""

import logging
from dataclasses import dataclass
from typing import Dict, Iterator, Optional

from .ast import AstNode, ProgramNode, VarDeclNode, VariableNode
from .errors import SemanticError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BuiltinTypeSymbol:
    """A built-in type such as INTEGER or REAL."""

    name: str


@dataclass(frozen=True)
class VarSymbol:
    """A declared variable and its type."""

    name: str
    type: BuiltinTypeSymbol


class SymbolTable:
    """Flat symbol table for a single program scope."""

    def __init__(self) -> None:
        self._symbols: Dict[str, object] = {}
        self._init_builtins()

    def _init_builtins(self) -> None:
        self.define(BuiltinTypeSymbol("INTEGER"))
        self.define(BuiltinTypeSymbol("REAL"))

    def define(self, symbol) -> None:
        self._symbols[symbol.name] = symbol

    def lookup(self, name: str) -> Optional[object]:
        return self._symbols.get(name)

    def variables(self) -> Dict[str, VarSymbol]:
        return {
            name: symbol
            for name, symbol in self._symbols.items()
            if isinstance(symbol, VarSymbol)
        }

    def __contains__(self, name: str) -> bool:
        return name in self._symbols

    def __repr__(self) -> str:
        return f"SymbolTable({list(self._symbols.values())!r})"


def _walk(node: AstNode) -> Iterator[AstNode]:
    """Yields every node below the given one in source order."""
    if node.type == "Program":
        yield from _walk(node.block)
    elif node.type == "Block":
        for declaration in node.declarations:
            yield declaration
        yield from _walk(node.compound_statement)
    elif node.type == "Compound":
        for statement in node.statements:
            yield statement
            yield from _walk(statement)
    elif node.type == "Assign":
        yield node.target
        yield node.value
        yield from _walk(node.value)
    elif node.type == "UnaryOp":
        yield node.operand
        yield from _walk(node.operand)
    elif node.type == "BinaryOp":
        yield node.left
        yield from _walk(node.left)
        yield node.right
        yield from _walk(node.right)


class SemanticAnalyzer:
    """Checks declarations against variable uses."""

    def __init__(self, source: Optional[str] = None):
        self._source = source

    def analyze(self, program: ProgramNode) -> SymbolTable:
        """
        Builds the symbol table for a program.

        Duplicate declarations are allowed; the last declared type wins.

        Raises:
            SemanticError: If a variable is used without being declared
        """
        table = SymbolTable()

        for node in _walk(program):
            if isinstance(node, VarDeclNode):
                self._declare(table, node)
            elif isinstance(node, VariableNode):
                self._check_declared(table, node)

        return table

    def _declare(self, table: SymbolTable, node: VarDeclNode) -> None:
        name = node.variable.name
        if isinstance(table.lookup(name), VarSymbol):
            logger.warning(
                "duplicate_variable_declaration",
                extra={"variable": name, "position": node.position},
            )

        type_symbol = table.lookup(node.type_spec.name)
        table.define(VarSymbol(name, type_symbol))

    def _check_declared(self, table: SymbolTable, node: VariableNode) -> None:
        if not isinstance(table.lookup(node.name), VarSymbol):
            raise SemanticError(
                f"Undeclared variable: '{node.name}'", node.position, self._source
            )


def analyze(program: ProgramNode, source: Optional[str] = None) -> SymbolTable:
    """Runs the static-analysis pass over a parsed program."""
    return SemanticAnalyzer(source).analyze(program)
