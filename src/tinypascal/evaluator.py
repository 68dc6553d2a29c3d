"""
Tree-walking evaluator.

Walks an AST post-order and applies assignments to a variable store.

Semantics:
- Each interpret() run starts from an empty variable store.
- Reading a variable that was never assigned raises NameResolutionError.
- '/' always produces a float; 'DIV' floors the quotient toward negative
  infinity and produces an int.
- Declarations have no runtime effect.
"""

import logging
import math
from dataclasses import dataclass, field
from typing import Dict, Literal, Optional, Union

from .ast import (
    AssignNode,
    AstNode,
    BinaryOperator,
    BinaryOpNode,
    BlockNode,
    CompoundNode,
    ExpressionNode,
    UnaryOperator,
    UnaryOpNode,
    VariableNode,
)
from .errors import EvaluationError, InterpreterError, NameResolutionError
from .limits import InterpreterLimits
from .parser import Parser
from .tokenizer import Tokenizer

logger = logging.getLogger(__name__)

# Runtime numeric value. Integer and real literals share one arithmetic model.
Number = Union[int, float]

Bindings = Dict[str, Number]


class Evaluator:
    """Evaluates a parsed program or expression."""

    def __init__(
        self,
        parser: Optional[Parser] = None,
        tree: Optional[AstNode] = None,
        source: Optional[str] = None,
    ):
        if parser is None and tree is None:
            raise ValueError("Evaluator requires a parser or an AST")

        self._parser = parser
        self._tree = tree
        if source is None and parser is not None:
            source = parser.source
        self._source = source
        self._global_scope: Bindings = {}

    @classmethod
    def from_ast(cls, tree: AstNode, source: Optional[str] = None) -> "Evaluator":
        """Creates an evaluator over an already-built AST."""
        return cls(tree=tree, source=source)

    @property
    def global_scope(self) -> Bindings:
        """Snapshot of the variable bindings left by the last run."""
        return dict(self._global_scope)

    def interpret(self) -> Bindings:
        """Parses (if needed) and runs a program, returning the final bindings."""
        self._global_scope = {}
        tree = self._tree if self._tree is not None else self._parser.parse()
        self._tree = tree

        try:
            self.evaluate(tree)
        except InterpreterError:
            # A failed run leaves no bindings behind
            self._global_scope = {}
            raise

        logger.debug(
            "interpretation_finished",
            extra={"variable_count": len(self._global_scope)},
        )
        return self.global_scope

    def interpret_expression(self) -> Number:
        """Parses (if needed) and evaluates a single arithmetic expression."""
        tree = self._tree if self._tree is not None else self._parser.parse_expression()
        self._tree = tree
        self._global_scope = {}

        value = self.evaluate(tree)
        if value is None:
            raise EvaluationError(
                f"{tree.type} does not produce a value", tree.position, self._source
            )
        return value

    def evaluate(self, node: AstNode) -> Optional[Number]:
        """Evaluates an AST node. Statements return None."""
        node_type = node.type

        if node_type == "Program":
            return self.evaluate(node.block)

        if node_type == "Block":
            return self._evaluate_block(node)

        if node_type in ("VarDecl", "TypeSpec", "NoOp"):
            return None

        if node_type == "Compound":
            return self._evaluate_compound(node)

        if node_type == "Assign":
            return self._evaluate_assign(node)

        if node_type == "Variable":
            return self._evaluate_variable(node)

        if node_type == "NumberLiteral":
            return node.value

        if node_type == "UnaryOp":
            return self._evaluate_unary_op(node.operator, node.operand, node.position)

        if node_type == "BinaryOp":
            return self._evaluate_binary_op(
                node.operator, node.left, node.right, node.position
            )

        raise EvaluationError(
            f"No evaluation rule for node type {type(node).__name__}",
            getattr(node, "position", None),
            self._source,
        )

    def _evaluate_block(self, node: BlockNode) -> None:
        for declaration in node.declarations:
            self.evaluate(declaration)
        self.evaluate(node.compound_statement)

    def _evaluate_compound(self, node: CompoundNode) -> None:
        for statement in node.statements:
            self.evaluate(statement)

    def _evaluate_assign(self, node: AssignNode) -> None:
        value = self._evaluate_operand(node.value)
        self._global_scope[node.target.name] = value

        logger.debug(
            "variable_assigned",
            extra={"variable": node.target.name, "value": value},
        )

    def _evaluate_variable(self, node: VariableNode) -> Number:
        if node.name not in self._global_scope:
            raise NameResolutionError(node.name, node.position, self._source)
        return self._global_scope[node.name]

    def _evaluate_operand(self, node: ExpressionNode) -> Number:
        value = self.evaluate(node)
        if value is None:
            raise EvaluationError(
                f"{node.type} does not produce a value", node.position, self._source
            )
        return value

    def _evaluate_unary_op(
        self, operator: UnaryOperator, operand: ExpressionNode, position: int
    ) -> Number:
        """Evaluates a unary sign operation."""
        value = self._evaluate_operand(operand)

        if operator == "+":
            return value

        if operator == "-":
            return -value

        raise EvaluationError(
            f"Unknown unary operator: {operator}", position, self._source
        )

    def _evaluate_binary_op(
        self,
        operator: BinaryOperator,
        left: ExpressionNode,
        right: ExpressionNode,
        position: int,
    ) -> Number:
        """Evaluates a binary arithmetic operation, left operand first."""
        left_value = self._evaluate_operand(left)
        right_value = self._evaluate_operand(right)

        try:
            return self._apply_binary_op(operator, left_value, right_value, position)
        except (OverflowError, ValueError) as error:
            raise EvaluationError(
                f"Arithmetic error in '{operator}': {error}", position, self._source
            ) from error

    def _apply_binary_op(
        self,
        operator: BinaryOperator,
        left_value: Number,
        right_value: Number,
        position: int,
    ) -> Number:
        if operator == "+":
            return left_value + right_value

        if operator == "-":
            return left_value - right_value

        if operator == "*":
            return left_value * right_value

        if operator == "/":
            if right_value == 0:
                raise EvaluationError("Division by zero", position, self._source)
            return left_value / right_value

        if operator == "DIV":
            if right_value == 0:
                raise EvaluationError("Integer division by zero", position, self._source)
            if isinstance(left_value, int) and isinstance(right_value, int):
                return left_value // right_value
            return math.floor(left_value / right_value)

        raise EvaluationError(
            f"Unknown binary operator: {operator}", position, self._source
        )


@dataclass
class EvaluationResult:
    """Result of running source text through the whole pipeline."""

    success: bool
    """Whether tokenizing, parsing and evaluation all succeeded."""

    value: Optional[Number] = None
    """Expression result (expression mode only)."""

    bindings: Bindings = field(default_factory=dict)
    """Final variable bindings (program mode only)."""

    error: Optional[str] = None
    """Formatted error message if the run failed."""


def interpret(source: str, limits: Optional[InterpreterLimits] = None) -> Bindings:
    """
    Runs a program and returns its final variable bindings.

    Raises:
        InterpreterError: If tokenizing, parsing or evaluation fails
    """
    return Evaluator(Parser(Tokenizer(source, limits=limits))).interpret()


def calculate(source: str, limits: Optional[InterpreterLimits] = None) -> Number:
    """
    Evaluates a single arithmetic expression and returns its value.

    Raises:
        InterpreterError: If tokenizing, parsing or evaluation fails
    """
    return Evaluator(Parser(Tokenizer(source, limits=limits))).interpret_expression()


def evaluate(
    source: str,
    mode: Literal["program", "expression"] = "program",
    limits: Optional[InterpreterLimits] = None,
) -> EvaluationResult:
    """
    Runs source text and captures interpreter errors in the result.

    Args:
        source: Program text, or a single expression in expression mode
        mode: "program" for block-structured programs, "expression" for
            the line-oriented arithmetic flavor
        limits: Optional interpreter limits

    Returns:
        The evaluation result with value, bindings and success status
    """
    try:
        if mode == "expression":
            return EvaluationResult(success=True, value=calculate(source, limits))
        return EvaluationResult(success=True, bindings=interpret(source, limits))
    except InterpreterError as error:
        return EvaluationResult(success=False, error=error.format_with_context())
