"""
Resource limits for tokenizing, parsing and evaluation.

These limits protect against runaway inputs: huge sources, deeply nested
expressions that would exhaust the Python stack, and oversized trees.
"""

from dataclasses import dataclass
from typing import Optional

from .errors import LimitExceededError


@dataclass(frozen=True)
class InterpreterLimits:
    """Interpreter limits configuration."""

    # Maximum source text length in characters
    max_source_length: int = 1_000_000

    # Maximum nesting of parentheses, unary chains and compound statements
    max_nesting_depth: int = 100

    # Maximum AST depth, bounds evaluator recursion on long operator chains
    max_ast_depth: int = 200

    # Maximum number of AST nodes in a parsed program
    max_ast_nodes: int = 100_000


DEFAULT_INTERPRETER_LIMITS = InterpreterLimits()


def check_source_length(
    source: str, limits: Optional[InterpreterLimits] = None
) -> None:
    """Validates that source length is within limits."""
    limits = limits or DEFAULT_INTERPRETER_LIMITS
    if len(source) > limits.max_source_length:
        raise LimitExceededError(
            "max_source_length", limits.max_source_length, len(source)
        )


def check_nesting_depth(
    depth: int,
    limits: Optional[InterpreterLimits] = None,
    position: Optional[int] = None,
    source: Optional[str] = None,
) -> None:
    """Validates nesting depth during parsing."""
    limits = limits or DEFAULT_INTERPRETER_LIMITS
    if depth > limits.max_nesting_depth:
        raise LimitExceededError(
            "max_nesting_depth", limits.max_nesting_depth, depth, position, source
        )


def check_ast_depth(depth: int, limits: Optional[InterpreterLimits] = None) -> None:
    """Validates AST depth after parsing."""
    limits = limits or DEFAULT_INTERPRETER_LIMITS
    if depth > limits.max_ast_depth:
        raise LimitExceededError("max_ast_depth", limits.max_ast_depth, depth)


def check_ast_node_count(
    count: int, limits: Optional[InterpreterLimits] = None
) -> None:
    """Validates AST node count after parsing."""
    limits = limits or DEFAULT_INTERPRETER_LIMITS
    if count > limits.max_ast_nodes:
        raise LimitExceededError("max_ast_nodes", limits.max_ast_nodes, count)
