"""
Abstract Syntax Tree (AST) node types for the Pascal subset.

The AST is produced by the parser and consumed by the evaluator and the
semantic analyzer. Every node is immutable once constructed.
"""

from abc import ABC
from dataclasses import dataclass
from typing import Literal, Sequence, Union

# ============================================================
# Operator Types
# ============================================================

UnaryOperator = Literal["+", "-"]

BinaryOperator = Literal["+", "-", "*", "/", "DIV"]

TypeName = Literal["INTEGER", "REAL"]


# ============================================================
# AST Node Types
# ============================================================


@dataclass(frozen=True)
class AstNodeBase(ABC):
    """Base class for all AST nodes."""

    position: int
    """Position in source text (for error reporting)."""


@dataclass(frozen=True)
class NumberLiteralNode(AstNodeBase):
    """Integer or real literal node."""

    value: Union[int, float]
    is_real: bool = False

    @property
    def type(self) -> Literal["NumberLiteral"]:
        return "NumberLiteral"


@dataclass(frozen=True)
class VariableNode(AstNodeBase):
    """Variable reference node."""

    name: str

    @property
    def type(self) -> Literal["Variable"]:
        return "Variable"


@dataclass(frozen=True)
class UnaryOpNode(AstNodeBase):
    """Unary sign operator node."""

    operator: UnaryOperator
    operand: "ExpressionNode"

    @property
    def type(self) -> Literal["UnaryOp"]:
        return "UnaryOp"


@dataclass(frozen=True)
class BinaryOpNode(AstNodeBase):
    """Binary arithmetic operator node."""

    operator: BinaryOperator
    left: "ExpressionNode"
    right: "ExpressionNode"

    @property
    def type(self) -> Literal["BinaryOp"]:
        return "BinaryOp"


@dataclass(frozen=True)
class AssignNode(AstNodeBase):
    """Assignment statement node (target := value)."""

    target: VariableNode
    value: "ExpressionNode"

    @property
    def type(self) -> Literal["Assign"]:
        return "Assign"


@dataclass(frozen=True)
class NoOpNode(AstNodeBase):
    """Empty statement node."""

    @property
    def type(self) -> Literal["NoOp"]:
        return "NoOp"


@dataclass(frozen=True)
class CompoundNode(AstNodeBase):
    """BEGIN ... END statement list, in source order."""

    statements: Sequence["StatementNode"]

    @property
    def type(self) -> Literal["Compound"]:
        return "Compound"


@dataclass(frozen=True)
class TypeSpecNode(AstNodeBase):
    """Declared type of a variable."""

    name: TypeName

    @property
    def type(self) -> Literal["TypeSpec"]:
        return "TypeSpec"


@dataclass(frozen=True)
class VarDeclNode(AstNodeBase):
    """Single variable declaration."""

    variable: VariableNode
    type_spec: TypeSpecNode

    @property
    def type(self) -> Literal["VarDecl"]:
        return "VarDecl"


@dataclass(frozen=True)
class BlockNode(AstNodeBase):
    """Declarations followed by a compound statement."""

    declarations: Sequence[VarDeclNode]
    compound_statement: CompoundNode

    @property
    def type(self) -> Literal["Block"]:
        return "Block"


@dataclass(frozen=True)
class ProgramNode(AstNodeBase):
    """Program root node."""

    name: str
    block: BlockNode

    @property
    def type(self) -> Literal["Program"]:
        return "Program"


# Union types over the closed node set
ExpressionNode = Union[
    NumberLiteralNode,
    VariableNode,
    UnaryOpNode,
    BinaryOpNode,
]

StatementNode = Union[
    CompoundNode,
    AssignNode,
    NoOpNode,
]

AstNode = Union[
    ProgramNode,
    BlockNode,
    VarDeclNode,
    TypeSpecNode,
    CompoundNode,
    AssignNode,
    NoOpNode,
    VariableNode,
    UnaryOpNode,
    BinaryOpNode,
    NumberLiteralNode,
]


# ============================================================
# AST Utilities
# ============================================================


def _children(node: AstNode) -> Sequence[AstNode]:
    """Returns the direct children of a node, in evaluation order."""
    if node.type == "Program":
        return (node.block,)

    if node.type == "Block":
        return (*node.declarations, node.compound_statement)

    if node.type == "VarDecl":
        return (node.variable, node.type_spec)

    if node.type == "Compound":
        return tuple(node.statements)

    if node.type == "Assign":
        return (node.target, node.value)

    if node.type == "UnaryOp":
        return (node.operand,)

    if node.type == "BinaryOp":
        return (node.left, node.right)

    return ()


def count_ast_nodes(node: AstNode) -> int:
    """Counts the total number of nodes in an AST."""
    count = 0
    stack = [node]

    while stack:
        current = stack.pop()
        count += 1
        stack.extend(_children(current))

    return count


def calculate_ast_depth(node: AstNode) -> int:
    """Calculates the maximum depth of an AST."""
    max_depth = 0
    stack = [(node, 1)]

    while stack:
        current, depth = stack.pop()
        max_depth = max(max_depth, depth)
        stack.extend((child, depth + 1) for child in _children(current))

    return max_depth


def ast_to_string(node: AstNode, indent: int = 0) -> str:
    """Returns a human-readable representation of an AST node for debugging."""
    prefix = "  " * indent

    if node.type == "Program":
        return f"{prefix}Program: {node.name}\n{ast_to_string(node.block, indent + 1)}"

    if node.type == "Block":
        parts = [f"{prefix}Block:"]
        parts.extend(ast_to_string(d, indent + 1) for d in node.declarations)
        parts.append(ast_to_string(node.compound_statement, indent + 1))
        return "\n".join(parts)

    if node.type == "VarDecl":
        return f"{prefix}VarDecl: {node.variable.name} : {node.type_spec.name}"

    if node.type == "TypeSpec":
        return f"{prefix}TypeSpec: {node.name}"

    if node.type == "Compound":
        if not node.statements:
            return f"{prefix}Compound"
        statements_str = "\n".join(ast_to_string(s, indent + 1) for s in node.statements)
        return f"{prefix}Compound:\n{statements_str}"

    if node.type == "Assign":
        return f"{prefix}Assign: {node.target.name}\n{ast_to_string(node.value, indent + 1)}"

    if node.type == "NoOp":
        return f"{prefix}NoOp"

    if node.type == "Variable":
        return f"{prefix}Variable: {node.name}"

    if node.type == "NumberLiteral":
        kind = "Real" if node.is_real else "Integer"
        return f"{prefix}{kind}: {node.value}"

    if node.type == "UnaryOp":
        return f"{prefix}UnaryOp: {node.operator}\n{ast_to_string(node.operand, indent + 1)}"

    if node.type == "BinaryOp":
        return (
            f"{prefix}BinaryOp: {node.operator}\n"
            f"{ast_to_string(node.left, indent + 1)}\n"
            f"{ast_to_string(node.right, indent + 1)}"
        )

    return f"{prefix}Unknown: {node}"
