"""
Interpreter for a small Pascal subset.

This package provides a lazy tokenizer, a recursive-descent parser producing
an immutable AST, and a tree-walking evaluator with a per-run variable store.
"""

# Core types and utilities
from .ast import (
    AssignNode,
    AstNode,
    AstNodeBase,
    BinaryOperator,
    BinaryOpNode,
    BlockNode,
    CompoundNode,
    ExpressionNode,
    NoOpNode,
    NumberLiteralNode,
    ProgramNode,
    StatementNode,
    TypeSpecNode,
    UnaryOperator,
    UnaryOpNode,
    VarDeclNode,
    VariableNode,
    ast_to_string,
    calculate_ast_depth,
    count_ast_nodes,
)
from .config import InterpreterConfig
from .errors import (
    EvaluationError,
    InterpreterError,
    LexerError,
    LimitExceededError,
    NameResolutionError,
    ParseError,
    SemanticError,
)

# Evaluator
from .evaluator import (
    Bindings,
    EvaluationResult,
    Evaluator,
    Number,
    calculate,
    evaluate,
    interpret,
)
from .limits import (
    DEFAULT_INTERPRETER_LIMITS,
    InterpreterLimits,
    check_ast_depth,
    check_ast_node_count,
    check_nesting_depth,
    check_source_length,
)

# Parser
from .parser import (
    Parser,
    parse,
    parse_expression,
)

# Static analysis
from .semantic import (
    BuiltinTypeSymbol,
    SemanticAnalyzer,
    SymbolTable,
    VarSymbol,
    analyze,
)

# Tokenizer
from .tokenizer import (
    RESERVED_KEYWORDS,
    Token,
    Tokenizer,
    TokenType,
    tokenize,
)

__version__ = "0.1.0"

__all__ = [
    # AST types
    "AstNode",
    "AstNodeBase",
    "ExpressionNode",
    "StatementNode",
    "ProgramNode",
    "BlockNode",
    "VarDeclNode",
    "TypeSpecNode",
    "CompoundNode",
    "AssignNode",
    "NoOpNode",
    "VariableNode",
    "UnaryOpNode",
    "BinaryOpNode",
    "NumberLiteralNode",
    "UnaryOperator",
    "BinaryOperator",
    "count_ast_nodes",
    "calculate_ast_depth",
    "ast_to_string",
    # Errors
    "InterpreterError",
    "LexerError",
    "ParseError",
    "EvaluationError",
    "NameResolutionError",
    "SemanticError",
    "LimitExceededError",
    # Limits and configuration
    "InterpreterLimits",
    "DEFAULT_INTERPRETER_LIMITS",
    "InterpreterConfig",
    "check_source_length",
    "check_nesting_depth",
    "check_ast_depth",
    "check_ast_node_count",
    # Tokenizer
    "Token",
    "TokenType",
    "Tokenizer",
    "RESERVED_KEYWORDS",
    "tokenize",
    # Parser
    "Parser",
    "parse",
    "parse_expression",
    # Evaluator
    "Number",
    "Bindings",
    "Evaluator",
    "EvaluationResult",
    "interpret",
    "calculate",
    "evaluate",
    # Static analysis
    "SymbolTable",
    "BuiltinTypeSymbol",
    "VarSymbol",
    "SemanticAnalyzer",
    "analyze",
]
