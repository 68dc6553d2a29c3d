"""
Parser for the Pascal subset.

Pulls tokens from a Tokenizer one at a time and builds an Abstract Syntax
Tree (AST). Uses recursive descent with exactly one token of lookahead.

Grammar:

    program        : PROGRAM variable SEMI block DOT
    block          : declarations compound_statement
    declarations   : (VAR (variable_declaration SEMI)+)? procedure_decl*
    procedure_decl : PROCEDURE ID SEMI block SEMI
    variable_declaration : ID (COMMA ID)* COLON type_spec
    type_spec      : INTEGER | REAL
    compound_statement : BEGIN statement_list END
    statement_list : statement (SEMI statement)*
    statement      : compound_statement | assignment_statement | empty
    assignment_statement : variable ASSIGN expr
    expr           : term ((PLUS | MINUS) term)*
    term           : factor ((MUL | INTEGER_DIV | FLOAT_DIV) factor)*
    factor         : (PLUS | MINUS) factor
                   | INTEGER_CONST | REAL_CONST
                   | LPAREN expr RPAREN
                   | variable
    variable       : ID
"""

import logging
from typing import List, Optional

from .ast import (
    AssignNode,
    AstNode,
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
    calculate_ast_depth,
    count_ast_nodes,
)
from .errors import ParseError
from .limits import (
    DEFAULT_INTERPRETER_LIMITS,
    InterpreterLimits,
    check_ast_depth,
    check_ast_node_count,
    check_nesting_depth,
)
from .tokenizer import Token, Tokenizer, TokenType

logger = logging.getLogger(__name__)

_ADDITIVE_OPERATORS = {
    TokenType.PLUS: "+",
    TokenType.MINUS: "-",
}

_MULTIPLICATIVE_OPERATORS = {
    TokenType.MUL: "*",
    TokenType.FLOAT_DIV: "/",
    TokenType.INTEGER_DIV: "DIV",
}


class Parser:
    """Recursive-descent parser over a lazy token stream."""

    def __init__(self, tokenizer: Tokenizer):
        self._tokenizer = tokenizer
        self._source = tokenizer.source
        self._limits = tokenizer.limits or DEFAULT_INTERPRETER_LIMITS
        self._depth = 0
        self._current_token = tokenizer.next_token()

    @property
    def source(self) -> str:
        return self._source

    @property
    def current_token(self) -> Token:
        return self._current_token

    def parse(self) -> ProgramNode:
        """Parses a complete program and returns its root node."""
        program = self._parse_program()
        self._expect_end_of_input()

        node_count = self._validate_tree(program)

        logger.debug(
            "program_parsed",
            extra={"program": program.name, "node_count": node_count},
        )
        return program

    def parse_expression(self) -> ExpressionNode:
        """Parses a single arithmetic expression spanning the whole input."""
        node = self._parse_expr()
        self._expect_end_of_input()
        self._validate_tree(node)
        return node

    def _validate_tree(self, node: AstNode) -> int:
        """Validates AST limits and returns the node count."""
        node_count = count_ast_nodes(node)
        check_ast_node_count(node_count, self._limits)
        check_ast_depth(calculate_ast_depth(node), self._limits)
        return node_count

    # ============================================================
    # Token Helpers
    # ============================================================

    def eat(self, token_type: TokenType) -> Token:
        """
        Consumes the current token if it has the expected type.

        Raises:
            ParseError: If the lookahead token has a different type
        """
        token = self._current_token
        if token.type != token_type:
            raise ParseError(
                f"Invalid syntax: expected {token_type.value}, got {token.type.value}",
                token.position,
                self._source,
                expected=token_type.value,
                actual=token.type.value,
            )
        self._current_token = self._tokenizer.next_token()
        return token

    def _check(self, *types: TokenType) -> bool:
        return self._current_token.type in types

    def _expect_end_of_input(self) -> None:
        self.eat(TokenType.EOF)

    def _enter(self) -> None:
        self._depth += 1
        check_nesting_depth(
            self._depth, self._limits, self._current_token.position, self._source
        )

    def _leave(self) -> None:
        self._depth -= 1

    # ============================================================
    # Program Structure
    # ============================================================

    def _parse_program(self) -> ProgramNode:
        """program : PROGRAM variable SEMI block DOT"""
        position = self.eat(TokenType.PROGRAM).position
        name = self._parse_variable().name
        self.eat(TokenType.SEMI)
        block = self._parse_block()
        self.eat(TokenType.DOT)
        return ProgramNode(position=position, name=name, block=block)

    def _parse_block(self) -> BlockNode:
        """block : declarations compound_statement"""
        position = self._current_token.position
        declarations = self._parse_declarations()
        compound_statement = self._parse_compound_statement()
        return BlockNode(
            position=position,
            declarations=tuple(declarations),
            compound_statement=compound_statement,
        )

    def _parse_declarations(self) -> List[VarDeclNode]:
        """declarations : (VAR (variable_declaration SEMI)+)? procedure_decl*"""
        declarations: List[VarDeclNode] = []

        if self._check(TokenType.VAR):
            self.eat(TokenType.VAR)
            while True:
                declarations.extend(self._parse_variable_declaration())
                self.eat(TokenType.SEMI)
                if not self._check(TokenType.ID):
                    break

        while self._check(TokenType.PROCEDURE):
            self._parse_procedure_declaration()

        return declarations

    def _parse_procedure_declaration(self) -> None:
        """procedure_decl : PROCEDURE ID SEMI block SEMI"""
        position = self.eat(TokenType.PROCEDURE).position
        name = self.eat(TokenType.ID).value
        self.eat(TokenType.SEMI)
        self._enter()
        self._parse_block()
        self._leave()
        self.eat(TokenType.SEMI)

        logger.debug(
            "procedure_declaration_skipped",
            extra={"procedure": name, "position": position},
        )

    def _parse_variable_declaration(self) -> List[VarDeclNode]:
        """variable_declaration : ID (COMMA ID)* COLON type_spec"""
        variables = [self._parse_variable()]

        while self._check(TokenType.COMMA):
            self.eat(TokenType.COMMA)
            variables.append(self._parse_variable())

        self.eat(TokenType.COLON)
        type_spec = self._parse_type_spec()

        return [
            VarDeclNode(position=variable.position, variable=variable, type_spec=type_spec)
            for variable in variables
        ]

    def _parse_type_spec(self) -> TypeSpecNode:
        """type_spec : INTEGER | REAL"""
        token = self._current_token
        if self._check(TokenType.INTEGER):
            self.eat(TokenType.INTEGER)
            return TypeSpecNode(position=token.position, name="INTEGER")

        self.eat(TokenType.REAL)
        return TypeSpecNode(position=token.position, name="REAL")

    # ============================================================
    # Statements
    # ============================================================

    def _parse_compound_statement(self) -> CompoundNode:
        """compound_statement : BEGIN statement_list END"""
        position = self.eat(TokenType.BEGIN).position
        self._enter()
        statements = self._parse_statement_list()
        self._leave()
        self.eat(TokenType.END)
        return CompoundNode(position=position, statements=tuple(statements))

    def _parse_statement_list(self) -> List[StatementNode]:
        """statement_list : statement (SEMI statement)*"""
        statements = [self._parse_statement()]

        while self._check(TokenType.SEMI):
            self.eat(TokenType.SEMI)
            statements.append(self._parse_statement())

        # Two statements must be separated by ';'
        if self._check(TokenType.ID):
            self.eat(TokenType.SEMI)

        return statements

    def _parse_statement(self) -> StatementNode:
        """statement : compound_statement | assignment_statement | empty"""
        if self._check(TokenType.BEGIN):
            return self._parse_compound_statement()

        if self._check(TokenType.ID):
            return self._parse_assignment_statement()

        return NoOpNode(position=self._current_token.position)

    def _parse_assignment_statement(self) -> AssignNode:
        """assignment_statement : variable ASSIGN expr"""
        target = self._parse_variable()
        position = self.eat(TokenType.ASSIGN).position
        value = self._parse_expr()
        return AssignNode(position=position, target=target, value=value)

    def _parse_variable(self) -> VariableNode:
        """variable : ID"""
        token = self.eat(TokenType.ID)
        return VariableNode(position=token.position, name=str(token.value))

    # ============================================================
    # Expressions (by precedence, lowest to highest)
    # ============================================================

    def _parse_expr(self) -> ExpressionNode:
        """expr : term ((PLUS | MINUS) term)*"""
        node = self._parse_term()

        while self._check(*_ADDITIVE_OPERATORS):
            token = self.eat(self._current_token.type)
            operator: BinaryOperator = _ADDITIVE_OPERATORS[token.type]
            right = self._parse_term()
            node = BinaryOpNode(
                position=token.position,
                operator=operator,
                left=node,
                right=right,
            )

        return node

    def _parse_term(self) -> ExpressionNode:
        """term : factor ((MUL | INTEGER_DIV | FLOAT_DIV) factor)*"""
        node = self._parse_factor()

        while self._check(*_MULTIPLICATIVE_OPERATORS):
            token = self.eat(self._current_token.type)
            operator: BinaryOperator = _MULTIPLICATIVE_OPERATORS[token.type]
            right = self._parse_factor()
            node = BinaryOpNode(
                position=token.position,
                operator=operator,
                left=node,
                right=right,
            )

        return node

    def _parse_factor(self) -> ExpressionNode:
        """factor : unary sign, number, parenthesized expr or variable"""
        token = self._current_token

        if self._check(TokenType.PLUS, TokenType.MINUS):
            self.eat(token.type)
            operator: UnaryOperator = _ADDITIVE_OPERATORS[token.type]
            self._enter()
            operand = self._parse_factor()
            self._leave()
            return UnaryOpNode(position=token.position, operator=operator, operand=operand)

        if self._check(TokenType.INTEGER_CONST):
            self.eat(TokenType.INTEGER_CONST)
            return NumberLiteralNode(position=token.position, value=token.value)

        if self._check(TokenType.REAL_CONST):
            self.eat(TokenType.REAL_CONST)
            return NumberLiteralNode(position=token.position, value=token.value, is_real=True)

        if self._check(TokenType.LPAREN):
            self.eat(TokenType.LPAREN)
            self._enter()
            node = self._parse_expr()
            self._leave()
            self.eat(TokenType.RPAREN)
            return node

        if self._check(TokenType.ID):
            return self._parse_variable()

        raise ParseError(
            f"Invalid syntax: unexpected {token.type.value} in expression",
            token.position,
            self._source,
            actual=token.type.value,
        )


def parse(
    source: str, limits: Optional[InterpreterLimits] = None
) -> ProgramNode:
    """
    Parses program text into an AST.

    Args:
        source: The program text to parse
        limits: Optional interpreter limits

    Returns:
        The Program root node

    Raises:
        LexerError: If tokenization fails
        ParseError: If parsing fails
    """
    return Parser(Tokenizer(source, limits=limits)).parse()


def parse_expression(
    source: str, limits: Optional[InterpreterLimits] = None
) -> ExpressionNode:
    """
    Parses a single arithmetic expression into an AST.

    Raises:
        LexerError: If tokenization fails
        ParseError: If parsing fails
    """
    return Parser(Tokenizer(source, limits=limits)).parse_expression()
