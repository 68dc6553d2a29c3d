"""
Tests for the tokenizer.
"""

from types import MappingProxyType

import pytest

from tinypascal import LexerError, LimitExceededError, InterpreterLimits, tokenize
from tinypascal.tokenizer import MAX_INTEGER_DIGITS, RESERVED_KEYWORDS, Tokenizer, TokenType


def token_types(source: str) -> list[TokenType]:
    return [t.type for t in tokenize(source)[:-1]]


class TestLiterals:
    """Tests for numeric literal tokenization."""

    def test_tokenizes_integer_literals(self):
        tokens = tokenize("42")
        assert len(tokens) == 2
        assert tokens[0].type == TokenType.INTEGER_CONST
        assert tokens[0].value == 42
        assert tokens[0].position == 0
        assert tokens[1].type == TokenType.EOF

    def test_tokenizes_real_literals(self):
        tokens = tokenize("3.14159")
        assert tokens[0].type == TokenType.REAL_CONST
        assert tokens[0].value == pytest.approx(3.14159)
        assert isinstance(tokens[0].value, float)

    def test_integer_payload_is_base_ten(self):
        tokens = tokenize("007")
        assert tokens[0].value == 7

    def test_does_not_absorb_sign(self):
        assert token_types("-5") == [TokenType.MINUS, TokenType.INTEGER_CONST]

    def test_dot_without_digits_is_not_part_of_number(self):
        assert token_types("5.") == [TokenType.INTEGER_CONST, TokenType.DOT]


class TestIdentifiers:
    """Tests for identifier and reserved word tokenization."""

    def test_tokenizes_simple_identifiers(self):
        tokens = tokenize("foo")
        assert tokens[0].type == TokenType.ID
        assert tokens[0].value == "foo"
        assert tokens[0].position == 0

    def test_lower_cases_identifiers(self):
        tokens = tokenize("MyVar")
        assert tokens[0].value == "myvar"

    def test_tokenizes_identifiers_with_underscores_and_digits(self):
        tokens = tokenize("_private_var2")
        assert tokens[0].type == TokenType.ID
        assert tokens[0].value == "_private_var2"

    @pytest.mark.parametrize(
        "spelling,expected",
        [
            ("PROGRAM", TokenType.PROGRAM),
            ("program", TokenType.PROGRAM),
            ("Var", TokenType.VAR),
            ("begin", TokenType.BEGIN),
            ("END", TokenType.END),
            ("integer", TokenType.INTEGER),
            ("Real", TokenType.REAL),
            ("div", TokenType.INTEGER_DIV),
            ("procedure", TokenType.PROCEDURE),
        ],
    )
    def test_resolves_reserved_words_case_insensitively(self, spelling, expected):
        tokens = tokenize(spelling)
        assert tokens[0].type == expected
        assert tokens[0].value == spelling.upper()

    def test_reserved_word_prefix_is_an_identifier(self):
        tokens = tokenize("beginning")
        assert tokens[0].type == TokenType.ID
        assert tokens[0].value == "beginning"

    def test_reserved_word_table_is_immutable(self):
        with pytest.raises(TypeError):
            RESERVED_KEYWORDS["WHILE"] = TokenType.ID  # type: ignore[index]

    def test_uses_reserved_word_table_given_at_construction(self):
        table = MappingProxyType({"BEGIN": TokenType.BEGIN})
        tokenizer = Tokenizer("begin end", reserved_words=table)
        assert tokenizer.next_token().type == TokenType.BEGIN
        end = tokenizer.next_token()
        assert end.type == TokenType.ID
        assert end.value == "end"


class TestOperators:
    """Tests for operator and punctuation tokenization."""

    def test_tokenizes_arithmetic_operators(self):
        assert token_types("+ - * / DIV") == [
            TokenType.PLUS,
            TokenType.MINUS,
            TokenType.MUL,
            TokenType.FLOAT_DIV,
            TokenType.INTEGER_DIV,
        ]

    def test_tokenizes_assign_with_lookahead(self):
        assert token_types("x := 1") == [
            TokenType.ID,
            TokenType.ASSIGN,
            TokenType.INTEGER_CONST,
        ]

    def test_tokenizes_lone_colon(self):
        assert token_types("a : INTEGER") == [
            TokenType.ID,
            TokenType.COLON,
            TokenType.INTEGER,
        ]

    def test_assign_requires_adjacent_equals(self):
        with pytest.raises(LexerError) as exc_info:
            tokenize("x : = 1")
        assert exc_info.value.character == "="

    def test_tokenizes_punctuation(self):
        assert token_types(", ; . ( )") == [
            TokenType.COMMA,
            TokenType.SEMI,
            TokenType.DOT,
            TokenType.LPAREN,
            TokenType.RPAREN,
        ]

    def test_tokenizes_without_whitespace(self):
        assert token_types("(1+2.5)*x") == [
            TokenType.LPAREN,
            TokenType.INTEGER_CONST,
            TokenType.PLUS,
            TokenType.REAL_CONST,
            TokenType.RPAREN,
            TokenType.MUL,
            TokenType.ID,
        ]


class TestWhitespaceAndComments:
    """Tests for skipped input."""

    def test_skips_whitespace_of_all_kinds(self):
        tokens = tokenize(" \t\r\n 1 \n")
        assert tokens[0].type == TokenType.INTEGER_CONST
        assert tokens[0].position == 5

    def test_skips_comments(self):
        assert token_types("{ a comment } x { another }") == [TokenType.ID]

    def test_comments_do_not_nest(self):
        assert token_types("{ outer { inner } y") == [TokenType.ID]

    def test_unterminated_comment_runs_to_end_of_input(self):
        tokens = tokenize("x { never closed")
        assert [t.type for t in tokens] == [TokenType.ID, TokenType.EOF]


class TestLazyTokenizer:
    """Tests for the on-demand token stream."""

    def test_returns_tokens_one_at_a_time(self):
        tokenizer = Tokenizer("a + 1")
        assert tokenizer.next_token().type == TokenType.ID
        assert tokenizer.next_token().type == TokenType.PLUS
        assert tokenizer.next_token().type == TokenType.INTEGER_CONST

    def test_eof_is_idempotent(self):
        tokenizer = Tokenizer("x")
        tokenizer.next_token()
        for _ in range(3):
            token = tokenizer.next_token()
            assert token.type == TokenType.EOF
            assert token.position == 1

    def test_empty_source_yields_eof(self):
        assert [t.type for t in tokenize("")] == [TokenType.EOF]

    def test_tokens_are_immutable(self):
        token = tokenize("x")[0]
        with pytest.raises(AttributeError):
            token.value = "y"  # type: ignore[misc]


class TestErrors:
    """Tests for lexical errors."""

    def test_rejects_unknown_character(self):
        with pytest.raises(LexerError) as exc_info:
            tokenize("x := 1 # 2")
        assert exc_info.value.character == "#"
        assert exc_info.value.position == 7

    def test_error_is_raised_lazily(self):
        tokenizer = Tokenizer("1 ?")
        assert tokenizer.next_token().type == TokenType.INTEGER_CONST
        with pytest.raises(LexerError):
            tokenizer.next_token()

    def test_error_reports_line_and_column(self):
        with pytest.raises(LexerError) as exc_info:
            tokenize("BEGIN\n  x := @\nEND")
        assert exc_info.value.line_and_column() == (2, 8)
        formatted = exc_info.value.format_with_context()
        assert "line 2, column 8" in formatted
        assert "  x := @" in formatted

    def test_rejects_oversized_source(self):
        with pytest.raises(LimitExceededError) as exc_info:
            tokenize("1 + 1", InterpreterLimits(max_source_length=3))
        assert exc_info.value.limit_name == "max_source_length"
        assert exc_info.value.actual == 5

    def test_rejects_overlong_integer_literal(self):
        with pytest.raises(LexerError) as exc_info:
            tokenize("x := " + "1" * 5000)
        assert exc_info.value.position == 5
        assert "Integer literal too long: 5000 digits" in exc_info.value.message

    def test_accepts_integer_literal_at_digit_limit(self):
        token = tokenize("9" * MAX_INTEGER_DIGITS)[0]
        assert token.type == TokenType.INTEGER_CONST
        assert token.value == int("9" * MAX_INTEGER_DIGITS)
