"""
Tokenizer (lexer) for the Pascal subset.

Converts program text into tokens on demand for the parser.
"""

from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import List, Mapping, Optional, Union

from .errors import LexerError
from .limits import InterpreterLimits, check_source_length


class TokenType(Enum):
    """Token types produced by the tokenizer."""

    # Literals
    INTEGER_CONST = "INTEGER_CONST"
    REAL_CONST = "REAL_CONST"

    # Identifiers
    ID = "ID"

    # Reserved words
    PROGRAM = "PROGRAM"
    VAR = "VAR"
    PROCEDURE = "PROCEDURE"
    BEGIN = "BEGIN"
    END = "END"
    INTEGER = "INTEGER"
    REAL = "REAL"
    INTEGER_DIV = "DIV"

    # Operators
    PLUS = "PLUS"
    MINUS = "MINUS"
    MUL = "MUL"
    FLOAT_DIV = "FLOAT_DIV"

    # Punctuation
    ASSIGN = "ASSIGN"
    COLON = "COLON"
    SEMI = "SEMI"
    DOT = "DOT"
    COMMA = "COMMA"
    LPAREN = "LPAREN"
    RPAREN = "RPAREN"

    # Special
    EOF = "EOF"


TokenValue = Union[int, float, str, None]


@dataclass(frozen=True)
class Token:
    """A token produced by the tokenizer."""

    type: TokenType
    value: TokenValue
    position: int


# Reserved words, keyed by their upper-cased spelling
RESERVED_KEYWORDS: Mapping[str, TokenType] = MappingProxyType(
    {
        "PROGRAM": TokenType.PROGRAM,
        "VAR": TokenType.VAR,
        "PROCEDURE": TokenType.PROCEDURE,
        "BEGIN": TokenType.BEGIN,
        "END": TokenType.END,
        "INTEGER": TokenType.INTEGER,
        "REAL": TokenType.REAL,
        "DIV": TokenType.INTEGER_DIV,
    }
)

_SINGLE_CHAR_TOKENS: Mapping[str, TokenType] = MappingProxyType(
    {
        "(": TokenType.LPAREN,
        ")": TokenType.RPAREN,
        ".": TokenType.DOT,
        ",": TokenType.COMMA,
        ";": TokenType.SEMI,
        "+": TokenType.PLUS,
        "-": TokenType.MINUS,
        "*": TokenType.MUL,
        "/": TokenType.FLOAT_DIV,
    }
)

# Longest integer literal int() accepts under the default conversion limit
MAX_INTEGER_DIGITS = 4300


def _is_digit(ch: str) -> bool:
    """Checks if a character is a digit."""
    return "0" <= ch <= "9"


def _is_identifier_start(ch: str) -> bool:
    """Checks if a character can start an identifier."""
    return ("a" <= ch <= "z") or ("A" <= ch <= "Z") or ch == "_"


def _is_identifier_part(ch: str) -> bool:
    """Checks if a character can continue an identifier."""
    return _is_identifier_start(ch) or _is_digit(ch)


def _is_whitespace(ch: str) -> bool:
    """Checks if a character is whitespace."""
    return ch in (" ", "\t", "\n", "\r")


class Tokenizer:
    """
    Lazy tokenizer over a single source string.

    Each call to next_token() scans exactly one token. Once the source is
    exhausted, every further call returns an EOF token.
    """

    def __init__(
        self,
        source: str,
        reserved_words: Mapping[str, TokenType] = RESERVED_KEYWORDS,
        limits: Optional[InterpreterLimits] = None,
    ):
        check_source_length(source, limits)
        self._source = source
        self._reserved_words = reserved_words
        self._limits = limits
        self._position = 0

    @property
    def source(self) -> str:
        return self._source

    @property
    def limits(self) -> Optional[InterpreterLimits]:
        return self._limits

    def next_token(self) -> Token:
        """Scans and returns the next token."""
        while not self._is_at_end():
            ch = self._peek()

            if _is_whitespace(ch):
                self._advance()
                continue

            if ch == "{":
                self._skip_comment()
                continue

            return self._scan_token()

        return Token(TokenType.EOF, None, self._position)

    def _is_at_end(self) -> bool:
        return self._position >= len(self._source)

    def _peek(self) -> str:
        if self._is_at_end():
            return "\0"
        return self._source[self._position]

    def _peek_next(self) -> str:
        if self._position + 1 >= len(self._source):
            return "\0"
        return self._source[self._position + 1]

    def _advance(self) -> str:
        ch = self._source[self._position]
        self._position += 1
        return ch

    def _skip_comment(self) -> None:
        # Comments do not nest; an unterminated comment runs to end of input
        self._advance()  # consume '{'
        while not self._is_at_end() and self._peek() != "}":
            self._advance()
        if not self._is_at_end():
            self._advance()  # consume '}'

    def _scan_token(self) -> Token:
        start_position = self._position
        ch = self._peek()

        if _is_digit(ch):
            return self._scan_number(start_position)

        if _is_identifier_start(ch):
            return self._scan_identifier(start_position)

        if ch == ":":
            self._advance()
            if self._peek() == "=":
                self._advance()
                return Token(TokenType.ASSIGN, ":=", start_position)
            return Token(TokenType.COLON, ":", start_position)

        if ch in _SINGLE_CHAR_TOKENS:
            self._advance()
            return Token(_SINGLE_CHAR_TOKENS[ch], ch, start_position)

        raise LexerError(ch, start_position, self._source)

    def _scan_number(self, start_position: int) -> Token:
        value = ""

        # Integer part
        while _is_digit(self._peek()):
            value += self._advance()

        # Fractional part
        if self._peek() == "." and _is_digit(self._peek_next()):
            value += self._advance()  # consume '.'
            while _is_digit(self._peek()):
                value += self._advance()
            return Token(TokenType.REAL_CONST, float(value), start_position)

        if len(value) > MAX_INTEGER_DIGITS:
            raise LexerError(
                value[0],
                start_position,
                self._source,
                message=f"Integer literal too long: {len(value)} digits",
            )
        return Token(TokenType.INTEGER_CONST, int(value, 10), start_position)

    def _scan_identifier(self, start_position: int) -> Token:
        value = ""

        while _is_identifier_part(self._peek()):
            value += self._advance()

        keyword = value.upper()
        keyword_type = self._reserved_words.get(keyword)
        if keyword_type:
            return Token(keyword_type, keyword, start_position)

        return Token(TokenType.ID, value.lower(), start_position)


def tokenize(
    source: str, limits: Optional[InterpreterLimits] = None
) -> List[Token]:
    """
    Tokenizes a source string into a list of tokens ending with EOF.

    Args:
        source: The program or expression text to tokenize
        limits: Optional interpreter limits

    Returns:
        List of tokens

    Raises:
        LexerError: If the source contains an invalid character
    """
    tokenizer = Tokenizer(source, limits=limits)
    tokens: List[Token] = []

    while True:
        token = tokenizer.next_token()
        tokens.append(token)
        if token.type == TokenType.EOF:
            return tokens
