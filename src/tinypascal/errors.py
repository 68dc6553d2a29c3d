"""
Error types for the interpreter pipeline.

All interpreter errors extend InterpreterError for consistent handling.
"""

from typing import Optional


class InterpreterError(Exception):
    """
    Base error class for all tokenizer, parser and evaluator errors.
    """

    def __init__(
        self,
        message: str,
        position: Optional[int] = None,
        source: Optional[str] = None,
    ):
        super().__init__(message)
        self.message = message
        self.position = position
        self.source = source

    def line_and_column(self) -> Optional[tuple[int, int]]:
        """Returns the 1-based (line, column) of the error position."""
        if self.source is None or self.position is None:
            return None

        line = self.source.count("\n", 0, self.position) + 1
        line_start = self.source.rfind("\n", 0, self.position) + 1
        return line, self.position - line_start + 1

    def format_with_context(self) -> str:
        """
        Returns a formatted error message with the offending source line.
        """
        location = self.line_and_column()
        if location is None:
            return self.message

        line, column = location
        line_start = self.source.rfind("\n", 0, self.position) + 1
        line_end = self.source.find("\n", self.position)
        if line_end == -1:
            line_end = len(self.source)

        pointer = " " * (column - 1) + "^"
        return (
            f"{self.message} (line {line}, column {column})\n"
            f"  {self.source[line_start:line_end]}\n"
            f"  {pointer}"
        )


class LexerError(InterpreterError):
    """
    Error thrown during tokenization (lexical analysis).
    """

    def __init__(
        self,
        character: str,
        position: int,
        source: Optional[str] = None,
        message: Optional[str] = None,
    ):
        super().__init__(
            message or f"Unexpected character: '{character}'", position, source
        )
        self.character = character


class ParseError(InterpreterError):
    """
    Error thrown during parsing (syntax analysis).
    """

    def __init__(
        self,
        message: str,
        position: Optional[int] = None,
        source: Optional[str] = None,
        expected: Optional[str] = None,
        actual: Optional[str] = None,
    ):
        super().__init__(message, position, source)
        self.expected = expected
        self.actual = actual


class EvaluationError(InterpreterError):
    """
    Error thrown during evaluation (runtime error).
    """

    pass


class NameResolutionError(EvaluationError):
    """
    Error thrown when a variable is read before it has been assigned.
    """

    def __init__(
        self,
        name: str,
        position: Optional[int] = None,
        source: Optional[str] = None,
    ):
        super().__init__(f"Name error: '{name}' is not defined", position, source)
        self.name = name


class SemanticError(InterpreterError):
    """
    Error thrown by the static-analysis pass.
    """

    pass


class LimitExceededError(InterpreterError):
    """
    Error thrown when interpreter limits are exceeded.
    """

    def __init__(
        self,
        limit_name: str,
        limit: int,
        actual: int,
        position: Optional[int] = None,
        source: Optional[str] = None,
    ):
        message = f"Limit exceeded: {limit_name} (limit: {limit}, actual: {actual})"
        super().__init__(message, position, source)
        self.limit_name = limit_name
        self.limit = limit
        self.actual = actual
