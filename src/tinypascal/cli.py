"""
Command-line driver.

With a FILE argument, runs the program in it and prints the final variable
bindings. Without one, reads standard input line by line and prints the value
of each arithmetic expression, reporting errors and moving on to the next line.
"""

import argparse
import logging
import sys
from typing import List, Optional, TextIO

from .config import InterpreterConfig
from .errors import InterpreterError
from .evaluator import Evaluator, Number, calculate
from .limits import InterpreterLimits
from .parser import Parser
from .semantic import SemanticAnalyzer
from .tokenizer import Tokenizer
from .util.logging import enable_logging

logger = logging.getLogger(__name__)


def format_number(value: Number) -> str:
    """Formats a result the way it is printed on the command line."""
    if isinstance(value, float) and value.is_integer():
        return f"{value:.1f}"
    return str(value)


def run_program(
    source: str,
    limits: InterpreterLimits,
    check: bool = False,
    out: Optional[TextIO] = None,
) -> None:
    """Runs a program and prints its bindings sorted by name."""
    parser = Parser(Tokenizer(source, limits=limits))
    program = parser.parse()

    if check:
        SemanticAnalyzer(source).analyze(program)

    bindings = Evaluator.from_ast(program, source).interpret()
    for name in sorted(bindings):
        print(f"{name} = {format_number(bindings[name])}", file=out)


def run_lines(
    lines: TextIO,
    limits: InterpreterLimits,
    out: Optional[TextIO] = None,
    err: Optional[TextIO] = None,
) -> int:
    """Evaluates each non-blank line as an expression; returns the error count."""
    err = sys.stderr if err is None else err
    errors = 0
    for line in lines:
        line = line.strip()
        if not line:
            continue
        try:
            print(format_number(calculate(line, limits)), file=out)
        except InterpreterError as error:
            errors += 1
            print(f"error: {error.format_with_context()}", file=err)
    return errors


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="tinypascal",
        description="Interpret Pascal-subset programs or arithmetic expressions.",
    )
    parser.add_argument(
        "file",
        nargs="?",
        help="program file to run (if omitted, evaluates expressions from stdin)",
    )
    parser.add_argument(
        "--calc",
        action="store_true",
        help="treat FILE as one arithmetic expression per line",
    )
    parser.add_argument(
        "--check",
        action="store_true",
        help="reject programs that use undeclared variables before running them",
    )
    parser.add_argument(
        "--log-level",
        choices=["debug", "info", "warning", "error", "critical"],
        help="override TINYPASCAL_LOG_LEVEL",
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_arg_parser().parse_args(argv)

    config = InterpreterConfig.from_env()
    if args.log_level:
        config = config.model_copy(update={"log_level": args.log_level})
    enable_logging(config.log_level)
    limits = config.to_limits()

    if args.file is None:
        run_lines(sys.stdin, limits)
        return 0

    try:
        with open(args.file, encoding="utf-8") as handle:
            if args.calc:
                run_lines(handle, limits)
                return 0
            source = handle.read()
    except OSError as error:
        logger.debug("file_unreadable", extra={"file": args.file})
        print(f"error: {error}", file=sys.stderr)
        return 1

    try:
        run_program(source, limits, check=args.check)
    except InterpreterError as error:
        logger.debug("program_failed", extra={"file": args.file})
        print(f"error: {error.format_with_context()}", file=sys.stderr)
        return 1

    return 0

