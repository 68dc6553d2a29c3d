"""
Interpreter configuration.

Settings can be given explicitly or read from TINYPASCAL_* environment
variables.
"""

from __future__ import annotations

import os
from typing import Literal, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field

from .limits import DEFAULT_INTERPRETER_LIMITS, InterpreterLimits

ENV_VAR_LOG_LEVEL = "TINYPASCAL_LOG_LEVEL"
ENV_VAR_MAX_SOURCE_LENGTH = "TINYPASCAL_MAX_SOURCE_LENGTH"
ENV_VAR_MAX_NESTING_DEPTH = "TINYPASCAL_MAX_NESTING_DEPTH"
ENV_VAR_MAX_AST_DEPTH = "TINYPASCAL_MAX_AST_DEPTH"
ENV_VAR_MAX_AST_NODES = "TINYPASCAL_MAX_AST_NODES"

LogLevel = Literal["debug", "info", "warning", "error", "critical"]


class InterpreterConfig(BaseModel):
    """Configuration for running programs through the interpreter."""

    model_config = ConfigDict(frozen=True)

    log_level: LogLevel = "warning"

    # Resource limits, see InterpreterLimits
    max_source_length: int = Field(
        DEFAULT_INTERPRETER_LIMITS.max_source_length, gt=0
    )
    max_nesting_depth: int = Field(
        DEFAULT_INTERPRETER_LIMITS.max_nesting_depth, gt=0
    )
    max_ast_depth: int = Field(DEFAULT_INTERPRETER_LIMITS.max_ast_depth, gt=0)
    max_ast_nodes: int = Field(DEFAULT_INTERPRETER_LIMITS.max_ast_nodes, gt=0)

    def to_limits(self) -> InterpreterLimits:
        return InterpreterLimits(
            max_source_length=self.max_source_length,
            max_nesting_depth=self.max_nesting_depth,
            max_ast_depth=self.max_ast_depth,
            max_ast_nodes=self.max_ast_nodes,
        )

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> InterpreterConfig:
        """
        Builds a configuration from TINYPASCAL_* environment variables.

        Unset variables fall back to the defaults.

        Raises:
            pydantic.ValidationError: If a variable holds an invalid value
        """
        environ = os.environ if environ is None else environ
        candidate = {
            "log_level": environ.get(ENV_VAR_LOG_LEVEL),
            "max_source_length": environ.get(ENV_VAR_MAX_SOURCE_LENGTH),
            "max_nesting_depth": environ.get(ENV_VAR_MAX_NESTING_DEPTH),
            "max_ast_depth": environ.get(ENV_VAR_MAX_AST_DEPTH),
            "max_ast_nodes": environ.get(ENV_VAR_MAX_AST_NODES),
        }
        if candidate["log_level"] is not None:
            candidate["log_level"] = candidate["log_level"].lower()

        return cls.model_validate(
            {key: value for key, value in candidate.items() if value is not None}
        )
