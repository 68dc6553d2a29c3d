"""
Logging setup for command-line use.

Library modules only create loggers; handlers are installed here.
"""

import logging
from typing import Union

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def enable_logging(log_level: Union[str, int] = "warning") -> None:
    """Configures the root logger to write to stderr at the given level."""
    if isinstance(log_level, str):
        log_level = log_level.upper()

    logging.basicConfig(level=log_level, format=LOG_FORMAT, force=True)
