# SPDX-License-Identifier: MIT

import logging

from rich.console import Console
from rich.logging import RichHandler


def setup_logging(log_level: str = "WARNING") -> None:
    """Set up the root logger for the CLI.

    Args:
        log_level: Logging level name (DEBUG, INFO, WARNING, ERROR, CRITICAL).
            Unknown names fall back to WARNING.
    """
    level = logging.getLevelName(log_level.upper())
    if not isinstance(level, int):
        level = logging.WARNING

    root_logger = logging.getLogger()
    # Log records go to stderr
    if not any(isinstance(h, RichHandler) for h in root_logger.handlers):
        handler = RichHandler(
            console=Console(stderr=True), show_path=False, rich_tracebacks=True
        )
        handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))
        root_logger.addHandler(handler)
    root_logger.setLevel(level)
