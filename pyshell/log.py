"""
Logging setup for pyshell.

Stdout and stderr belong to the commands the user runs, so diagnostics are
silent unless a level or a log file is asked for.
"""

import logging
import sys
from datetime import datetime
from pathlib import Path

from pyshell.config import ShellConfig


ROOT_LOGGER = "pyshell"


class LogFormatter(logging.Formatter):
    """``[timestamp] LEVEL    [module] message``"""

    def format(self, record: logging.LogRecord) -> str:
        timestamp = datetime.fromtimestamp(record.created).strftime(
            '%Y-%m-%d %H:%M:%S.%f'
        )[:-3]
        module = record.name.split(".", 1)[-1]
        message = f"[{timestamp}] {record.levelname:8s} [{module}] {record.getMessage()}"
        if record.exc_info:
            message += "\n" + self.formatException(record.exc_info)
        return message


def setup_logging(config: ShellConfig) -> logging.Logger:
    """Configure the package root logger from ``config``. Safe to call twice."""
    root = logging.getLogger(ROOT_LOGGER)
    for handler in list(root.handlers):
        root.removeHandler(handler)
        handler.close()

    root.setLevel(config.log_level)
    root.propagate = False

    if config.log_file:
        path = Path(config.log_file)
        path.parent.mkdir(parents=True, exist_ok=True)
        handler = logging.FileHandler(path)
    elif config.log_level < logging.WARNING:
        handler = logging.StreamHandler(sys.stderr)
    else:
        handler = logging.NullHandler()

    handler.setLevel(config.log_level)
    handler.setFormatter(LogFormatter())
    root.addHandler(handler)
    return root
