"""Small coloured logging helpers writing to standard error."""

from __future__ import annotations

import sys
from enum import IntEnum

RED = "\033[31m"
GREEN = "\033[32m"
YELLOW = "\033[33m"
BLUE = "\033[34m"
PURPLE = "\033[35m"

BOLD_RED = "\033[01;31m"
BOLD_GREEN = "\033[01;32m"
BOLD_YELLOW = "\033[01;33m"
BOLD_BLUE = "\033[01;34m"
BOLD_PURPLE = "\033[01;35m"

BACK_RED = "\033[1m\033[01;41m"
BACK_GREEN = "\033[1m\033[01;42m"
BACK_YELLOW = "\033[1m\033[01;43m"
BACK_BLUE = "\033[1m\033[01;44m"
BACK_PURPLE = "\033[1m\033[01;45m"

DEFAULT = "\033[00m"

enabled = True


class LogLevel(IntEnum):
    ERROR = 0
    WARNING = 1
    INFO = 2
    DEBUG = 3

    def __str__(self) -> str:
        return self.name


def constructed(name: str) -> str:
    """Standard message for an object being created."""
    return f"{GREEN}[++ Constructor] {name}{DEFAULT}"


def destroyed(name: str) -> str:
    """Standard message for an object being torn down."""
    return f"{RED}[-- Destructor] {name}{DEFAULT}"


def log(message: str, level: LogLevel = LogLevel.INFO) -> str:
    """Write ``message`` tagged with ``level`` to stderr and return the line."""
    line = f"[{level}] {message}{DEFAULT}\n"
    if enabled:
        sys.stderr.write(line)
        sys.stderr.flush()
    return line