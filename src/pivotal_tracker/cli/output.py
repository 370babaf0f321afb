"""Console output for command results.

Successes get a green check mark, notes a yellow bullet and every error
message its own line behind a red cross. Record fields are printed
indented under the line that introduced them. Color is only used when
stdout is a terminal.
"""

import sys
from collections.abc import Iterable

GREEN = "\033[32m"
YELLOW = "\033[33m"
BLUE = "\033[34m"
RED = "\033[31m"
RESET = "\033[0m"

CHECK = "✓"
BULLET = "•"
CROSS = "✗"

INDENT = "  "


def _tty() -> bool:
    isatty = getattr(sys.stdout, "isatty", None)
    return bool(isatty and isatty())


def _paint(text: str, color: str) -> str:
    return f"{color}{text}{RESET}" if _tty() else text


def _mark(symbol: str, color: str, message: str) -> None:
    print(f"{_paint(symbol, color)} {message}")


def success(message: str) -> None:
    """Print a line marking a completed action."""
    _mark(CHECK, GREEN, message)


def info(message: str) -> None:
    _mark(BULLET, YELLOW, message)


def error(message: str) -> None:
    """Print one error message."""
    _mark(CROSS, RED, message)


def errors(messages: Iterable[str]) -> None:
    """Print each message of a Failure on its own line, in order."""
    for message in messages:
        error(message)


def header(title: str) -> None:
    print(_paint(title, BLUE))


def field(label: str, value: object) -> None:
    """Print an indented "label: value" line for one record attribute.

    None, empty strings and empty lists are skipped, so records from the
    service that leave attributes out print only what they carry. Lists
    are joined with commas.
    """
    if value is None or value == "" or value == []:
        return
    if isinstance(value, (list, tuple)):
        value = ", ".join(str(v) for v in value)
    print(f"{INDENT}{label}: {value}")


def project_line(name: str, project_id: int, is_default: bool = False) -> None:
    """Print one configured project as "name: id", flagging the default."""
    marker = " (default)" if is_default else ""
    print(f"{INDENT}{name}: {project_id}{marker}")
