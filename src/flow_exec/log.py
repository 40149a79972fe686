"""Console output, indentation level + GitHub Actions formatting."""

import os
import sys
import threading
from contextlib import contextmanager
from datetime import datetime

# Every console write in the package goes through this lock.
console_lock = threading.RLock()

_state = {"indent": 0, "verbose": False}


def _timestamp() -> str:
    return datetime.now().strftime("%H:%M:%S")


def _is_github_actions() -> bool:
    return os.environ.get("GITHUB_ACTIONS") == "true"


def echo(stream, text: str) -> None:
    """Write text to a console stream as one serialized step."""
    with console_lock:
        stream.write(text)
        stream.flush()


def indentation_level() -> int:
    """Current indentation, in spaces."""
    return _state["indent"]


@contextmanager
def indented(amount: int = 2):
    """Nest console output (and captured command echo) by `amount` spaces."""
    _state["indent"] += amount
    try:
        yield
    finally:
        _state["indent"] -= amount


def set_verbose(flag: bool) -> None:
    _state["verbose"] = bool(flag)


def is_verbose() -> bool:
    return _state["verbose"]


def message(text: str) -> None:
    echo(sys.stdout, " " * indentation_level() + text + "\n")


def debug(msg: str) -> None:
    if is_verbose():
        message(msg)


def warning(msg: str) -> None:
    if _is_github_actions():
        echo(sys.stdout, f"::warning::{msg}\n")
    message(msg)


def error(msg: str) -> None:
    if _is_github_actions():
        echo(sys.stdout, f"::error::{msg}\n")
    echo(sys.stderr, f"[{_timestamp()}] ERROR: {msg}\n")
