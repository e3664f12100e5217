"""testenv.log

Console output for the toolkit.

Components never print directly; they receive a logger and call
``logger.log(level, message)`` (or one of the shorthands). The console format
follows the rest of the CLI output: one emoji prefix per level, optional
ANSI colour when writing to a terminal.

Debug diagnostics that only matter when troubleshooting go through the
standard :mod:`logging` module instead.
"""

from __future__ import annotations

import logging
import os
import sys
from enum import Enum
from typing import List, Optional, TextIO, Tuple

RESET = "\x1b[0m"
BRIGHT = "\x1b[1m"
RED = "\x1b[31m"
GREEN = "\x1b[32m"
YELLOW = "\x1b[33m"
BLUE = "\x1b[34m"
MAGENTA = "\x1b[35m"
CYAN = "\x1b[36m"

HEADER_WIDTH = 60


class Level(str, Enum):
    PLAIN = "plain"
    SUCCESS = "success"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


_PREFIX = {
    Level.PLAIN: "",
    Level.SUCCESS: "✅ ",
    Level.INFO: "ℹ️  ",
    Level.WARNING: "⚠️  ",
    Level.ERROR: "❌ ",
}

_COLOR = {
    Level.PLAIN: "",
    Level.SUCCESS: GREEN,
    Level.INFO: BLUE,
    Level.WARNING: YELLOW,
    Level.ERROR: RED,
}


def _stream_supports_color(stream: TextIO) -> bool:
    if os.environ.get("NO_COLOR"):
        return False
    isatty = getattr(stream, "isatty", None)
    try:
        return bool(isatty and isatty())
    except ValueError:
        # closed stream
        return False


class ConsoleLogger:
    """Severity-aware writer bound to one output stream."""

    def __init__(self, stream: Optional[TextIO] = None, *, color: Optional[bool] = None) -> None:
        self._stream = stream
        self._color = color

    @property
    def stream(self) -> TextIO:
        # Resolve lazily so pytest's capsys replacement of sys.stdout is honoured.
        return self._stream if self._stream is not None else sys.stdout

    def _use_color(self) -> bool:
        if self._color is not None:
            return bool(self._color)
        return _stream_supports_color(self.stream)

    def _write(self, text: str, color: str = "") -> None:
        if color and self._use_color():
            text = f"{color}{text}{RESET}"
        print(text, file=self.stream, flush=True)

    def log(self, level: Level, message: str) -> None:
        level = Level(level)
        self._write(f"{_PREFIX[level]}{message}", _COLOR[level])

    def plain(self, message: str = "") -> None:
        self.log(Level.PLAIN, message)

    def success(self, message: str) -> None:
        self.log(Level.SUCCESS, message)

    def info(self, message: str) -> None:
        self.log(Level.INFO, message)

    def warning(self, message: str) -> None:
        self.log(Level.WARNING, message)

    def error(self, message: str) -> None:
        self.log(Level.ERROR, message)

    def header(self, title: str) -> None:
        rule = "=" * HEADER_WIDTH
        self._write("\n" + rule, CYAN)
        self._write(title, BRIGHT)
        self._write(rule, CYAN)

    def step(self, step: int, total: int, message: str) -> None:
        self._write(f"[{step}/{total}] {message}", MAGENTA)


class RecordingLogger(ConsoleLogger):
    """Logger that keeps every (level, message) pair in memory.

    Used by tests and by callers that want to inspect output after the fact.
    """

    def __init__(self) -> None:
        super().__init__(stream=None, color=False)
        self.records: List[Tuple[Level, str]] = []

    def _write(self, text: str, color: str = "") -> None:
        return None

    def log(self, level: Level, message: str) -> None:
        self.records.append((Level(level), message))

    def header(self, title: str) -> None:
        self.records.append((Level.PLAIN, title))

    def step(self, step: int, total: int, message: str) -> None:
        self.records.append((Level.PLAIN, f"[{step}/{total}] {message}"))

    def messages(self, level: Optional[Level] = None) -> List[str]:
        return [m for lv, m in self.records if level is None or lv == level]


_default_logger: Optional[ConsoleLogger] = None


def get_default_logger() -> ConsoleLogger:
    """Return the shared stdout logger (created on first use)."""
    global _default_logger
    if _default_logger is None:
        _default_logger = ConsoleLogger()
    return _default_logger


LOG_LEVEL_ENV = "TESTENV_LOG_LEVEL"


def configure_diagnostics(level: Optional[str] = None) -> None:
    """Route :mod:`logging` diagnostics to stderr.

    The level comes from *level* or ``TESTENV_LOG_LEVEL`` (default WARNING).
    Console output from :class:`ConsoleLogger` is unaffected.
    """
    name = (level or os.environ.get(LOG_LEVEL_ENV) or "WARNING").strip().upper()
    logging.basicConfig(
        level=getattr(logging, name, logging.WARNING),
        stream=sys.stderr,
        format="%(levelname)s %(name)s: %(message)s",
    )
