"""cli.help

Usage text for both entry points, rendered from the same flag tables the
parsers use.
"""

from __future__ import annotations

from typing import Sequence, Tuple

from testenv.execution.options import RUN_FLAGS
from testenv.flags import FlagSpec, format_flag_help
from testenv.log import ConsoleLogger

# (name, description)
ACTIONS: Tuple[Tuple[str, str], ...] = (
    ("init", "Initialize test environment"),
    ("samples", "Generate sample test files"),
    ("check", "Run test quality checks"),
    ("report", "Generate test report"),
    ("run", "Run tests (accepts the test runner options below)"),
)

ORCH_EXAMPLES: Tuple[Tuple[str, str], ...] = (
    ("testenv init", "Initialize test environment"),
    ("testenv init --generate-samples", "Init with sample tests"),
    ("testenv check", "Run quality checks"),
    ("testenv report", "Generate test report"),
    ("testenv run --coverage", "Run tests with coverage"),
)

RUN_EXAMPLES: Tuple[Tuple[str, str], ...] = (
    ("testenv-run", "Run all tests"),
    ("testenv-run --coverage", "Run tests with coverage"),
    ("testenv-run --watch", "Run tests in watch mode"),
    ("testenv-run --file auth.test", "Run specific test file"),
)

_WIDTH = 28


def _examples(log: ConsoleLogger, examples: Sequence[Tuple[str, str]]) -> None:
    log.plain("Examples:")
    width = max(len(cmd) for cmd, _ in examples) + 2
    for cmd, desc in examples:
        log.plain(f"  {cmd:<{width}}# {desc}")


def print_orchestration_help(log: ConsoleLogger, flags: Sequence[FlagSpec]) -> None:
    log.header("Test Utilities")
    log.plain("Usage: testenv <action> [options]")
    log.plain()
    log.plain("Actions:")
    for name, desc in ACTIONS:
        log.plain(f"  {name:<{_WIDTH}}{desc}")
    log.plain()
    log.plain("Options:")
    for line in format_flag_help(flags, width=_WIDTH):
        log.plain(line)
    log.plain()
    _examples(log, ORCH_EXAMPLES)


def print_runner_help(log: ConsoleLogger) -> None:
    log.header("Test Runner")
    log.plain("Usage: testenv-run [options]")
    log.plain()
    log.plain("Options:")
    for line in format_flag_help(RUN_FLAGS, width=_WIDTH):
        log.plain(line)
    log.plain()
    _examples(log, RUN_EXAMPLES)
