"""cli.dispatch

Resolve the orchestration subcommand and run it against the toolkit.

Every error raised inside a subcommand is caught here, once, and turned into
exit code 1. Unknown options are warnings, never failures.
"""

from __future__ import annotations

import logging
from typing import Dict, Optional, Sequence, Tuple

from cli.commands.check import run_check
from cli.commands.init import run_init
from cli.commands.report import run_report
from cli.commands.run import run_tests
from cli.commands.samples import run_samples
from cli.help import print_orchestration_help, print_runner_help
from testenv.errors import ProcessFailure, TestEnvError
from testenv.execution import parse_run_args
from testenv.flags import FlagSpec, ParsedFlags, parse_flags
from testenv.log import ConsoleLogger, get_default_logger
from testenv.toolkit import TestEnvToolkit

logger = logging.getLogger(__name__)

ORCH_FLAGS: Tuple[FlagSpec, ...] = (
    FlagSpec(("--generate-samples",), "generate_samples", help="Generate sample tests during init"),
    FlagSpec(("--run-checks",), "run_checks", help="Run quality checks during init"),
    FlagSpec(("-h", "--help"), "show_help", help="Show this help message"),
)

# accepted token -> canonical action
SUBCOMMANDS: Dict[str, str] = {
    "init": "init",
    "initialize": "init",
    "samples": "samples",
    "generate-samples": "samples",
    "check": "check",
    "quality-check": "check",
    "report": "report",
    "run": "run",
    "help": "help",
}

_DEFAULTS = {"generate_samples": False, "run_checks": False, "show_help": False}


def resolve_action(argv: Sequence[str]) -> ParsedFlags:
    """Return the parsed flags with ``subcommand`` resolved (``help`` by default)."""
    return parse_flags(argv, ORCH_FLAGS, defaults=_DEFAULTS, subcommands=SUBCOMMANDS, stop_at=("run",))


def _requested_help(parsed: ParsedFlags) -> Optional[str]:
    """``"orchestration"``, ``"runner"`` or None when no help was asked for."""
    action = "help" if parsed.values["show_help"] else (parsed.subcommand or "help")
    if action == "help":
        return "orchestration"
    if action == "run" and parse_run_args(parsed.rest).show_help:
        return "runner"
    return None


def _print_help(log: ConsoleLogger, which: str) -> None:
    if which == "runner":
        print_runner_help(log)
    else:
        print_orchestration_help(log, ORCH_FLAGS)


def show_help_if_requested(argv: Sequence[str], log: Optional[ConsoleLogger] = None) -> bool:
    """Print help and return True when *argv* asks for it.

    Needs no project, so entry points call it before loading configuration.
    """
    parsed = resolve_action(argv)
    which = _requested_help(parsed)
    if which is None:
        return False
    log = log or get_default_logger()
    for w in parsed.warnings:
        log.warning(w)
    _print_help(log, which)
    return True


def _report_error(log: ConsoleLogger, action: str, err: Exception) -> None:
    if isinstance(err, ProcessFailure):
        log.error(f"Test execution failed: {err}")
    elif isinstance(err, TestEnvError):
        log.error(f"Error: {err}")
    else:
        log.error(f"Unexpected error ({err.__class__.__name__}): {err}")
    hint: Optional[str] = getattr(err, "hint", None)
    if hint:
        log.info(hint)
    logger.debug("%s failed", action, exc_info=err)


def dispatch(argv: Sequence[str], toolkit: TestEnvToolkit, log: Optional[ConsoleLogger] = None) -> int:
    log = log or get_default_logger()
    parsed = resolve_action(argv)
    for w in parsed.warnings:
        log.warning(w)

    which = _requested_help(parsed)
    if which is not None:
        _print_help(log, which)
        return 0
    action = parsed.subcommand or "help"

    try:
        if action == "init":
            return int(
                run_init(
                    toolkit,
                    generate_samples=bool(parsed.values["generate_samples"]),
                    run_checks=bool(parsed.values["run_checks"]),
                )
            )
        if action == "samples":
            return int(run_samples(toolkit))
        if action == "check":
            return int(run_check(toolkit))
        if action == "report":
            return int(run_report(toolkit))
        if action == "run":
            return int(run_tests(parsed.rest, toolkit, log))
    except Exception as e:
        _report_error(log, action, e)
        return 1

    log.error(f"Unknown action: {action}")
    return 1
