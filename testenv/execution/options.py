"""testenv.execution.options

Flag table and parser for the runner entrypoint.

Parsing never fails: unrecognized dash-prefixed tokens are reported as
warnings on the result and ``-f`` without a following token is ignored.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence, Tuple

from testenv.flags import FlagSpec, parse_flags
from testenv.log import ConsoleLogger

RUN_FLAGS: Tuple[FlagSpec, ...] = (
    FlagSpec(("-c", "--coverage"), "coverage", help="Run tests with coverage report"),
    FlagSpec(("-w", "--watch"), "watch", help="Run tests in watch mode"),
    FlagSpec(("-v", "--verbose"), "verbose", help="Run tests with verbose output"),
    FlagSpec(("-f", "--file"), "test_file", takes_value=True, metavar="file", help="Run specific test file"),
    FlagSpec(("-u", "--update-snapshots"), "update_snapshots", help="Update test snapshots"),
    FlagSpec(("-s", "--silent"), "silent", help="Run tests silently"),
    FlagSpec(("--detect-open-handles",), "detect_open_handles", help="Detect open handles"),
    FlagSpec(("-h", "--help"), "show_help", help="Show this help message"),
)

RUN_SUBCOMMANDS = {"run": "run"}


@dataclass(frozen=True)
class RunOptions:
    coverage: bool = False
    watch: bool = False
    verbose: bool = False
    test_file: Optional[str] = None
    update_snapshots: bool = False
    silent: bool = False
    detect_open_handles: bool = False

    @property
    def scope(self) -> str:
        return self.test_file or "All tests"

    @property
    def mode(self) -> str:
        return "Watch" if self.watch else "Single run"


@dataclass(frozen=True)
class RunArgs:
    options: RunOptions
    show_help: bool = False
    warnings: Tuple[str, ...] = ()


_DEFAULTS = {
    "coverage": False,
    "watch": False,
    "verbose": False,
    "test_file": None,
    "update_snapshots": False,
    "silent": False,
    "detect_open_handles": False,
    "show_help": False,
}


def parse_run_args(argv: Sequence[str], log: Optional[ConsoleLogger] = None) -> RunArgs:
    """Parse runner arguments; warnings are also logged when *log* is given."""
    parsed = parse_flags(argv, RUN_FLAGS, defaults=_DEFAULTS, subcommands=RUN_SUBCOMMANDS)
    values = dict(parsed.values)
    show_help = bool(values.pop("show_help"))
    if log is not None:
        for w in parsed.warnings:
            log.warning(w)
    return RunArgs(options=RunOptions(**values), show_help=show_help, warnings=parsed.warnings)


def parse_run_options(argv: Sequence[str]) -> RunOptions:
    return parse_run_args(argv).options
