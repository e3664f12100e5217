"""testenv.execution

Run path: parse runner flags, check tooling, spawn the delegated runner.
"""

from __future__ import annotations

from .options import RUN_FLAGS, RunArgs, RunOptions, parse_run_args, parse_run_options
from .orchestrator import ProcessOutcome, SubprocessOrchestrator, build_runner_args
from .preflight import check_runner_dependencies

__all__ = [
    "ProcessOutcome",
    "RUN_FLAGS",
    "RunArgs",
    "RunOptions",
    "SubprocessOrchestrator",
    "build_runner_args",
    "check_runner_dependencies",
    "parse_run_args",
    "parse_run_options",
]
