"""testenv.execution.orchestrator

Build the delegated runner's argument list and supervise exactly one child
process per run.

Rule
----
Only this module should touch ``subprocess``.

The child inherits stdin/stdout/stderr, so the runner's output streams
straight to the terminal and nothing is buffered here.
"""

from __future__ import annotations

import logging
import shutil
import subprocess
import time
from dataclasses import dataclass
from pathlib import Path
from typing import List, Mapping, Optional, Sequence, Tuple

from testenv.errors import ProcessFailure
from testenv.log import ConsoleLogger, get_default_logger

from .options import RunOptions

logger = logging.getLogger(__name__)

DEFAULT_RUNNER_COMMAND: Tuple[str, ...] = ("npx", "jest")
DEFAULT_TEST_TIMEOUT_MS = 30000
COVERAGE_DIRECTORY = "coverage"
COVERAGE_REPORTERS: Tuple[str, ...] = ("text", "lcov", "html")

# Fixture-backed tests share one datastore, so the runner gets one worker.
MAX_WORKERS = 1


def build_runner_args(options: RunOptions, test_timeout_ms: int = DEFAULT_TEST_TIMEOUT_MS) -> List[str]:
    args: List[str] = []
    if options.coverage:
        args.append("--coverage")
        args.append(f"--coverageDirectory={COVERAGE_DIRECTORY}")
        args.extend(f"--coverageReporters={r}" for r in COVERAGE_REPORTERS)
    if options.watch:
        args.append("--watch")
    if options.verbose:
        args.append("--verbose")
    if options.test_file:
        args.append(options.test_file)
    if options.update_snapshots:
        args.append("--updateSnapshot")
    if options.silent:
        args.append("--silent")
    if options.detect_open_handles:
        args.append("--detectOpenHandles")

    args.append(f"--testTimeout={int(test_timeout_ms)}")
    args.append("--forceExit")
    args.append(f"--maxWorkers={MAX_WORKERS}")
    return args


@dataclass(frozen=True)
class ProcessOutcome:
    exit_code: int
    succeeded: bool
    command: Tuple[str, ...]
    elapsed_seconds: float


class SubprocessOrchestrator:
    """Spawn the runner with inherited stdio and wait for it."""

    def __init__(
        self,
        command: Sequence[str] = DEFAULT_RUNNER_COMMAND,
        *,
        cwd: Path,
        env: Optional[Mapping[str, str]] = None,
        log: Optional[ConsoleLogger] = None,
        test_timeout_ms: int = DEFAULT_TEST_TIMEOUT_MS,
    ) -> None:
        if not command:
            raise ValueError("runner command must not be empty")
        self.command = tuple(str(c) for c in command)
        self.cwd = Path(cwd)
        self.env = dict(env) if env is not None else None
        self.test_timeout_ms = int(test_timeout_ms)
        self._log = log or get_default_logger()

    def build_command(self, options: RunOptions) -> List[str]:
        return list(self.command) + build_runner_args(options, self.test_timeout_ms)

    def _resolve(self, cmd: List[str]) -> List[str]:
        # On Windows npx is npx.cmd; which() finds the real file so no shell is needed.
        path = self.env.get("PATH") if self.env is not None else None
        exe = shutil.which(cmd[0], path=path)
        if exe is None:
            return cmd
        return [exe] + cmd[1:]

    def run(self, options: RunOptions) -> ProcessOutcome:
        """Run once. Raises :class:`ProcessFailure` unless the child exits 0."""
        cmd = self.build_command(options)
        self._log.info(f"Command: {' '.join(cmd)}")

        started = time.monotonic()
        try:
            result = subprocess.run(self._resolve(cmd), cwd=str(self.cwd), env=self.env)
        except OSError as e:
            logger.debug("failed to spawn %s", cmd[0], exc_info=True)
            raise ProcessFailure(cmd, os_error=e) from e
        elapsed = time.monotonic() - started

        code = int(result.returncode)
        if code != 0:
            raise ProcessFailure(cmd, exit_code=code)
        return ProcessOutcome(exit_code=code, succeeded=True, command=tuple(cmd), elapsed_seconds=elapsed)
