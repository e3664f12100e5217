#!/usr/bin/env python3
"""
Test runner: prepares the test environment and runs the suite once through
the project's test runner (Jest by default).

Usage:
  python testenv_runner.py                    # Run all tests
  python testenv_runner.py --coverage         # Run tests with coverage
  python testenv_runner.py --file auth.test   # Run specific test file
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Optional, Sequence

from cli.commands.run import run_tests
from cli.help import print_runner_help
from testenv.errors import TestEnvError
from testenv.execution import parse_run_args
from testenv.log import configure_diagnostics, get_default_logger
from testenv.signals import installed_signal_handlers
from testenv.wiring import build_toolkit

logger = logging.getLogger("testenv_runner")


def main(argv: Optional[Sequence[str]] = None) -> int:
    configure_diagnostics()
    log = get_default_logger()
    args = list(sys.argv[1:] if argv is None else argv)

    # Help never needs a project.
    if parse_run_args(args).show_help:
        print_runner_help(log)
        return 0

    with installed_signal_handlers(log):
        try:
            toolkit = build_toolkit(Path.cwd(), log=log)
            return run_tests(args, toolkit, log)
        except TestEnvError as e:
            log.error(f"Test execution failed: {e}")
            hint = getattr(e, "hint", None)
            if hint:
                log.info(hint)
        except Exception as e:
            logger.debug("runner failed", exc_info=True)
            log.error(f"Test execution failed: {e}")
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
