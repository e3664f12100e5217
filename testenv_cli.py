#!/usr/bin/env python3
"""
Test environment utilities for a Node.js project.

Actions:
  init     - create the test workspace (directories, fixtures, harness files)
  samples  - write sample unit/integration/e2e tests
  check    - run the test quality audit
  report   - write a categorized test report
  run      - run the test suite (same options as testenv_runner.py)

Usage:
  python testenv_cli.py init --generate-samples
  python testenv_cli.py check
  python testenv_cli.py run --coverage
"""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Optional, Sequence

from cli.dispatch import dispatch, show_help_if_requested
from testenv.errors import TestEnvError
from testenv.log import configure_diagnostics, get_default_logger
from testenv.signals import installed_signal_handlers
from testenv.wiring import build_toolkit


def main(argv: Optional[Sequence[str]] = None) -> int:
    configure_diagnostics()
    log = get_default_logger()
    args = list(sys.argv[1:] if argv is None else argv)

    # Help never needs a project.
    if show_help_if_requested(args, log):
        return 0

    with installed_signal_handlers(log):
        try:
            toolkit = build_toolkit(Path.cwd(), log=log)
        except TestEnvError as e:
            log.error(f"Error: {e}")
            return 1
        return dispatch(args, toolkit, log)


if __name__ == "__main__":
    raise SystemExit(main())
