"""cli.commands.run

The runner flow shared by ``testenv run ...`` and the ``testenv-run`` entry.
"""

from __future__ import annotations

from typing import Sequence

from cli.help import print_runner_help
from testenv.execution import parse_run_args
from testenv.log import ConsoleLogger
from testenv.toolkit import TestEnvToolkit


def run_tests(argv: Sequence[str], toolkit: TestEnvToolkit, log: ConsoleLogger) -> int:
    """Parse runner flags and run the suite once.

    Errors propagate to the caller, which owns the exit-code translation.
    """
    args = parse_run_args(argv, log)
    if args.show_help:
        print_runner_help(log)
        return 0
    toolkit.run_tests(args.options)
    return 0
