from __future__ import annotations

from testenv.toolkit import TestEnvToolkit


def run_report(toolkit: TestEnvToolkit) -> int:
    toolkit.generate_report()
    return 0
