from __future__ import annotations

from testenv.toolkit import TestEnvToolkit


def run_check(toolkit: TestEnvToolkit) -> int:
    # Findings are advisory; a completed audit always exits 0.
    toolkit.run_checks()
    return 0
