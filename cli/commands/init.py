from __future__ import annotations

from testenv.toolkit import TestEnvToolkit


def run_init(toolkit: TestEnvToolkit, *, generate_samples: bool = False, run_checks: bool = False) -> int:
    toolkit.initialize(generate_samples=generate_samples, run_checks=run_checks)
    return 0
