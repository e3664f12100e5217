from __future__ import annotations

from testenv.toolkit import TestEnvToolkit


def run_samples(toolkit: TestEnvToolkit) -> int:
    toolkit.generate_samples()
    return 0
