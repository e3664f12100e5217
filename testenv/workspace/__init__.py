"""testenv.workspace

Provisioning of the on-disk test workspace: directory layout, seed fixtures,
harness scaffold files and sample tests, plus datastore checks and run
artifact housekeeping.
"""

from __future__ import annotations

from .fixtures import DEFAULT_FIXTURES, Fixture, FixtureWriter, load_fixture_set
from .layout import DirectoryProvisioner, WorkspaceLayout
from .samples import SampleTestWriter
from .scaffold import HarnessScaffolder

__all__ = [
    "DEFAULT_FIXTURES",
    "DirectoryProvisioner",
    "Fixture",
    "FixtureWriter",
    "HarnessScaffolder",
    "SampleTestWriter",
    "WorkspaceLayout",
    "load_fixture_set",
]
