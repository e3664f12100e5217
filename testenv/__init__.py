"""testenv

Core package for the test-environment toolkit.

Why this exists
---------------
The toolkit has two entrypoints (``testenv_cli.py`` for workspace
provisioning / audits / reports and ``testenv_runner.py`` for the delegated
test run). Both are kept as thin composition roots; everything they wire
together lives here:

* workspace provisioning (directories, fixtures, harness scaffolding)
* test corpus indexing, quality audit and reporting
* run option parsing and subprocess supervision for the external runner

This package must never import from :mod:`cli`.
"""

from __future__ import annotations

__version__ = "0.3.0"
