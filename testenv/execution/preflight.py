"""testenv.execution.preflight

Fail fast when the project cannot run its tests at all.
"""

from __future__ import annotations

from pathlib import Path
from typing import Mapping, Optional

from testenv.audit.rules.dependencies import missing_required, read_manifest
from testenv.errors import ConfigurationError
from testenv.log import ConsoleLogger, get_default_logger


def install_hint(required: Mapping[str, str]) -> str:
    return "Run: npm install --save-dev " + " ".join(required)


def check_runner_dependencies(
    manifest_path: Path,
    required: Mapping[str, str],
    *,
    log: Optional[ConsoleLogger] = None,
) -> None:
    """Raise :class:`ConfigurationError` if required tooling is not declared.

    Tooling declared under runtime ``dependencies`` is accepted (the runner
    can still find it) but reported.
    """
    log = log or get_default_logger()
    path = Path(manifest_path)
    if not path.exists():
        raise ConfigurationError(f"{path.name} not found!", hint=f"Expected the project manifest at {path}")
    try:
        manifest = read_manifest(path)
    except (OSError, ValueError) as e:
        raise ConfigurationError(f"Could not read {path.name}: {e}") from e

    missing, runtime_only = missing_required(manifest, required)
    if missing:
        raise ConfigurationError(
            f"Missing required dependencies: {', '.join(missing)}",
            hint=install_hint(required),
        )
    for name in runtime_only:
        log.info(f"{name} is declared under dependencies; consider moving it to devDependencies")
    log.success("All required dependencies are installed")
