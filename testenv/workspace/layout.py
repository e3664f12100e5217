"""testenv.workspace.layout

On-disk layout of the test workspace and its idempotent provisioning.

Layout (relative to the project root, defaults from :mod:`testenv.config`)::

    tests/
      unit/ integration/ e2e/ api/ performance/ security/
      fixtures/
        data/ files/ uploads/
    test-results/

The layout is a public contract: the harness scaffold, the fixture loader
and the report path all assume it.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, List, Optional, Tuple

from testenv.config import TEST_CATEGORIES, ProjectConfig
from testenv.errors import ProvisioningError
from testenv.log import ConsoleLogger, get_default_logger

logger = logging.getLogger(__name__)

FIXTURE_SUBDIRS: Tuple[str, ...] = ("data", "files", "uploads")

# Directories that stay empty but must be tracked by version control.
PLACEHOLDER_SUBDIRS: Tuple[str, ...] = ("files", "uploads")


@dataclass(frozen=True)
class WorkspaceLayout:
    project_root: Path
    test_root: Path
    fixtures_root: Path
    output_root: Path

    @classmethod
    def from_config(cls, config: ProjectConfig) -> "WorkspaceLayout":
        return cls(
            project_root=config.project_root,
            test_root=config.test_root,
            fixtures_root=config.fixtures_root,
            output_root=config.output_root,
        )

    @property
    def fixture_data_dir(self) -> Path:
        return self.fixtures_root / "data"

    def category_dir(self, category: str) -> Path:
        return self.test_root / category

    def placeholder_dirs(self) -> Tuple[Path, ...]:
        return tuple(self.fixtures_root / d for d in PLACEHOLDER_SUBDIRS)

    def directories(self) -> Tuple[Path, ...]:
        """Ordered set of directories to provision (no duplicates)."""
        ordered: List[Path] = [self.test_root]
        ordered += [self.category_dir(c) for c in TEST_CATEGORIES]
        ordered.append(self.fixtures_root)
        ordered += [self.fixtures_root / d for d in FIXTURE_SUBDIRS]
        ordered.append(self.output_root)

        seen = set()
        out: List[Path] = []
        for p in ordered:
            if p not in seen:
                seen.add(p)
                out.append(p)
        return tuple(out)

    def relative(self, path: Path) -> str:
        try:
            return Path(path).relative_to(self.project_root).as_posix()
        except ValueError:
            return str(path)


class DirectoryProvisioner:
    """Create directories, tolerating ones that already exist."""

    def __init__(self, *, log: Optional[ConsoleLogger] = None, project_root: Optional[Path] = None) -> None:
        self._log = log or get_default_logger()
        self._project_root = Path(project_root) if project_root else None

    def _display(self, path: Path) -> str:
        if self._project_root is not None:
            try:
                return path.relative_to(self._project_root).as_posix()
            except ValueError:
                pass
        return str(path)

    def provision(self, paths: Iterable[Path]) -> List[Path]:
        """Ensure every path exists; return the ones created by this call."""
        created: List[Path] = []
        for raw in paths:
            path = Path(raw)
            if path.is_dir():
                continue
            if path.exists():
                raise ProvisioningError(path, FileExistsError(f"not a directory: {path}"))
            try:
                path.mkdir(parents=True, exist_ok=True)
            except OSError as e:
                raise ProvisioningError(path, e) from e
            created.append(path)
            self._log.info(f"Created directory: {self._display(path)}")

        logger.debug("provisioned %d new directories", len(created))
        return created
