"""testenv.audit.indexer

Discover test files under one or more roots.

Traversal is iterative (explicit stack of pending directories) and keeps a
set of canonical directory paths already visited, so a symlink pointing back
up the tree is entered at most once and the walk always terminates.
"""

from __future__ import annotations

import logging
import os
import re
from datetime import datetime, timezone
from pathlib import Path
from typing import Iterable, List, Optional, Pattern, Sequence, Set, Union

from testenv.config import OTHER_CATEGORY, TEST_CATEGORIES

from .model import TestFileRecord

logger = logging.getLogger(__name__)

SOURCE_EXTENSIONS = ("js", "jsx", "ts", "tsx", "mjs", "cjs")

# `<name>.test.<ext>` / `<name>.spec.<ext>`
TEST_FILE_RE: Pattern[str] = re.compile(
    r"^.+\.(?:test|spec)\.(?:" + "|".join(SOURCE_EXTENSIONS) + r")$"
)


def infer_category(relative_dir_parts: Sequence[str], categories: Sequence[str] = TEST_CATEGORIES) -> str:
    """Return the known category nearest the root, else ``other``."""
    known = set(categories)
    for part in relative_dir_parts:
        if part in known:
            return part
    return OTHER_CATEGORY


class TestFileIndexer:
    """Index test files below *roots* (paths reported relative to *project_root*)."""

    __test__ = False

    def __init__(
        self,
        project_root: Union[str, Path],
        roots: Iterable[Union[str, Path]],
        *,
        pattern: Union[str, Pattern[str]] = TEST_FILE_RE,
    ) -> None:
        self.project_root = Path(project_root)
        self.roots = [Path(r) for r in roots]
        self.pattern = re.compile(pattern) if isinstance(pattern, str) else pattern

    def _relative(self, path: Path) -> str:
        try:
            return path.relative_to(self.project_root).as_posix()
        except ValueError:
            return path.as_posix()

    def _record(self, path: Path, root: Path) -> Optional[TestFileRecord]:
        try:
            st = path.stat()
        except OSError:
            # dangling symlink or file removed mid-walk
            logger.debug("skipping unreadable file %s", path, exc_info=True)
            return None
        dir_parts = path.relative_to(root).parts[:-1]
        return TestFileRecord(
            path=path,
            relative_path=self._relative(path),
            category=infer_category(dir_parts),
            size_bytes=int(st.st_size),
            modified_at=datetime.fromtimestamp(st.st_mtime, tz=timezone.utc),
        )

    def _walk(self, root: Path, visited: Set[str]) -> List[TestFileRecord]:
        out: List[TestFileRecord] = []
        pending: List[Path] = [root]
        while pending:
            current = pending.pop()
            canonical = os.path.realpath(current)
            if canonical in visited:
                logger.debug("already visited %s (via %s)", canonical, current)
                continue
            visited.add(canonical)

            try:
                entries = sorted(os.scandir(current), key=lambda e: e.name)
            except OSError:
                logger.debug("cannot list %s", current, exc_info=True)
                continue

            for entry in entries:
                entry_path = current / entry.name
                try:
                    is_dir = entry.is_dir()
                except OSError:
                    continue
                if is_dir:
                    pending.append(entry_path)
                elif self.pattern.match(entry.name):
                    rec = self._record(entry_path, root)
                    if rec is not None:
                        out.append(rec)
        return out

    def index(self) -> List[TestFileRecord]:
        visited: Set[str] = set()
        records: List[TestFileRecord] = []
        for root in self.roots:
            if not root.is_dir():
                continue
            records.extend(self._walk(root, visited))
        records.sort(key=lambda r: r.relative_path)
        return records
