"""testenv.audit.report

Categorized report over the indexed test files.

Artifact: ``<output_root>/test-report.json``, replaced on every run::

    {
      "schema_version": "test_report_v1",
      "timestamp": "2026-01-01T00:00:00+00:00",
      "summary": {"total_files": 6, "counts_by_category": {"unit": 3, ...}},
      "files": [{"path": "tests/unit/a.test.js", "category": "unit",
                 "size_bytes": 120, "modified_at": "..."}]
    }
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Tuple

from testenv.config import OTHER_CATEGORY, TEST_CATEGORIES
from testenv.io.fs import write_json_atomic
from testenv.log import ConsoleLogger

from .model import TestFileRecord

TEST_REPORT_SCHEMA_V1 = "test_report_v1"
TEST_REPORT_FILENAME = "test-report.json"


@dataclass(frozen=True)
class TestReport:
    __test__ = False

    timestamp: str
    total_files: int
    counts_by_category: Dict[str, int]
    files: Tuple[Dict[str, Any], ...]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "schema_version": TEST_REPORT_SCHEMA_V1,
            "timestamp": self.timestamp,
            "summary": {
                "total_files": int(self.total_files),
                "counts_by_category": dict(self.counts_by_category),
            },
            "files": [dict(f) for f in self.files],
        }


def count_by_category(records: Sequence[TestFileRecord]) -> Dict[str, int]:
    """Counts for every known category (zeros included); ``other`` only if used."""
    counts: Dict[str, int] = {c: 0 for c in TEST_CATEGORIES}
    for r in records:
        counts[r.category] = counts.get(r.category, 0) + 1
    if counts.get(OTHER_CATEGORY) == 0:
        counts.pop(OTHER_CATEGORY)
    return counts


def _file_entry(r: TestFileRecord) -> Dict[str, Any]:
    return {
        "path": r.relative_path,
        "category": r.category,
        "size_bytes": int(r.size_bytes),
        "modified_at": r.modified_at.isoformat(),
    }


class ReportGenerator:
    def __init__(self, output_root: Path) -> None:
        self.output_root = Path(output_root)

    @property
    def report_path(self) -> Path:
        return self.output_root / TEST_REPORT_FILENAME

    def build(self, records: Sequence[TestFileRecord], *, now: Optional[datetime] = None) -> TestReport:
        ts = (now or datetime.now(timezone.utc)).isoformat()
        return TestReport(
            timestamp=ts,
            total_files=len(records),
            counts_by_category=count_by_category(records),
            files=tuple(_file_entry(r) for r in records),
        )

    def generate(self, records: Sequence[TestFileRecord], *, now: Optional[datetime] = None) -> TestReport:
        """Build the report and overwrite the artifact."""
        report = self.build(records, now=now)
        write_json_atomic(self.report_path, report.to_dict())
        return report


def print_report(log: ConsoleLogger, report: TestReport) -> None:
    log.info("Test files by type:")
    lines: List[str] = [f"  {cat}: {n} files" for cat, n in report.counts_by_category.items()]
    for line in lines:
        log.info(line)
    log.info(f"Total: {report.total_files} files")
