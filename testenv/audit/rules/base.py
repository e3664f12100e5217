"""testenv.audit.rules.base

Rule interface shared by every audit check.

A rule only *reads*: it receives an :class:`AuditContext` and returns
:class:`~testenv.audit.model.RuleFindings`. Rules are independent of each
other and of their execution order, which lets a heuristic rule be swapped
for a parser-backed one without touching the auditor.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Mapping, Protocol, Sequence

from testenv.audit.model import IssueCode, RuleFindings, TestFileRecord
from testenv.io.fs import read_source_text


@dataclass
class AuditContext:
    project_root: Path
    files: Sequence[TestFileRecord]
    manifest_path: Path
    coverage_summary_path: Path
    coverage_threshold: float = 70.0
    required_dependencies: Mapping[str, str] = field(default_factory=dict)
    optional_dependencies: Mapping[str, str] = field(default_factory=dict)
    _sources: Dict[Path, str] = field(default_factory=dict, repr=False)

    def source(self, record: TestFileRecord) -> str:
        """File content, read once per audit pass."""
        text = self._sources.get(record.path)
        if text is None:
            text = read_source_text(record.path)
            self._sources[record.path] = text
        return text


class AuditRule(Protocol):
    code: IssueCode
    title: str
    ok_message: str

    def check(self, ctx: AuditContext) -> RuleFindings:
        ...
