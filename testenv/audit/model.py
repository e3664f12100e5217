"""testenv.audit.model

Small data model for the quality audit.

The auditor produces a list of :class:`QualityIssue` (advisory findings) and
a list of :class:`AuditNote` (informational lines such as coverage figures).
Neither ever fails the invocation by itself.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Dict, Optional, Tuple

QUALITY_REPORT_SCHEMA_V1 = "quality_report_v1"
QUALITY_REPORT_FILENAME = "quality-report.json"

VERDICT_PASS = "pass"
VERDICT_ADVISORY = "advisory"


class Severity(str, Enum):
    WARNING = "warning"
    INFO = "info"


class IssueCode(str, Enum):
    NAMING = "naming"
    STRUCTURE = "structure"
    DEPENDENCY = "dependency"
    COVERAGE = "coverage"


@dataclass(frozen=True)
class TestFileRecord:
    """One discovered test file."""

    __test__ = False

    path: Path
    relative_path: str
    category: str
    size_bytes: int
    modified_at: datetime

    @property
    def name(self) -> str:
        return self.path.name


@dataclass(frozen=True)
class QualityIssue:
    severity: Severity
    code: IssueCode
    message: str
    file: Optional[str] = None

    def to_dict(self) -> Dict[str, Optional[str]]:
        return {
            "severity": self.severity.value,
            "code": self.code.value,
            "file": self.file,
            "message": self.message,
        }


@dataclass(frozen=True)
class AuditNote:
    code: IssueCode
    message: str

    def to_dict(self) -> Dict[str, str]:
        return {"code": self.code.value, "message": self.message}


@dataclass(frozen=True)
class RuleFindings:
    """What one rule returned.

    ``checked`` is False when the rule had nothing to evaluate (e.g. no
    coverage artifact); such a rule reports neither success nor issues.
    """

    issues: Tuple[QualityIssue, ...] = ()
    notes: Tuple[AuditNote, ...] = ()
    checked: bool = True


@dataclass(frozen=True)
class AuditResult:
    issues: Tuple[QualityIssue, ...] = ()
    notes: Tuple[AuditNote, ...] = ()
    files_checked: int = 0
    counts_by_rule: Dict[str, int] = field(default_factory=dict)

    @property
    def verdict(self) -> str:
        return VERDICT_PASS if not self.issues else VERDICT_ADVISORY

    @property
    def warning_count(self) -> int:
        return sum(1 for i in self.issues if i.severity == Severity.WARNING)

    @property
    def info_count(self) -> int:
        return sum(1 for i in self.issues if i.severity == Severity.INFO)

    def issues_for(self, code: IssueCode) -> Tuple[QualityIssue, ...]:
        return tuple(i for i in self.issues if i.code == code)

    def to_dict(self) -> Dict[str, object]:
        return {
            "schema_version": QUALITY_REPORT_SCHEMA_V1,
            "verdict": self.verdict,
            "files_checked": int(self.files_checked),
            "counts_by_rule": dict(self.counts_by_rule),
            "issues": [i.to_dict() for i in self.issues],
            "notes": [n.to_dict() for n in self.notes],
        }
