"""testenv.audit.rules.coverage

Line coverage threshold over the runner's ``coverage-summary.json``.

Only the ``total`` block is read. A missing or unreadable artifact is not an
issue: coverage is optional and produced only by ``--coverage`` runs.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional

from testenv.audit.model import AuditNote, IssueCode, QualityIssue, RuleFindings, Severity
from testenv.io.fs import read_json

from .base import AuditContext

METRICS = ("lines", "functions", "branches", "statements")


def _pct(block: Mapping[str, Any], metric: str) -> Optional[float]:
    entry = block.get(metric)
    if not isinstance(entry, dict):
        return None
    value = entry.get("pct")
    if isinstance(value, bool):
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        # istanbul writes "Unknown" when a metric has no entries
        return None


def read_coverage_totals(path: Path) -> Dict[str, Optional[float]]:
    raw = read_json(path)
    total = raw.get("total") if isinstance(raw, dict) else None
    if not isinstance(total, dict):
        raise ValueError("coverage summary has no 'total' block")
    return {m: _pct(total, m) for m in METRICS}


def _fmt(v: Optional[float]) -> str:
    return "n/a" if v is None else f"{v:g}%"


class CoverageRule:
    code = IssueCode.COVERAGE
    title = "Test coverage"
    ok_message = "Test coverage looks good"

    def check(self, ctx: AuditContext) -> RuleFindings:
        path = Path(ctx.coverage_summary_path)
        if not path.exists():
            return RuleFindings(
                notes=(AuditNote(code=self.code, message="No coverage report found. Run tests with --coverage flag."),),
                checked=False,
            )
        try:
            totals = read_coverage_totals(path)
        except (OSError, ValueError) as e:
            return RuleFindings(
                notes=(AuditNote(code=self.code, message=f"Could not check test coverage: {e}"),),
                checked=False,
            )

        notes: List[AuditNote] = [
            AuditNote(code=self.code, message=f"{m.capitalize()}: {_fmt(totals[m])}") for m in METRICS
        ]
        lines = totals["lines"]
        if lines is not None and lines < ctx.coverage_threshold:
            issue = QualityIssue(
                severity=Severity.WARNING,
                code=self.code,
                file=path.name,
                message=f"Line coverage is below {ctx.coverage_threshold:g}% ({lines:g}%)",
            )
            return RuleFindings(issues=(issue,), notes=tuple(notes))
        return RuleFindings(notes=tuple(notes))
