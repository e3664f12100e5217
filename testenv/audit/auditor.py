"""testenv.audit.auditor

Run the audit rules and aggregate their findings.

Rule of thumb: the auditor only *reads* the project. Writing the audit
artifact is a separate, explicit step (:func:`write_audit_artifact`).
"""

from __future__ import annotations

from pathlib import Path
from typing import Dict, List, Optional, Sequence

from testenv.config import ProjectConfig
from testenv.io.fs import write_json_atomic
from testenv.log import ConsoleLogger

from .model import VERDICT_PASS, AuditNote, AuditResult, QualityIssue, RuleFindings, Severity, TestFileRecord
from .rules import AuditContext, AuditRule, default_rules


def build_context(config: ProjectConfig, files: Sequence[TestFileRecord]) -> AuditContext:
    return AuditContext(
        project_root=config.project_root,
        files=list(files),
        manifest_path=config.manifest_path,
        coverage_summary_path=config.coverage_summary_path,
        coverage_threshold=float(config.coverage_threshold),
        required_dependencies=dict(config.required_dependencies),
        optional_dependencies=dict(config.optional_dependencies),
    )


class QualityAuditor:
    def __init__(self, rules: Optional[Sequence[AuditRule]] = None, *, log: Optional[ConsoleLogger] = None) -> None:
        self.rules = tuple(rules) if rules is not None else default_rules()
        self._log = log

    def audit(self, ctx: AuditContext) -> AuditResult:
        issues: List[QualityIssue] = []
        notes: List[AuditNote] = []
        counts: Dict[str, int] = {}

        for rule in self.rules:
            if self._log is not None:
                self._log.info(f"Checking {rule.title.lower()}...")
            findings = rule.check(ctx)
            issues.extend(findings.issues)
            notes.extend(findings.notes)
            counts[rule.code.value] = counts.get(rule.code.value, 0) + len(findings.issues)
            if self._log is not None:
                _print_rule_findings(self._log, rule, findings)

        return AuditResult(
            issues=tuple(issues),
            notes=tuple(notes),
            files_checked=len(ctx.files),
            counts_by_rule=counts,
        )


def _print_rule_findings(log: ConsoleLogger, rule: AuditRule, findings: RuleFindings) -> None:
    for n in findings.notes:
        log.info(n.message)
    for i in findings.issues:
        if i.severity == Severity.WARNING:
            log.warning(i.message)
        else:
            log.info(i.message)
    if findings.issues:
        log.warning(f"Found {len(findings.issues)} {rule.code.value} issue(s)")
    elif findings.checked:
        log.success(rule.ok_message)


def print_audit_summary(log: ConsoleLogger, result: AuditResult) -> None:
    """One closing line; issues are advisory and never change the exit code."""
    if result.verdict == VERDICT_PASS:
        log.success(f"Quality checks passed ({result.files_checked} test files)")
    else:
        log.warning(
            f"Quality checks finished with {result.warning_count} warning(s) and "
            f"{result.info_count} info issue(s) across {result.files_checked} test files"
        )


def write_audit_artifact(result: AuditResult, path: Path) -> Path:
    write_json_atomic(Path(path), result.to_dict())
    return Path(path)
