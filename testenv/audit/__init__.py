"""testenv.audit

Static audit over the test corpus: indexing, rule checks and reporting.

- indexer.py: discover test files and their metadata
- rules/: independent heuristic checks (naming, structure, deps, coverage)
- auditor.py: run rules, aggregate, print, write the audit artifact
- report.py: categorized report artifact
"""

from __future__ import annotations

from .auditor import QualityAuditor, build_context, print_audit_summary, write_audit_artifact
from .indexer import TEST_FILE_RE, TestFileIndexer, infer_category
from .model import (
    QUALITY_REPORT_FILENAME,
    AuditNote,
    AuditResult,
    IssueCode,
    QualityIssue,
    Severity,
    TestFileRecord,
)
from .report import TEST_REPORT_FILENAME, ReportGenerator, TestReport, print_report

__all__ = [
    "AuditNote",
    "AuditResult",
    "IssueCode",
    "QUALITY_REPORT_FILENAME",
    "QualityAuditor",
    "QualityIssue",
    "ReportGenerator",
    "Severity",
    "TEST_FILE_RE",
    "TEST_REPORT_FILENAME",
    "TestFileIndexer",
    "TestFileRecord",
    "TestReport",
    "build_context",
    "infer_category",
    "print_audit_summary",
    "print_report",
    "write_audit_artifact",
]
