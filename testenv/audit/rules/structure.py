"""testenv.audit.rules.structure

Every test file needs a grouping block, at least one test and at least one
assertion. Detection is textual; method calls such as ``/re/.test(x)`` are
not mistaken for test blocks.
"""

from __future__ import annotations

import re
from typing import List, Pattern, Tuple

from testenv.audit.model import IssueCode, QualityIssue, RuleFindings, Severity

from .base import AuditContext

_NOT_MEMBER = r"(?<![\w$.])"

GROUP_RE: Pattern[str] = re.compile(_NOT_MEMBER + r"describe(?:\.\w+)?\s*\(")
TEST_RE: Pattern[str] = re.compile(_NOT_MEMBER + r"(?:test|it)(?:\.\w+)?\s*\(")
ASSERT_RE: Pattern[str] = re.compile(_NOT_MEMBER + r"expect\s*\(")

# (pattern, message prefix)
REQUIRED_CONSTRUCTS: Tuple[Tuple[Pattern[str], str], ...] = (
    (GROUP_RE, "Test file should have describe blocks"),
    (TEST_RE, "Test file should have test/it blocks"),
    (ASSERT_RE, "Test file should have assertions"),
)


class StructureRule:
    code = IssueCode.STRUCTURE
    title = "Test structure"
    ok_message = "Test structure looks good"

    def check(self, ctx: AuditContext) -> RuleFindings:
        issues: List[QualityIssue] = []
        for rec in ctx.files:
            text = ctx.source(rec)
            for pattern, message in REQUIRED_CONSTRUCTS:
                if not pattern.search(text):
                    issues.append(
                        QualityIssue(
                            severity=Severity.WARNING,
                            code=self.code,
                            file=rec.relative_path,
                            message=f"{message}: {rec.name}",
                        )
                    )
        return RuleFindings(issues=tuple(issues))
