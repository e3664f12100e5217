"""testenv.audit.rules.naming

File-name convention and ``describe`` description checks.

Descriptions are found with a regular expression, not a parser. Literal
first arguments in single, double or back-tick quotes are checked even when
they span lines; computed arguments (identifiers, template literals with
``${...}``, ``describe.each`` tables) are skipped rather than guessed at.
"""

from __future__ import annotations

import re
from typing import List, Pattern

from testenv.audit.indexer import SOURCE_EXTENSIONS, TEST_FILE_RE
from testenv.audit.model import IssueCode, QualityIssue, RuleFindings, Severity

from .base import AuditContext

MIN_DESCRIPTION_LENGTH = 3
EXTENSIONS_HINT = ", ".join(SOURCE_EXTENSIONS)

DESCRIBE_LITERAL_RE: Pattern[str] = re.compile(
    r"(?<![\w$.])describe(?:\.(?:only|skip))?\s*\(\s*(['\"`])((?:\\.|(?!\1)[^\\])*?)\1",
    re.DOTALL,
)


def describe_descriptions(source: str) -> List[str]:
    """Literal descriptions passed to ``describe``, in source order."""
    out: List[str] = []
    for m in DESCRIBE_LITERAL_RE.finditer(source):
        quote, text = m.group(1), m.group(2)
        if quote == "`" and "${" in text:
            continue
        out.append(text)
    return out


class NamingRule:
    code = IssueCode.NAMING
    title = "Test naming conventions"
    ok_message = "Test naming conventions look good"

    def __init__(self, pattern: Pattern[str] = TEST_FILE_RE, min_length: int = MIN_DESCRIPTION_LENGTH) -> None:
        self.pattern = pattern
        self.min_length = int(min_length)

    def check(self, ctx: AuditContext) -> RuleFindings:
        issues: List[QualityIssue] = []
        for rec in ctx.files:
            if not self.pattern.match(rec.name):
                issues.append(
                    QualityIssue(
                        severity=Severity.WARNING,
                        code=self.code,
                        file=rec.relative_path,
                        message=(
                            f"Test file should end with .test.<ext> or .spec.<ext> "
                            f"({EXTENSIONS_HINT}): {rec.name}"
                        ),
                    )
                )

            for desc in describe_descriptions(ctx.source(rec)):
                if len(desc.strip()) < self.min_length:
                    issues.append(
                        QualityIssue(
                            severity=Severity.WARNING,
                            code=self.code,
                            file=rec.relative_path,
                            message=f"Describe block should have meaningful description: {rec.name} ({desc!r})",
                        )
                    )
        return RuleFindings(issues=tuple(issues))
