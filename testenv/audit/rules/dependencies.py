"""testenv.audit.rules.dependencies

Check the project manifest (``package.json``) for test tooling.

Required tooling missing from ``devDependencies`` is a warning; declaring it
under runtime ``dependencies`` instead is an info issue. Optional tooling is
only ever mentioned in notes.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, List, Mapping, Tuple

from testenv.audit.model import AuditNote, IssueCode, QualityIssue, RuleFindings, Severity
from testenv.io.fs import read_json

from .base import AuditContext


def read_manifest(path: Path) -> Dict[str, Any]:
    """Parse the manifest; raise ``OSError``/``ValueError`` when unusable."""
    raw = read_json(path)
    if not isinstance(raw, dict):
        raise ValueError(f"{Path(path).name} must contain a JSON object")
    return raw


def _section(manifest: Mapping[str, Any], key: str) -> Mapping[str, Any]:
    v = manifest.get(key)
    return v if isinstance(v, dict) else {}


def missing_required(manifest: Mapping[str, Any], required: Mapping[str, str]) -> Tuple[List[str], List[str]]:
    """Return ``(missing, runtime_only)`` for the required dependency names."""
    dev = _section(manifest, "devDependencies")
    runtime = _section(manifest, "dependencies")
    missing: List[str] = []
    runtime_only: List[str] = []
    for name in required:
        if name in dev:
            continue
        if name in runtime:
            runtime_only.append(name)
        else:
            missing.append(name)
    return missing, runtime_only


class DependencyRule:
    code = IssueCode.DEPENDENCY
    title = "Test dependencies"
    ok_message = "All required test dependencies are installed"

    def check(self, ctx: AuditContext) -> RuleFindings:
        path = Path(ctx.manifest_path)
        if not path.exists():
            return RuleFindings(
                issues=(
                    QualityIssue(
                        severity=Severity.WARNING,
                        code=self.code,
                        file=path.name,
                        message=f"{path.name} not found",
                    ),
                )
            )
        try:
            manifest = read_manifest(path)
        except (OSError, ValueError) as e:
            return RuleFindings(
                issues=(
                    QualityIssue(
                        severity=Severity.WARNING,
                        code=self.code,
                        file=path.name,
                        message=f"Could not read {path.name}: {e}",
                    ),
                )
            )

        issues: List[QualityIssue] = []
        missing, runtime_only = missing_required(manifest, ctx.required_dependencies)
        for name in missing:
            desc = ctx.required_dependencies.get(name) or ""
            suffix = f" ({desc})" if desc else ""
            issues.append(
                QualityIssue(
                    severity=Severity.WARNING,
                    code=self.code,
                    file=path.name,
                    message=f"Missing required dependency: {name}{suffix}",
                )
            )
        for name in runtime_only:
            issues.append(
                QualityIssue(
                    severity=Severity.INFO,
                    code=self.code,
                    file=path.name,
                    message=f"{name} is declared under dependencies; move it to devDependencies",
                )
            )

        notes: List[AuditNote] = []
        declared = set(_section(manifest, "devDependencies")) | set(_section(manifest, "dependencies"))
        for name, desc in ctx.optional_dependencies.items():
            if name not in declared:
                suffix = f" ({desc})" if desc else ""
                notes.append(AuditNote(code=self.code, message=f"Optional dependency not installed: {name}{suffix}"))

        return RuleFindings(issues=tuple(issues), notes=tuple(notes))
