"""testenv.audit.rules

The four audit rules. :func:`default_rules` gives the order used for console output;
results do not depend on it.
"""

from __future__ import annotations

from typing import Tuple

from .base import AuditContext, AuditRule
from .coverage import CoverageRule
from .dependencies import DependencyRule
from .naming import NamingRule
from .structure import StructureRule


def default_rules() -> Tuple[AuditRule, ...]:
    return (CoverageRule(), NamingRule(), StructureRule(), DependencyRule())


__all__ = [
    "AuditContext",
    "AuditRule",
    "CoverageRule",
    "DependencyRule",
    "NamingRule",
    "StructureRule",
    "default_rules",
]
