"""Issue model and the pure issue factory.

Submodules
----------
- ``models``: Data types (IssueType, IssueSeverity, Issue, ScanSummary,
  FileCounts, ScanResult).
- ``factory``: ``create_issue`` and the static severity, message,
  suggestion and auto-fix tables.
"""

from baselinelint.core.issues.models import (
    FileCounts,
    Issue,
    IssueSeverity,
    IssueType,
    ScanResult,
    ScanSummary,
)
from baselinelint.core.issues.factory import SourceLocation, create_issue, severity_for_tier

__all__ = [
    "FileCounts",
    "Issue",
    "IssueSeverity",
    "IssueType",
    "ScanResult",
    "ScanSummary",
    "SourceLocation",
    "create_issue",
    "severity_for_tier",
]
