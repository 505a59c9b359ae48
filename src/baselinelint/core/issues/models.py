"""Data models for scan output: Issue, ScanSummary, FileCounts, ScanResult.

These are the types produced by the analyzers and the scan orchestrator and
consumed by external collaborators (CLI formatters, CI wrappers, editor
integrations). They carry no behaviour beyond aggregation and serialization.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from baselinelint.core.compat.models import Tier


class IssueType(str, Enum):
    """Surface language an issue was detected in."""

    CSS = "css"
    JAVASCRIPT = "javascript"
    HTML = "html"

    @property
    def display_name(self) -> str:
        return _TYPE_DISPLAY[self]


_TYPE_DISPLAY: dict[IssueType, str] = {
    IssueType.CSS: "CSS",
    IssueType.JAVASCRIPT: "JavaScript",
    IssueType.HTML: "HTML",
}


class IssueSeverity(str, Enum):
    """Diagnostic severity derived from the feature's tier."""

    ERROR = "error"
    WARNING = "warning"
    INFO = "info"


# ---------------------------------------------------------------------------
# Issue: A single detected feature usage
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Issue:
    """One detected usage of a web-platform feature.

    Issues are immutable values with no lifecycle beyond a single scan. The
    ``tier`` is a snapshot taken when the issue was built, so a later change
    to the compatibility table never alters an emitted issue.

    Attributes:
        type: Surface language the feature was detected in.
        feature: Display label of the feature.
        feature_id: Identifier of the matched ``FeatureInfo``.
        key: The feature key that matched.
        tier: Baseline tier at detection time.
        severity: Severity derived from ``tier``.
        message: Deterministic human-readable description.
        file: Source identifier (path) the issue was found in.
        line: 1-based line of the construct.
        column: 1-based column of the construct.
        property: CSS property or HTML attribute name, when applicable.
        value: Normalized CSS value or HTML attribute value.
        suggestion: Static remediation hint, when one is known.
        auto_fix: Static replacement snippet, when one is known.
    """

    type: IssueType
    feature: str
    feature_id: str
    key: str
    tier: Tier
    severity: IssueSeverity
    message: str
    file: str
    line: int
    column: int
    property: str | None = None
    value: str | None = None
    suggestion: str | None = None
    auto_fix: str | None = None

    def location(self) -> str:
        """Return ``file:line:column`` for terminal output."""
        return f"{self.file}:{self.line}:{self.column}"

    def sort_key(self) -> tuple[str, int, int]:
        return (self.file, self.line, self.column)

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON contract for this issue."""
        return {
            "type": self.type.value,
            "feature": self.feature,
            "featureId": self.feature_id,
            "key": self.key,
            "property": self.property,
            "value": self.value,
            "baseline": self.tier.label,
            "severity": self.severity.value,
            "message": self.message,
            "suggestion": self.suggestion,
            "autoFix": self.auto_fix,
            "file": self.file,
            "line": self.line,
            "column": self.column,
        }


# ---------------------------------------------------------------------------
# Aggregates
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ScanSummary:
    """Counts derived from a list of issues."""

    total: int
    errors: int
    warnings: int
    info: int
    limited: int
    newly: int
    widely: int

    @classmethod
    def from_issues(cls, issues: list[Issue]) -> ScanSummary:
        return cls(
            total=len(issues),
            errors=sum(1 for i in issues if i.severity is IssueSeverity.ERROR),
            warnings=sum(1 for i in issues if i.severity is IssueSeverity.WARNING),
            info=sum(1 for i in issues if i.severity is IssueSeverity.INFO),
            limited=sum(1 for i in issues if i.tier is Tier.LIMITED),
            newly=sum(1 for i in issues if i.tier is Tier.NEWLY_AVAILABLE),
            widely=sum(1 for i in issues if i.tier is Tier.WIDELY_AVAILABLE),
        )

    def to_dict(self) -> dict[str, int]:
        return {
            "total": self.total,
            "errors": self.errors,
            "warnings": self.warnings,
            "info": self.info,
            "baselineLimited": self.limited,
            "baselineNewly": self.newly,
            "baselineWidely": self.widely,
        }


@dataclass(frozen=True)
class FileCounts:
    """How many files were analysed and how many produced issues."""

    scanned: int
    with_issues: int

    def to_dict(self) -> dict[str, int]:
        return {"scanned": self.scanned, "withIssues": self.with_issues}


@dataclass
class ScanResult:
    """The complete result of a scan.

    Only the issue list and the scanned-file count are stored. ``summary``
    and ``files.with_issues`` are recomputed from ``issues`` on every
    access, so they can never drift from the list they describe.

    Attributes:
        issues: Issues in visitation order.
        files_scanned: Number of files that were read and analysed.
    """

    issues: list[Issue] = field(default_factory=list)
    files_scanned: int = 0

    @property
    def summary(self) -> ScanSummary:
        return ScanSummary.from_issues(self.issues)

    @property
    def files(self) -> FileCounts:
        return FileCounts(
            scanned=self.files_scanned,
            with_issues=len({issue.file for issue in self.issues}),
        )

    @property
    def has_issues(self) -> bool:
        return bool(self.issues)

    def sorted(self) -> ScanResult:
        """Return a copy with issues ordered by (file, line, column)."""
        return ScanResult(
            issues=sorted(self.issues, key=Issue.sort_key),
            files_scanned=self.files_scanned,
        )

    def filter(self, severity: IssueSeverity) -> list[Issue]:
        return [issue for issue in self.issues if issue.severity is severity]

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON contract for the whole scan."""
        return {
            "issues": [issue.to_dict() for issue in self.issues],
            "summary": self.summary.to_dict(),
            "files": self.files.to_dict(),
        }
