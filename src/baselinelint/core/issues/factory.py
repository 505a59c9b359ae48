"""Pure construction of ``Issue`` values from detected features.

``create_issue`` is the single place where a detected (feature, tier,
location) tuple becomes an ``Issue``. It has no side effects and reads only
the static tables in this module, so identical inputs always produce equal
issues.

Severity Policy
---------------
=================  ========
Tier               Severity
=================  ========
Limited            error
Newly available    warning
Widely available   info
=================  ========

Widely available features only reach the factory when a scan runs at the
``widely`` baseline level; the analyzers suppress them otherwise.
"""

from __future__ import annotations

from dataclasses import dataclass

from baselinelint.core.compat.models import FeatureInfo, Tier
from baselinelint.core.issues.models import Issue, IssueSeverity, IssueType

_SEVERITY_BY_TIER: dict[Tier, IssueSeverity] = {
    Tier.LIMITED: IssueSeverity.ERROR,
    Tier.NEWLY_AVAILABLE: IssueSeverity.WARNING,
    Tier.WIDELY_AVAILABLE: IssueSeverity.INFO,
}

_MESSAGE_TEMPLATES: dict[Tier, str] = {
    Tier.LIMITED: "{feature} ({kind}) is not Baseline. Limited browser support.",
    Tier.NEWLY_AVAILABLE: "{feature} ({kind}) is Baseline Newly available. Use with caution.",
    Tier.WIDELY_AVAILABLE: "{feature} ({kind}) is Baseline Widely available. Safe to use.",
}

# Remediation hints keyed by feature id. Features without an entry get no
# suggestion.
SUGGESTIONS: dict[str, str] = {
    "word-break-auto-phrase": (
        "Use word-break: normal with overflow-wrap: break-word as a fallback."
    ),
    "subgrid": (
        "Repeat the parent's track definition on the child grid for browsers "
        "without subgrid."
    ),
    "container-queries": (
        "Provide media-query based styles before the @container rule."
    ),
    "has-selector": (
        "Guard the rule with @supports selector(:has(*)) or toggle a class from script."
    ),
    "text-wrap-pretty": "Treat text-wrap: pretty as progressive enhancement only.",
    "field-sizing": "Size the control with an explicit width or rows as a fallback.",
    "anchor-positioning": (
        "Position the element with a script-based library where anchor "
        "positioning is unsupported."
    ),
    "array-tosorted": "Copy then sort: [...array].sort(compareFn).",
    "async-clipboard": (
        "Feature-detect navigator.clipboard and fall back to document.execCommand('copy')."
    ),
    "request-idle-callback": "Fall back to setTimeout when requestIdleCallback is missing.",
    "web-share": "Feature-detect navigator.share and offer a copy-link fallback.",
    "file-system-access": (
        "Fall back to <input type=\"file\"> and download links for saving."
    ),
    "promise-withresolvers": (
        "Create the promise manually and capture resolve/reject in the executor."
    ),
    "popover": "Ship a polyfill or toggle visibility from script where popover is missing.",
    "fencedframe": "Use a sandboxed <iframe> instead.",
    "customizable-select": "Keep the native <select> rendering as the fallback.",
    "iframe-credentialless": "Use the sandbox attribute to restrict the iframe instead.",
}

# Static replacement snippets keyed by feature id.
AUTO_FIXES: dict[str, str] = {
    "word-break-auto-phrase": "word-break: normal; overflow-wrap: break-word;",
    "array-tosorted": "[...array].sort(compareFn)",
    "request-idle-callback": "(window.requestIdleCallback || ((cb) => setTimeout(cb, 1)))",
    "fencedframe": '<iframe sandbox="allow-scripts"></iframe>',
}


@dataclass(frozen=True)
class SourceLocation:
    """Where a construct was found: source identifier plus 1-based position."""

    file: str
    line: int
    column: int


def severity_for_tier(tier: Tier) -> IssueSeverity:
    """Map a Baseline tier to its diagnostic severity."""
    return _SEVERITY_BY_TIER[tier]


def format_message(issue_type: IssueType, feature: str, tier: Tier) -> str:
    """Render the deterministic message for (type, feature, tier)."""
    return _MESSAGE_TEMPLATES[tier].format(feature=feature, kind=issue_type.display_name)


def suggestion_for(feature_id: str) -> str | None:
    return SUGGESTIONS.get(feature_id)


def auto_fix_for(feature_id: str) -> str | None:
    return AUTO_FIXES.get(feature_id)


def create_issue(
    issue_type: IssueType,
    feature: FeatureInfo,
    key: str,
    location: SourceLocation,
    property: str | None = None,
    value: str | None = None,
) -> Issue:
    """Build an ``Issue`` for a detected feature.

    The feature's tier is copied into the issue, so the issue stays valid
    even if a different compatibility table is loaded later.

    Args:
        issue_type: Surface language of the source file.
        feature: The matched feature.
        key: The feature key that matched.
        location: Where the construct was found.
        property: CSS property or HTML attribute name.
        value: Normalized CSS value or HTML attribute value.

    Returns:
        A fully populated, immutable ``Issue``.
    """
    return Issue(
        type=issue_type,
        feature=feature.name,
        feature_id=feature.id,
        key=key,
        tier=feature.tier,
        severity=severity_for_tier(feature.tier),
        message=format_message(issue_type, feature.name, feature.tier),
        file=location.file,
        line=location.line,
        column=location.column,
        property=property or None,
        value=value or None,
        suggestion=suggestion_for(feature.id),
        auto_fix=auto_fix_for(feature.id),
    )
