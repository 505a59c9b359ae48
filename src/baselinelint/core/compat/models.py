"""Data models for the compatibility database: Tier, BaselineLevel, FeatureInfo.

These types are decoupled from the database loader so that the issue factory,
analyzers and CLI formatters can import them without pulling in YAML loading
or the bundled feature table.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum, IntEnum
from types import MappingProxyType


# ---------------------------------------------------------------------------
# Tier: Ordered Baseline classification
# ---------------------------------------------------------------------------


class Tier(IntEnum):
    """Three-level Baseline compatibility scale.

    The integer encoding enables direct comparison:
    LIMITED < NEWLY_AVAILABLE < WIDELY_AVAILABLE.
    """

    LIMITED = 1
    NEWLY_AVAILABLE = 2
    WIDELY_AVAILABLE = 3

    @property
    def label(self) -> str:
        """Short string form used in YAML tables and JSON output."""
        return _TIER_LABELS[self]

    @property
    def display_name(self) -> str:
        """Human-readable form for terminal output."""
        return _TIER_DISPLAY[self]

    @classmethod
    def parse(cls, value: str | bool | None) -> Tier:
        """Parse a tier from its table form.

        Accepts ``limited``, ``newly`` and ``widely`` (case-insensitive).
        ``false`` and ``None`` mean Limited, matching the web-features
        convention of ``baseline: false`` for non-Baseline features.

        Raises:
            ValueError: If the value is not a known tier.
        """
        if value is None or value is False:
            return cls.LIMITED
        if isinstance(value, str):
            tier = _TIERS_BY_LABEL.get(value.strip().lower())
            if tier is not None:
                return tier
        raise ValueError(f"Unknown Baseline tier: {value!r}")


_TIER_LABELS: dict[Tier, str] = {
    Tier.LIMITED: "limited",
    Tier.NEWLY_AVAILABLE: "newly",
    Tier.WIDELY_AVAILABLE: "widely",
}

_TIER_DISPLAY: dict[Tier, str] = {
    Tier.LIMITED: "Limited Support",
    Tier.NEWLY_AVAILABLE: "Newly Available",
    Tier.WIDELY_AVAILABLE: "Widely Available",
}

_TIERS_BY_LABEL: dict[str, Tier] = {
    "limited": Tier.LIMITED,
    "newly": Tier.NEWLY_AVAILABLE,
    "widely": Tier.WIDELY_AVAILABLE,
}


# ---------------------------------------------------------------------------
# BaselineLevel: Which tiers a scan reports
# ---------------------------------------------------------------------------


class BaselineLevel(str, Enum):
    """The most permissive tier a scan still reports.

    Every tier above the level is the safe tier and is suppressed:

    - ``limited`` reports Limited features only (the default).
    - ``newly`` reports Limited and Newly available features.
    - ``widely`` reports every detected feature, Widely available as info.
    """

    LIMITED = "limited"
    NEWLY = "newly"
    WIDELY = "widely"

    @property
    def max_reported_tier(self) -> Tier:
        return _TIERS_BY_LABEL[self.value]

    @property
    def safe_threshold(self) -> Tier | None:
        """Lowest tier treated as safe, or None when everything is reported."""
        if self is BaselineLevel.WIDELY:
            return None
        return Tier(self.max_reported_tier + 1)

    def reports(self, tier: Tier) -> bool:
        """Return True if a feature at ``tier`` is reported at this level."""
        return tier <= self.max_reported_tier

    @classmethod
    def parse(cls, value: str | BaselineLevel) -> BaselineLevel:
        """Parse a level name, raising ValueError on unknown input."""
        if isinstance(value, BaselineLevel):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            choices = ", ".join(level.value for level in cls)
            raise ValueError(
                f"Unknown baseline level {value!r} (expected one of: {choices})"
            ) from None


# ---------------------------------------------------------------------------
# FeatureInfo: One row of the compatibility table
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class FeatureInfo:
    """A web-platform feature and its Baseline status.

    Instances are immutable; the ``support`` mapping is wrapped in a
    read-only proxy at construction time.

    Attributes:
        id: Stable identifier (e.g., "word-break-auto-phrase").
        name: Display label used as ``Issue.feature``.
        description: Short human-readable summary.
        group: Surface language group: "css", "javascript" or "html".
        tier: Current Baseline tier.
        compat_keys: Feature keys that resolve to this feature.
        low_date: Date the feature became Newly available (ISO string).
        high_date: Date the feature became Widely available (ISO string).
        support: Browser name to minimum supporting version.
        spec_url: Link to the defining specification.
    """

    id: str
    name: str
    description: str
    group: str
    tier: Tier
    compat_keys: tuple[str, ...] = ()
    low_date: str | None = None
    high_date: str | None = None
    support: Mapping[str, str] = field(default_factory=dict, hash=False)
    spec_url: str | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "support", MappingProxyType(dict(self.support)))

    def to_dict(self) -> dict:
        """Return a JSON-serializable view of this feature."""
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "group": self.group,
            "baseline": self.tier.label,
            "baseline_low_date": self.low_date,
            "baseline_high_date": self.high_date,
            "support": dict(self.support),
            "compat_features": list(self.compat_keys),
            "spec": self.spec_url,
        }
