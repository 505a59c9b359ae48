"""Immutable compatibility database mapping feature keys to Baseline status.

The ``CompatDatabase`` is built once from a YAML table (the bundled
``data/features.yaml`` or a user-supplied file) and is read-only afterwards.
Analyzers receive it by reference; there is no module-level feature table.

Lookup Semantics
----------------
A feature key is the deterministic string an analyzer derives from a
syntactic construct (``css.properties.word-break.auto-phrase``,
``navigator.clipboard.writeText``, ``dialog``). Each ``FeatureInfo`` lists
the keys that resolve to it. A key that is absent from the table is a
*miss*: ``lookup()`` returns None and callers report nothing. Misses are the
common case and never raise.

Because the table is immutable and issues copy the tier at construction
time, loading a newer table never alters issues that were already emitted.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator, Mapping
from functools import lru_cache
from importlib import resources
from pathlib import Path
from types import MappingProxyType
from typing import Any

import yaml

from baselinelint.core.compat.models import FeatureInfo, Tier
from baselinelint.exceptions import DatabaseError

logger = logging.getLogger(__name__)

_BUNDLED_TABLE = "features.yaml"
_REQUIRED_FIELDS = ("id", "name", "group")


class CompatDatabase:
    """Read-only registry of web-platform features indexed by feature key.

    Usage::

        db = CompatDatabase.bundled()
        info = db.lookup("css.properties.word-break.auto-phrase")
        if info is not None and info.tier < Tier.NEWLY_AVAILABLE:
            ...

    Instances are safe to share between threads: nothing is mutated after
    ``__init__`` returns.
    """

    def __init__(self, features: Iterable[FeatureInfo], version: str = "unversioned") -> None:
        by_id: dict[str, FeatureInfo] = {}
        by_key: dict[str, FeatureInfo] = {}
        for feature in features:
            if feature.id in by_id:
                raise DatabaseError(f"Duplicate feature id: {feature.id}")
            by_id[feature.id] = feature
            for key in feature.compat_keys:
                owner = by_key.get(key)
                if owner is not None:
                    raise DatabaseError(
                        f"Feature key {key!r} is claimed by both "
                        f"{owner.id!r} and {feature.id!r}"
                    )
                by_key[key] = feature
        self._by_id: Mapping[str, FeatureInfo] = MappingProxyType(by_id)
        self._by_key: Mapping[str, FeatureInfo] = MappingProxyType(by_key)
        self._version = version

    # -- Construction --

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> CompatDatabase:
        """Build a database from a parsed YAML/JSON document.

        Args:
            data: Mapping with a ``features`` list and an optional ``version``.

        Raises:
            DatabaseError: If the document does not match the table schema.
        """
        if not isinstance(data, Mapping):
            raise DatabaseError("Compatibility table must be a mapping")
        raw_features = data.get("features")
        if not isinstance(raw_features, list):
            raise DatabaseError("Compatibility table needs a 'features' list")
        features = [_feature_from_entry(entry, index) for index, entry in enumerate(raw_features)]
        return cls(features, version=str(data.get("version", "unversioned")))

    @classmethod
    def from_yaml(cls, path: Path) -> CompatDatabase:
        """Load a compatibility table from a YAML file.

        Raises:
            DatabaseError: If the file is unreadable or malformed.
        """
        try:
            text = Path(path).read_text(encoding="utf-8")
        except OSError as exc:
            raise DatabaseError(f"Cannot read compatibility table {path}: {exc}") from exc
        return cls._from_text(text, source=str(path))

    @classmethod
    def bundled(cls) -> CompatDatabase:
        """Load the compatibility table shipped with the package."""
        text = (
            resources.files("baselinelint.core.compat")
            .joinpath("data")
            .joinpath(_BUNDLED_TABLE)
            .read_text(encoding="utf-8")
        )
        return cls._from_text(text, source=_BUNDLED_TABLE)

    @classmethod
    def _from_text(cls, text: str, source: str) -> CompatDatabase:
        try:
            data = yaml.safe_load(text)
        except yaml.YAMLError as exc:
            raise DatabaseError(f"Invalid YAML in compatibility table {source}: {exc}") from exc
        database = cls.from_mapping(data or {})
        logger.debug(
            "Loaded compatibility table %s (version %s, %d features)",
            source, database.version, len(database),
        )
        return database

    # -- Queries --

    @property
    def version(self) -> str:
        return self._version

    @property
    def features(self) -> list[FeatureInfo]:
        """All features in table order."""
        return list(self._by_id.values())

    def lookup(self, key: str) -> FeatureInfo | None:
        """Return the feature a key resolves to, or None on a miss."""
        return self._by_key.get(key)

    def get(self, feature_id: str) -> FeatureInfo | None:
        """Return a feature by its id, or None if unknown."""
        return self._by_id.get(feature_id)

    def is_at_or_above_tier(self, key: str, threshold: Tier) -> bool:
        """Return True if ``key`` resolves to a feature at or above ``threshold``.

        A miss is never at or above any tier.
        """
        feature = self.lookup(key)
        return feature is not None and feature.tier >= threshold

    def by_group(self, group: str) -> list[FeatureInfo]:
        """Return all features in a surface-language group ("css", "javascript", "html")."""
        wanted = group.lower()
        return [f for f in self._by_id.values() if f.group == wanted]

    def by_tier(self, tier: Tier) -> list[FeatureInfo]:
        return [f for f in self._by_id.values() if f.tier == tier]

    def search(self, query: str) -> list[FeatureInfo]:
        """Case-insensitive substring search over id, name and description."""
        needle = query.lower()
        return [
            f for f in self._by_id.values()
            if needle in f.id.lower()
            or needle in f.name.lower()
            or needle in f.description.lower()
        ]

    def widely_available(self) -> list[FeatureInfo]:
        return self.by_tier(Tier.WIDELY_AVAILABLE)

    def newly_available(self) -> list[FeatureInfo]:
        return self.by_tier(Tier.NEWLY_AVAILABLE)

    def baseline_features(self) -> list[FeatureInfo]:
        """Features that are Baseline at all (Newly or Widely available)."""
        return [f for f in self._by_id.values() if f.tier >= Tier.NEWLY_AVAILABLE]

    def __contains__(self, key: object) -> bool:
        return key in self._by_key

    def __len__(self) -> int:
        return len(self._by_id)

    def __iter__(self) -> Iterator[FeatureInfo]:
        return iter(self._by_id.values())

    def __repr__(self) -> str:
        return f"CompatDatabase(version={self._version!r}, features={len(self)})"


@lru_cache(maxsize=1)
def default_database() -> CompatDatabase:
    """Return the process-wide database built from the bundled table.

    Built on first use and cached; the instance is immutable, so sharing it
    across scans and threads is safe.
    """
    return CompatDatabase.bundled()


def _feature_from_entry(entry: Any, index: int) -> FeatureInfo:
    """Convert one YAML ``features`` entry into a ``FeatureInfo``."""
    if not isinstance(entry, Mapping):
        raise DatabaseError(f"Feature entry #{index} must be a mapping")
    missing = [name for name in _REQUIRED_FIELDS if not entry.get(name)]
    if missing:
        raise DatabaseError(
            f"Feature entry #{index} is missing required field(s): {', '.join(missing)}"
        )
    feature_id = str(entry["id"])
    try:
        tier = Tier.parse(entry.get("baseline"))
    except ValueError as exc:
        raise DatabaseError(f"Feature {feature_id!r}: {exc}") from exc

    keys = entry.get("compat_features") or []
    if not isinstance(keys, list):
        raise DatabaseError(f"Feature {feature_id!r}: 'compat_features' must be a list")
    support = entry.get("support") or {}
    if not isinstance(support, Mapping):
        raise DatabaseError(f"Feature {feature_id!r}: 'support' must be a mapping")

    return FeatureInfo(
        id=feature_id,
        name=str(entry["name"]),
        description=str(entry.get("description", "")),
        group=str(entry["group"]).lower(),
        tier=tier,
        compat_keys=tuple(str(key) for key in keys),
        low_date=_optional_str(entry.get("baseline_low_date")),
        high_date=_optional_str(entry.get("baseline_high_date")),
        support={str(browser): str(version) for browser, version in support.items()},
        spec_url=_optional_str(entry.get("spec")),
    )


def _optional_str(value: Any) -> str | None:
    return None if value is None else str(value)
