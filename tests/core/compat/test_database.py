"""Tests for CompatDatabase loading and queries.

Verifies:
    - The bundled table loads and resolves known keys.
    - Misses return None and never raise.
    - Malformed tables fail at load time with DatabaseError.
"""

from __future__ import annotations

from pathlib import Path

import pytest

from baselinelint.core.compat.database import CompatDatabase, default_database
from baselinelint.core.compat.models import Tier
from baselinelint.exceptions import BaselineLintError, DatabaseError


# ---------------------------------------------------------------------------
# Bundled table
# ---------------------------------------------------------------------------


class TestBundledTable:
    """Sanity checks on the table shipped with the package."""

    def test_loads_with_version(self, database: CompatDatabase) -> None:
        assert database.version == "2026.10.0"
        assert len(database) > 50

    def test_word_break_auto_phrase_is_limited(self, database: CompatDatabase) -> None:
        feature = database.lookup("css.properties.word-break.auto-phrase")
        assert feature is not None
        assert feature.id == "word-break-auto-phrase"
        assert feature.name == "word-break: auto-phrase"
        assert feature.tier is Tier.LIMITED

    def test_fetch_is_widely_available(self, database: CompatDatabase) -> None:
        feature = database.lookup("fetch")
        assert feature is not None
        assert feature.tier is Tier.WIDELY_AVAILABLE

    def test_every_group_is_known(self, database: CompatDatabase) -> None:
        assert {f.group for f in database} == {"css", "javascript", "html"}

    def test_default_database_is_cached(self) -> None:
        assert default_database() is default_database()


# ---------------------------------------------------------------------------
# Queries
# ---------------------------------------------------------------------------


class TestQueries:
    """Lookup, filtering and search."""

    def test_miss_returns_none(self, database: CompatDatabase) -> None:
        assert database.lookup("css.properties.color.red") is None
        assert "css.properties.color.red" not in database

    def test_contains_known_key(self, database: CompatDatabase) -> None:
        assert "navigator.clipboard.writeText" in database

    def test_get_by_id(self, database: CompatDatabase) -> None:
        feature = database.get("dialog")
        assert feature is not None
        assert feature.group == "html"
        assert database.get("nope") is None

    def test_is_at_or_above_tier(self, database: CompatDatabase) -> None:
        assert database.is_at_or_above_tier("fetch", Tier.NEWLY_AVAILABLE)
        assert not database.is_at_or_above_tier("navigator.share", Tier.NEWLY_AVAILABLE)
        assert not database.is_at_or_above_tier("unknownApi", Tier.LIMITED)

    def test_by_group_is_case_insensitive(self, database: CompatDatabase) -> None:
        css = database.by_group("CSS")
        assert css
        assert all(f.group == "css" for f in css)

    def test_tier_filters_partition_table(self, database: CompatDatabase) -> None:
        limited = database.by_tier(Tier.LIMITED)
        newly = database.newly_available()
        widely = database.widely_available()
        assert len(limited) + len(newly) + len(widely) == len(database)
        assert len(database.baseline_features()) == len(newly) + len(widely)

    def test_search_matches_name_and_description(self, database: CompatDatabase) -> None:
        ids = {f.id for f in database.search("CLIPBOARD")}
        assert "async-clipboard" in ids

    def test_features_keep_table_order(self, tiny_database: CompatDatabase) -> None:
        assert [f.id for f in tiny_database.features] == ["alpha", "beta", "gamma"]


# ---------------------------------------------------------------------------
# Loading errors
# ---------------------------------------------------------------------------


class TestLoadingErrors:
    """Malformed tables are rejected before any scan starts."""

    def _entry(self, **overrides: object) -> dict:
        entry: dict = {"id": "x", "name": "X", "group": "css", "baseline": "limited"}
        entry.update(overrides)
        return entry

    def test_database_error_is_a_baselinelint_error(self) -> None:
        assert issubclass(DatabaseError, BaselineLintError)

    def test_missing_features_list(self) -> None:
        with pytest.raises(DatabaseError, match="features"):
            CompatDatabase.from_mapping({"version": "1"})

    def test_missing_required_field(self) -> None:
        with pytest.raises(DatabaseError, match="name"):
            CompatDatabase.from_mapping({"features": [{"id": "x", "group": "css"}]})

    def test_unknown_tier(self) -> None:
        with pytest.raises(DatabaseError, match="Unknown Baseline tier"):
            CompatDatabase.from_mapping({"features": [self._entry(baseline="soon")]})

    def test_duplicate_id(self) -> None:
        with pytest.raises(DatabaseError, match="Duplicate feature id"):
            CompatDatabase.from_mapping({"features": [self._entry(), self._entry()]})

    def test_duplicate_key(self) -> None:
        data = {"features": [
            self._entry(id="a", compat_features=["k"]),
            self._entry(id="b", compat_features=["k"]),
        ]}
        with pytest.raises(DatabaseError, match="claimed by both"):
            CompatDatabase.from_mapping(data)

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(DatabaseError, match="Cannot read"):
            CompatDatabase.from_yaml(tmp_path / "missing.yaml")

    def test_invalid_yaml(self, tmp_path: Path) -> None:
        path = tmp_path / "bad.yaml"
        path.write_text("features: [unclosed\n")
        with pytest.raises(DatabaseError, match="Invalid YAML"):
            CompatDatabase.from_yaml(path)

    def test_from_yaml(self, tmp_path: Path) -> None:
        path = tmp_path / "table.yaml"
        path.write_text(
            "version: '9'\n"
            "features:\n"
            "  - id: x\n"
            "    name: X\n"
            "    group: javascript\n"
            "    baseline: false\n"
            "    compat_features: [xApi]\n"
        )
        database = CompatDatabase.from_yaml(path)
        assert database.version == "9"
        feature = database.lookup("xApi")
        assert feature is not None
        assert feature.tier is Tier.LIMITED
