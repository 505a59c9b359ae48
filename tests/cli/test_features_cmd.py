"""Tests for ``baselinelint features`` command."""

from __future__ import annotations

import json
from pathlib import Path

from click.testing import CliRunner

from baselinelint.cli.features_cmd import select_features
from baselinelint.cli.main import cli
from baselinelint.core.compat.database import CompatDatabase


class TestFeaturesCommand:
    """Listing and filtering the compatibility table."""

    def test_lists_table(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["features"])
        assert result.exit_code == 0
        assert "feature(s)" in result.output

    def test_json_output(self, runner: CliRunner, database: CompatDatabase) -> None:
        result = runner.invoke(cli, ["features", "--format", "json"])
        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["version"] == database.version
        assert len(data["features"]) == len(database)

    def test_group_and_tier_filters(self, runner: CliRunner) -> None:
        result = runner.invoke(
            cli, ["features", "--group", "css", "--tier", "limited", "--format", "json"],
        )
        features = json.loads(result.output)["features"]
        assert features
        assert all(f["group"] == "css" and f["baseline"] == "limited" for f in features)
        assert "word-break-auto-phrase" in {f["id"] for f in features}

    def test_search(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["features", "--search", "clipboard", "--format", "json"])
        ids = [f["id"] for f in json.loads(result.output)["features"]]
        assert ids == ["async-clipboard"]

    def test_no_match(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["features", "--search", "zzz-no-such-feature"])
        assert result.exit_code == 0
        assert "No matching features" in result.output

    def test_bad_table_exits_2(self, runner: CliRunner, tmp_path: Path) -> None:
        table = tmp_path / "table.yaml"
        table.write_text("features:\n  - id: x\n")
        result = runner.invoke(cli, ["features", "--features", str(table)])
        assert result.exit_code == 2
        assert "Error:" in result.output


class TestSelectFeatures:
    """Filter helper used by the command."""

    def test_keeps_table_order(self, tiny_database: CompatDatabase) -> None:
        assert [f.id for f in select_features(tiny_database)] == ["alpha", "beta", "gamma"]

    def test_combined_filters(self, tiny_database: CompatDatabase) -> None:
        selected = select_features(tiny_database, group="html", tier="widely", search="gam")
        assert [f.id for f in selected] == ["gamma"]
