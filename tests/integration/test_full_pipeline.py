"""End-to-end integration tests: enumerate -> analyze -> aggregate -> serialize."""
from __future__ import annotations

import json
from pathlib import Path

from baselinelint import ScanOptions, scan
from baselinelint.core.compat.models import BaselineLevel, Tier
from baselinelint.core.issues.models import IssueSeverity


def _write_site(root: Path) -> None:
    (root / "styles").mkdir(parents=True)
    (root / "scripts").mkdir()
    (root / "styles" / "layout.css").write_text(
        ".page { display: grid; grid-template-columns: subgrid; }\n"
        ".title { word-break: auto-phrase; text-wrap: balance; }\n"
        "@container (min-width: 400px) {\n"
        "  .card:has(img) { field-sizing: content; }\n"
        "}\n"
    )
    (root / "scripts" / "share.ts").write_text(
        "export async function share(data: ShareData): Promise<void> {\n"
        "  const id: string = crypto.randomUUID();\n"
        "  await navigator.clipboard.writeText(id);\n"
        "  if (navigator.canShare(data)) {\n"
        "    await navigator.share(data);\n"
        "  }\n"
        "}\n"
    )
    (root / "index.html").write_text(
        "<!doctype html>\n"
        "<html>\n"
        "<body>\n"
        "  <dialog id=\"d\">Hello</dialog>\n"
        "  <div popover id=\"p\">Menu</div>\n"
        "  <img src=\"a.png\" loading=\"lazy\">\n"
        "  <fencedframe></fencedframe>\n"
        "</body>\n"
        "</html>\n"
    )
    (root / "broken.css").write_text(".x { color: red; } }}} @@@ {")


class TestLevels:
    """Each level reports a superset of the stricter level."""

    def test_limited(self, tmp_path: Path) -> None:
        _write_site(tmp_path)
        result = scan(tmp_path)
        assert result.files.scanned == 4
        assert {i.tier for i in result.issues} == {Tier.LIMITED}
        assert sorted(i.feature_id for i in result.issues) == [
            "fencedframe", "field-sizing", "web-share", "web-share", "word-break-auto-phrase",
        ]

    def test_newly(self, tmp_path: Path) -> None:
        _write_site(tmp_path)
        result = scan(tmp_path, ScanOptions(baseline_level=BaselineLevel.NEWLY))
        ids = {i.feature_id for i in result.issues}
        assert {
            "subgrid", "text-wrap-balance", "container-queries", "has-selector",
            "async-clipboard", "popover", "loading-lazy",
        } <= ids
        assert Tier.WIDELY_AVAILABLE not in {i.tier for i in result.issues}

    def test_widely(self, tmp_path: Path) -> None:
        _write_site(tmp_path)
        result = scan(tmp_path, ScanOptions(baseline_level="widely"))  # type: ignore[arg-type]
        info = {i.feature_id for i in result.filter(IssueSeverity.INFO)}
        assert {"grid", "crypto-random-uuid", "dialog"} <= info

    def test_levels_are_nested(self, tmp_path: Path) -> None:
        _write_site(tmp_path)
        keys = {}
        for level in BaselineLevel:
            result = scan(tmp_path, ScanOptions(baseline_level=level))
            keys[level] = {(i.file, i.key, i.line, i.column) for i in result.issues}
        assert keys[BaselineLevel.LIMITED] <= keys[BaselineLevel.NEWLY] <= keys[BaselineLevel.WIDELY]


class TestSerialization:
    """The JSON contract."""

    def test_round_trips_through_json(self, tmp_path: Path) -> None:
        _write_site(tmp_path)
        result = scan(tmp_path, ScanOptions(baseline_level=BaselineLevel.WIDELY, workers=3))
        data = json.loads(json.dumps(result.to_dict()))
        summary = data["summary"]
        assert summary["total"] == len(data["issues"])
        assert summary["errors"] + summary["warnings"] + summary["info"] == summary["total"]
        assert (
            summary["baselineLimited"] + summary["baselineNewly"] + summary["baselineWidely"]
            == summary["total"]
        )
        assert data["files"]["scanned"] == 4
        assert data["files"]["withIssues"] == 3

    def test_suggestions_and_fixes(self, tmp_path: Path) -> None:
        _write_site(tmp_path)
        result = scan(tmp_path)
        word_break = next(i for i in result.issues if i.feature_id == "word-break-auto-phrase")
        assert word_break.suggestion
        assert word_break.auto_fix
        assert word_break.to_dict()["autoFix"] == word_break.auto_fix
