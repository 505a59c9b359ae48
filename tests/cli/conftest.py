"""Shared fixtures for CLI tests.

Provides temporary project directories with clean sources, sources that use
non-Baseline features, and projects carrying a ``baselinelint.yaml``.
"""

from __future__ import annotations

from pathlib import Path

import pytest
from click.testing import CliRunner


@pytest.fixture
def runner() -> CliRunner:
    """Create a Click CliRunner for invoking commands."""
    return CliRunner()


@pytest.fixture
def empty_dir(tmp_path: Path) -> Path:
    """A directory with nothing to scan."""
    target = tmp_path / "empty"
    target.mkdir()
    (target / "notes.txt").write_text("nothing to see\n")
    return target


@pytest.fixture
def clean_dir(tmp_path: Path) -> Path:
    """Sources that only use long-established features."""
    target = tmp_path / "clean"
    target.mkdir()
    (target / "site.css").write_text("body { color: red; margin: 0 auto; }\n")
    (target / "app.js").write_text("document.querySelector('a');\n")
    return target


@pytest.fixture
def newly_dir(tmp_path: Path) -> Path:
    """Sources using Newly available features only."""
    target = tmp_path / "newly"
    target.mkdir()
    (target / "copy.js").write_text("navigator.clipboard.writeText('hi');\n")
    return target


@pytest.fixture
def configured_dir(newly_dir: Path) -> Path:
    """The newly_dir project with a config file lowering the level to newly."""
    (newly_dir / "baselinelint.yaml").write_text("baseline_level: newly\n")
    return newly_dir
