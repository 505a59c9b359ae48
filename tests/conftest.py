"""Shared fixtures for baselinelint tests."""

from __future__ import annotations

import pathlib

import pytest

from baselinelint.core.compat.database import CompatDatabase


@pytest.fixture(scope="session")
def database() -> CompatDatabase:
    """The bundled compatibility table, loaded once per session."""
    return CompatDatabase.bundled()


@pytest.fixture
def tiny_database() -> CompatDatabase:
    """A three-feature table, one feature per tier."""
    return CompatDatabase.from_mapping({
        "version": "test",
        "features": [
            {
                "id": "alpha",
                "name": "Alpha",
                "group": "css",
                "baseline": "limited",
                "compat_features": ["css.properties.alpha", "alphaApi"],
            },
            {
                "id": "beta",
                "name": "Beta",
                "group": "javascript",
                "baseline": "newly",
                "compat_features": ["betaApi.run"],
            },
            {
                "id": "gamma",
                "name": "Gamma",
                "group": "html",
                "baseline": "widely",
                "compat_features": ["gamma", "div.gamma"],
            },
        ],
    })


@pytest.fixture
def project_dir(tmp_path: pathlib.Path) -> pathlib.Path:
    """A small front-end project with one Limited feature per language.

    Layout::

        src/index.html          <fencedframe>           (limited)
        src/main.js             fetch (widely), requestIdleCallback (limited)
        src/styles/app.css      word-break: auto-phrase (limited)
        node_modules/lib/x.js   navigator.share         (excluded)
        README.md               (no analyzer)
    """
    src = tmp_path / "src"
    (src / "styles").mkdir(parents=True)
    (src / "index.html").write_text(
        '<fencedframe src="https://ads.example"></fencedframe>\n'
    )
    (src / "main.js").write_text(
        "fetch('/x');\nrequestIdleCallback(() => {});\n"
    )
    (src / "styles" / "app.css").write_text(".a { word-break: auto-phrase; }\n")
    vendored = tmp_path / "node_modules" / "lib"
    vendored.mkdir(parents=True)
    (vendored / "x.js").write_text("navigator.share({});\n")
    (tmp_path / "README.md").write_text("# demo\n")
    return tmp_path
