"""Tests for the restricted glob matcher."""

from __future__ import annotations

import pytest

from baselinelint.exceptions import InvalidOptionsError
from baselinelint.scanner.globs import (
    compile_glob,
    glob_matches,
    matches_any,
    prunes_directory,
    validate_patterns,
)


class TestWildcards:
    """``**/``, ``**`` and ``*`` semantics."""

    @pytest.mark.parametrize(
        ("pattern", "path", "expected"),
        [
            ("**/*.css", "src/a/b/c.css", True),
            ("**/*.css", "c.css", True),
            ("**/*.css", "src/c.js", False),
            ("*.css", "c.css", True),
            ("*.css", "src/c.css", False),
            ("**/node_modules/**", "pkg/node_modules/x/y.js", True),
            ("**/node_modules/**", "node_modules/y.js", True),
            ("**/node_modules/**", "src/node_modules_backup/y.js", False),
            ("src/**", "src/a/b.js", True),
            ("src/**", "lib/a.js", False),
            ("src/*.js", "src/a.js", True),
            ("src/*.js", "src/deep/a.js", False),
            ("**", "anything/at/all.txt", True),
        ],
    )
    def test_matches(self, pattern: str, path: str, expected: bool) -> None:
        assert glob_matches(pattern, path) is expected

    def test_matching_is_anchored(self) -> None:
        assert not glob_matches("*.css", "a.css.map")
        assert not glob_matches("a.css", "xa.css")


class TestLiterals:
    """Everything except ``*`` is literal."""

    @pytest.mark.parametrize("pattern", ["a?.js", "[ab].js", "{a,b}.js", "!a.js", "a.b+c.js"])
    def test_special_characters_are_literal(self, pattern: str) -> None:
        assert glob_matches(pattern, pattern)

    def test_question_mark_is_not_a_wildcard(self) -> None:
        assert not glob_matches("a?.js", "ab.js")

    def test_dot_is_not_a_wildcard(self) -> None:
        assert not glob_matches("*.css", "acss")

    def test_brackets_are_not_a_class(self) -> None:
        assert not glob_matches("[ab].js", "a.js")


class TestValidation:
    """Malformed patterns fail before any I/O."""

    @pytest.mark.parametrize("pattern", ["", "   "])
    def test_empty_pattern(self, pattern: str) -> None:
        with pytest.raises(InvalidOptionsError):
            compile_glob(pattern)

    def test_validate_names_the_option(self) -> None:
        with pytest.raises(InvalidOptionsError, match="exclude"):
            validate_patterns(["**/*.js", ""], "exclude")

    def test_validate_rejects_non_strings(self) -> None:
        with pytest.raises(InvalidOptionsError, match="not a string"):
            validate_patterns(["**/*.js", 3], "include")  # type: ignore[list-item]

    def test_validate_wraps_single_string(self) -> None:
        assert validate_patterns("**/*.css", "include") == ("**/*.css",)


class TestHelpers:
    """matches_any and subtree pruning."""

    def test_matches_any(self) -> None:
        assert matches_any(["*.js", "*.css"], "a.css")
        assert not matches_any([], "a.css")

    def test_prunes_excluded_subtree(self) -> None:
        assert prunes_directory(["**/node_modules/**"], "pkg/node_modules")
        assert prunes_directory(["**/node_modules/**"], "node_modules")
        assert not prunes_directory(["**/node_modules/**"], "src")

    def test_single_segment_pattern_never_prunes(self) -> None:
        assert not prunes_directory(["vendor/*"], "vendor")
