"""Restricted glob patterns for include / exclude filtering.

Only three wildcards are recognised:

==========  ==================================================
Token       Matches
==========  ==================================================
``**/``     zero or more whole leading path segments
``**``      any run of characters, separators included
``*``       any run of characters within one segment
==========  ==================================================

Every other character is literal. There are no character classes, brace
expansion, negation or escapes. Patterns are matched against the full
root-relative POSIX path, anchored at both ends, so ``*.css`` matches
``a.css`` but not ``src/a.css`` while ``**/*.css`` matches both.
"""

from __future__ import annotations

import re
from collections.abc import Iterable
from functools import lru_cache

from baselinelint.exceptions import InvalidOptionsError


@lru_cache(maxsize=256)
def compile_glob(pattern: str) -> re.Pattern[str]:
    """Translate a glob into an anchored regular expression.

    Raises:
        InvalidOptionsError: If the pattern is empty or not a string.
    """
    if not isinstance(pattern, str) or not pattern.strip():
        raise InvalidOptionsError(f"Empty glob pattern: {pattern!r}")

    parts: list[str] = []
    i = 0
    length = len(pattern)
    while i < length:
        if pattern.startswith("**/", i):
            parts.append("(?:.*/)?")
            i += 3
        elif pattern.startswith("**", i):
            parts.append(".*")
            i += 2
        elif pattern[i] == "*":
            parts.append("[^/]*")
            i += 1
        else:
            parts.append(re.escape(pattern[i]))
            i += 1
    return re.compile("".join(parts), re.DOTALL)


def glob_matches(pattern: str, path: str) -> bool:
    """Return True if ``pattern`` matches the whole of ``path``."""
    return compile_glob(pattern).fullmatch(path) is not None


def matches_any(patterns: Iterable[str], path: str) -> bool:
    return any(glob_matches(pattern, path) for pattern in patterns)


def prunes_directory(patterns: Iterable[str], directory: str) -> bool:
    """Return True if every file below ``directory`` is excluded.

    Only patterns ending in ``/**`` (or ``**`` alone) can exclude a whole
    subtree, so only those are consulted.
    """
    probe = f"{directory}/"
    return any(
        glob_matches(pattern, probe)
        for pattern in patterns
        if pattern == "**" or pattern.endswith("/**")
    )


def validate_patterns(patterns: Iterable[str], option: str) -> tuple[str, ...]:
    """Compile every pattern once so malformed input fails before any I/O.

    Raises:
        InvalidOptionsError: Naming ``option`` when a pattern is invalid.
    """
    if isinstance(patterns, str):
        patterns = [patterns]
    validated: list[str] = []
    for pattern in patterns:
        if not isinstance(pattern, str):
            raise InvalidOptionsError(f"Invalid {option} pattern: {pattern!r} is not a string")
        try:
            compile_glob(pattern)
        except InvalidOptionsError as exc:
            raise InvalidOptionsError(f"Invalid {option} pattern: {exc}") from exc
        validated.append(pattern)
    return tuple(validated)
