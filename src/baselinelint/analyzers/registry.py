"""Analyzer registry for dispatching files by extension.

The ``AnalyzerRegistry`` holds an ordered list of ``FeatureAnalyzer``
instances. ``for_path()`` returns the first analyzer whose extensions
include the file's suffix, or None for files no analyzer handles (those
are skipped silently by the scanner).

``default_registry()`` pre-registers the three built-in analyzers. Custom
analyzers can be added with ``register()``.
"""

from __future__ import annotations

from pathlib import PurePath

from baselinelint.analyzers.base import FeatureAnalyzer
from baselinelint.analyzers.css import CssAnalyzer
from baselinelint.analyzers.markup import MarkupAnalyzer
from baselinelint.analyzers.script import ScriptAnalyzer


class AnalyzerRegistry:
    """Registry of feature analyzers keyed by file extension.

    Attributes:
        analyzers: Ordered list of registered analyzer instances.
    """

    def __init__(self) -> None:
        self.analyzers: list[FeatureAnalyzer] = []

    def register(self, analyzer: FeatureAnalyzer) -> None:
        """Add an analyzer. Earlier registrations win on shared extensions."""
        self.analyzers.append(analyzer)

    def for_path(self, path: str | PurePath) -> FeatureAnalyzer | None:
        """Return the analyzer responsible for ``path``, if any."""
        for analyzer in self.analyzers:
            if analyzer.can_analyze(path):
                return analyzer
        return None

    @property
    def extensions(self) -> frozenset[str]:
        return frozenset(ext for analyzer in self.analyzers for ext in analyzer.extensions)


def default_registry() -> AnalyzerRegistry:
    """Create an AnalyzerRegistry with the CSS, script and markup analyzers."""
    registry = AnalyzerRegistry()
    registry.register(CssAnalyzer())
    registry.register(ScriptAnalyzer())
    registry.register(MarkupAnalyzer())
    return registry
