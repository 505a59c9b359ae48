"""Per-language feature analyzers.

Each analyzer parses one surface language, maps constructs to feature keys
and reports the features the scan's baseline level does not treat as safe.
"""

from baselinelint.analyzers.base import FeatureAnalyzer, FeatureUse
from baselinelint.analyzers.css import CssAnalyzer
from baselinelint.analyzers.markup import MarkupAnalyzer
from baselinelint.analyzers.registry import AnalyzerRegistry, default_registry
from baselinelint.analyzers.script import ScriptAnalyzer

__all__ = [
    "AnalyzerRegistry",
    "CssAnalyzer",
    "FeatureAnalyzer",
    "FeatureUse",
    "MarkupAnalyzer",
    "ScriptAnalyzer",
    "default_registry",
]
