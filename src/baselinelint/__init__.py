"""baselinelint: Baseline web-platform compatibility analysis for CSS, JS/TS and HTML."""

from __future__ import annotations

__version__ = "0.1.0"
__license__ = "MIT"

from baselinelint.scanner import ScanOptions, analyze_file, scan

__all__ = [
    "ScanOptions",
    "__version__",
    "analyze_file",
    "scan",
]
