"""File enumeration, option handling and scan orchestration.

Submodules
----------
- ``globs``: Restricted glob matcher for include / exclude patterns.
- ``options``: ``ScanOptions`` and the YAML configuration loader.
- ``orchestrator``: ``Scanner`` plus the ``scan`` and ``analyze_file``
  entry points.
"""

from baselinelint.scanner.options import ScanOptions, find_config, load_config
from baselinelint.scanner.orchestrator import Scanner, analyze_file, scan

__all__ = [
    "ScanOptions",
    "Scanner",
    "analyze_file",
    "find_config",
    "load_config",
    "scan",
]
