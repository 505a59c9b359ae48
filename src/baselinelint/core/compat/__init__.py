"""Compatibility database: Baseline status of web-platform features.

Submodules
----------
- ``models``: Data types (Tier, BaselineLevel, FeatureInfo).
- ``database``: The immutable CompatDatabase and its YAML loader.

All public names are re-exported here::

    from baselinelint.core.compat import CompatDatabase, Tier, default_database
"""

from baselinelint.core.compat.models import BaselineLevel, FeatureInfo, Tier
from baselinelint.core.compat.database import CompatDatabase, default_database

__all__ = [
    "BaselineLevel",
    "CompatDatabase",
    "FeatureInfo",
    "Tier",
    "default_database",
]
