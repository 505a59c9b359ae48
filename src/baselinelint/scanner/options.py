"""Scan options and the YAML configuration file.

``ScanOptions`` is validated on construction: malformed globs, an unknown
baseline level or a non-positive worker count raise
``InvalidOptionsError`` before the scanner touches the filesystem.

Configuration File
------------------
A project may keep its options in ``baselinelint.yaml``:

.. code-block:: yaml

    include:
      - "src/**/*.css"
      - "src/**/*.ts"
    exclude:
      - "**/vendor/**"
    baseline_level: newly
    workers: 4
    features: ./compat/features.yaml

Keys that are absent keep their defaults. ``features`` is resolved
relative to the config file's directory.
"""

from __future__ import annotations

import dataclasses
import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from baselinelint.core.compat.models import BaselineLevel
from baselinelint.exceptions import InvalidOptionsError
from baselinelint.scanner.globs import validate_patterns

logger = logging.getLogger(__name__)

DEFAULT_INCLUDE_PATTERNS: tuple[str, ...] = (
    "**/*.css",
    "**/*.js",
    "**/*.jsx",
    "**/*.ts",
    "**/*.tsx",
    "**/*.html",
    "**/*.htm",
)

DEFAULT_EXCLUDE_PATTERNS: tuple[str, ...] = (
    "**/node_modules/**",
    "**/dist/**",
    "**/build/**",
    "**/out/**",
)

CONFIG_FILENAMES = ("baselinelint.yaml", "baselinelint.yml", ".baselinelint.yaml")

_CONFIG_KEYS = frozenset({"include", "exclude", "baseline_level", "workers", "features", "verbose"})


@dataclass(frozen=True)
class ScanOptions:
    """Options controlling a single scan.

    Attributes:
        include_patterns: A file is scanned only if one of these matches.
        exclude_patterns: A file is skipped if any of these matches.
        baseline_level: Most permissive tier still reported.
        verbose: Emit per-file debug logging. Never changes results.
        workers: Number of files analysed concurrently.
        should_cancel: Polled before each file; returning True stops the
            scan and returns the partial result.
        features_path: Alternative compatibility table, or None for the
            bundled one.
    """

    include_patterns: tuple[str, ...] = DEFAULT_INCLUDE_PATTERNS
    exclude_patterns: tuple[str, ...] = DEFAULT_EXCLUDE_PATTERNS
    baseline_level: BaselineLevel = BaselineLevel.LIMITED
    verbose: bool = False
    workers: int = 1
    should_cancel: Callable[[], bool] | None = field(default=None, compare=False, repr=False)
    features_path: Path | None = None

    def __post_init__(self) -> None:
        include = validate_patterns(self.include_patterns, "include")
        if not include:
            raise InvalidOptionsError("At least one include pattern is required")
        object.__setattr__(self, "include_patterns", include)
        object.__setattr__(
            self, "exclude_patterns", validate_patterns(self.exclude_patterns, "exclude")
        )
        try:
            level = BaselineLevel.parse(self.baseline_level)
        except ValueError as exc:
            raise InvalidOptionsError(str(exc)) from exc
        object.__setattr__(self, "baseline_level", level)
        if isinstance(self.workers, bool) or not isinstance(self.workers, int):
            raise InvalidOptionsError(f"workers must be an integer, got {self.workers!r}")
        if self.workers < 1:
            raise InvalidOptionsError(f"workers must be at least 1, got {self.workers}")
        if self.features_path is not None:
            object.__setattr__(self, "features_path", Path(self.features_path))

    def cancelled(self) -> bool:
        return self.should_cancel is not None and bool(self.should_cancel())

    def with_overrides(self, **changes: Any) -> ScanOptions:
        """Return a copy with every non-None value in ``changes`` applied.

        Used by the CLI so that flags the user did not pass leave the
        config file values in place.
        """
        applied = {name: value for name, value in changes.items() if value is not None}
        return dataclasses.replace(self, **applied) if applied else self

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any], base_dir: Path | None = None) -> ScanOptions:
        """Build options from a parsed configuration mapping.

        Raises:
            InvalidOptionsError: If a value has the wrong shape.
        """
        if not isinstance(data, Mapping):
            raise InvalidOptionsError("Configuration must be a mapping")
        unknown = sorted(str(key) for key in data if key not in _CONFIG_KEYS)
        if unknown:
            logger.warning("Ignoring unknown configuration key(s): %s", ", ".join(unknown))

        kwargs: dict[str, Any] = {}
        if "include" in data:
            kwargs["include_patterns"] = _pattern_list(data["include"], "include")
        if "exclude" in data:
            kwargs["exclude_patterns"] = _pattern_list(data["exclude"], "exclude")
        if data.get("baseline_level") is not None:
            kwargs["baseline_level"] = data["baseline_level"]
        if data.get("workers") is not None:
            kwargs["workers"] = data["workers"]
        if data.get("verbose") is not None:
            kwargs["verbose"] = bool(data["verbose"])
        if data.get("features"):
            features = Path(str(data["features"]))
            if base_dir is not None and not features.is_absolute():
                features = base_dir / features
            kwargs["features_path"] = features
        return cls(**kwargs)


def _pattern_list(value: Any, option: str) -> tuple[str, ...]:
    if value is None:
        return ()
    if isinstance(value, str):
        return (value,)
    if not isinstance(value, list):
        raise InvalidOptionsError(f"'{option}' must be a list of glob patterns")
    return tuple(value)


def load_config(path: Path) -> ScanOptions:
    """Load ``ScanOptions`` from a YAML configuration file.

    Raises:
        InvalidOptionsError: If the file is unreadable, not valid YAML or
            holds invalid values.
    """
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise InvalidOptionsError(f"Cannot read config file {path}: {exc}") from exc
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise InvalidOptionsError(f"Invalid YAML in config file {path}: {exc}") from exc
    logger.debug("Loaded configuration from %s", path)
    return ScanOptions.from_mapping(data or {}, base_dir=path.parent)


def find_config(directory: Path) -> Path | None:
    """Return the first known config file in ``directory``, if any."""
    for name in CONFIG_FILENAMES:
        candidate = Path(directory) / name
        if candidate.is_file():
            return candidate
    return None
