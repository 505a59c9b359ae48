"""baselinelint exception hierarchy.

All public exceptions inherit from BaselineLintError, giving callers a single
base class to catch when they want to handle any baselinelint-specific failure
without swallowing unrelated errors.
"""


class BaselineLintError(Exception):
    """Base exception for all baselinelint errors."""


class ParseError(BaselineLintError):
    """Raised when a source file cannot be parsed.

    Only ever raised inside an analyzer. ``FeatureAnalyzer.analyze`` catches
    it, logs a warning and reports zero issues for the file, so a single
    malformed file never aborts a multi-file scan.
    """


class InvalidOptionsError(BaselineLintError):
    """Raised when scan options are malformed.

    Covers a missing root path, empty or unsupported glob patterns, unknown
    baseline levels and non-positive worker counts. Raised before any file
    is read.
    """


class DatabaseError(BaselineLintError):
    """Raised when a compatibility table cannot be loaded.

    Covers unreadable YAML, missing required fields, unknown tiers and
    feature keys claimed by more than one feature.
    """
