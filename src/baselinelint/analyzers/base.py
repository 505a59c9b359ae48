"""Base interface shared by the CSS, script and markup analyzers.

Every analyzer implements ``FeatureAnalyzer``. A subclass supplies only
one method, ``_detect(content, file)``, which parses the source and yields
``FeatureUse`` records: a feature key plus the 1-based location of the
construct that produced it. The base class then turns the records into
issues:

1. Look the key up in the ``CompatDatabase``. A miss yields nothing.
2. Drop features whose tier the scan's ``BaselineLevel`` does not report.
3. Drop repeats of a ``(key, line, column)`` already reported for the file.
4. Build the issue with ``create_issue``.

Parse Failures
--------------
``_detect`` raises ``ParseError`` when the grammar cannot parse the input.
``analyze()`` catches it, logs a warning and returns no issues for the
file. A parse failure never propagates to the scan.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from pathlib import PurePath

from baselinelint.core.compat.database import CompatDatabase
from baselinelint.core.compat.models import BaselineLevel
from baselinelint.core.issues.factory import SourceLocation, create_issue
from baselinelint.core.issues.models import Issue, IssueType
from baselinelint.exceptions import ParseError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FeatureUse:
    """A syntactic construct that maps to a feature key.

    Attributes:
        key: Lookup key for the compatibility database.
        line: 1-based line of the construct.
        column: 1-based column of the construct.
        property: CSS property or HTML attribute name, when applicable.
        value: Normalized CSS value or HTML attribute value.
    """

    key: str
    line: int
    column: int
    property: str | None = None
    value: str | None = None


class FeatureAnalyzer(ABC):
    """Abstract base class for per-language feature analyzers.

    Analyzers are stateless: all inputs arrive through ``analyze()``, so one
    instance can serve every file of a scan and several worker threads at
    once.

    Attributes:
        issue_type: Surface language recorded on every issue.
        extensions: Lowercase file suffixes this analyzer handles.
    """

    issue_type: IssueType
    extensions: tuple[str, ...] = ()

    def can_analyze(self, path: str | PurePath) -> bool:
        """Return True if the file suffix belongs to this analyzer."""
        return PurePath(path).suffix.lower() in self.extensions

    def analyze(
        self,
        content: str,
        file: str,
        database: CompatDatabase,
        level: BaselineLevel = BaselineLevel.LIMITED,
    ) -> list[Issue]:
        """Detect the features used in ``content`` and report them.

        Args:
            content: Full source text of the file.
            file: Source identifier recorded on each issue.
            database: Compatibility table to resolve keys against.
            level: Most permissive tier still reported.

        Returns:
            Issues in document order. Empty when nothing is reported or
            the content cannot be parsed.
        """
        try:
            uses = list(self._detect(content, file))
        except ParseError as exc:
            logger.warning("Skipping unparseable file %s: %s", file, exc)
            return []
        return list(self._report(uses, file, database, level))

    @abstractmethod
    def _detect(self, content: str, file: str) -> Iterable[FeatureUse]:
        """Parse ``content`` and yield every feature use in document order.

        Raises:
            ParseError: If the content cannot be parsed.
        """

    def _report(
        self,
        uses: Iterable[FeatureUse],
        file: str,
        database: CompatDatabase,
        level: BaselineLevel,
    ) -> Iterator[Issue]:
        seen: set[tuple[str, int, int]] = set()
        for use in uses:
            feature = database.lookup(use.key)
            if feature is None or not level.reports(feature.tier):
                continue
            marker = (use.key, use.line, use.column)
            if marker in seen:
                continue
            seen.add(marker)
            yield create_issue(
                self.issue_type,
                feature,
                use.key,
                SourceLocation(file=file, line=use.line, column=use.column),
                property=use.property,
                value=use.value,
            )

    def __repr__(self) -> str:
        return f"{type(self).__name__}(extensions={self.extensions!r})"
