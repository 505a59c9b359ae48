"""HTML analyzer built on BeautifulSoup.

Markup is parsed with the standard ``html.parser`` builder, which recovers
from unclosed or stray tags instead of failing. Every element is visited in
document order and yields two kinds of keys:

- the bare tag name (``dialog``, ``search``, ``fencedframe``);
- ``<tag>.<attribute>`` for each attribute (``div.popover``,
  ``img.loading``), carrying the attribute name and value on the issue.

Markup the builder rejects outright (malformed marked sections such as
``<![foo[ ]]>``) raises ``ParseError``.
"""

from __future__ import annotations

from collections.abc import Iterator

from bs4 import BeautifulSoup, ParserRejectedMarkup, Tag

from baselinelint.analyzers.base import FeatureAnalyzer, FeatureUse
from baselinelint.core.issues.models import IssueType
from baselinelint.exceptions import ParseError


def _attribute_value(value: object) -> str | None:
    # Multi-valued attributes (class, rel) come back as lists.
    if isinstance(value, (list, tuple)):
        return " ".join(str(part) for part in value)
    if value is None:
        return None
    return str(value)


class MarkupAnalyzer(FeatureAnalyzer):
    """Detects HTML elements and attributes."""

    issue_type = IssueType.HTML
    extensions = (".html", ".htm")

    def _detect(self, content: str, file: str) -> Iterator[FeatureUse]:
        try:
            soup = BeautifulSoup(content, "html.parser")
        except ParserRejectedMarkup as exc:
            raise ParseError(f"Markup rejected by html.parser: {exc}") from exc
        for element in soup.descendants:
            if not isinstance(element, Tag):
                continue
            line = element.sourceline or 1
            column = (element.sourcepos or 0) + 1
            tag = element.name.lower()
            yield FeatureUse(tag, line, column)
            for attribute, value in element.attrs.items():
                name = attribute.lower()
                yield FeatureUse(
                    f"{tag}.{name}",
                    line,
                    column,
                    property=name,
                    value=_attribute_value(value),
                )
