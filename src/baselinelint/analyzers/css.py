"""CSS analyzer built on the tree-sitter CSS grammar.

Three constructs are mapped to feature keys:

- **Declarations** (``word-break: auto-phrase``) at any depth, including
  nested rules and at-rule blocks. Each yields ``css.properties.<property>``
  and, when a value is present, ``css.properties.<property>.<value>``.
- **At-rules** (``@container``, ``@layer``) yield ``css.at-rules.<name>``.
- **Pseudo-classes** (``:has``, ``:focus-visible``) yield
  ``css.selectors.<name>``.

Value Normalization
-------------------
The value part of a declaration key is built from the declaration's
top-level value nodes, joined by a single space:

=========================  ==========================  ================
Node                       Example                     Contributes
=========================  ==========================  ================
function call              ``calc(100% - 10px)``       ``calc``
binary expression          ``1 / 3``                   ``1 / 3``
number with unit           ``10px``                    ``10px``
identifier, color, string  ``auto-phrase``             source text
comma, ``!important``      ``a, b !important``         nothing
=========================  ==========================  ================

Internal whitespace in a token collapses to one space. Property names are
lowercased; values keep their source case.

Error Recovery
--------------
tree-sitter-css does not know every modern syntax (container-query range
conditions such as ``(inline-size > 30em)`` among them) and wraps what it
cannot parse in ``ERROR`` nodes. Those subtrees, and tokens the parser
inserted as missing, are skipped; the rest of the sheet is still analysed.
A sheet is rejected with ``ParseError`` only when no top-level construct
parsed at all.
"""

from __future__ import annotations

import re
from collections.abc import Iterator

import tree_sitter_css
from tree_sitter import Language, Node, Parser

from baselinelint.analyzers.base import FeatureAnalyzer, FeatureUse
from baselinelint.core.issues.models import IssueType
from baselinelint.exceptions import ParseError

CSS_LANGUAGE = Language(tree_sitter_css.language())

# Value children that never contribute a token.
_SKIPPED_VALUE_NODES = frozenset({"property_name", "important", "comment"})

_WHITESPACE = re.compile(r"\s+")


def _text(node: Node) -> str:
    return node.text.decode("utf-8", errors="replace") if node.text else ""


def _collapse(text: str) -> str:
    return _WHITESPACE.sub(" ", text).strip()


def _position(node: Node) -> tuple[int, int]:
    row, column = node.start_point
    return row + 1, column + 1


def _render_value(node: Node) -> list[str]:
    """Render one value node into its key tokens."""
    if node.type == "call_expression":
        name = node.child_by_field_name("function_name") or next(
            (child for child in node.named_children if child.type == "function_name"), None
        )
        return [_text(name)] if name is not None else []
    if node.type == "binary_expression":
        tokens: list[str] = []
        for child in node.children:
            if child.type in _SKIPPED_VALUE_NODES:
                continue
            if child.is_named:
                tokens.extend(_render_value(child))
            else:
                tokens.append(_text(child))
        return tokens
    token = _collapse(_text(node))
    return [token] if token else []


def normalize_value(declaration: Node) -> str:
    """Return the normalized value of a ``declaration`` node.

    Only nodes after the ``:`` separator are considered.
    """
    tokens: list[str] = []
    after_colon = False
    for child in declaration.children:
        if not after_colon:
            after_colon = child.type == ":"
            continue
        if not child.is_named or child.type in _SKIPPED_VALUE_NODES or _broken(child):
            continue
        tokens.extend(_render_value(child))
    return " ".join(token for token in tokens if token)


def _at_rule_name(node: Node) -> str | None:
    if node.type != "at_rule" and not node.type.endswith("_statement"):
        return None
    if node.child_count == 0:
        return None
    keyword = _text(node.children[0])
    if not keyword.startswith("@"):
        return None
    return keyword[1:].lower() or None


def _broken(node: Node) -> bool:
    return node.type == "ERROR" or node.is_missing


def _usable(node: Node) -> bool:
    """Return True for a top-level node that parsed into a real construct."""
    return node.is_named and node.type != "comment" and not _broken(node)


def _pseudo_class(node: Node) -> tuple[str, Node] | None:
    """Return (name, colon node) for a ``pseudo_class_selector``."""
    colon: Node | None = None
    for child in node.children:
        if child.type == ":":
            colon = child
        elif colon is not None and child.type == "class_name":
            return _text(child).lower(), colon
    return None


class CssAnalyzer(FeatureAnalyzer):
    """Detects CSS properties, values, at-rules and pseudo-classes."""

    issue_type = IssueType.CSS
    extensions = (".css",)

    def _detect(self, content: str, file: str) -> Iterator[FeatureUse]:
        tree = Parser(CSS_LANGUAGE).parse(content.encode("utf-8", errors="surrogatepass"))
        root = tree.root_node
        if _broken(root) or (root.has_error and not any(_usable(c) for c in root.children)):
            raise ParseError(f"Malformed style sheet: {file}")
        return self._walk(root)

    def _walk(self, root: Node) -> Iterator[FeatureUse]:
        stack = [root]
        while stack:
            node = stack.pop()
            if _broken(node):
                continue
            yield from self._uses_for(node)
            stack.extend(reversed(node.children))

    def _uses_for(self, node: Node) -> Iterator[FeatureUse]:
        if node.type == "declaration":
            name = next(
                (child for child in node.children if child.type == "property_name"), None
            )
            if name is None:
                return
            prop = _text(name).lower()
            line, column = _position(node)
            value = normalize_value(node)
            yield FeatureUse(
                f"css.properties.{prop}", line, column, property=prop, value=value or None
            )
            if value:
                yield FeatureUse(
                    f"css.properties.{prop}.{value}", line, column, property=prop, value=value
                )
        elif node.type == "pseudo_class_selector":
            found = _pseudo_class(node)
            if found is not None:
                name, colon = found
                line, column = _position(colon)
                yield FeatureUse(f"css.selectors.{name}", line, column)
        else:
            rule = _at_rule_name(node)
            if rule is not None:
                line, column = _position(node)
                yield FeatureUse(f"css.at-rules.{rule}", line, column)
