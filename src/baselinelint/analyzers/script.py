"""JavaScript and TypeScript analyzer.

Sources are parsed with tree-sitter (the JavaScript grammar for ``.js`` and
``.jsx``, the TypeScript grammars for ``.ts`` and ``.tsx``), converted into
the uniform tree from ``script_nodes`` and walked once. Every call and
member expression is resolved to a dotted path, and that path is the
feature key: ``navigator.clipboard.writeText('x')`` looks up
``navigator.clipboard.writeText``.

A call and its callee member start at the same position and resolve to the
same key; the base class reports the pair once.
"""

from __future__ import annotations

from collections.abc import Iterator
from pathlib import PurePath

import tree_sitter_javascript
import tree_sitter_typescript
from tree_sitter import Language, Parser

from baselinelint.analyzers.base import FeatureAnalyzer, FeatureUse
from baselinelint.analyzers.script_nodes import (
    Call,
    Member,
    ScriptNode,
    build_script_tree,
    resolve_api_path,
    walk,
)
from baselinelint.core.issues.models import IssueType
from baselinelint.exceptions import ParseError

JAVASCRIPT_LANGUAGE = Language(tree_sitter_javascript.language())
TYPESCRIPT_LANGUAGE = Language(tree_sitter_typescript.language_typescript())
TSX_LANGUAGE = Language(tree_sitter_typescript.language_tsx())

_LANGUAGES: dict[str, Language] = {
    ".js": JAVASCRIPT_LANGUAGE,
    ".jsx": JAVASCRIPT_LANGUAGE,
    ".mjs": JAVASCRIPT_LANGUAGE,
    ".cjs": JAVASCRIPT_LANGUAGE,
    ".ts": TYPESCRIPT_LANGUAGE,
    ".tsx": TSX_LANGUAGE,
}


def language_for(file: str) -> Language:
    """Pick the grammar for a file; unknown suffixes use JavaScript."""
    return _LANGUAGES.get(PurePath(file).suffix.lower(), JAVASCRIPT_LANGUAGE)


class ScriptAnalyzer(FeatureAnalyzer):
    """Detects Web API usage in JavaScript and TypeScript sources."""

    issue_type = IssueType.JAVASCRIPT
    extensions = (".js", ".jsx", ".ts", ".tsx")

    def _detect(self, content: str, file: str) -> Iterator[FeatureUse]:
        tree = Parser(language_for(file)).parse(content.encode("utf-8", errors="surrogatepass"))
        if tree.root_node.has_error:
            raise ParseError(f"Malformed script: {file}")
        return self._uses(build_script_tree(tree.root_node))

    def _uses(self, root: ScriptNode) -> Iterator[FeatureUse]:
        for node in walk(root):
            if not isinstance(node.shape, (Call, Member)):
                continue
            path = resolve_api_path(node)
            if path:
                yield FeatureUse(path, node.line, node.column)
