"""Uniform script syntax tree and the dotted-path resolver.

The tree-sitter JavaScript and TypeScript grammars expose dozens of node
types. The script analyzer only cares about three of them, so the concrete
tree is converted once into ``ScriptNode`` values whose ``shape`` is one of
four variants:

- ``Call(callee)`` for ``call_expression``
- ``Member(object, property)`` for ``member_expression``
- ``Identifier(name)`` for ``identifier``
- ``Other(kind)`` for everything else

``Other`` nodes keep their children, so the walker still reaches calls
nested inside constructs it does not know about (arrow functions, JSX,
TypeScript generics).

Conversion, walking and resolution are all iterative. Deeply nested input
(long call chains, generated bundles) never hits the interpreter's
recursion limit.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from typing import Union

from tree_sitter import Node


@dataclass(frozen=True)
class Call:
    callee: ScriptNode


@dataclass(frozen=True)
class Member:
    object: ScriptNode
    property: str


@dataclass(frozen=True)
class Identifier:
    name: str


@dataclass(frozen=True)
class Other:
    kind: str


Shape = Union[Call, Member, Identifier, Other]


@dataclass(frozen=True, eq=False)
class ScriptNode:
    """One node of the uniform tree.

    Attributes:
        shape: The node variant and its payload.
        children: Named children in source order.
        line: 1-based start line.
        column: 1-based start column.
    """

    shape: Shape
    children: tuple[ScriptNode, ...] = ()
    line: int = 1
    column: int = 1


def _text(node: Node | None) -> str:
    if node is None or not node.text:
        return ""
    return node.text.decode("utf-8", errors="replace")


def build_script_tree(root: Node) -> ScriptNode:
    """Convert a tree-sitter tree into a ``ScriptNode`` tree.

    Nodes are collected in pre-order, then built in reverse so every
    child exists before its parent.
    """
    order: list[Node] = []
    stack = [root]
    while stack:
        node = stack.pop()
        order.append(node)
        stack.extend(node.named_children)

    built: dict[int, ScriptNode] = {}
    for node in reversed(order):
        children = tuple(built[child.id] for child in node.named_children)
        built[node.id] = ScriptNode(
            shape=_shape_for(node, built),
            children=children,
            line=node.start_point[0] + 1,
            column=node.start_point[1] + 1,
        )
    return built[root.id]


def _shape_for(node: Node, built: dict[int, ScriptNode]) -> Shape:
    if node.type == "call_expression":
        callee = node.child_by_field_name("function")
        if callee is not None:
            return Call(callee=built[callee.id])
    elif node.type == "member_expression":
        obj = node.child_by_field_name("object")
        prop = node.child_by_field_name("property")
        if obj is not None and prop is not None:
            return Member(object=built[obj.id], property=_text(prop))
    elif node.type == "identifier":
        return Identifier(name=_text(node))
    return Other(kind=node.type)


def walk(root: ScriptNode) -> Iterator[ScriptNode]:
    """Yield every node in document (pre-)order."""
    stack = [root]
    while stack:
        node = stack.pop()
        yield node
        stack.extend(reversed(node.children))


def resolve_api_path(node: ScriptNode) -> str | None:
    """Resolve a node to a dotted API path such as ``navigator.share``.

    Calls resolve to their callee. A member whose object does not resolve
    contributes its bare property name, so ``[1, 2].toSorted()`` resolves
    to ``toSorted``. Returns None when nothing resolves.
    """
    parts: list[str] = []
    current = node
    while True:
        shape = current.shape
        if isinstance(shape, Call):
            current = shape.callee
        elif isinstance(shape, Member):
            parts.append(shape.property)
            current = shape.object
        elif isinstance(shape, Identifier):
            parts.append(shape.name)
            break
        else:
            break
    if not parts:
        return None
    return ".".join(reversed(parts))
