"""Read-only accessors over tree-sitter style syntax nodes.

Nodes are only required to expose ``type``, ``text``, ``start_point``,
``children`` and ``named_children``; ``child_by_field_name`` is used when the
node provides it.
"""

from __future__ import annotations

from typing import Any, Optional, Protocol, Sequence


class SyntaxNode(Protocol):
	type: str
	text: Any
	start_point: Any
	children: Sequence["SyntaxNode"]
	named_children: Sequence["SyntaxNode"]


def node_text(node: SyntaxNode) -> str:
	raw = node.text
	if raw is None:
		return ""
	if isinstance(raw, (bytes, bytearray)):
		return raw.decode("utf-8", errors="replace")
	return str(raw)


def start_line(node: SyntaxNode) -> int:
	"""0-based row of the first character of *node*."""
	point = node.start_point
	row = getattr(point, "row", None)
	if row is None:
		row = point[0]
	return int(row)


def field_child(node: SyntaxNode, field: str) -> Optional[SyntaxNode]:
	lookup = getattr(node, "child_by_field_name", None)
	if lookup is None:
		return None
	return lookup(field)


def nth_child(node: SyntaxNode, index: int) -> Optional[SyntaxNode]:
	children = node.children
	if 0 <= index < len(children):
		return children[index]
	return None


def first_named_child(node: SyntaxNode) -> Optional[SyntaxNode]:
	named = node.named_children
	return named[0] if named else None


def first_child_of_type(node: SyntaxNode, node_type: str) -> Optional[SyntaxNode]:
	for child in node.children:
		if child.type == node_type:
			return child
	return None
