"""Conversion of syntax trees into labelled trees for the tree view."""

from __future__ import annotations

import itertools

from .model import TreeAttributes, TreeNode
from .syntax import SyntaxNode, node_text, start_line

# Shared by every serialization in the process; ids are never reused.
_node_ids = itertools.count()


def _next_id() -> str:
	return f"node-{next(_node_ids)}"


def node_label(node: SyntaxNode) -> str:
	line = start_line(node) + 1
	text = node_text(node).strip()
	return f"Line {line}: {text}" if text else f"Line {line}"


def serialize_tree(node: SyntaxNode) -> TreeNode:
	"""Mirror *node* and its named children as a TreeNode.

	Built with an explicit stack so deeply nested expressions do not hit the
	recursion limit. Ids are taken as nodes are popped, which is pre-order.
	"""
	root = None
	stack = [(node, None)]
	while stack:
		current, siblings = stack.pop()
		attributes = TreeAttributes(text=node_label(current), node_id=_next_id())
		tree = TreeNode(name=current.type, attributes=attributes)
		if siblings is None:
			root = tree
		else:
			siblings.append(tree)
		named = current.named_children
		if named:
			tree.children = []
			for child in reversed(named):
				stack.append((child, tree.children))
	return root


def placeholder_tree() -> TreeNode:
	return TreeNode(
		name="root",
		attributes=TreeAttributes(text="Root Node", node_id=_next_id()),
	)
