"""Single-pass extraction of dependencies, conditions and calls.

Each supported language is described by a :class:`Dialect`: a table from
grammar node types to the :class:`Construct` they represent, plus accessors
that locate the interesting child of a construct. The walk itself is shared.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Dict, List, Optional

from .callgraph import CallGraph
from .model import ContractAnalysis
from .serialize import serialize_tree
from .syntax import (
	SyntaxNode,
	field_child,
	first_child_of_type,
	first_named_child,
	nth_child,
	node_text,
)

logger = logging.getLogger(__name__)


class Construct(Enum):
	IMPORT = "import"
	DECLARATION = "declaration"
	DEFINITION = "definition"
	BRANCH = "branch"
	CALL = "call"


NodeAccessor = Callable[[SyntaxNode], Optional[SyntaxNode]]
NameAccessor = Callable[[SyntaxNode], Optional[str]]


@dataclass(frozen=True)
class Dialect:
	language: str
	constructs: Dict[str, Construct]
	definition_name: NameAccessor
	condition: NodeAccessor
	callee: NodeAccessor


@dataclass
class Facts:
	dependencies: Dict[str, None] = field(default_factory=dict)
	conditions: List[str] = field(default_factory=list)
	call_graph: CallGraph = field(default_factory=CallGraph)

	def add_dependency(self, text: str) -> None:
		if text:
			self.dependencies[text] = None


def _text_of(node: Optional[SyntaxNode]) -> Optional[str]:
	if node is None:
		return None
	text = node_text(node).strip()
	return text or None


def _field_or(name: str, fallback: NodeAccessor) -> NodeAccessor:
	def accessor(node: SyntaxNode) -> Optional[SyntaxNode]:
		child = field_child(node, name)
		return child if child is not None else fallback(node)

	return accessor


# -- python -----------------------------------------------------------------

def _python_name(node: SyntaxNode) -> Optional[str]:
	return _text_of(field_child(node, "name"))


PYTHON = Dialect(
	language="python",
	constructs={
		"import_statement": Construct.IMPORT,
		"import_from_statement": Construct.IMPORT,
		"class_definition": Construct.DECLARATION,
		"function_definition": Construct.DEFINITION,
		"if_statement": Construct.BRANCH,
		"elif_clause": Construct.BRANCH,
		"while_statement": Construct.BRANCH,
		"assert_statement": Construct.BRANCH,
		"call": Construct.CALL,
	},
	definition_name=_python_name,
	condition=_field_or("condition", first_named_child),
	callee=lambda node: field_child(node, "function"),
)


# -- haskell ----------------------------------------------------------------

def _haskell_name(node: SyntaxNode) -> Optional[str]:
	# function types in signatures are also `function` nodes, without a name
	return _text_of(field_child(node, "name"))


_haskell_operator = _field_or("operator", lambda n: nth_child(n, 1))
_haskell_function = _field_or("function", lambda n: nth_child(n, 0))


def _haskell_callee(node: SyntaxNode) -> Optional[SyntaxNode]:
	# an infix application calls its operator, a plain one its head
	if node.type == "infix":
		return _haskell_operator(node)
	return _haskell_function(node)


HASKELL = Dialect(
	language="haskell",
	constructs={
		"import": Construct.IMPORT,
		"data_type": Construct.DECLARATION,
		"newtype": Construct.DECLARATION,
		"class": Construct.DECLARATION,
		"function": Construct.DEFINITION,
		"bind": Construct.DEFINITION,
		"conditional": Construct.BRANCH,
		"boolean": Construct.BRANCH,
		"apply": Construct.CALL,
		"infix": Construct.CALL,
	},
	definition_name=_haskell_name,
	condition=first_named_child,
	callee=_haskell_callee,
)


# -- aiken ------------------------------------------------------------------

_AIKEN_PREFIXES = {"validator": "validator:", "test": "test:"}


def _aiken_name(node: SyntaxNode) -> Optional[str]:
	name = _text_of(first_child_of_type(node, "identifier"))
	if name is None:
		return None
	return _AIKEN_PREFIXES.get(node.type, "") + name


AIKEN = Dialect(
	language="aiken",
	constructs={
		"import": Construct.IMPORT,
		"type_definition": Construct.DECLARATION,
		"function": Construct.DEFINITION,
		"validator": Construct.DEFINITION,
		"test": Construct.DEFINITION,
		"if": Construct.BRANCH,
		"when": Construct.BRANCH,
		"call": Construct.CALL,
	},
	definition_name=_aiken_name,
	condition=first_named_child,
	callee=_field_or("function", lambda n: nth_child(n, 0)),
)


DIALECTS: Dict[str, Dialect] = {d.language: d for d in (PYTHON, HASKELL, AIKEN)}


# -- handlers ---------------------------------------------------------------
# Each handler returns the enclosing function name for the node's subtree.

Handler = Callable[[SyntaxNode, Dialect, Facts, Optional[str]], Optional[str]]


def _on_import(node, dialect, facts, current):
	facts.add_dependency(node_text(node).strip())
	return current


def _on_declaration(node, dialect, facts, current):
	text = node_text(node).strip()
	if text:
		facts.add_dependency(f"class: {text}")
	return current


def _on_definition(node, dialect, facts, current):
	name = dialect.definition_name(node)
	if name is None:
		return current
	facts.call_graph.add_function(name)
	return name


def _on_branch(node, dialect, facts, current):
	condition = _text_of(dialect.condition(node))
	if condition is not None:
		facts.conditions.append(condition)
	return current


def _on_call(node, dialect, facts, current):
	callee = _text_of(dialect.callee(node))
	if callee is not None and current is not None:
		facts.call_graph.add_call(current, callee.strip("`"))
	return current


HANDLERS: Dict[Construct, Handler] = {
	Construct.IMPORT: _on_import,
	Construct.DECLARATION: _on_declaration,
	Construct.DEFINITION: _on_definition,
	Construct.BRANCH: _on_branch,
	Construct.CALL: _on_call,
}


def get_dialect(language: str) -> Dialect:
	try:
		return DIALECTS[language]
	except KeyError:
		raise ValueError(f"Unsupported language: {language}") from None


def collect_facts(root: SyntaxNode, language: str) -> Facts:
	"""Walk *root* pre-order and accumulate facts, call graph included."""
	dialect = get_dialect(language)
	facts = Facts()
	stack = [(root, None)]
	while stack:
		node, current = stack.pop()
		# keyword tokens such as `import` or `class` share their construct's tag
		construct = dialect.constructs.get(node.type) if getattr(node, "is_named", True) else None
		if construct is not None:
			current = HANDLERS[construct](node, dialect, facts, current)
		# reversed so the leftmost child is visited first
		for child in reversed(node.children):
			stack.append((child, current))
	logger.debug(
		"%s: %d dependencies, %d conditions, %d functions",
		language,
		len(facts.dependencies),
		len(facts.conditions),
		len(facts.call_graph.callees),
	)
	return facts


def extract_facts(root: SyntaxNode, language: str) -> ContractAnalysis:
	facts = collect_facts(root, language)
	return ContractAnalysis(
		dependencies=list(facts.dependencies),
		conditions=facts.conditions,
		tree_data=serialize_tree(root),
	)
