"""Entry points used by the server: source analysis and flow layout."""

from __future__ import annotations

import logging
from typing import Optional, Sequence, Union

from .facts import extract_facts
from .languages import UNKNOWN, detect_language
from .layout import Direction, layout_dag
from .model import ContractAnalysis, FlowEdge, FlowNode, LayoutResult
from .registry import ParserRegistry, get_registry
from .serialize import placeholder_tree

logger = logging.getLogger(__name__)


def empty_analysis() -> ContractAnalysis:
	return ContractAnalysis(dependencies=[], conditions=[], tree_data=placeholder_tree())


async def analyze(
	source_code: str,
	file_name: str,
	registry: Optional[ParserRegistry] = None,
) -> ContractAnalysis:
	"""Analyze *source_code*, picking the language from *file_name*.

	Files with an unrecognised extension get an empty analysis. A grammar
	that cannot be loaded raises GrammarLoadError.
	"""
	language = detect_language(file_name)
	if language == UNKNOWN:
		logger.debug("No grammar for %s, returning empty analysis", file_name)
		return empty_analysis()

	parser = await (registry or get_registry()).get(language)
	tree = parser.parse(source_code.encode("utf-8"))
	return extract_facts(tree.root_node, language)


def layout_flow(
	nodes: Sequence[FlowNode],
	edges: Sequence[FlowEdge],
	direction: Union[Direction, str] = Direction.TB,
) -> LayoutResult:
	return layout_dag(nodes, edges, direction)
