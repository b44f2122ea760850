"""Parsing of execution-flow payloads produced by a language model.

The model is asked for ``{"nodes": [{id, label}], "links": [{source,
target}]}`` and tends to wrap its answer in a Markdown code fence.
"""

from __future__ import annotations

import json
import logging
import re
from typing import Any, Mapping, Union

from pydantic import ValidationError

from .errors import FlowPayloadError
from .model import FlowEdge, FlowGraph

logger = logging.getLogger(__name__)

_FENCE_START = re.compile(r"^\s*```(?:json)?\s*", re.IGNORECASE)
_FENCE_END = re.compile(r"\s*```\s*$")


def strip_code_fence(text: str) -> str:
    return _FENCE_END.sub("", _FENCE_START.sub("", text)).strip()


def edge_id(edge: FlowEdge, index: int) -> str:
    return f"e-{edge.source}-{edge.target}-{index}"


def parse_flow(payload: Union[str, Mapping[str, Any]]) -> FlowGraph:
    """Validate a flow payload into a FlowGraph with edge ids filled in."""
    if isinstance(payload, str):
        try:
            payload = json.loads(strip_code_fence(payload))
        except json.JSONDecodeError as exc:
            raise FlowPayloadError(f"Flow payload is not valid JSON: {exc}") from exc

    if not isinstance(payload, Mapping):
        raise FlowPayloadError("Flow payload must be a JSON object")

    links = payload.get("links")
    if links is None:
        links = payload.get("edges", [])
    try:
        graph = FlowGraph(nodes=payload.get("nodes") or [], edges=links or [])
    except ValidationError as exc:
        raise FlowPayloadError(f"Invalid flow payload: {exc}") from exc

    graph.edges = [
        edge if edge.id else edge.model_copy(update={"id": edge_id(edge, i)})
        for i, edge in enumerate(graph.edges)
    ]
    logger.debug("Parsed flow with %d nodes, %d edges", len(graph.nodes), len(graph.edges))
    return graph
