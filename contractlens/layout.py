"""
Layered layout of execution-flow graphs using networkx.

Uses networkx for:
- Graph representation and id validation
- Topological ordering for longest-path rank assignment
- Node ordering within ranks (barycenter sweeps)

Every node gets the same fixed footprint; positions are the top-left corner
of that box so renderers can place nodes directly.
"""

import logging
from enum import Enum
from typing import Dict, List, Sequence, Union

import networkx as nx

from . import config
from .errors import LayoutInputError
from .model import FlowEdge, FlowNode, LayoutResult, Position

logger = logging.getLogger(__name__)


class Direction(str, Enum):
    TB = "TB"  # top to bottom
    LR = "LR"  # left to right


class LayeredLayout:
    """
    Rank-based layout for directed acyclic graphs.

    Ranks come from the longest path from a source, so for every edge
    u -> v the rank of v is greater than the rank of u. Nodes sharing a rank
    are spread along the cross axis without overlapping.
    """

    def __init__(
        self,
        node_width: float = config.NODE_WIDTH,
        node_height: float = config.NODE_HEIGHT,
        node_sep: float = config.NODE_SEP,
        rank_sep: float = config.RANK_SEP,
        sweeps: int = 4,
    ):
        self.node_width = node_width
        self.node_height = node_height
        self.node_sep = node_sep
        self.rank_sep = rank_sep
        self.sweeps = sweeps

    def layout(
        self,
        nodes: Sequence[FlowNode],
        edges: Sequence[FlowEdge],
        direction: Union[Direction, str] = Direction.TB,
    ) -> LayoutResult:
        """
        Compute positions for the given flow graph.

        Args:
            nodes: Flow nodes; ids must be unique
            edges: Flow edges referring to ids in *nodes*
            direction: Direction.TB or Direction.LR

        Returns:
            LayoutResult with positioned copies of the nodes, the edges
            unchanged and the rank of every node

        Raises:
            LayoutInputError: if an edge references an unknown node id,
                a node id is repeated or the direction is not TB or LR
        """
        try:
            direction = Direction(direction)
        except ValueError:
            raise LayoutInputError(f"Unknown layout direction {direction!r}") from None
        graph = self._build_graph(nodes, edges)

        ranks = self._assign_ranks(graph)
        layers = self._group_by_rank(graph, ranks)
        layers = self._order_layers(layers, graph)
        positions = self._place(layers, direction)

        return LayoutResult(
            nodes=[node.model_copy(update={"position": positions[node.id]}) for node in nodes],
            edges=list(edges),
            ranks=ranks,
        )

    def _build_graph(
        self, nodes: Sequence[FlowNode], edges: Sequence[FlowEdge]
    ) -> nx.DiGraph:
        graph = nx.DiGraph()
        for node in nodes:
            if node.id in graph:
                raise LayoutInputError(f"Duplicate node id '{node.id}'")
            graph.add_node(node.id)

        for edge in edges:
            for end in (edge.source, edge.target):
                if end not in graph:
                    raise LayoutInputError(
                        f"Edge {edge.source} -> {edge.target} references unknown node '{end}'"
                    )
            graph.add_edge(edge.source, edge.target)
        return graph

    def _assign_ranks(self, graph: nx.DiGraph) -> Dict[str, int]:
        """
        Assign ranks using the longest path method.
        """
        try:
            order = list(nx.topological_sort(graph))
        except nx.NetworkXUnfeasible:
            # Cycles are not expected; fall back to input order so the
            # layout still completes.
            logger.warning("Flow graph contains a cycle; ranks follow input order")
            order = list(graph.nodes())

        ranks: Dict[str, int] = {}
        for node in order:
            predecessors = [p for p in graph.predecessors(node) if p != node]
            ranks[node] = max((ranks.get(p, -1) for p in predecessors), default=-1) + 1
        return ranks

    def _group_by_rank(self, graph: nx.DiGraph, ranks: Dict[str, int]) -> List[List[str]]:
        if not ranks:
            return []
        layers: List[List[str]] = [[] for _ in range(max(ranks.values()) + 1)]
        # graph.nodes() keeps input order, the starting order within a rank
        for node in graph.nodes():
            layers[ranks[node]].append(node)
        return layers

    def _order_layers(self, layers: List[List[str]], graph: nx.DiGraph) -> List[List[str]]:
        """
        Order nodes within each rank to reduce edge crossings.
        Uses barycenter heuristic.
        """
        if len(layers) <= 1:
            return layers

        for _ in range(self.sweeps):
            # Forward pass
            for i in range(1, len(layers)):
                layers[i] = self._order_layer_by_barycenter(
                    layers[i], layers[i - 1], graph, use_predecessors=True
                )

            # Backward pass
            for i in range(len(layers) - 2, -1, -1):
                layers[i] = self._order_layer_by_barycenter(
                    layers[i], layers[i + 1], graph, use_predecessors=False
                )

        return layers

    def _order_layer_by_barycenter(
        self,
        layer: List[str],
        ref_layer: List[str],
        graph: nx.DiGraph,
        use_predecessors: bool,
    ) -> List[str]:
        ref_positions = {node: i for i, node in enumerate(ref_layer)}
        current = {node: i for i, node in enumerate(layer)}

        def barycenter(node: str) -> float:
            if use_predecessors:
                neighbors = graph.predecessors(node)
            else:
                neighbors = graph.successors(node)

            positions = [ref_positions[n] for n in neighbors if n in ref_positions]

            if not positions:
                # Keep current order for nodes with no connections to ref layer
                return current[node]

            return sum(positions) / len(positions)

        return sorted(layer, key=barycenter)

    def _place(self, layers: List[List[str]], direction: Direction) -> Dict[str, Position]:
        if direction is Direction.TB:
            cross_size, main_size = self.node_width, self.node_height
        else:
            cross_size, main_size = self.node_height, self.node_width
        cross_pitch = cross_size + self.node_sep
        main_pitch = main_size + self.rank_sep

        widest = max((len(layer) for layer in layers), default=0)
        positions: Dict[str, Position] = {}
        for rank, layer in enumerate(layers):
            # centre each rank against the widest one
            offset = (widest - len(layer)) * cross_pitch / 2
            main = rank * main_pitch + main_size / 2
            for slot, node in enumerate(layer):
                cross = offset + slot * cross_pitch + cross_size / 2
                if direction is Direction.TB:
                    center_x, center_y = cross, main
                else:
                    center_x, center_y = main, cross
                positions[node] = Position(
                    x=center_x - self.node_width / 2,
                    y=center_y - self.node_height / 2,
                )
        return positions


def layout_dag(
    nodes: Sequence[FlowNode],
    edges: Sequence[FlowEdge],
    direction: Union[Direction, str] = Direction.TB,
) -> LayoutResult:
    return LayeredLayout().layout(nodes, edges, direction)
