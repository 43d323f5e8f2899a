"""Maximum flow and minimum cut via shortest augmenting paths (Edmonds-Karp).

`MaxFlowSolver` mutates the flow stored on the edges of the network it is
given, so a network must be owned by exactly one solver for its lifetime.
Build a fresh network for every independent computation.
"""

from __future__ import annotations

import math
from typing import FrozenSet, List, Optional, Tuple

from divelim.algorithms.bfs import residual_bfs
from divelim.algorithms.types import Edge, FlowSummary
from divelim.errors import InvalidNetworkConfiguration
from divelim.graph.flow_network import UNBOUNDED, Capacity, FlowEdge, FlowNetwork
from divelim.logging import get_logger

logger = get_logger(__name__)


class MaxFlowSolver:
    """Compute a maximum ``source -> sink`` flow and the minimum cut it induces.

    The computation runs at construction. Afterwards, `value` holds the flow
    value and `in_cut(v)` tells whether ``v`` lies on the source side of the
    minimum cut, i.e. is reachable from the source through edges with strictly
    positive residual capacity.

    If an augmenting path with unbounded bottleneck is found, `value` is
    `UNBOUNDED` and augmentation stops; the cut is then not meaningful.

    Args:
        network: The network to solve. Its edge flows are modified in place.
        source: Source vertex.
        sink: Sink vertex.

    Raises:
        InvalidNetworkConfiguration: If ``source == sink`` or either vertex is
            out of range.

    Example:
        >>> net = FlowNetwork(4)
        >>> _ = net.add_edge(0, 1, 3)
        >>> _ = net.add_edge(0, 2, 5)
        >>> _ = net.add_edge(1, 3, 3)
        >>> _ = net.add_edge(2, 3, 5)
        >>> MaxFlowSolver(net, 0, 3).value
        8
    """

    def __init__(self, network: FlowNetwork, source: int, sink: int) -> None:
        if source == sink:
            raise InvalidNetworkConfiguration(
                f"Source and sink must differ, both are {source}."
            )
        network.validate_vertex(source)
        network.validate_vertex(sink)

        self._network = network
        self._source = source
        self._sink = sink
        self._value: Capacity = 0
        self._augmentations = 0
        self._marked: List[bool] = []

        self._solve()

    def _solve(self) -> None:
        network, source, sink = self._network, self._source, self._sink

        while True:
            marked, edge_to = residual_bfs(network, source, sink)
            if not marked[sink]:
                self._marked = marked
                break

            path = self._path_to(sink, edge_to)
            bottleneck = min(
                edge.residual_capacity_to(vertex) for vertex, edge in path
            )
            if math.isinf(bottleneck):
                logger.warning(
                    "Unbounded augmenting path from %d to %d; flow value is unbounded",
                    source,
                    sink,
                )
                self._value = UNBOUNDED
                self._marked, _ = residual_bfs(network, source)
                break

            for vertex, edge in path:
                edge.add_residual_flow_to(vertex, bottleneck)
            self._value += bottleneck
            self._augmentations += 1
            logger.debug(
                "Augmenting path %d: %d edges, bottleneck %s, total %s",
                self._augmentations,
                len(path),
                bottleneck,
                self._value,
            )

    def _path_to(
        self, vertex: int, edge_to: List[Optional[FlowEdge]]
    ) -> List[Tuple[int, FlowEdge]]:
        """Walk ``edge_to`` back from ``vertex`` to the source.

        Returns ``(vertex_reached, edge)`` pairs, sink first.
        """
        path: List[Tuple[int, FlowEdge]] = []
        while vertex != self._source:
            edge = edge_to[vertex]
            if edge is None:
                raise InvalidNetworkConfiguration(
                    f"Vertex {vertex} has no predecessor on the augmenting path."
                )
            path.append((vertex, edge))
            vertex = edge.other(vertex)
        return path

    @property
    def value(self) -> Capacity:
        """Maximum flow value."""
        return self._value

    @property
    def augmentations(self) -> int:
        """Number of augmenting paths applied."""
        return self._augmentations

    @property
    def network(self) -> FlowNetwork:
        return self._network

    def in_cut(self, vertex: int) -> bool:
        """Return True if ``vertex`` is on the source side of the minimum cut."""
        self._network.validate_vertex(vertex)
        return self._marked[vertex]

    @property
    def reachable(self) -> FrozenSet[int]:
        """Vertices on the source side of the minimum cut."""
        return frozenset(v for v, seen in enumerate(self._marked) if seen)

    def min_cut_edges(self) -> Tuple[Edge, ...]:
        """Return edges leaving the source side, as ``(tail, head, index)``.

        After a bounded solve all of them are saturated and their capacities
        sum to `value`.
        """
        marked = self._marked
        return tuple(
            (edge.tail, edge.head, idx)
            for idx, edge in enumerate(self._network.edges())
            if marked[edge.tail] and not marked[edge.head]
        )

    def summary(self) -> FlowSummary:
        """Return an immutable `FlowSummary` of the computation."""
        return FlowSummary(
            total_flow=self._value,
            reachable=self.reachable,
            min_cut=self.min_cut_edges(),
            augmentations=self._augmentations,
        )


def calc_max_flow(network: FlowNetwork, source: int, sink: int) -> Capacity:
    """Compute the maximum flow value between two vertices.

    The network's edge flows are modified in place.

    Args:
        network: The network to solve.
        source: Source vertex.
        sink: Sink vertex.

    Returns:
        The maximum flow value.
    """
    return MaxFlowSolver(network, source, sink).value
