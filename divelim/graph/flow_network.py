"""Directed flow network with per-edge capacity and mutable flow.

`FlowNetwork` holds a fixed number of integer-indexed vertices and a list of
`FlowEdge` objects in insertion order. Parallel edges are allowed. The network
carries no knowledge of what its vertices mean; callers keep that mapping.

Residual capacities are read and written through the edge itself:
`residual_capacity_to(v)` and `add_residual_flow_to(v, delta)` interpret the
direction from the endpoint passed in, so a search can walk forward and
reverse arcs uniformly.
"""

from __future__ import annotations

import math
from typing import Iterator, List, Union

from divelim.errors import InvalidNetworkConfiguration

#: Numeric capacity or flow amount.
Capacity = Union[int, float]

#: Capacity sentinel for edges that never constrain flow.
UNBOUNDED: float = math.inf


class FlowEdge:
    """A directed edge ``tail -> head`` with a fixed capacity and mutable flow.

    Invariant: ``0 <= flow <= capacity``.
    """

    __slots__ = ("tail", "head", "capacity", "flow")

    def __init__(self, tail: int, head: int, capacity: Capacity) -> None:
        if math.isnan(capacity) or capacity < 0:
            raise InvalidNetworkConfiguration(
                f"Edge {tail}->{head} has invalid capacity {capacity!r}."
            )
        self.tail = tail
        self.head = head
        self.capacity = capacity
        self.flow: Capacity = 0

    def other(self, vertex: int) -> int:
        """Return the endpoint opposite to ``vertex``."""
        if vertex == self.tail:
            return self.head
        if vertex == self.head:
            return self.tail
        raise InvalidNetworkConfiguration(
            f"Vertex {vertex} is not an endpoint of edge {self.tail}->{self.head}."
        )

    def residual_capacity_to(self, vertex: int) -> Capacity:
        """Return how much more flow can move along this edge towards ``vertex``.

        Towards the head this is ``capacity - flow``; towards the tail it is the
        flow that could be pushed back.
        """
        if vertex == self.head:
            return self.capacity - self.flow
        if vertex == self.tail:
            return self.flow
        raise InvalidNetworkConfiguration(
            f"Vertex {vertex} is not an endpoint of edge {self.tail}->{self.head}."
        )

    def add_residual_flow_to(self, vertex: int, delta: Capacity) -> None:
        """Move ``delta`` units of flow along this edge towards ``vertex``.

        Moving towards the head increases flow; moving towards the tail
        cancels existing flow.

        Raises:
            InvalidNetworkConfiguration: If the move would leave flow outside
                ``[0, capacity]`` or ``vertex`` is not an endpoint.
        """
        if delta < 0 or delta > self.residual_capacity_to(vertex):
            raise InvalidNetworkConfiguration(
                f"Cannot move {delta} units towards {vertex} on edge "
                f"{self.tail}->{self.head} (flow={self.flow}, capacity={self.capacity})."
            )
        if vertex == self.head:
            self.flow += delta
        else:
            self.flow -= delta

    def __repr__(self) -> str:
        return f"FlowEdge({self.tail}->{self.head}, flow={self.flow}/{self.capacity})"


class FlowNetwork:
    """Fixed-size directed multigraph of `FlowEdge` objects.

    Args:
        num_vertices: Number of vertices; vertices are ``0..num_vertices-1``.

    Raises:
        InvalidNetworkConfiguration: If ``num_vertices`` is negative.
    """

    def __init__(self, num_vertices: int) -> None:
        if num_vertices < 0:
            raise InvalidNetworkConfiguration(
                f"Number of vertices must be non-negative, got {num_vertices}."
            )
        self._num_vertices = num_vertices
        self._edges: List[FlowEdge] = []
        self._adj: List[List[FlowEdge]] = [[] for _ in range(num_vertices)]

    def vertices(self) -> int:
        """Return the number of vertices."""
        return self._num_vertices

    def validate_vertex(self, vertex: int) -> None:
        """Raise `InvalidNetworkConfiguration` unless ``vertex`` is in range."""
        if not 0 <= vertex < self._num_vertices:
            raise InvalidNetworkConfiguration(
                f"Vertex {vertex} is out of range [0, {self._num_vertices})."
            )

    def add_edge(self, tail: int, head: int, capacity: Capacity) -> FlowEdge:
        """Append a directed edge ``tail -> head`` and return it.

        Raises:
            InvalidNetworkConfiguration: On out-of-range vertices, negative or
                NaN capacity, or a self-loop with nonzero capacity.
        """
        self.validate_vertex(tail)
        self.validate_vertex(head)
        if tail == head and capacity != 0:
            raise InvalidNetworkConfiguration(
                f"Self-loop on vertex {tail} with nonzero capacity {capacity}."
            )
        edge = FlowEdge(tail, head, capacity)
        self._edges.append(edge)
        self._adj[tail].append(edge)
        if head != tail:
            self._adj[head].append(edge)
        return edge

    def adj(self, vertex: int) -> List[FlowEdge]:
        """Return edges incident to ``vertex`` in either direction."""
        self.validate_vertex(vertex)
        return self._adj[vertex]

    def edges(self) -> List[FlowEdge]:
        """Return all edges in insertion order."""
        return self._edges

    def num_edges(self) -> int:
        return len(self._edges)

    def __iter__(self) -> Iterator[FlowEdge]:
        return iter(self._edges)

    def __repr__(self) -> str:
        return f"FlowNetwork(V={self._num_vertices}, E={len(self._edges)})"
