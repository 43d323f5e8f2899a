"""Conversion from FlowNetwork to NetworkX graphs.

NetworkX treats an edge without a ``capacity`` attribute as having infinite
capacity, so unbounded edges are exported without one. The resulting graph can
be fed straight into ``networkx.maximum_flow`` for cross-checking.
"""

from typing import Optional, Sequence

import networkx as nx

from divelim.graph.flow_network import FlowNetwork


def to_networkx(
    network: FlowNetwork, labels: Optional[Sequence[str]] = None
) -> nx.MultiDiGraph:
    """Convert a FlowNetwork to a NetworkX MultiDiGraph.

    Every vertex becomes a node (keyed by its integer index, with an optional
    ``label`` attribute) and every edge keeps its insertion index as key.

    Args:
        network: The FlowNetwork to convert.
        labels: Optional per-vertex labels, indexed by vertex.

    Returns:
        A NetworkX MultiDiGraph with ``flow`` and, for bounded edges,
        ``capacity`` edge attributes.
    """
    nx_graph = nx.MultiDiGraph()
    for v in range(network.vertices()):
        if labels is not None:
            nx_graph.add_node(v, label=labels[v])
        else:
            nx_graph.add_node(v)

    for key, edge in enumerate(network.edges()):
        attrs = {"flow": edge.flow}
        if edge.capacity != float("inf"):
            attrs["capacity"] = edge.capacity
        nx_graph.add_edge(edge.tail, edge.head, key=key, **attrs)
    return nx_graph


def to_digraph(network: FlowNetwork) -> nx.DiGraph:
    """Convert a FlowNetwork to a NetworkX DiGraph, summing parallel capacities.

    Parallel bounded edges are consolidated into one edge whose capacity is
    the sum; if any parallel edge is unbounded the consolidated edge is too.
    Self-loops (always zero capacity) are dropped.

    Args:
        network: The FlowNetwork to convert.

    Returns:
        A NetworkX DiGraph suitable for ``networkx.maximum_flow_value``.
    """
    nx_graph = nx.DiGraph()
    nx_graph.add_nodes_from(range(network.vertices()))
    unbounded = set()

    for edge in network.edges():
        u, v = edge.tail, edge.head
        if u == v:
            continue
        if edge.capacity == float("inf"):
            unbounded.add((u, v))
        if nx_graph.has_edge(u, v):
            nx_graph[u][v]["capacity"] += edge.capacity
        else:
            nx_graph.add_edge(u, v, capacity=edge.capacity)

    # networkx reads a missing capacity attribute as infinite
    for u, v in unbounded:
        del nx_graph[u][v]["capacity"]
    return nx_graph
