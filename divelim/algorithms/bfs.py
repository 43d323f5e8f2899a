from collections import deque
from typing import List, Optional, Tuple

from divelim.graph.flow_network import FlowEdge, FlowNetwork


def residual_bfs(
    network: FlowNetwork, src: int, dst: Optional[int] = None
) -> Tuple[List[bool], List[Optional[FlowEdge]]]:
    """
    Breadth-first search over the residual graph.

    An edge is traversable from ``u`` towards its other endpoint ``v`` when its
    residual capacity towards ``v`` is strictly positive. The search stops
    early once ``dst`` is marked; with ``dst=None`` it visits everything
    reachable from ``src``.

    Returns:
        ``(marked, edge_to)`` where ``marked[v]`` says whether ``v`` was reached
        and ``edge_to[v]`` is the last edge on the shortest residual path to
        ``v`` (``None`` for ``src`` and unreached vertices).
    """
    num_vertices = network.vertices()
    marked = [False] * num_vertices
    edge_to: List[Optional[FlowEdge]] = [None] * num_vertices

    marked[src] = True
    queue = deque([src])
    while queue:
        node = queue.popleft()
        for edge in network.adj(node):
            neighbor = edge.other(node)
            if not marked[neighbor] and edge.residual_capacity_to(neighbor) > 0:
                edge_to[neighbor] = edge
                marked[neighbor] = True
                if neighbor == dst:
                    return marked, edge_to
                queue.append(neighbor)
    return marked, edge_to
