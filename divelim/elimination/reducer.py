"""Reduction of "can this competitor still finish first?" to a max-flow problem.

For a target competitor ``x`` with best reachable total ``best = w[x] + r[x]``
the network is:

- one game vertex per pair ``(i, j)`` of other competitors with games left,
  fed from the source with capacity ``g[i][j]`` and draining into ``i`` and
  ``j`` with unbounded capacity;
- one edge ``i -> sink`` per other competitor with capacity
  ``max(0, best - w[i])``, the extra wins ``i`` can take without passing ``x``;
- one edge ``source -> i`` with capacity ``w[i] - best`` for every competitor
  that is already ahead of ``best``. Such an edge can never carry flow, so the
  full reduction reports those eliminations on its own.

``x`` is eliminated iff the max flow is below the total source capacity. The
competitors on the source side of the min cut then form a certificate.

Vertex layout: competitors ``0..n-1`` (the target's vertex stays isolated),
source ``n``, sink ``n + 1``, game vertices from ``n + 2``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Tuple

from divelim.algorithms.max_flow import MaxFlowSolver
from divelim.elimination.result import EliminationResult
from divelim.errors import InvalidNetworkConfiguration
from divelim.graph.flow_network import UNBOUNDED, FlowNetwork
from divelim.logging import get_logger
from divelim.model.standings import Standings

logger = get_logger(__name__)


@dataclass(frozen=True)
class EliminationNetwork:
    """A flow network built for one target competitor.

    Attributes:
        target: Index of the competitor under test.
        network: The freshly built network; owned by whoever solves it.
        source: Source vertex.
        sink: Sink vertex.
        vertex_of: Competitor index -> vertex, for every competitor except
            the target.
        required_flow: Total source capacity; a max flow below it means the
            target is eliminated.
        labels: Human-readable label per vertex.
    """

    target: int
    network: FlowNetwork
    source: int
    sink: int
    vertex_of: Dict[int, int]
    required_flow: int
    labels: Tuple[str, ...]


def build_elimination_network(standings: Standings, target: int) -> EliminationNetwork:
    """Build the flow network that decides whether ``target`` is eliminated.

    Args:
        standings: Division standings.
        target: Index of the competitor under test.

    Returns:
        An `EliminationNetwork` with a new, unsolved network.
    """
    n = standings.size
    if not 0 <= target < n:
        raise InvalidNetworkConfiguration(
            f"Target index {target} is out of range [0, {n})."
        )

    wins, games = standings.wins, standings.games
    best = standings.best(target)
    source, sink = n, n + 1

    others = [i for i in range(n) if i != target]
    pairs = [
        (i, j)
        for a, i in enumerate(others)
        for j in others[a + 1 :]
        if games[i][j] > 0
    ]

    network = FlowNetwork(n + 2 + len(pairs))
    labels = list(standings.names) + ["source", "sink"]
    required_flow = 0

    for v, (i, j) in enumerate(pairs, start=n + 2):
        network.add_edge(source, v, games[i][j])
        network.add_edge(v, i, UNBOUNDED)
        network.add_edge(v, j, UNBOUNDED)
        labels.append(f"{standings.names[i]}-{standings.names[j]}")
        required_flow += games[i][j]

    for i in others:
        network.add_edge(i, sink, max(0, best - wins[i]))
        if wins[i] > best:
            network.add_edge(source, i, wins[i] - best)
            required_flow += wins[i] - best

    logger.debug(
        "Built elimination network for '%s': %d vertices, %d edges, required flow %d",
        standings.names[target],
        network.vertices(),
        network.num_edges(),
        required_flow,
    )
    return EliminationNetwork(
        target=target,
        network=network,
        source=source,
        sink=sink,
        vertex_of={i: i for i in others},
        required_flow=required_flow,
        labels=tuple(labels),
    )


def solve_elimination(standings: Standings, target: int) -> EliminationResult:
    """Decide elimination of ``target`` with a full max-flow computation.

    Each call builds and solves its own network, so concurrent calls never
    share mutable flow state.
    """
    reduction = build_elimination_network(standings, target)
    solver = MaxFlowSolver(reduction.network, reduction.source, reduction.sink)
    name = standings.names[target]

    if solver.value >= reduction.required_flow:
        return EliminationResult.not_eliminated(name, method="maxflow")

    certificate = tuple(
        standings.names[i]
        for i, vertex in sorted(reduction.vertex_of.items())
        if solver.in_cut(vertex)
    )
    logger.debug(
        "'%s' eliminated: max flow %s < %d, certificate %s",
        name,
        solver.value,
        reduction.required_flow,
        certificate,
    )
    return EliminationResult.eliminated_by(name, certificate, method="maxflow")
