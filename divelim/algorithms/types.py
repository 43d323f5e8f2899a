"""Types and data structures for algorithm analytics.

Defines immutable summary containers for algorithm outputs.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import FrozenSet, Tuple

from divelim.graph.flow_network import Capacity

# Edge identifier tuple: (tail, head, insertion index)
Edge = Tuple[int, int, int]


@dataclass(frozen=True)
class FlowSummary:
    """Summary of max-flow computation results.

    Attributes:
        total_flow: Maximum flow value achieved.
        reachable: Vertices reachable from the source in the final residual
            graph, i.e. the source side of the minimum cut.
        min_cut: Saturated edges leaving the source side.
        augmentations: Number of augmenting paths used.
    """

    total_flow: Capacity
    reachable: FrozenSet[int]
    min_cut: Tuple[Edge, ...]
    augmentations: int
