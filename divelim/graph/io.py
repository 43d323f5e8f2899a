from __future__ import annotations

import math
from typing import Any, Dict, Optional, Sequence

from divelim.errors import InvalidNetworkConfiguration
from divelim.graph.flow_network import FlowNetwork


def network_to_node_link(
    network: FlowNetwork, labels: Optional[Sequence[str]] = None
) -> Dict[str, Any]:
    """
    Converts a FlowNetwork into a node-link dict representation.

    The representation is suitable for JSON serialization. Unbounded capacities
    are written as ``None`` since JSON has no infinity.

    The returned dict has the following structure:
        {
            "graph": {"vertices": V, "edges": E},
            "nodes": [
                {"id": vertex, "label": <label or str(vertex)>},
                ...
            ],
            "links": [
                {
                    "source": <vertex>,
                    "target": <vertex>,
                    "key": <insertion index>,
                    "capacity": <number or None>,
                    "flow": <number>,
                },
                ...
            ]
        }

    Args:
        network: The FlowNetwork to convert.
        labels: Optional per-vertex labels, indexed by vertex.

    Returns:
        A dict containing the 'graph' attributes, list of 'nodes', and list of 'links'.
    """
    if labels is not None and len(labels) != network.vertices():
        raise InvalidNetworkConfiguration(
            f"Expected {network.vertices()} labels, got {len(labels)}."
        )

    return {
        "graph": {"vertices": network.vertices(), "edges": network.num_edges()},
        "nodes": [
            {"id": v, "label": labels[v] if labels is not None else str(v)}
            for v in range(network.vertices())
        ],
        "links": [
            {
                "source": edge.tail,
                "target": edge.head,
                "key": key,
                "capacity": None if math.isinf(edge.capacity) else edge.capacity,
                "flow": edge.flow,
            }
            for key, edge in enumerate(network.edges())
        ],
    }
