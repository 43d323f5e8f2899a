"""divelim: mathematical elimination analysis for round-robin divisions.

A competitor is eliminated when no outcome of the remaining games lets it
finish with the most wins. divelim decides this with a constant-time leader
comparison and, failing that, a max-flow/min-cut reduction, and returns a
certificate: the competitors that together make first place unreachable.

Primary API:
    DivisionQuery - Elimination and standings queries for one division
    Standings - Immutable wins/losses/schedule data
    read_standings() - Load standings from a text or YAML file
    FlowNetwork, MaxFlowSolver - The underlying flow primitives
    to_networkx() - Export a flow network to NetworkX

Example:
    from divelim import DivisionQuery, read_standings

    division = DivisionQuery(read_standings("teams4.txt"))
    for name in division.teams():
        if division.is_eliminated(name):
            print(name, division.certificate(name))
"""

from __future__ import annotations

from divelim import cli, logging
from divelim._version import __version__
from divelim.algorithms.max_flow import MaxFlowSolver, calc_max_flow
from divelim.algorithms.types import FlowSummary
from divelim.config import EliminationConfig
from divelim.elimination import (
    DivisionQuery,
    EliminationNetwork,
    EliminationResult,
    EliminationStatus,
    build_elimination_network,
    solve_elimination,
)
from divelim.errors import (
    DivelimError,
    InconsistentResult,
    InvalidNetworkConfiguration,
    MalformedStandings,
    UnknownCompetitor,
)
from divelim.graph.convert import to_digraph, to_networkx
from divelim.graph.flow_network import UNBOUNDED, FlowEdge, FlowNetwork
from divelim.io import load_standings_yaml, parse_standings, read_standings
from divelim.model.standings import Standings

__all__ = [
    # Version
    "__version__",
    # Model
    "Standings",
    "parse_standings",
    "load_standings_yaml",
    "read_standings",
    # Elimination (primary API)
    "DivisionQuery",
    "EliminationConfig",
    "EliminationResult",
    "EliminationStatus",
    "EliminationNetwork",
    "build_elimination_network",
    "solve_elimination",
    # Flow primitives
    "FlowNetwork",
    "FlowEdge",
    "UNBOUNDED",
    "MaxFlowSolver",
    "FlowSummary",
    "calc_max_flow",
    # NetworkX interop
    "to_networkx",
    "to_digraph",
    # Errors
    "DivelimError",
    "InconsistentResult",
    "UnknownCompetitor",
    "InvalidNetworkConfiguration",
    "MalformedStandings",
    # Utilities
    "cli",
    "logging",
]
