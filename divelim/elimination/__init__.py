"""Elimination analysis: reduction to max-flow and the division query layer."""

from divelim.elimination.division import DivisionQuery
from divelim.elimination.reducer import (
    EliminationNetwork,
    build_elimination_network,
    solve_elimination,
)
from divelim.elimination.result import EliminationResult, EliminationStatus

__all__ = [
    "DivisionQuery",
    "EliminationNetwork",
    "EliminationResult",
    "EliminationStatus",
    "build_elimination_network",
    "solve_elimination",
]
