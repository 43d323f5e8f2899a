"""Exception hierarchy for divelim.

All errors raised by the package derive from `DivelimError`. Each concrete
error also inherits from the builtin exception a caller would naturally
expect (`KeyError` for lookups, `ValueError` for bad data).
"""

from __future__ import annotations


class DivelimError(Exception):
    """Base class for all divelim errors."""


class UnknownCompetitor(DivelimError, KeyError):
    """Raised when a competitor name is not present in the standings.

    Attributes:
        name: The unrecognized name.
    """

    def __init__(self, name: str) -> None:
        super().__init__(name)
        self.name = name

    def __str__(self) -> str:
        return f"Unrecognized competitor: {self.name!r}"


class InvalidNetworkConfiguration(DivelimError, ValueError):
    """Raised when a flow network or solver is constructed with invalid input.

    Under correct reduction this is unreachable; it signals an internal defect.
    """


class MalformedStandings(DivelimError, ValueError):
    """Raised when standings data violates its invariants at load time."""


class InconsistentResult(DivelimError, ValueError):
    """Raised when an elimination result's status disagrees with its certificate."""
