"""Result types for elimination queries."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Any, Dict, Optional, Tuple

from divelim.errors import InconsistentResult


class EliminationStatus(IntEnum):
    """Outcome of an elimination query."""

    #: No computation has been made for this competitor.
    UNKNOWN = 0
    #: The competitor can still finish with the most wins.
    NOT_ELIMINATED = 1
    #: The competitor cannot finish with the most wins.
    ELIMINATED = 2


@dataclass(frozen=True)
class EliminationResult:
    """Elimination status of one competitor.

    A freshly constructed result with only ``competitor`` set is UNKNOWN, which
    is distinct from a known NOT_ELIMINATED outcome.

    Attributes:
        competitor: Name of the competitor the result is about.
        status: Outcome of the query.
        certificate: Names of competitors whose banked wins plus games among
            themselves average more than ``competitor`` can reach, in division
            order. Non-empty exactly when ``status`` is ELIMINATED.
        method: ``"trivial"`` or ``"maxflow"`` for computed results.
    """

    competitor: str
    status: EliminationStatus = EliminationStatus.UNKNOWN
    certificate: Tuple[str, ...] = ()
    method: Optional[str] = None

    def __post_init__(self) -> None:
        if (self.status == EliminationStatus.ELIMINATED) != bool(self.certificate):
            raise InconsistentResult(
                f"Result for '{self.competitor}' with status {self.status.name} "
                f"has certificate {self.certificate!r}."
            )

    @classmethod
    def eliminated_by(
        cls, competitor: str, certificate: Tuple[str, ...], method: str
    ) -> "EliminationResult":
        return cls(competitor, EliminationStatus.ELIMINATED, tuple(certificate), method)

    @classmethod
    def not_eliminated(cls, competitor: str, method: str) -> "EliminationResult":
        return cls(competitor, EliminationStatus.NOT_ELIMINATED, (), method)

    @property
    def eliminated(self) -> bool:
        """True only for a known elimination."""
        return self.status == EliminationStatus.ELIMINATED

    @property
    def known(self) -> bool:
        return self.status != EliminationStatus.UNKNOWN

    def to_dict(self) -> Dict[str, Any]:
        """Return a JSON-serializable representation."""
        return {
            "competitor": self.competitor,
            "status": self.status.name.lower(),
            "eliminated": self.eliminated,
            "certificate": list(self.certificate) if self.eliminated else None,
            "method": self.method,
        }
