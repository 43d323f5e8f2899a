"""Elimination queries over a division.

`DivisionQuery` answers "is this competitor eliminated, and by whom?" for an
immutable set of standings. Each query first tries the constant-time leader
comparison and falls back to the max-flow reduction.

Only the most recent result is cached, keyed by competitor name; a query for a
different competitor replaces it. Access to the cached pair is serialized with
a lock, so one instance may be shared across threads. Every full computation
builds its own flow network.
"""

from __future__ import annotations

import threading
from typing import Iterator, List, Optional, Tuple

from divelim.config import DEFAULT_CONFIG, EliminationConfig
from divelim.elimination.reducer import solve_elimination
from divelim.elimination.result import EliminationResult
from divelim.logging import get_logger
from divelim.model.standings import Standings

logger = get_logger(__name__)


class DivisionQuery:
    """Answer elimination and standings lookups for one division.

    Args:
        standings: Division standings; never modified.
        config: Optional configuration; defaults to `DEFAULT_CONFIG`.

    Example:
        >>> division = DivisionQuery(standings)
        >>> division.is_eliminated("Philadelphia")
        True
        >>> division.certificate("Philadelphia")
        ('Atlanta', 'New_York')
    """

    def __init__(
        self, standings: Standings, config: Optional[EliminationConfig] = None
    ) -> None:
        self._standings = standings
        self._config = config or DEFAULT_CONFIG

        # First competitor with the most wins
        self._leader: Optional[int] = None
        self._most_wins = 0
        for i, w in enumerate(standings.wins):
            if self._leader is None or w > self._most_wins:
                self._leader, self._most_wins = i, w

        self._last: Optional[Tuple[str, EliminationResult]] = None
        self._lock = threading.Lock()

    @property
    def standings(self) -> Standings:
        return self._standings

    @property
    def leader(self) -> Optional[str]:
        """Name of the current wins leader, or None for an empty division."""
        if self._leader is None:
            return None
        return self._standings.names[self._leader]

    #
    # Division lookups
    #
    def number_of_teams(self) -> int:
        return self._standings.size

    def __len__(self) -> int:
        return self._standings.size

    def __contains__(self, name: object) -> bool:
        return name in self._standings

    def teams(self) -> List[str]:
        """Return competitor names in division order."""
        return list(self._standings.names)

    def wins(self, name: str) -> int:
        return self._standings.wins[self._standings.index_of(name)]

    def losses(self, name: str) -> int:
        return self._standings.losses[self._standings.index_of(name)]

    def remaining(self, name: str) -> int:
        return self._standings.remaining[self._standings.index_of(name)]

    def against(self, name1: str, name2: str) -> int:
        """Return the number of games left between ``name1`` and ``name2``.

        Raises:
            UnknownCompetitor: Naming whichever argument is not recognized.
        """
        i = self._standings.index_of(name1)
        j = self._standings.index_of(name2)
        return self._standings.games[i][j]

    #
    # Elimination
    #
    def result(self, name: str) -> EliminationResult:
        """Return the elimination result for ``name``.

        Raises:
            UnknownCompetitor: If ``name`` is not in the division.
        """
        target = self._standings.index_of(name)

        if not self._config.cache_results:
            return self._compute(target)

        with self._lock:
            if self._last is not None and self._last[0] == name:
                logger.debug("Reusing cached result for '%s'", name)
                return self._last[1]
            result = self._compute(target)
            self._last = (name, result)
            return result

    def is_eliminated(self, name: str) -> bool:
        """Return True if ``name`` cannot finish with the most wins."""
        return self.result(name).eliminated

    def certificate(self, name: str) -> Optional[Tuple[str, ...]]:
        """Return the names that eliminate ``name``, or None if not eliminated."""
        result = self.result(name)
        return result.certificate if result.eliminated else None

    certificate_of_elimination = certificate

    def eliminations(self) -> Iterator[EliminationResult]:
        """Yield the result for every competitor in division order."""
        for name in self._standings.names:
            yield self.result(name)

    def _compute(self, target: int) -> EliminationResult:
        if self._config.trivial_check:
            result = self._trivial_search(target)
            if result is not None:
                return result
        return solve_elimination(self._standings, target)

    def _trivial_search(self, target: int) -> Optional[EliminationResult]:
        """Return an elimination by the leader if its wins alone exceed the target's best."""
        if self._leader is None or self._standings.best(target) >= self._most_wins:
            return None
        name = self._standings.names[target]
        leader = self._standings.names[self._leader]
        logger.debug(
            "'%s' trivially eliminated by '%s' (%d > %d)",
            name,
            leader,
            self._most_wins,
            self._standings.best(target),
        )
        return EliminationResult.eliminated_by(name, (leader,), method="trivial")

