"""Immutable division standings.

`Standings` stores per-competitor wins, losses and remaining games together
with the symmetric games-left matrix. All invariants are checked once at
construction; a `Standings` instance that exists is valid.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, Mapping, Tuple

from divelim.errors import MalformedStandings, UnknownCompetitor


@dataclass(frozen=True)
class Standings:
    """Wins, losses and schedule of every competitor in a division.

    Attributes:
        names: Unique, case-sensitive competitor names in division order.
        wins: Wins so far, indexed like ``names``.
        losses: Losses so far.
        remaining: Games left to play.
        games: ``games[i][j]`` is the number of games left between ``i`` and
            ``j``. Symmetric with a zero diagonal, and each row sums to
            ``remaining[i]``.

    Raises:
        MalformedStandings: If any invariant is violated.
    """

    names: Tuple[str, ...]
    wins: Tuple[int, ...]
    losses: Tuple[int, ...]
    remaining: Tuple[int, ...]
    games: Tuple[Tuple[int, ...], ...]
    _index: Dict[str, int] = field(
        init=False, repr=False, compare=False, hash=False, default_factory=dict
    )

    def __post_init__(self) -> None:
        # Normalize to tuples so callers may pass lists
        try:
            object.__setattr__(self, "names", tuple(self.names))
            object.__setattr__(self, "wins", tuple(self.wins))
            object.__setattr__(self, "losses", tuple(self.losses))
            object.__setattr__(self, "remaining", tuple(self.remaining))
            object.__setattr__(
                self, "games", tuple(tuple(row) for row in self.games)
            )
        except TypeError as exc:
            raise MalformedStandings(f"Standings columns must be sequences: {exc}") from exc
        self._validate()
        object.__setattr__(
            self, "_index", {name: i for i, name in enumerate(self.names)}
        )

    def _validate(self) -> None:
        n = len(self.names)
        for label, column in (
            ("wins", self.wins),
            ("losses", self.losses),
            ("remaining", self.remaining),
            ("games", self.games),
        ):
            if len(column) != n:
                raise MalformedStandings(
                    f"Expected {n} entries in '{label}', got {len(column)}."
                )

        seen = set()
        for name in self.names:
            if not isinstance(name, str) or not name:
                raise MalformedStandings(f"Invalid competitor name {name!r}.")
            if name in seen:
                raise MalformedStandings(f"Duplicate competitor name '{name}'.")
            seen.add(name)

        for i, name in enumerate(self.names):
            for label, value in (
                ("wins", self.wins[i]),
                ("losses", self.losses[i]),
                ("remaining", self.remaining[i]),
            ):
                _check_count(value, f"{label} of '{name}'")

            row = self.games[i]
            if len(row) != n:
                raise MalformedStandings(
                    f"Games row of '{name}' has {len(row)} entries, expected {n}."
                )
            for j, value in enumerate(row):
                _check_count(value, f"games between '{name}' and '{self.names[j]}'")
            if row[i] != 0:
                raise MalformedStandings(
                    f"'{name}' has {row[i]} games left against itself."
                )
            if sum(row) != self.remaining[i]:
                raise MalformedStandings(
                    f"Games left of '{name}' sum to {sum(row)}, "
                    f"but remaining is {self.remaining[i]}."
                )

        for i in range(n):
            for j in range(i + 1, n):
                if self.games[i][j] != self.games[j][i]:
                    raise MalformedStandings(
                        f"Games between '{self.names[i]}' and '{self.names[j]}' "
                        f"are asymmetric: {self.games[i][j]} vs {self.games[j][i]}."
                    )

    @classmethod
    def from_records(cls, records: Iterable[Mapping[str, Any]]) -> "Standings":
        """Build standings from per-competitor mappings.

        Each record has ``name``, ``wins``, ``losses``, optional ``remaining``
        (defaults to the sum of ``against``) and ``against``, a mapping of
        opponent name to games left. Missing opponents mean zero games.

        Raises:
            MalformedStandings: On missing keys, unknown opponents, or any
                invariant violation.
        """
        records = list(records)
        names = []
        for rec in records:
            if "name" not in rec:
                raise MalformedStandings("Competitor record missing 'name' field.")
            names.append(str(rec["name"]))
        index = {name: i for i, name in enumerate(names)}

        wins, losses, remaining, games = [], [], [], []
        for rec, name in zip(records, names):
            for key in ("wins", "losses"):
                if key not in rec:
                    raise MalformedStandings(f"Competitor '{name}' missing '{key}'.")
            row = [0] * len(names)
            for opponent, count in (rec.get("against") or {}).items():
                opponent = str(opponent)
                if opponent not in index:
                    raise MalformedStandings(
                        f"Competitor '{name}' lists unknown opponent '{opponent}'."
                    )
                row[index[opponent]] = count
            wins.append(rec["wins"])
            losses.append(rec["losses"])
            remaining.append(rec.get("remaining", sum(row)))
            games.append(row)

        return cls(
            names=tuple(names),
            wins=tuple(wins),
            losses=tuple(losses),
            remaining=tuple(remaining),
            games=tuple(tuple(row) for row in games),
        )

    @property
    def size(self) -> int:
        """Number of competitors."""
        return len(self.names)

    def index_of(self, name: str) -> int:
        """Return the index of ``name``.

        Raises:
            UnknownCompetitor: If ``name`` is not in the division.
        """
        try:
            return self._index[name]
        except (KeyError, TypeError):
            raise UnknownCompetitor(name) from None

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and name in self._index

    def best(self, i: int) -> int:
        """Most wins competitor ``i`` can still reach."""
        return self.wins[i] + self.remaining[i]


def _check_count(value: Any, what: str) -> None:
    # bool is an int subclass but never a valid count
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise MalformedStandings(f"Invalid {what}: {value!r}.")
