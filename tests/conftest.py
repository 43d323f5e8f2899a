"""Global pytest configuration and shared fixtures.

Fixtures provide the classic four- and five-team divisions, a random
standings factory, and a brute-force elimination oracle that enumerates every
subset of opponents. Helpers are exposed as fixtures so test modules never
import this file directly.
"""

from __future__ import annotations

import random
from itertools import combinations
from pathlib import Path
from typing import Callable, Optional, Sequence, Tuple

import pytest

from divelim.io import read_standings
from divelim.model.standings import Standings

SAMPLE_DATA = Path(__file__).parent / "sample_data"


@pytest.fixture
def sample_data_dir() -> Path:
    return SAMPLE_DATA


@pytest.fixture
def teams4() -> Standings:
    # Atlanta       83 71  8  0 1 6 1
    # Philadelphia  80 79  3  1 0 0 2
    # New_York      78 78  6  6 0 0 0
    # Montreal      77 82  3  1 2 0 0
    return read_standings(SAMPLE_DATA / "teams4.txt")


@pytest.fixture
def teams5() -> Standings:
    return read_standings(SAMPLE_DATA / "teams5.txt")


def _random_standings(
    seed: int, n: Optional[int] = None, max_games: int = 4, max_wins: int = 20
) -> Standings:
    rng = random.Random(seed)
    if n is None:
        n = rng.randint(1, 6)
    games = [[0] * n for _ in range(n)]
    for i, j in combinations(range(n), 2):
        games[i][j] = games[j][i] = rng.randint(0, max_games)
    return Standings(
        names=tuple(f"T{i}" for i in range(n)),
        wins=tuple(rng.randint(0, max_wins) for _ in range(n)),
        losses=tuple(rng.randint(0, max_wins) for _ in range(n)),
        remaining=tuple(sum(row) for row in games),
        games=tuple(tuple(row) for row in games),
    )


@pytest.fixture
def random_standings() -> Callable[..., Standings]:
    """Factory: ``random_standings(seed, n=None)`` -> valid random `Standings`."""
    return _random_standings


def _witness_margin(standings: Standings, target: int, subset: Sequence[int]) -> int:
    """Return ``w(S) + g(S) - |S| * best(target)``; positive means S eliminates target."""
    banked = sum(standings.wins[i] for i in subset)
    among = sum(standings.games[i][j] for i, j in combinations(subset, 2))
    return banked + among - len(subset) * standings.best(target)


def _is_witness(standings: Standings, target: str, certificate: Sequence[str]) -> bool:
    t = standings.index_of(target)
    subset = [standings.index_of(name) for name in certificate]
    if not subset or t in subset or len(set(subset)) != len(subset):
        return False
    return _witness_margin(standings, t, subset) > 0


def _brute_force(standings: Standings, target: str) -> Tuple[bool, Optional[Tuple[int, ...]]]:
    t = standings.index_of(target)
    others = [i for i in range(standings.size) if i != t]
    for k in range(1, len(others) + 1):
        for subset in combinations(others, k):
            if _witness_margin(standings, t, subset) > 0:
                return True, subset
    return False, None


@pytest.fixture
def is_witness() -> Callable[[Standings, str, Sequence[str]], bool]:
    """``is_witness(standings, target, names)``: does the set eliminate the target?"""
    return _is_witness


@pytest.fixture
def brute_force_eliminated() -> Callable[[Standings, str], bool]:
    """Oracle: ``brute_force_eliminated(standings, target)`` by subset enumeration."""
    return lambda standings, target: _brute_force(standings, target)[0]
