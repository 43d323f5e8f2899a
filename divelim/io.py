"""Loading division standings from text and YAML.

Text format: the number of competitors ``N``, then one record per competitor
with its name (no internal whitespace), wins, losses, remaining games and
``N`` games-left counts in file order. Tokens may be split across lines
freely.

YAML format::

    teams:
      - name: Atlanta
        wins: 83
        losses: 71
        remaining: 8          # optional, defaults to the sum of 'against'
        against: {Philadelphia: 1, New_York: 6, Montreal: 1}
"""

from __future__ import annotations

from pathlib import Path
from typing import Iterator, List, Union

import yaml

from divelim.errors import MalformedStandings
from divelim.logging import get_logger
from divelim.model.standings import Standings

logger = get_logger(__name__)

YAML_SUFFIXES = (".yaml", ".yml")


def parse_standings(text: str) -> Standings:
    """Parse standings from the whitespace-separated text format.

    Args:
        text: File contents.

    Returns:
        Validated `Standings`.

    Raises:
        MalformedStandings: On truncated input, trailing tokens, non-integer
            counts, or any standings invariant violation.
    """
    tokens = iter(text.split())

    n = _next_int(tokens, "number of competitors")
    if n < 0:
        raise MalformedStandings(f"Number of competitors must be non-negative, got {n}.")

    names: List[str] = []
    wins: List[int] = []
    losses: List[int] = []
    remaining: List[int] = []
    games: List[List[int]] = []
    for i in range(n):
        name = next(tokens, None)
        if name is None:
            raise MalformedStandings(f"Expected {n} competitors, found {i}.")
        names.append(name)
        wins.append(_next_int(tokens, f"wins of '{name}'"))
        losses.append(_next_int(tokens, f"losses of '{name}'"))
        remaining.append(_next_int(tokens, f"remaining games of '{name}'"))
        games.append([_next_int(tokens, f"games left of '{name}'") for _ in range(n)])

    extra = next(tokens, None)
    if extra is not None:
        raise MalformedStandings(
            f"Unexpected token '{extra}' after {n} competitor records."
        )

    return Standings(
        names=tuple(names),
        wins=tuple(wins),
        losses=tuple(losses),
        remaining=tuple(remaining),
        games=tuple(tuple(row) for row in games),
    )


def load_standings_yaml(yaml_str: str) -> Standings:
    """Parse standings from a YAML document with a top-level ``teams`` list.

    Raises:
        MalformedStandings: On invalid YAML, wrong structure, or any standings
            invariant violation.
    """
    try:
        data = yaml.safe_load(yaml_str)
    except yaml.YAMLError as exc:
        raise MalformedStandings(f"Invalid YAML: {exc}") from exc

    if not isinstance(data, dict):
        raise MalformedStandings("The provided YAML must map to a dictionary at top-level.")
    teams = data.get("teams")
    if not isinstance(teams, list):
        raise MalformedStandings("'teams' must be a list")
    for entry in teams:
        if not isinstance(entry, dict):
            raise MalformedStandings("Each team definition must be a mapping")
        if "against" in entry and not isinstance(entry["against"], (dict, type(None))):
            raise MalformedStandings(
                f"'against' of team '{entry.get('name')}' must be a mapping"
            )

    return Standings.from_records(teams)


def read_standings(path: Union[str, Path]) -> Standings:
    """Read standings from a file, choosing the format by suffix.

    ``.yaml`` and ``.yml`` files are read as YAML, everything else as text.
    """
    path = Path(path)
    text = path.read_text(encoding="utf-8")
    if path.suffix.lower() in YAML_SUFFIXES:
        standings = load_standings_yaml(text)
    else:
        standings = parse_standings(text)
    logger.debug("Loaded %d competitors from %s", standings.size, path)
    return standings


def _next_int(tokens: Iterator[str], what: str) -> int:
    token = next(tokens, None)
    if token is None:
        raise MalformedStandings(f"Unexpected end of input reading {what}.")
    try:
        return int(token)
    except ValueError:
        raise MalformedStandings(f"Expected an integer for {what}, got '{token}'.") from None
