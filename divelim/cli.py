"""Command-line interface for divelim."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from time import perf_counter
from typing import Any, Dict, List, Optional

from divelim.config import EliminationConfig
from divelim.elimination.division import DivisionQuery
from divelim.elimination.reducer import build_elimination_network
from divelim.elimination.result import EliminationResult
from divelim.errors import DivelimError
from divelim.graph.io import network_to_node_link
from divelim.io import read_standings
from divelim.logging import get_logger, set_global_log_level, setup_root_logger

logger = get_logger(__name__)


def _format_result(result: EliminationResult) -> str:
    """Return the classic one-line description of a result.

    Examples:
        "Montreal is eliminated by the subset R = { Atlanta }"
        "Atlanta is not eliminated"
    """
    if result.eliminated:
        return (
            f"{result.competitor} is eliminated by the subset "
            f"R = {{ {' '.join(result.certificate)} }}"
        )
    return f"{result.competitor} is not eliminated"


def _format_duration(seconds: float) -> str:
    """Return a concise human-readable duration string.

    Examples:
        0.123 -> "123.0 ms"; 1.234 -> "1.23 s".
    """
    if seconds < 1.0:
        return f"{seconds * 1000.0:.1f} ms"
    return f"{seconds:.2f} s"


def _check_command(args: argparse.Namespace) -> None:
    """Report elimination status for every (or the selected) competitor."""
    standings = read_standings(args.standings)
    config = EliminationConfig(trivial_check=not args.no_trivial)
    division = DivisionQuery(standings, config=config)

    names = args.team if args.team else division.teams()
    start = perf_counter()
    results = [division.result(name) for name in names]
    elapsed = perf_counter() - start

    eliminated = sum(1 for r in results if r.eliminated)
    logger.info(
        "Checked %d competitors in %s: %d eliminated",
        len(results),
        _format_duration(elapsed),
        eliminated,
    )

    if args.json:
        payload: Dict[str, Any] = {
            "standings": str(args.standings),
            "leader": division.leader,
            "results": [r.to_dict() for r in results],
        }
        print(json.dumps(payload, indent=2))
    else:
        for result in results:
            print(_format_result(result))


def _network_command(args: argparse.Namespace) -> None:
    """Dump the elimination network for one competitor as node-link JSON."""
    standings = read_standings(args.standings)
    target = standings.index_of(args.team)
    reduction = build_elimination_network(standings, target)

    data = network_to_node_link(reduction.network, labels=reduction.labels)
    data["graph"].update(
        {
            "target": args.team,
            "source": reduction.source,
            "sink": reduction.sink,
            "required_flow": reduction.required_flow,
        }
    )
    text = json.dumps(data, indent=2)
    if args.output is not None:
        args.output.parent.mkdir(parents=True, exist_ok=True)
        args.output.write_text(text + "\n", encoding="utf-8")
        logger.info("Network written to %s", args.output)
    else:
        print(text)


def main(argv: Optional[List[str]] = None) -> None:
    """Entry point for the ``divelim`` command.

    Args:
        argv: Optional list of command-line arguments. If ``None``, ``sys.argv``
            is used.
    """
    parser = argparse.ArgumentParser(
        prog="divelim",
        description="Determine which competitors are eliminated from first place.",
    )
    parser.add_argument(
        "--verbose", "-v", action="store_true", help="Enable debug logging"
    )
    parser.add_argument(
        "--quiet", action="store_true", help="Only log warnings and errors"
    )

    subparsers = parser.add_subparsers(
        dest="command",
        required=True,
        title="Available commands",
        metavar="{check,network}",
        help="Available commands",
    )

    check_parser = subparsers.add_parser(
        "check", help="Report elimination status and certificates"
    )
    check_parser.add_argument(
        "standings", type=Path, help="Path to standings file (text or YAML)"
    )
    check_parser.add_argument(
        "--team",
        "-t",
        action="append",
        help="Only check this competitor (repeatable)",
    )
    check_parser.add_argument(
        "--json", action="store_true", help="Print results as JSON"
    )
    check_parser.add_argument(
        "--no-trivial",
        action="store_true",
        help="Always run the max-flow reduction, skipping the leader shortcut",
    )

    network_parser = subparsers.add_parser(
        "network", help="Dump the elimination flow network for one competitor"
    )
    network_parser.add_argument(
        "standings", type=Path, help="Path to standings file (text or YAML)"
    )
    network_parser.add_argument(
        "--team", "-t", required=True, help="Competitor to build the network for"
    )
    network_parser.add_argument(
        "--output", "-o", type=Path, default=None, help="Write JSON to this file"
    )

    args = parser.parse_args(argv)

    setup_root_logger()
    if args.verbose:
        set_global_log_level(logging.DEBUG)
        logger.debug("Debug logging enabled")
    elif args.quiet:
        set_global_log_level(logging.WARNING)

    try:
        if args.command == "check":
            _check_command(args)
        elif args.command == "network":
            _network_command(args)
    except FileNotFoundError as exc:
        logger.error("Standings file not found: %s", exc.filename)
        sys.exit(1)
    except DivelimError as exc:
        logger.error("%s", exc)
        sys.exit(1)


if __name__ == "__main__":
    main()
