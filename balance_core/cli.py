# balance_core/cli.py
"""Command-line interface for splitting the selected players into balanced teams."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from balance_core.config import load_config
from balance_core.constants import Criterion
from balance_core.io import (
    default_selection,
    load_roster,
    load_selections,
    parse_name_list,
    save_selections,
)
from balance_core.balancer import balance_selection
from balance_core.models import BalanceError
from balance_core.report import format_report
from balance_core.validation import validate_roster

logger = logging.getLogger(__name__)


def _parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Split selected players into balanced teams")
    parser.add_argument("--roster", type=Path, default=Path("players.json"), help="Roster file (JSON or CSV)")
    parser.add_argument(
        "--selections",
        type=Path,
        default=Path("selections.json"),
        help="Where the last selection is stored",
    )
    parser.add_argument("--config", type=Path, default=None, help="Optional YAML config file")
    parser.add_argument("--players-per-team", type=int, default=None, help="Team size (default from config)")
    parser.add_argument(
        "--include-keeper",
        action="store_true",
        help="Also balance goalkeeper ratings",
    )
    parser.add_argument("--solver", choices=["cbc", "highs"], default=None, help="MILP backend")
    parser.add_argument("--time-limit", type=float, default=None, help="Solver time limit in seconds")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return parser.parse_args(argv)


def _read_stdin_names() -> List[str]:
    if sys.stdin is None or sys.stdin.isatty():
        return []
    return parse_name_list(sys.stdin.read())


def main(argv: Optional[List[str]] = None) -> int:
    args = _parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        config = load_config(str(args.config) if args.config else None)
        overrides = {}
        if args.players_per_team is not None:
            overrides["players_per_team"] = args.players_per_team
        if args.include_keeper:
            overrides["objective_criteria"] = list(config.objective_criteria) + [Criterion.KEEPER]
        if args.solver:
            overrides["solver"] = args.solver
        if args.time_limit:
            overrides["time_limit_seconds"] = args.time_limit
        if overrides:
            config = config.model_validate({**config.model_dump(), **overrides})

        players = load_roster(str(args.roster))
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    for err in validate_roster(players):
        print(f"Warning: {err}", file=sys.stderr)

    names = _read_stdin_names()
    saved = load_selections(str(args.selections))
    mask = default_selection(players, saved, names)
    selected = [p for p, keep in zip(players, mask) if keep]
    if names:
        known = {p.name for p in players}
        for name in names:
            if name not in known:
                print(f"Warning: {name!r} is not on the roster", file=sys.stderr)
    elif selected:
        print(
            f"Using saved selection from {args.selections} ({len(selected)} players): "
            + ", ".join(p.name for p in selected),
            file=sys.stderr,
        )
    else:
        print(
            "No players selected: pipe one name per line on stdin, or select players in the app.",
            file=sys.stderr,
        )
    save_selections(selected, str(args.selections))

    try:
        result = balance_selection(selected, config)
    except BalanceError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if not result.ok:
        print(f"Error: could not balance teams ({result.error})", file=sys.stderr)
        return 1

    print(format_report(result.teams))
    return 0


if __name__ == "__main__":
    sys.exit(main())
