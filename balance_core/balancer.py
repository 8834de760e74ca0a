# balance_core/balancer.py
from __future__ import annotations
import logging
from collections import Counter
from typing import Optional, Sequence

from .models import AppConfig, BalanceError, Player, SolveResult
from .solver_ilp import PulpSolver, SolverAdapter, build_balance_model
from .assignment import extract_teams, verify_partition
from .validation import plan_team_layout

logger = logging.getLogger(__name__)


def balance_teams(
    players: Sequence[Player],
    number_of_teams: int,
    players_per_team: int,
    config: Optional[AppConfig] = None,
    solver: Optional[SolverAdapter] = None,
) -> SolveResult:
    """
    Build, solve and extract in one step. A solver failure comes back as a
    SolveResult with `error` set and no teams; extraction defects raise
    AssignmentError. A name listed twice is rejected with BalanceError before
    any model is built.
    """
    counts = Counter(p.name for p in players)
    dupes = sorted(name for name, n in counts.items() if n > 1)
    if dupes:
        raise BalanceError(f"The same player is listed more than once: {', '.join(dupes)}")

    config = config or AppConfig(players_per_team=players_per_team)
    solver = solver or PulpSolver.from_config(config)

    model = build_balance_model(
        players,
        number_of_teams=number_of_teams,
        players_per_team=players_per_team,
        objective_criteria=config.objective_criteria,
    )
    outcome = solver.solve(model)
    if not outcome.is_optimal:
        logger.warning(
            "No balanced split for %d players into %d teams of %d (status %s)",
            len(model.players), number_of_teams, players_per_team, outcome.status,
        )
        return SolveResult(status=outcome.status, error=f"ILP solver status: {outcome.status}")

    teams = extract_teams(model.players, number_of_teams, outcome.values, config.assignment_threshold)
    verify_partition(teams, model.players, players_per_team)

    return SolveResult(
        teams=teams,
        status=outcome.status,
        objective=outcome.objective,
        max_diff={c.label: v for c, v in outcome.max_diff.items()},
    )


def balance_selection(
    selected: Sequence[Player],
    config: AppConfig,
    solver: Optional[SolverAdapter] = None,
) -> SolveResult:
    """Derive the team count from the selection, then balance. Raises TeamLayoutError on leftovers."""
    number_of_teams = plan_team_layout(len(selected), config.players_per_team)
    return balance_teams(
        selected,
        number_of_teams=number_of_teams,
        players_per_team=config.players_per_team,
        config=config,
        solver=solver,
    )
