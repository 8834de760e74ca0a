# balance_core/solver_ilp.py
from __future__ import annotations
import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Protocol, Sequence, Tuple

import pulp

from .constants import DEFAULT_OBJECTIVE_CRITERIA, Criterion
from .models import AppConfig, Player

logger = logging.getLogger(__name__)

# (player_idx, team_idx) -> solver value of x[p][t]
Assignment = Dict[Tuple[int, int], float]


@dataclass
class BalanceModel:
    """A built (not yet solved) team assignment problem."""
    prob: pulp.LpProblem
    x: Dict[Tuple[int, int], pulp.LpVariable]
    max_diff: Dict[Criterion, pulp.LpVariable]
    players: List[Player]
    number_of_teams: int
    players_per_team: int
    objective_criteria: List[Criterion]


@dataclass
class SolverOutcome:
    status: str
    values: Assignment = field(default_factory=dict)
    max_diff: Dict[Criterion, float] = field(default_factory=dict)
    objective: Optional[float] = None

    @property
    def is_optimal(self) -> bool:
        return self.status == "Optimal"


class SolverAdapter(Protocol):
    def solve(self, model: BalanceModel) -> SolverOutcome: ...


def build_balance_model(
    players: Sequence[Player],
    number_of_teams: int,
    players_per_team: int,
    objective_criteria: Optional[Sequence[Criterion]] = None,
) -> BalanceModel:
    """
    Binary assignment model:
      x[p,t] = 1 if player p plays for team t
      max_diff[c] >= |teamScore[c,t] - avgScore[c]|  for each objective criterion c, team t
    minimizing sum(max_diff). The player count is not checked against
    number_of_teams * players_per_team; a mismatch makes the model infeasible.
    """
    if number_of_teams < 1:
        raise ValueError(f"number_of_teams must be at least 1, got {number_of_teams}")
    if players_per_team < 1:
        raise ValueError(f"players_per_team must be at least 1, got {players_per_team}")

    players = list(players)
    criteria = sorted(set(objective_criteria if objective_criteria is not None else DEFAULT_OBJECTIVE_CRITERIA))
    if not criteria:
        raise ValueError("At least one objective criterion is required.")
    P = len(players)
    T = number_of_teams

    prob = pulp.LpProblem("team_balance", pulp.LpMinimize)

    X = {}
    for p in range(P):
        for t in range(T):
            X[(p, t)] = pulp.LpVariable(f"x_{p}_{t}", cat="Binary")

    max_diff = {c: pulp.LpVariable(f"max_diff_{c.name.lower()}", lowBound=0) for c in criteria}

    prob += pulp.lpSum(max_diff.values()), "total_max_diff"

    # 1) Every player on exactly one team
    for p in range(P):
        prob += pulp.lpSum(X[(p, t)] for t in range(T)) == 1, f"one_team_{p}"

    # 2) Fixed team size
    for t in range(T):
        prob += pulp.lpSum(X[(p, t)] for p in range(P)) == players_per_team, f"size_{t}"

    # 3) Two-sided deviation bound per criterion and team
    for c in criteria:
        ratings = [pl.rating(c) for pl in players]
        team_scores = [
            pulp.lpSum(ratings[p] * X[(p, t)] for p in range(P))
            for t in range(T)
        ]
        avg_score = (1.0 / T) * pulp.lpSum(team_scores)
        name = c.name.lower()
        for t in range(T):
            prob += max_diff[c] >= team_scores[t] - avg_score, f"dev_over_{name}_{t}"
            prob += max_diff[c] >= avg_score - team_scores[t], f"dev_under_{name}_{t}"

    logger.debug(
        "Built balance model: %d players, %d teams of %d, criteria=%s, %d constraints",
        P, T, players_per_team, [c.label for c in criteria], len(prob.constraints),
    )
    return BalanceModel(
        prob=prob,
        x=X,
        max_diff=max_diff,
        players=players,
        number_of_teams=T,
        players_per_team=players_per_team,
        objective_criteria=criteria,
    )


class PulpSolver:
    """Solves a BalanceModel with a PuLP backend (CBC by default, HiGHS on request)."""

    def __init__(
        self,
        solver: str = "cbc",
        time_limit: Optional[float] = None,
        gap_rel: Optional[float] = None,
        msg: bool = False,
    ):
        self.solver = solver.lower()
        self.time_limit = time_limit
        self.gap_rel = gap_rel
        self.msg = msg

    @classmethod
    def from_config(cls, config: AppConfig) -> "PulpSolver":
        return cls(
            solver=config.solver,
            time_limit=config.time_limit_seconds,
            gap_rel=config.gap_rel,
            msg=config.solver_msg,
        )

    def _backend(self):
        kwargs = {"msg": self.msg}
        if self.time_limit:
            kwargs["timeLimit"] = self.time_limit
        if self.gap_rel:
            kwargs["gapRel"] = self.gap_rel

        if self.solver == "highs":
            highs_cmd = getattr(pulp, "HiGHS_CMD", None)
            if highs_cmd is not None:
                candidate = highs_cmd(**kwargs)
                if candidate.available():
                    return candidate, "HiGHS"
            logger.warning("HiGHS solver unavailable; falling back to CBC")

        return pulp.PULP_CBC_CMD(**kwargs), "CBC"

    def solve(self, model: BalanceModel) -> SolverOutcome:
        backend, label = self._backend()
        logger.info(
            "Solving with %s: %d players into %d teams",
            label, len(model.players), model.number_of_teams,
        )
        status = model.prob.solve(backend)
        status_name = pulp.LpStatus[status]
        # CBC stopped by its time limit still reports "Optimal"; sol_status does not
        if status_name == "Optimal" and model.prob.sol_status != pulp.LpSolutionOptimal:
            status_name = pulp.LpSolution.get(model.prob.sol_status, "Not Solved")
            logger.warning("%s stopped before proving optimality (%s)", label, status_name)
        logger.info("%s finished with status %s", label, status_name)
        if status_name != "Optimal":
            return SolverOutcome(status=status_name)

        values: Assignment = {}
        for key, var in model.x.items():
            v = var.value()
            values[key] = float(v) if v is not None else 0.0
        max_diff = {c: float(var.value() or 0.0) for c, var in model.max_diff.items()}
        return SolverOutcome(
            status=status_name,
            values=values,
            max_diff=max_diff,
            objective=float(pulp.value(model.prob.objective) or 0.0),
        )
