# FILE: balance_core/fairness.py
from __future__ import annotations
import logging
from typing import Dict, Iterable, List, Sequence, Tuple
import pandas as pd

from .constants import ALL_CRITERIA, Criterion, team_label
from .models import Player
from .ratings import rate_average, rate_max, team_average, team_score

logger = logging.getLogger(__name__)


def criterion_spreads(teams: Sequence[Sequence[Player]]) -> Dict[Criterion, Tuple[float, float]]:
    """criterion -> (highest team average, lowest team average)."""
    out: Dict[Criterion, Tuple[float, float]] = {}
    if not teams:
        return out
    for c in ALL_CRITERIA:
        avgs = [rate_average(team, c) for team in teams]
        out[c] = (max(avgs), min(avgs))
    return out


def total_imbalance(teams: Sequence[Sequence[Player]]) -> float:
    """
    Sum over all six criteria (Keeper included) of the gap between the best
    and worst team average. 0.0 means every team averages the same everywhere.
    """
    diff = 0.0
    for c, (hi, lo) in criterion_spreads(teams).items():
        logger.debug("criterion %s: max %.2f, min %.2f", c.label, hi, lo)
        diff += hi - lo
    return diff


def objective_deviations(
    teams: Sequence[Sequence[Player]],
    criteria: Iterable[Criterion],
) -> Dict[Criterion, float]:
    """
    Worst absolute deviation of a team's score sum from the mean team score,
    per criterion. On an optimal partition this equals the solver's maxDiff.
    """
    out: Dict[Criterion, float] = {}
    if not teams:
        return out
    for c in criteria:
        scores = [team_score(team, c) for team in teams]
        avg = sum(scores) / len(scores)
        out[c] = max(abs(s - avg) for s in scores)
    return out


def fairness_dashboard_df(teams: Sequence[Sequence[Player]]) -> pd.DataFrame:
    rows: List[dict] = []
    for idx, team in enumerate(teams):
        row = {
            "team": team_label(idx),
            "players": len(team),
            "team_average": round(team_average(team), 2),
        }
        for c in ALL_CRITERIA:
            row[f"{c.label} avg"] = round(rate_average(team, c), 2)
            row[f"{c.label} max"] = rate_max(team, c)
        rows.append(row)
    return pd.DataFrame(rows)


def teams_grid_df(teams: Sequence[Sequence[Player]]) -> pd.DataFrame:
    """One column per team, player names sorted, blank-padded to equal length."""
    height = max((len(t) for t in teams), default=0)
    data = {}
    for idx, team in enumerate(teams):
        names = sorted(p.name for p in team)
        data[team_label(idx)] = names + [""] * (height - len(names))
    return pd.DataFrame(data)
