# balance_core/ratings.py
from __future__ import annotations
from typing import Sequence
import numpy as np

from .constants import Criterion
from .models import Player


def rating_matrix(team: Sequence[Player]) -> np.ndarray:
    """Players x criteria matrix of raw ratings."""
    if not team:
        return np.zeros((0, len(Criterion)), dtype=int)
    return np.array([p.ratings for p in team], dtype=int)


def rate_average(team: Sequence[Player], criterion: Criterion) -> float:
    """
    Mean rating for one criterion over players rated above 0.
    A 0 rating means "does not play there" and does not drag the mean down.
    Returns 0.0 when nobody in the team qualifies (or the team is empty).
    """
    col = rating_matrix(team)[:, int(criterion)]
    rated = col[col > 0]
    if rated.size == 0:
        return 0.0
    return float(rated.mean())


def rate_max(team: Sequence[Player], criterion: Criterion) -> int:
    col = rating_matrix(team)[:, int(criterion)]
    return int(col.max()) if col.size else 0


def player_average(player: Player) -> float:
    return float(np.mean(player.ratings))


def team_average(team: Sequence[Player]) -> float:
    if not team:
        return 0.0
    return float(np.mean([player_average(p) for p in team]))


def team_score(team: Sequence[Player], criterion: Criterion) -> int:
    """Sum of a criterion over the team (the quantity the solver balances)."""
    return int(rating_matrix(team)[:, int(criterion)].sum())
