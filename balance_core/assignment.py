# FILE: balance_core/assignment.py
from __future__ import annotations
from collections import Counter
from typing import List, Mapping, Sequence, Tuple

from .constants import ASSIGNMENT_THRESHOLD
from .models import AssignmentError, Player


def extract_teams(
    players: Sequence[Player],
    number_of_teams: int,
    values: Mapping[Tuple[int, int], float],
    threshold: float = ASSIGNMENT_THRESHOLD,
) -> List[List[Player]]:
    """
    Map solver values of x[p,t] back to team rosters.
    Each player must have exactly one team above the threshold; anything else
    is an AssignmentError rather than a guess.
    """
    teams: List[List[Player]] = [[] for _ in range(number_of_teams)]
    for p_idx, player in enumerate(players):
        chosen = [
            t for t in range(number_of_teams)
            if values.get((p_idx, t), 0.0) > threshold
        ]
        if len(chosen) != 1:
            raise AssignmentError(
                f"Player {player.name!r} assigned to {len(chosen)} teams "
                f"(expected exactly 1): {chosen}"
            )
        teams[chosen[0]].append(player)
    return teams


def verify_partition(
    teams: Sequence[Sequence[Player]],
    players: Sequence[Player],
    players_per_team: int,
) -> None:
    seen = Counter(p.name for team in teams for p in team)
    dupes = sorted(name for name, n in seen.items() if n > 1)
    if dupes:
        raise AssignmentError(f"Players on more than one team: {', '.join(dupes)}")
    missing = sorted(p.name for p in players if p.name not in seen)
    if missing:
        raise AssignmentError(f"Players left without a team: {', '.join(missing)}")
    extra = sorted(set(seen) - {p.name for p in players})
    if extra:
        raise AssignmentError(f"Unknown players in teams: {', '.join(extra)}")
    for idx, team in enumerate(teams):
        if len(team) != players_per_team:
            raise AssignmentError(
                f"Team {idx + 1} has {len(team)} players (expected {players_per_team})"
            )
