# FILE: tests/helpers.py
"""Small roster builders shared by the tests."""
from __future__ import annotations
from itertools import combinations
from typing import Iterable, List, Sequence

from balance_core.constants import Criterion
from balance_core.fairness import objective_deviations
from balance_core.models import Player


def quick_player(name: str, keeper=0, defender=50, midfielder=50, forward=50, speed=50, stamina=50) -> Player:
    return Player(
        name=name, keeper=keeper, defender=defender, midfielder=midfielder,
        forward=forward, speed=speed, stamina=stamina,
    )


def ten_players() -> List[Player]:
    rows = [
        ("Ana", 80, 40, 30, 20, 50, 60),
        ("Bruno", 0, 75, 60, 40, 70, 80),
        ("Caio", 0, 60, 70, 55, 65, 70),
        ("Davi", 0, 50, 65, 80, 85, 60),
        ("Enzo", 70, 55, 40, 30, 45, 55),
        ("Fabio", 0, 80, 50, 35, 60, 75),
        ("Gil", 0, 45, 75, 70, 80, 85),
        ("Hugo", 0, 65, 55, 60, 55, 50),
        ("Igor", 0, 35, 60, 85, 90, 65),
        ("Joao", 0, 70, 80, 65, 75, 90),
    ]
    return [quick_player(*r) for r in rows]


def brute_force_two_teams(players: Sequence[Player], criteria: Iterable[Criterion]) -> float:
    """Smallest achievable sum of worst deviations over every 2-team split."""
    criteria = list(criteria)
    n = len(players)
    best = float("inf")
    for combo in combinations(range(n), n // 2):
        a = [players[i] for i in combo]
        b = [players[i] for i in range(n) if i not in combo]
        devs = objective_deviations([a, b], criteria)
        best = min(best, sum(devs.values()))
    return best


def partition_key(teams) -> set:
    return {frozenset(p.name for p in team) for team in teams}
