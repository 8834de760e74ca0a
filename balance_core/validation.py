# FILE: balance_core/validation.py
from __future__ import annotations
from collections import Counter
from typing import List, Optional, Sequence

from .constants import Criterion
from .models import Player, TeamLayoutError

MAX_RATING = 100


def validate_roster(players: Sequence[Player]) -> List[str]:
    errs = []
    counts = Counter(p.name for p in players)
    dupes = sorted(name for name, n in counts.items() if n > 1)
    if dupes:
        errs.append(f"Duplicate player names detected: {', '.join(dupes)}")

    blank = [i + 1 for i, p in enumerate(players) if not p.name.strip()]
    if blank:
        errs.append(f"Players without a name at rows: {', '.join(str(i) for i in blank)}")

    for c in Criterion:
        neg = [p.name for p in players if p.rating(c) < 0]
        if neg:
            errs.append(f"Negative {c.label} rating: {', '.join(neg)}")
        high = [p.name for p in players if p.rating(c) > MAX_RATING]
        if high:
            errs.append(f"{c.label} rating above {MAX_RATING}: {', '.join(high)}")
    return errs


def check_team_layout(selected_count: int, players_per_team: int) -> Optional[str]:
    if players_per_team < 1:
        return "Players per team must be at least 1."
    if selected_count < players_per_team:
        return (f"Only {selected_count} players selected; "
                f"at least {players_per_team} are needed for one team.")
    leftover = selected_count % players_per_team
    if leftover:
        return (f"{selected_count} players do not split into teams of {players_per_team} "
                f"({leftover} left over). Add {players_per_team - leftover} or remove {leftover}.")
    return None


def plan_team_layout(selected_count: int, players_per_team: int) -> int:
    """Number of teams for the selection; refuses layouts that would leave players out."""
    msg = check_team_layout(selected_count, players_per_team)
    if msg:
        raise TeamLayoutError(msg)
    return selected_count // players_per_team
