# balance_core/report.py
from __future__ import annotations
from typing import List, Sequence

from .constants import ALL_CRITERIA, team_label
from .fairness import total_imbalance
from .models import Player
from .ratings import rate_average, rate_max, team_average


def format_team(team: Sequence[Player], team_idx: int) -> List[str]:
    lines = [f"Team {team_label(team_idx)}:"]
    lines += [f"  {p.name}" for p in team]
    lines.append(f"Team rating average: {team_average(team):.2f}")
    for c in ALL_CRITERIA:
        lines.append(f"  {c.label}: {rate_average(team, c):.2f} - max: {rate_max(team, c)}")
    return lines


def format_copy_block(teams: Sequence[Sequence[Player]]) -> str:
    """Bare team lists for pasting into a group chat."""
    lines: List[str] = []
    for idx, team in enumerate(teams):
        lines.append(f"Team {team_label(idx)}:")
        lines += [p.name for p in team]
        lines.append("")
    return "\n".join(lines)


def format_report(teams: Sequence[Sequence[Player]]) -> str:
    lines: List[str] = []
    for idx, team in enumerate(teams):
        lines += format_team(team, idx)
        lines.append("")
    lines.append(f"Total imbalance across all criteria: {total_imbalance(teams):.2f}")
    lines.append("")
    lines.append("-------- copy & paste --------")
    lines.append(format_copy_block(teams))
    return "\n".join(lines)
