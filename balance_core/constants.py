# FILE: balance_core/constants.py
from __future__ import annotations
from enum import IntEnum


class Criterion(IntEnum):
    """Skill dimensions; the value is the index into Player.ratings."""
    KEEPER = 0
    DEFENDER = 1
    MIDFIELDER = 2
    FORWARD = 3
    SPEED = 4
    STAMINA = 5

    @property
    def label(self) -> str:
        return CRITERION_LABELS[self]

    @property
    def field(self) -> str:
        return RATING_FIELDS[self.value]

    @classmethod
    def parse(cls, value) -> "Criterion":
        if isinstance(value, Criterion):
            return value
        if isinstance(value, int):
            return cls(value)
        key = str(value).strip().lower()
        for c in cls:
            if key in (c.name.lower(), c.label.lower()):
                return c
        raise ValueError(f"Unknown criterion: {value}")


CRITERION_LABELS = {
    Criterion.KEEPER: "Keeper",
    Criterion.DEFENDER: "Defender",
    Criterion.MIDFIELDER: "Midfielder",
    Criterion.FORWARD: "Forward",
    Criterion.SPEED: "Speed",
    Criterion.STAMINA: "Stamina",
}

# Player field names, in rating-vector order
RATING_FIELDS = ["keeper", "defender", "midfielder", "forward", "speed", "stamina"]

ALL_CRITERIA = list(Criterion)

# --- Fairness objective scope ---
# Keeper is not balanced by the solver unless added here (or via config).
DEFAULT_OBJECTIVE_CRITERIA = [
    Criterion.DEFENDER,
    Criterion.MIDFIELDER,
    Criterion.FORWARD,
    Criterion.SPEED,
    Criterion.STAMINA,
]

DEFAULT_PLAYERS_PER_TEAM = 5

# Values above 0.5 mean "assigned" for a binary x[p][t]
ASSIGNMENT_THRESHOLD = 0.5

# --- Team labels (bib colours), cycled when there are more teams ---
TEAM_COLORS = ["Black", "Blue", "Yellow", "Orange"]


def team_label(team_idx: int) -> str:
    color = TEAM_COLORS[team_idx % len(TEAM_COLORS)]
    lap = team_idx // len(TEAM_COLORS)
    return color if lap == 0 else f"{color} {lap + 1}"
