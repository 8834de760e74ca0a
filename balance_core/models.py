# balance_core/models.py
from __future__ import annotations
from typing import Dict, List, Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator

from .constants import (
    ASSIGNMENT_THRESHOLD,
    DEFAULT_OBJECTIVE_CRITERIA,
    DEFAULT_PLAYERS_PER_TEAM,
    RATING_FIELDS,
    Criterion,
)


class BalanceError(Exception):
    """Base class for balancing failures."""


class AssignmentError(BalanceError):
    """Solver output does not describe a valid partition."""


class TeamLayoutError(BalanceError, ValueError):
    """Selected player count does not fit the requested team layout."""


class Player(BaseModel):
    """A rated player. Identity is the name; ratings are never mutated."""

    name: str
    keeper: int = 0
    defender: int = 0
    midfielder: int = 0
    forward: int = 0
    speed: int = 0
    stamina: int = 0

    model_config = ConfigDict(frozen=True)

    @property
    def ratings(self) -> List[int]:
        return [getattr(self, f) for f in RATING_FIELDS]

    def rating(self, criterion: Criterion) -> int:
        return getattr(self, RATING_FIELDS[int(criterion)])

    def __eq__(self, other):
        if not isinstance(other, Player):
            return NotImplemented
        return self.name == other.name

    def __hash__(self):
        return hash(self.name)

    def __str__(self) -> str:
        return self.name


class AppConfig(BaseModel):
    players_per_team: int = DEFAULT_PLAYERS_PER_TEAM
    objective_criteria: List[Criterion] = Field(default_factory=lambda: list(DEFAULT_OBJECTIVE_CRITERIA))
    solver: str = "cbc"
    time_limit_seconds: Optional[float] = None
    gap_rel: Optional[float] = None
    solver_msg: bool = False
    assignment_threshold: float = ASSIGNMENT_THRESHOLD

    @field_validator("players_per_team")
    @classmethod
    def _positive(cls, v):
        if v < 1:
            raise ValueError("players_per_team must be at least 1")
        return v

    @field_validator("objective_criteria", mode="before")
    @classmethod
    def _criteria(cls, v):
        if not v:
            raise ValueError("objective_criteria must name at least one criterion")
        out: List[Criterion] = []
        for item in v:
            c = Criterion.parse(item)
            if c not in out:
                out.append(c)
        return sorted(out)

    @field_validator("solver")
    @classmethod
    def _solver_name(cls, v):
        v = str(v).strip().lower()
        if v not in ("cbc", "highs"):
            raise ValueError(f"Unsupported solver: {v}")
        return v

    @field_validator("time_limit_seconds", "gap_rel")
    @classmethod
    def _positive_or_unset(cls, v, info):
        if v is not None and v <= 0:
            raise ValueError(f"{info.field_name} must be greater than 0 (or null for no limit)")
        return v

    @field_validator("assignment_threshold")
    @classmethod
    def _threshold(cls, v):
        if not 0.0 < v < 1.0:
            raise ValueError("assignment_threshold must be between 0 and 1")
        return v

    @property
    def includes_keeper(self) -> bool:
        return Criterion.KEEPER in self.objective_criteria


class SolveResult(BaseModel):
    teams: Optional[List[List[Player]]] = None
    status: str = "Not Solved"
    objective: Optional[float] = None
    max_diff: Dict[str, float] = Field(default_factory=dict)
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.teams is not None and self.error is None
