# balance_core/config.py
from __future__ import annotations
import logging
import os
import textwrap
from typing import Optional
import yaml

from .constants import DEFAULT_OBJECTIVE_CRITERIA, DEFAULT_PLAYERS_PER_TEAM
from .models import AppConfig

logger = logging.getLogger(__name__)

ASSETS_DIR = "assets"
CONFIG_PATH = os.path.join(ASSETS_DIR, "balance.yaml")
SAMPLE_ROSTER_PATH = os.path.join(ASSETS_DIR, "sample_players.csv")

_SOLVER_ENV = "TEAM_BALANCER_SOLVER"
_TIME_LIMIT_ENV = "TEAM_BALANCER_TIME_LIMIT"

# ===== App defaults =====
DEFAULT_CONFIG = {
    "players_per_team": DEFAULT_PLAYERS_PER_TEAM,
    "objective_criteria": [c.name.lower() for c in DEFAULT_OBJECTIVE_CRITERIA],
    "solver": "cbc",                 # or "highs" if the HiGHS binary is installed
    "time_limit_seconds": None,
    "gap_rel": None,
    "solver_msg": False,
}


def _env_float(name: str, default: Optional[float]) -> Optional[float]:
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        value = float(raw)
    except ValueError:
        logger.warning("Invalid float for %s: %s; using default %s", name, raw, default)
        return default
    return value if value > 0 else default


def load_config(path: Optional[str] = None) -> AppConfig:
    """DEFAULT_CONFIG, overlaid by the YAML file (if any), then by environment variables."""
    data = dict(DEFAULT_CONFIG)
    if path and os.path.exists(path):
        with open(path, "r", encoding="utf-8") as f:
            obj = yaml.safe_load(f) or {}
        if not isinstance(obj, dict):
            raise ValueError(f"{path} must contain a mapping of settings.")
        unknown = sorted(set(obj) - set(AppConfig.model_fields))
        if unknown:
            logger.warning("Ignoring unknown config keys in %s: %s", path, unknown)
        data.update({k: v for k, v in obj.items() if k in AppConfig.model_fields})
    elif path:
        logger.info("Config file %s not found; using defaults", path)

    solver = os.getenv(_SOLVER_ENV)
    if solver:
        data["solver"] = solver
    data["time_limit_seconds"] = _env_float(_TIME_LIMIT_ENV, data.get("time_limit_seconds"))
    return AppConfig(**data)


def ensure_assets_exist():
    os.makedirs(ASSETS_DIR, exist_ok=True)
    if not os.path.exists(CONFIG_PATH):
        with open(CONFIG_PATH, "w", encoding="utf-8") as f:
            f.write(DEFAULT_CONFIG_YAML)
    if not os.path.exists(SAMPLE_ROSTER_PATH):
        with open(SAMPLE_ROSTER_PATH, "w", encoding="utf-8") as f:
            f.write(DEFAULT_SAMPLE_ROSTER_CSV)


# ===== Default config file =====
DEFAULT_CONFIG_YAML = textwrap.dedent("""\
players_per_team: 5
# Criteria the solver balances. Add "keeper" to balance goalkeeping too.
objective_criteria:
  - defender
  - midfielder
  - forward
  - speed
  - stamina
solver: cbc
time_limit_seconds: null
""")

# ===== Sample roster (0 = does not play there) =====
DEFAULT_SAMPLE_ROSTER_CSV = textwrap.dedent("""\
name,keeper,defender,midfielder,forward,speed,stamina
Alex Carter,80,40,30,20,50,60
Blake Diaz,0,75,60,40,70,80
Casey Ellis,0,60,70,55,65,70
Drew Fox,0,50,65,80,85,60
Emery Gray,70,55,40,30,45,55
Fin Hayes,0,80,50,35,60,75
Gabe Irwin,0,45,75,70,80,85
Harper Jones,0,65,55,60,55,50
Izzy Kim,0,35,60,85,90,65
Jordan Lee,0,70,80,65,75,90
Kai Miller,60,50,45,40,50,60
Lane Novak,0,55,70,75,70,70
Morgan Ortiz,0,85,45,30,55,80
Nico Park,0,40,85,60,60,75
Owen Quinn,0,60,50,90,95,55
""")
