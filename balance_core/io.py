# balance_core/io.py
from __future__ import annotations
import io
import json
import logging
import os
from typing import Iterable, List, Optional, Sequence
import pandas as pd

from .aliases import map_headers, map_record
from .constants import RATING_FIELDS
from .models import Player

logger = logging.getLogger(__name__)

REQUIRED_COLUMNS = ["name"] + RATING_FIELDS


def _normalize_roster_df(df: pd.DataFrame) -> pd.DataFrame:
    df, _ = map_headers(df)
    missing = [c for c in REQUIRED_COLUMNS if c not in df.columns]
    if missing:
        raise ValueError(f"Missing required columns: {missing}")

    df = df[REQUIRED_COLUMNS].copy()
    df["name"] = df["name"].fillna("").astype(str).str.strip()
    df = df[df["name"] != ""]
    for c in RATING_FIELDS:
        df[c] = pd.to_numeric(df[c], errors="coerce").fillna(0).astype(int)
    return df.reset_index(drop=True)


def dataframe_to_roster(df: pd.DataFrame) -> List[Player]:
    """Rows become players; only the first row of a repeated name is kept."""
    df = _normalize_roster_df(df)
    dupes = sorted(set(df.loc[df["name"].duplicated(), "name"]))
    if dupes:
        logger.warning("Keeping the first row for repeated player names: %s", ", ".join(dupes))
        df = df.drop_duplicates(subset="name", keep="first")
    return [Player(**row) for row in df.to_dict(orient="records")]


def roster_to_dataframe(players: Sequence[Player]) -> pd.DataFrame:
    return pd.DataFrame([p.model_dump() for p in players], columns=REQUIRED_COLUMNS)


def load_roster_csv(file_like) -> List[Player]:
    if isinstance(file_like, (bytes, bytearray)):
        file_like = io.BytesIO(file_like)
    return dataframe_to_roster(pd.read_csv(file_like))


def players_from_records(records: Iterable[dict]) -> List[Player]:
    rows = [map_record(r) for r in records if isinstance(r, dict)]
    if not rows:
        return []
    return dataframe_to_roster(pd.DataFrame(rows, columns=REQUIRED_COLUMNS))


def load_players_json(path: str) -> List[Player]:
    """Read a JSON array of player objects. A missing file is an empty roster."""
    if not os.path.exists(path):
        logger.warning("Roster file %s not found; starting with an empty roster", path)
        return []
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)
    if not isinstance(data, list):
        raise ValueError(f"{path} must contain a JSON list of players.")
    return players_from_records(data)


def load_roster(path: str) -> List[Player]:
    if path.lower().endswith(".csv"):
        if not os.path.exists(path):
            logger.warning("Roster file %s not found; starting with an empty roster", path)
            return []
        with open(path, "rb") as f:
            return load_roster_csv(f)
    return load_players_json(path)


def save_roster_csv_bytes(players: Sequence[Player]) -> bytes:
    buf = io.StringIO()
    roster_to_dataframe(players).to_csv(buf, index=False)
    return buf.getvalue().encode("utf-8")


def generate_template_csv_bytes() -> bytes:
    empty = pd.DataFrame(columns=REQUIRED_COLUMNS)
    buf = io.StringIO()
    empty.to_csv(buf, index=False)
    return buf.getvalue().encode("utf-8")


# ===== Saved selections =====
def save_selections(players: Sequence[Player], path: str) -> None:
    payload = [p.model_dump() for p in players]
    with open(path, "w", encoding="utf-8") as f:
        json.dump(payload, f, ensure_ascii=False, indent=2)


def load_selections(path: str) -> List[Player]:
    """Previously selected players; missing or unreadable file means no selection."""
    if not os.path.exists(path):
        return []
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
        return players_from_records(data if isinstance(data, list) else [])
    except (ValueError, OSError) as e:
        logger.warning("Ignoring unreadable selections file %s: %s", path, e)
        return []


def parse_name_list(text: str) -> List[str]:
    return [line.strip() for line in text.splitlines() if line.strip()]


def default_selection(
    players: Sequence[Player],
    saved: Sequence[Player],
    names: Optional[Sequence[str]] = None,
) -> List[bool]:
    """Pre-checked state per roster player: an explicit name list wins over saved selections."""
    if names:
        wanted = set(names)
        return [p.name in wanted for p in players]
    saved_set = set(saved)
    return [p in saved_set for p in players]
