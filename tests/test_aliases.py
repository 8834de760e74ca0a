# FILE: tests/test_aliases.py
import pandas as pd
from balance_core.aliases import canonical_key, map_headers, map_record

def test_map_headers_basic():
    df = pd.DataFrame(columns=["Player", "GK", "qualidade_zagueiro", "Pace", "Unknown"])
    mapped_df, mapping = map_headers(df)
    assert mapping["Player"] == "name"
    assert mapping["GK"] == "keeper"
    assert mapping["qualidade_zagueiro"] == "defender"
    assert mapping["Pace"] == "speed"
    assert mapping["Unknown"] is None
    assert "keeper" in mapped_df.columns

def test_first_alias_wins():
    df = pd.DataFrame(columns=["speed", "pace"])
    _, mapping = map_headers(df)
    assert mapping == {"speed": "speed", "pace": None}

def test_map_record_original_keys():
    rec = {
        "name": "Rafa",
        "qualidade_goleiro": 0,
        "qualidade_zagueiro": 70,
        "qualidade_meio": 60,
        "qualidade_atacante": 50,
        "speed": 80,
        "stamina": 90,
        "apelido": "R",
    }
    out = map_record(rec)
    assert out == {
        "name": "Rafa", "keeper": 0, "defender": 70, "midfielder": 60,
        "forward": 50, "speed": 80, "stamina": 90,
    }
    assert canonical_key("  Stamina ") == "stamina"
