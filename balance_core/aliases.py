# FILE: balance_core/aliases.py
ALIASES = {
    "name": ["name", "player", "full name", "nome", "jogador"],
    "keeper": ["keeper", "goalkeeper", "gk", "goleiro", "qualidade_goleiro"],
    "defender": ["defender", "defence", "defense", "def", "zagueiro", "qualidade_zagueiro"],
    "midfielder": ["midfielder", "midfield", "mid", "meio", "qualidade_meio"],
    "forward": ["forward", "attacker", "striker", "fwd", "atacante", "qualidade_atacante"],
    "speed": ["speed", "pace", "velocidade"],
    "stamina": ["stamina", "endurance", "fitness", "preparo"],
}


def canonical_key(key):
    """Return the canonical field for a roster column/key, or None if unknown."""
    k = str(key).strip().lower()
    for canon, aliases in ALIASES.items():
        if k == canon or k in aliases:
            return canon
    return None


def map_record(record: dict) -> dict:
    """Rename the keys of one roster record; unknown keys are dropped."""
    out = {}
    for key, value in record.items():
        canon = canonical_key(key)
        if canon is not None and canon not in out:
            out[canon] = value
    return out


def map_headers(df):
    """
    Map input DataFrame columns to canonical names using aliases.
    Returns (renamed_df, mapping_report).
    """
    mapping = {}
    rename_cols = {}
    taken = set()
    for col in df.columns:
        canon = canonical_key(col)
        if canon is not None and canon not in taken:
            rename_cols[col] = canon
            taken.add(canon)
            mapping[col] = canon
        else:
            mapping[col] = None
    df = df.rename(columns=rename_cols)
    return df, mapping
