# app.py
import json
import logging
from typing import List

import streamlit as st

from balance_core.config import (
    CONFIG_PATH,
    SAMPLE_ROSTER_PATH,
    ensure_assets_exist,
    load_config,
)
from balance_core.constants import ALL_CRITERIA, Criterion, team_label
from balance_core.io import (
    default_selection,
    generate_template_csv_bytes,
    load_roster_csv,
    load_selections,
    players_from_records,
    roster_to_dataframe,
    save_selections,
)
from balance_core.balancer import balance_selection
from balance_core.fairness import fairness_dashboard_df, total_imbalance
from balance_core.models import AppConfig, BalanceError, Player
from balance_core.ratings import rate_average, rate_max, team_average
from balance_core.report import format_copy_block, format_report
from balance_core.validation import check_team_layout, validate_roster
from balance_core.export_pdf import render_pdf

logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

SELECTIONS_PATH = "selections.json"

# ---------- Page ----------
st.set_page_config(page_title="Team Balancer", layout="wide")

ensure_assets_exist()


# ---------- Session State ----------
def _init_state():
    ss = st.session_state
    ss.setdefault("stage", 1)  # 1..3
    ss.setdefault("roster", [])
    ss.setdefault("app_config", load_config(CONFIG_PATH))
    ss.setdefault("selected_names", None)
    ss.setdefault("result", None)

_init_state()


# ---------- Sidebar ----------
with st.sidebar:
    st.header("⚙️ Settings")
    cfg: AppConfig = st.session_state.app_config
    players_per_team = st.number_input(
        "Players per team",
        min_value=1, max_value=11,
        value=cfg.players_per_team,
        step=1,
    )
    balanced = st.multiselect(
        "Balanced criteria",
        options=[c.label for c in ALL_CRITERIA],
        default=[c.label for c in cfg.objective_criteria],
        help="Criteria the solver evens out. Keeper is off by default.",
    )
    time_limit = st.number_input(
        "Solver time limit (s, 0 = none)",
        min_value=0, max_value=600,
        value=int(cfg.time_limit_seconds or 0),
        step=5,
    )

    try:
        st.session_state.app_config = AppConfig(
            **{
                **cfg.model_dump(),
                "players_per_team": int(players_per_team),
                "objective_criteria": balanced or [c.label for c in cfg.objective_criteria],
                "time_limit_seconds": float(time_limit) or None,
            }
        )
    except ValueError as e:
        st.warning(f"Invalid settings; keeping previous values. ({e})")

    st.divider()
    st.subheader("📄 Files")
    colT, colS = st.columns(2)
    with colT:
        st.download_button(
            "template.csv",
            data=generate_template_csv_bytes(),
            file_name="template.csv",
            mime="text/csv",
            use_container_width=True,
        )
    with colS:
        with open(SAMPLE_ROSTER_PATH, "rb") as f:
            st.download_button(
                "sample_players.csv",
                data=f.read(),
                file_name="sample_players.csv",
                mime="text/csv",
                use_container_width=True,
            )


st.title("Team Balancer")
st.caption("1) Import roster → 2) Pick who is playing → 3) Balanced teams")


def _stage_nav(back_to=None, next_to=None, next_label="Next"):
    cols = st.columns([1, 1])
    with cols[0]:
        if back_to is not None and st.button("Back", key=f"back_{back_to}", use_container_width=True):
            st.session_state.stage = back_to
            st.rerun()
    with cols[1]:
        if next_to is not None and st.button(next_label, key=f"next_{next_to}", use_container_width=True):
            st.session_state.stage = next_to
            st.rerun()


def _team_card(team: List[Player], idx: int):
    st.markdown(f"**Team {team_label(idx)}** · average {team_average(team):.1f}")
    for p in team:
        st.write("•", p.name)
    st.caption(" · ".join(
        f"{c.label} {rate_average(team, c):.1f} (max {rate_max(team, c)})" for c in ALL_CRITERIA
    ))


# ============================================================
# STAGE 1: Import roster (JSON/CSV)
# ============================================================
if st.session_state.stage == 1:
    st.subheader("1) Import roster")
    up_col1, up_col2 = st.columns([2, 1])
    with up_col1:
        file = st.file_uploader("Drop a players CSV or JSON here", type=["csv", "json"])
    with up_col2:
        st.caption("Load sample")
        if st.button("Load sample roster"):
            with open(SAMPLE_ROSTER_PATH, "rb") as f:
                st.session_state.roster = load_roster_csv(f.read())
            st.success("Sample roster loaded.")

    if file is not None:
        try:
            if file.name.lower().endswith(".json"):
                st.session_state.roster = players_from_records(json.loads(file.getvalue()))
            else:
                st.session_state.roster = load_roster_csv(file.getvalue())
            st.success(f"Imported {len(st.session_state.roster)} players.")
        except ValueError as e:
            st.error(f"Error loading roster: {e}")

    roster = st.session_state.roster
    if not roster:
        st.info("No roster loaded yet.")
    else:
        st.dataframe(roster_to_dataframe(roster), use_container_width=True)
        errors = validate_roster(roster)
        if errors:
            st.error("Validation errors:")
            for e in errors:
                st.write("•", e)
        else:
            st.success("Roster looks valid ✅")

    _stage_nav(back_to=None, next_to=2 if roster else None, next_label="Next: Pick players")

# ============================================================
# STAGE 2: Select participating players
# ============================================================
elif st.session_state.stage == 2:
    st.subheader("2) Who is playing today?")
    roster = st.session_state.roster
    if not roster:
        st.info("Import a roster in stage 1 first.")
        _stage_nav(back_to=1)
    else:
        if st.session_state.selected_names is None:
            mask = default_selection(roster, load_selections(SELECTIONS_PATH))
            st.session_state.selected_names = [p.name for p, keep in zip(roster, mask) if keep]

        names = [p.name for p in roster]
        chosen = st.multiselect(
            "Players",
            options=names,
            default=[n for n in st.session_state.selected_names if n in names],
        )
        st.session_state.selected_names = chosen

        per_team = st.session_state.app_config.players_per_team
        msg = check_team_layout(len(chosen), per_team)
        if msg:
            st.warning(msg)
        else:
            st.info(f"{len(chosen)} players → {len(chosen) // per_team} teams of {per_team}.")

        cols = st.columns([1, 1])
        with cols[0]:
            if st.button("Back", use_container_width=True):
                st.session_state.stage = 1
                st.rerun()
        with cols[1]:
            if st.button("Balance teams", type="primary", disabled=bool(msg), use_container_width=True):
                selected = [p for p in roster if p.name in set(chosen)]
                save_selections(selected, SELECTIONS_PATH)
                try:
                    with st.spinner("Solving..."):
                        st.session_state.result = balance_selection(selected, st.session_state.app_config)
                    st.session_state.stage = 3
                    st.rerun()
                except BalanceError as e:
                    st.error(str(e))

# ============================================================
# STAGE 3: Balanced teams
# ============================================================
elif st.session_state.stage == 3:
    st.subheader("3) Balanced teams")
    result = st.session_state.result
    if result is None:
        st.info("Nothing balanced yet.")
    elif not result.ok:
        st.error(f"Could not balance the selection: {result.error}")
    else:
        teams = result.teams
        cols = st.columns(min(len(teams), 4))
        for idx, team in enumerate(teams):
            with cols[idx % len(cols)]:
                _team_card(team, idx)

        st.divider()
        m1, m2 = st.columns(2)
        m1.metric("Total imbalance (team averages)", f"{total_imbalance(teams):.2f}")
        m2.metric("Solver objective (sum of max deviations)", f"{result.objective:.2f}")
        if result.max_diff:
            st.caption("Max deviation per balanced criterion: " + ", ".join(
                f"{k} {v:.1f}" for k, v in result.max_diff.items()
            ))
        if not st.session_state.app_config.includes_keeper:
            st.caption(f"{Criterion.KEEPER.label} is not balanced by the solver.")

        st.dataframe(fairness_dashboard_df(teams), use_container_width=True)

        d1, d2 = st.columns(2)
        with d1:
            st.download_button(
                "Download team sheet (PDF)",
                data=render_pdf(teams),
                file_name="teams.pdf",
                mime="application/pdf",
                use_container_width=True,
            )
        with d2:
            st.download_button(
                "Download report (TXT)",
                data=format_report(teams).encode("utf-8"),
                file_name="teams.txt",
                mime="text/plain",
                use_container_width=True,
            )
        st.code(format_copy_block(teams), language=None)

    _stage_nav(back_to=2)
