# FILE: pages/1_Roster.py
import streamlit as st
import pandas as pd
from balance_core.aliases import map_headers
from balance_core.io import dataframe_to_roster, roster_to_dataframe
from balance_core.validation import validate_roster

st.title("1. Roster: Import & Review")
st.write("Upload a CSV with one row per player, or load the sample roster from the main page.")

uploaded_file = st.file_uploader("Upload roster CSV", type=["csv"])
if uploaded_file:
    df = pd.read_csv(uploaded_file)
    _, mapping = map_headers(df)
    mapping_report = ", ".join(f"{col}→{new}" for col, new in mapping.items() if new)
    st.success(f"Header mapping: {mapping_report}")
    ignored = [col for col, new in mapping.items() if new is None]
    if ignored:
        st.caption(f"Ignored columns: {', '.join(ignored)}")
    try:
        st.session_state.roster = dataframe_to_roster(df)
    except ValueError as e:
        st.error(str(e))

roster = st.session_state.get("roster") or []
if roster:
    st.dataframe(roster_to_dataframe(roster))
    for err in validate_roster(roster):
        st.warning(err)
else:
    st.write("No roster loaded.")
