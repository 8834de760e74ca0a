# FILE: pages/2_Reports_Exports.py
import streamlit as st
from balance_core.export_pdf import render_pdf
from balance_core.fairness import fairness_dashboard_df, teams_grid_df, total_imbalance
from balance_core.report import format_report

st.title("2. Reports & Exports")
result = st.session_state.get("result")
if result is None or not result.ok:
    st.warning("No balanced teams yet. Please balance a selection first.")
    st.stop()

teams = result.teams

st.dataframe(teams_grid_df(teams))
st.metric("Total imbalance", f"{total_imbalance(teams):.2f}")
st.dataframe(fairness_dashboard_df(teams))

csv_bytes = teams_grid_df(teams).to_csv(index=False).encode("utf-8")
st.download_button("Download Teams CSV", data=csv_bytes, file_name="teams.csv", mime="text/csv")

st.download_button("Download Report (TXT)", data=format_report(teams), file_name="teams.txt")

pdf_bytes = render_pdf(teams)
st.download_button("Download Team Sheet (PDF)", data=pdf_bytes, file_name="teams.pdf", mime="application/pdf")
