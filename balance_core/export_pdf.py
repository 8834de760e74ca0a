# balance_core/export_pdf.py
from __future__ import annotations
from typing import Sequence
import io
from reportlab.lib.pagesizes import letter, landscape
from reportlab.lib import colors
from reportlab.pdfgen import canvas
from reportlab.platypus import Table, TableStyle

from .fairness import fairness_dashboard_df, teams_grid_df, total_imbalance
from .models import Player


def render_pdf(teams: Sequence[Sequence[Player]], title: str = "Balanced Teams") -> bytes:
    buf = io.BytesIO()
    page_size = landscape(letter)
    c = canvas.Canvas(buf, pagesize=page_size)

    c.setFont("Helvetica-Bold", 16)
    c.drawString(40, page_size[1] - 40, title)
    c.setFont("Helvetica", 10)
    c.drawString(40, page_size[1] - 58, f"Total imbalance: {total_imbalance(teams):.2f}")

    grid = teams_grid_df(teams)
    data = [list(grid.columns)] + grid.values.tolist()

    t = Table(data, repeatRows=1)
    t.setStyle(TableStyle([
        ("BACKGROUND", (0, 0), (-1, 0), colors.lightgrey),
        ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
        ("FONTSIZE", (0, 0), (-1, -1), 10),
        ("GRID", (0, 0), (-1, -1), 0.5, colors.grey),
        ("ALIGN", (0, 0), (-1, -1), "LEFT"),
    ]))
    _, table_h = t.wrapOn(c, page_size[0] - 80, page_size[1] - 100)
    y = page_size[1] - 80 - table_h
    t.drawOn(c, 40, y)

    # Per-team averages under the roster grid
    dash = fairness_dashboard_df(teams)
    avg_cols = ["team", "team_average"] + [col for col in dash.columns if col.endswith(" avg")]
    stats = [avg_cols] + dash[avg_cols].values.tolist()
    s = Table(stats, repeatRows=1)
    s.setStyle(TableStyle([
        ("BACKGROUND", (0, 0), (-1, 0), colors.lightgrey),
        ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
        ("FONTSIZE", (0, 0), (-1, -1), 9),
        ("GRID", (0, 0), (-1, -1), 0.5, colors.grey),
    ]))
    _, stats_h = s.wrapOn(c, page_size[0] - 80, y - 40)
    s.drawOn(c, 40, max(20, y - 20 - stats_h))

    c.showPage()
    c.save()
    return buf.getvalue()
