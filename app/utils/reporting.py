from __future__ import annotations

import logging
from datetime import datetime, timezone
from html import escape
from io import BytesIO
from typing import Any

from reportlab.lib import colors
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import getSampleStyleSheet
from reportlab.platypus import Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle

logger = logging.getLogger(__name__)

LEVEL_COLORS = {
    "low": "#16A34A",
    "medium": "#CA8A04",
    "high": "#EA580C",
    "very-high": "#DC2626",
}

_HEADER_STYLE = [
    ("BACKGROUND", (0, 0), (-1, 0), colors.HexColor("#111827")),
    ("TEXTCOLOR", (0, 0), (-1, 0), colors.whitesmoke),
    ("GRID", (0, 0), (-1, -1), 0.5, colors.grey),
    ("BACKGROUND", (0, 1), (-1, -1), colors.HexColor("#F8FAFC")),
]


def _factor_rows(vm: dict[str, Any]) -> list[list[str]]:
    rows = [["Factor", "Value", "Weight", "Direction"]]
    for row in vm.get("factor_rows") or []:
        rows.append(
            [
                str(row["label"]),
                f"{int(row['value'])} / 100",
                f"{float(row['weight']):.0%}",
                "protective" if row.get("protective") else "risk",
            ]
        )
    return rows


def _comparison_rows(vm: dict[str, Any]) -> list[list[str]]:
    comparison = vm.get("comparison") or {}
    current = comparison.get("current") or {}
    future = comparison.get("future") or {}
    future_year = str(comparison.get("future_year") or "")
    rows = [["", "Current", f"Projected {future_year}".strip()]]
    rows.append(["Overall", str(current.get("overall", "")), str(future.get("overall", ""))])
    rows.append(["Risk level", str(current.get("risk_label", "")), str(future.get("risk_label", ""))])
    current_factors = current.get("factors") or {}
    future_factors = future.get("factors") or {}
    for row in vm.get("factor_rows") or []:
        name = row["name"]
        rows.append([str(row["label"]), str(current_factors.get(name, "")), str(future_factors.get(name, ""))])
    return rows


def build_division_report_pdf(vm: dict[str, Any]) -> bytes:
    """Render a one-page risk sheet from a division detail view model."""
    division = vm["division"]
    assessment = vm["assessment"]
    view_label = "Current" if vm.get("view") == "current" else f"Projected {vm.get('year')}"

    buffer = BytesIO()
    doc = SimpleDocTemplate(buffer, pagesize=A4, leftMargin=28, rightMargin=28, topMargin=24)
    styles = getSampleStyleSheet()

    story = []
    story.append(Paragraph(f"Division Risk Report - {escape(division['name'])}", styles["Title"]))
    story.append(
        Paragraph(
            f"County: {escape(division['county'])} | Population: {int(division['population']):,} | View: {view_label}",
            styles["Normal"],
        )
    )
    story.append(Paragraph(f"Generated: {datetime.now(timezone.utc).isoformat()}", styles["Normal"]))
    story.append(Spacer(1, 10))

    level_color = LEVEL_COLORS.get(str(assessment["risk_level"]), "#111827")
    story.append(Paragraph("Overall Risk Assessment", styles["Heading2"]))
    story.append(
        Paragraph(
            f"<font size=18 color='{level_color}'><b>{int(assessment['overall'])}</b></font> / 100 "
            f"- {escape(str(assessment['risk_label']))} Risk",
            styles["BodyText"],
        )
    )
    if assessment.get("is_reference_baseline") and assessment.get("computed_overall") != assessment.get("overall"):
        story.append(
            Paragraph(
                f"Reference baseline score. Current weighting gives {int(assessment['computed_overall'])}.",
                styles["Italic"],
            )
        )
    story.append(Spacer(1, 10))

    story.append(Paragraph("Risk Factors", styles["Heading2"]))
    factor_table = Table(_factor_rows(vm), hAlign="LEFT")
    factor_table.setStyle(TableStyle(_HEADER_STYLE))
    story.append(factor_table)
    story.append(Spacer(1, 10))

    story.append(Paragraph("Current vs. Future", styles["Heading2"]))
    comparison_table = Table(_comparison_rows(vm), hAlign="LEFT")
    comparison_table.setStyle(TableStyle(_HEADER_STYLE))
    story.append(comparison_table)

    doc.build(story)
    logger.info("Report rendered for division %s (%s)", division["id"], view_label)
    return buffer.getvalue()
