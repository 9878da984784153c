"""
Assessment PDF report rendering.

Builds an A4 report in memory from the stored assessment results: a header
with the business name and assessment date, summary cards, a theme table and
a footer.
"""

import html
import io
import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional

from reportlab.lib import colors
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
from reportlab.lib.units import mm
from reportlab.platypus import HRFlowable, Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle

logger = logging.getLogger(__name__)

BAND_COLORS = {
    "needs_improvement": "#E53E3E",
    "below_average": "#ED8936",
    "moderate": "#ECC94B",
    "strong": "#48BB78",
}
DEFAULT_BAND_COLOR = "#718096"

PRIMARY = colors.HexColor("#1A365D")
ACCENT = colors.HexColor("#2B6CB0")
MUTED = colors.HexColor("#718096")
PANEL = colors.HexColor("#F7FAFC")
LINE = colors.HexColor("#E2E8F0")


@dataclass
class ReportData:
    business_name: str
    sector: str
    completed_at: Optional[datetime]
    summary: Dict[str, Any]
    theme_scores: List[Dict[str, Any]] = field(default_factory=list)


def band_color(band: Optional[str]) -> str:
    return BAND_COLORS.get(band or "", DEFAULT_BAND_COLOR)


def band_label(band: Optional[str]) -> str:
    """'needs_improvement' -> 'Needs Improvement'; missing band -> 'N/A'."""
    if not band:
        return "N/A"
    return band.replace("_", " ").title()


def _fmt(value: Optional[float], digits: int) -> str:
    if value is None:
        return "-"
    return f"{value:.{digits}f}"


def build_styles() -> Dict[str, ParagraphStyle]:
    sample = getSampleStyleSheet()
    return {
        "title": ParagraphStyle(
            "ReportTitle", parent=sample["Title"], textColor=colors.white, fontSize=22, leading=26
        ),
        "header_meta": ParagraphStyle(
            "HeaderMeta", parent=sample["Normal"], textColor=colors.white, alignment=1, fontSize=11
        ),
        "card_title": ParagraphStyle(
            "CardTitle", parent=sample["Normal"], textColor=colors.HexColor("#4A5568"), alignment=1, fontSize=9
        ),
        "card_value": ParagraphStyle(
            "CardValue", parent=sample["Normal"], textColor=ACCENT, alignment=1, fontSize=20, leading=24,
            fontName="Helvetica-Bold",
        ),
        "card_label": ParagraphStyle(
            "CardLabel", parent=sample["Normal"], textColor=MUTED, alignment=1, fontSize=9
        ),
        "section": ParagraphStyle(
            "Section", parent=sample["Heading2"], textColor=PRIMARY, spaceBefore=12, spaceAfter=6
        ),
        "cell": ParagraphStyle("Cell", parent=sample["Normal"], fontSize=9, leading=11),
        "footer": ParagraphStyle(
            "Footer", parent=sample["Normal"], textColor=MUTED, alignment=1, fontSize=8
        ),
    }


def _summary_cards(data: ReportData, styles: Dict[str, ParagraphStyle], width: float) -> Table:
    summary = data.summary
    band = summary.get("performance_band")
    band_style = ParagraphStyle(
        "BandValue", parent=styles["card_value"], textColor=colors.HexColor(band_color(band)), fontSize=14
    )
    sector_style = ParagraphStyle("SectorValue", parent=styles["card_value"], fontSize=12, leading=15)
    cards = [
        [
            Paragraph("COMPOSITE SCORE", styles["card_title"]),
            Paragraph("PERFORMANCE BAND", styles["card_title"]),
            Paragraph("BUSINESS SECTOR", styles["card_title"]),
        ],
        [
            Paragraph(f"{_fmt(summary.get('composite_mean'), 2)}/5", styles["card_value"]),
            Paragraph(html.escape(band_label(band)), band_style),
            Paragraph(html.escape(data.sector or "-"), sector_style),
        ],
        [
            Paragraph(f"{_fmt(summary.get('composite_percentage'), 1)}%", styles["card_label"]),
            Paragraph("", styles["card_label"]),
            Paragraph("", styles["card_label"]),
        ],
    ]
    table = Table(cards, colWidths=[width / 3] * 3)
    table.setStyle(
        TableStyle(
            [
                ("BACKGROUND", (0, 0), (-1, -1), PANEL),
                ("BOX", (0, 0), (0, -1), 1, LINE),
                ("BOX", (1, 0), (1, -1), 1, LINE),
                ("BOX", (2, 0), (2, -1), 1, LINE),
                ("VALIGN", (0, 0), (-1, -1), "MIDDLE"),
                ("TOPPADDING", (0, 0), (-1, -1), 6),
                ("BOTTOMPADDING", (0, 0), (-1, -1), 6),
            ]
        )
    )
    return table


def _theme_table(data: ReportData, styles: Dict[str, ParagraphStyle], width: float) -> Table:
    rows: List[List[Any]] = [["Theme", "Mean Score", "Percentage", "Performance Band"]]
    band_cells = []
    for idx, ts in enumerate(data.theme_scores, start=1):
        band = ts.get("performance_band")
        rows.append(
            [
                Paragraph(html.escape(str(ts.get("theme_name") or ts.get("theme_id"))), styles["cell"]),
                _fmt(ts.get("mean_score"), 2),
                f"{_fmt(ts.get('percentage'), 1)}%",
                band_label(band),
            ]
        )
        band_cells.append(("TEXTCOLOR", (3, idx), (3, idx), colors.HexColor(band_color(band))))

    table = Table(rows, colWidths=[width * 0.46, width * 0.16, width * 0.16, width * 0.22], repeatRows=1)
    table.setStyle(
        TableStyle(
            [
                ("BACKGROUND", (0, 0), (-1, 0), PANEL),
                ("TEXTCOLOR", (0, 0), (-1, 0), PRIMARY),
                ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
                ("FONTSIZE", (0, 0), (-1, -1), 9),
                ("LINEBELOW", (0, 0), (-1, -1), 0.5, LINE),
                ("VALIGN", (0, 0), (-1, -1), "MIDDLE"),
                ("TOPPADDING", (0, 0), (-1, -1), 6),
                ("BOTTOMPADDING", (0, 0), (-1, -1), 6),
            ]
            + band_cells
        )
    )
    return table


def render_assessment_pdf(data: ReportData) -> bytes:
    """Render the assessment report and return the PDF bytes."""
    styles = build_styles()
    output = io.BytesIO()
    doc = SimpleDocTemplate(
        output,
        pagesize=A4,
        leftMargin=20 * mm,
        rightMargin=20 * mm,
        topMargin=20 * mm,
        bottomMargin=20 * mm,
        title=f"{data.business_name} Assessment Report",
        author="SME Self-Assessment",
    )

    assessed_on = data.completed_at.strftime("%d %B %Y") if data.completed_at else "-"
    header = Table(
        [
            [Paragraph("Business Performance Assessment Report", styles["title"])],
            [Paragraph(html.escape(data.business_name), styles["header_meta"])],
            [Paragraph(f"Assessment Date: {assessed_on}", styles["header_meta"])],
        ],
        colWidths=[doc.width],
    )
    header.setStyle(
        TableStyle(
            [
                ("BACKGROUND", (0, 0), (-1, -1), PRIMARY),
                ("TOPPADDING", (0, 0), (-1, 0), 14),
                ("BOTTOMPADDING", (0, -1), (-1, -1), 14),
            ]
        )
    )

    story: List[Any] = [
        header,
        Spacer(1, 14),
        _summary_cards(data, styles, doc.width),
        Paragraph("Theme Scores", styles["section"]),
    ]
    if data.theme_scores:
        story.append(_theme_table(data, styles, doc.width))
    else:
        story.append(Paragraph("No theme scores available.", styles["cell"]))

    story.extend(
        [
            Spacer(1, 18),
            HRFlowable(width="100%", color=LINE, thickness=1.5, spaceAfter=6),
            Paragraph(
                f"Generated on {datetime.now().strftime('%d %B %Y')} - SME Self-Assessment Platform",
                styles["footer"],
            ),
        ]
    )

    doc.build(story)
    pdf_bytes = output.getvalue()
    logger.info(f"Rendered assessment report for '{data.business_name}' ({len(pdf_bytes)} bytes)")
    return pdf_bytes
