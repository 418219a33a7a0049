"""
pdf_report.py
=============
Printable birth-star and Vimshottari dasha report.
Uses ReportLab for PDF generation.

Install: pip install reportlab
"""

from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import getSampleStyleSheet, ParagraphStyle
from reportlab.lib.units import cm
from reportlab.lib.colors import HexColor
from reportlab.platypus import (
    SimpleDocTemplate, Paragraph, Spacer, Table, TableStyle, HRFlowable,
)
from reportlab.lib.enums import TA_CENTER, TA_LEFT
import io
from datetime import datetime

# ── Color palette ──────────────────────────────────────────────
INK       = HexColor("#14121C")
SAFFRON   = HexColor("#D98E2B")
SURFACE   = HexColor("#23202E")
MUTED     = HexColor("#6E6A7C")
ROW_A     = HexColor("#FAF7F2")
WHITE     = HexColor("#FFFFFF")
RULE      = HexColor("#DDDDDD")

TABLE_BASE = [
    ("FONTSIZE",      (0, 0), (-1, -1), 8.5),
    ("GRID",          (0, 0), (-1, -1), 0.3, RULE),
    ("TOPPADDING",    (0, 0), (-1, -1), 5),
    ("BOTTOMPADDING", (0, 0), (-1, -1), 5),
    ("LEFTPADDING",   (0, 0), (-1, -1), 6),
]

HEADER_ROW = [
    ("FONTNAME",       (0, 0), (-1, 0),  "Helvetica-Bold"),
    ("FONTNAME",       (0, 1), (-1, -1), "Helvetica"),
    ("BACKGROUND",     (0, 0), (-1, 0),  SURFACE),
    ("TEXTCOLOR",      (0, 0), (-1, 0),  SAFFRON),
    ("ROWBACKGROUNDS", (0, 1), (-1, -1), [ROW_A, WHITE]),
]


def generate_pdf_report(horoscope: dict, timeline: dict, name: str = "Native") -> bytes:
    """
    Build the report from the ``generate_horoscope`` and
    ``generate_dasha_timeline`` payloads of the same birth instant.
    Returns PDF as bytes.
    """
    buffer = io.BytesIO()
    doc = SimpleDocTemplate(
        buffer,
        pagesize=A4,
        rightMargin=2*cm, leftMargin=2*cm,
        topMargin=2*cm, bottomMargin=2*cm,
        title=f"Dasha Report — {name}",
        author="Graha.dev",
    )

    styles = getSampleStyleSheet()
    title_style = ParagraphStyle(
        "Title", parent=styles["Normal"],
        fontSize=26, fontName="Helvetica",
        textColor=INK, alignment=TA_CENTER, spaceAfter=6,
    )
    subtitle_style = ParagraphStyle(
        "Subtitle", parent=styles["Normal"],
        fontSize=11, fontName="Helvetica",
        textColor=MUTED, alignment=TA_CENTER, spaceAfter=20,
    )
    body_style = ParagraphStyle(
        "Body", parent=styles["Normal"],
        fontSize=9, fontName="Helvetica",
        textColor=INK, spaceAfter=4, leading=14,
    )
    footer_style = ParagraphStyle(
        "Footer", parent=styles["Normal"],
        fontSize=7, fontName="Helvetica-Oblique",
        textColor=MUTED, alignment=TA_CENTER, spaceBefore=20,
    )
    bar_style = ParagraphStyle(
        "Bar", parent=styles["Normal"],
        fontSize=11, fontName="Helvetica-Bold",
        textColor=WHITE, alignment=TA_LEFT,
    )

    def section_bar(text):
        return Table(
            [[Paragraph(text, bar_style)]],
            colWidths=[17*cm],
            style=TableStyle([
                ("BACKGROUND",    (0, 0), (-1, -1), INK),
                ("TOPPADDING",    (0, 0), (-1, -1), 8),
                ("BOTTOMPADDING", (0, 0), (-1, -1), 8),
                ("LEFTPADDING",   (0, 0), (-1, -1), 12),
            ]),
        )

    story = [
        Paragraph("GRAHA", title_style),
        Paragraph("Birth Star · Vimshottari Dasha Report", subtitle_style),
        HRFlowable(width="100%", thickness=0.5, color=SAFFRON),
        Spacer(1, 0.4*cm),
    ]

    # ── BIRTH DETAILS ─────────────────────────────────────────
    story.append(section_bar("BIRTH DETAILS"))
    story.append(Spacer(1, 0.3*cm))
    details = [
        ["Name", name, "Birth Date", timeline.get("birth_date", "—")],
        ["Sun Sign", horoscope.get("sun_sign", "—"), "Moon Sign", horoscope.get("moon_sign", "—")],
        ["Birth Star", horoscope.get("moon_star", "—"), "Pada", str(horoscope.get("moon_pada", "—"))],
    ]
    det_table = Table(details, colWidths=[3.5*cm, 5*cm, 3.5*cm, 5*cm])
    det_table.setStyle(TableStyle(TABLE_BASE + [
        ("FONTNAME",  (0, 0), (-1, -1), "Helvetica"),
        ("FONTNAME",  (0, 0), (0, -1), "Helvetica-Bold"),
        ("FONTNAME",  (2, 0), (2, -1), "Helvetica-Bold"),
        ("TEXTCOLOR", (0, 0), (0, -1), MUTED),
        ("TEXTCOLOR", (2, 0), (2, -1), MUTED),
    ]))
    story.append(det_table)
    story.append(Spacer(1, 0.5*cm))

    # ── DASHA ─────────────────────────────────────────────────
    story.append(section_bar("VIMSHOTTARI DASHA TIMELINE"))
    story.append(Spacer(1, 0.3*cm))

    cur = timeline.get("current", {})
    if cur.get("maha_dasha"):
        story.append(Paragraph(
            f"<b>Active Maha Dasha:</b> {cur['maha_dasha']} "
            f"({cur.get('maha_dasha_start', '—')} → {cur.get('maha_dasha_end', '—')})",
            body_style,
        ))
        if cur.get("antardasha"):
            story.append(Paragraph(
                f"<b>Antardasha (Bhukti):</b> {cur['antardasha']} "
                f"({cur.get('antardasha_start', '—')} → {cur.get('antardasha_end', '—')})",
                body_style,
            ))
        story.append(Spacer(1, 0.2*cm))

    rows = [["Maha Dasha Lord", "Start Date", "End Date", "Duration (yrs)"]]
    rows += [
        [p["lord"], p["start"], p["end"], f"{p['duration_years']:.2f}"]
        for p in timeline.get("periods", [])
    ]
    d_table = Table(rows, colWidths=[5*cm, 4*cm, 4*cm, 4*cm])
    d_table.setStyle(TableStyle(TABLE_BASE + HEADER_ROW))
    story.append(d_table)

    # ── FOOTER ────────────────────────────────────────────────
    story.append(HRFlowable(width="100%", thickness=0.5, color=SAFFRON))
    story.append(Paragraph(
        f"Generated by Graha.dev · {datetime.now().strftime('%d %B %Y')}",
        footer_style,
    ))
    story.append(Paragraph(
        "Positions use a fixed Lahiri ayanamsa and low-precision lunar/solar series. "
        "For informational purposes only.",
        footer_style,
    ))

    doc.build(story)
    buffer.seek(0)
    return buffer.read()
