"""
Generate a PDF report of verification violations.
"""

from __future__ import annotations

from collections import Counter

from reportlab.lib.pagesizes import A4
from reportlab.lib.units import cm
from reportlab.platypus import SimpleDocTemplate, Paragraph, Spacer, PageBreak
from reportlab.lib.styles import getSampleStyleSheet

from .utils import truncate
from .verify import UnexpectedAnomaly, VerificationResult


def _escape_for_rl(s: str, truncate_chars: int = 4000) -> str:
    """Basic escaping for ReportLab Paragraph markup."""
    s = truncate(s, truncate_chars)
    s = s.replace("&", "&amp;").replace("<", "&lt;").replace(">", "&gt;")
    return s.replace("\n", "<br/>")


def _code(s: str, truncate_chars: int) -> str:
    body = _escape_for_rl(s, truncate_chars).replace(" ", "&nbsp;")
    return f"<font name='Courier'>{body}</font>"


def save_verification_report_pdf(
    result: VerificationResult,
    out_pdf_path: str,
    *,
    title: str = "Anomaly Verification Report",
    truncate_chars: int = 4000,
) -> None:
    styles = getSampleStyleSheet()
    story = []

    story.append(Paragraph(f"<b>{_escape_for_rl(title)}</b>", styles["Title"]))
    story.append(Spacer(1, 0.5 * cm))

    story.append(Paragraph(f"<b>Status:</b> {'PASSED' if result.ok else 'FAILED'}", styles["Normal"]))
    story.append(Paragraph(f"<b>Violations:</b> {len(result.violations)}", styles["Normal"]))
    for kind, count in sorted(Counter(v.kind for v in result.violations).items()):
        story.append(Paragraph(f"<b>{kind}:</b> {count}", styles["Normal"]))

    for i, v in enumerate(result.violations, start=1):
        story.append(PageBreak())
        story.append(
            Paragraph(
                f"<b>Violation #{i}</b>: {v.kind}: {_escape_for_rl(v.label)}",
                styles["Heading3"],
            )
        )
        story.append(Spacer(1, 0.2 * cm))
        story.append(Paragraph(_escape_for_rl(v.message), styles["Normal"]))
        story.append(Spacer(1, 0.3 * cm))

        if isinstance(v, UnexpectedAnomaly):
            story.append(Paragraph("<b>Record:</b>", styles["Normal"]))
            story.append(Paragraph(_code(v.record, truncate_chars), styles["BodyText"]))
            if v.new_schema is not None:
                story.append(Spacer(1, 0.2 * cm))
                story.append(Paragraph("<b>New schema:</b>", styles["Normal"]))
                story.append(Paragraph(_code(v.new_schema, truncate_chars), styles["BodyText"]))
            continue

        if v.expected:
            story.append(Paragraph("<b>Expected:</b>", styles["Normal"]))
            story.append(Paragraph(_code(v.expected, truncate_chars), styles["BodyText"]))
            story.append(Spacer(1, 0.2 * cm))

        if v.actual:
            story.append(Paragraph("<b>Actual:</b>", styles["Normal"]))
            story.append(Paragraph(_code(v.actual, truncate_chars), styles["BodyText"]))
            story.append(Spacer(1, 0.2 * cm))

    doc = SimpleDocTemplate(
        out_pdf_path,
        pagesize=A4,
        leftMargin=2 * cm,
        rightMargin=2 * cm,
        topMargin=2 * cm,
        bottomMargin=2 * cm,
    )
    doc.build(story)
