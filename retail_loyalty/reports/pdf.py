"""
PDF rendering for the sales summary report.
"""
from __future__ import annotations

import io
from decimal import Decimal

from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import getSampleStyleSheet
from reportlab.lib.units import mm
from reportlab.platypus import Paragraph, SimpleDocTemplate, Spacer

from ..config import get_config
from ..data.models import SalesSummary

MARGIN = 20 * mm


def _money(currency: str, amount: Decimal) -> str:
    return f"{currency} {amount:.2f}"


def render_summary_pdf(summary: SalesSummary, title: str = "Sales Summary Report") -> bytes:
    """
    Render a sales summary as a one-page PDF.

    Args:
        summary: Totals to print
        title: Heading at the top of the page

    Returns:
        PDF bytes
    """
    currency = get_config().currency_label
    styles = getSampleStyleSheet()

    buffer = io.BytesIO()
    doc = SimpleDocTemplate(
        buffer,
        pagesize=A4,
        rightMargin=MARGIN,
        leftMargin=MARGIN,
        topMargin=MARGIN,
        bottomMargin=MARGIN,
        title=title,
    )

    story = [
        Paragraph(title, styles["Title"]),
        Spacer(1, 6 * mm),
        Paragraph(f"Total Sales: {_money(currency, summary.total_sales)}", styles["Normal"]),
        Paragraph(f"Advance Payments: {_money(currency, summary.advance_payments)}", styles["Normal"]),
        Spacer(1, 6 * mm),
        Paragraph("Tax Breakdown:", styles["Normal"]),
    ]
    for rate, amount in summary.tax_details.items():
        story.append(Paragraph(f"&nbsp;&nbsp;- {rate}: {_money(currency, amount)}", styles["Normal"]))

    doc.build(story)
    pdf_bytes = buffer.getvalue()
    buffer.close()

    return pdf_bytes
