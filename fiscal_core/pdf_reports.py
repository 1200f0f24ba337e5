"""
fiscal_core.pdf_reports
PDF creation (reportlab). Figures come from summaries/views only.
"""
from __future__ import annotations
import logging
from datetime import datetime
from pathlib import Path
from typing import Any, List, Optional, Sequence

from .config import REPORT_FOOTER, TOP_LIMIT
from .filters import filter_by_date_range
from .records import ExpenseRecord, IncomeRecord
from .summaries import notable_transactions, top_categories
from .utils import fmt_amount, fmt_percent, timestamp_line
from .views import category_shares, monthly_breakdown, period_totals, year_bounds, yearly_breakdown

def require_reportlab():
    try:
        from reportlab.lib.pagesizes import A4  # noqa
        from reportlab.lib.units import inch  # noqa
        from reportlab.lib import colors  # noqa
        from reportlab.lib.styles import getSampleStyleSheet  # noqa
        from reportlab.pdfgen import canvas  # noqa
        from reportlab.platypus import (  # noqa
            SimpleDocTemplate, Paragraph, Spacer, Table, TableStyle, PageBreak
        )
        return (A4, inch, colors, getSampleStyleSheet, canvas,
                SimpleDocTemplate, Paragraph, Spacer, Table, TableStyle, PageBreak)
    except ImportError:
        raise SystemExit("Missing dependency: reportlab\nInstall with: pip3 install reportlab\n")

def _numbered_canvas_class(canvas_mod, footer: str):
    class NumberedCanvas(canvas_mod.Canvas):
        """Defers page output so every page can show 'Page i of n'."""

        def __init__(self, *args, **kwargs):
            super().__init__(*args, **kwargs)
            self._saved_page_states: List[dict] = []

        def showPage(self):
            self._saved_page_states.append(dict(self.__dict__))
            self._startPage()

        def save(self):
            page_count = len(self._saved_page_states)
            for state in self._saved_page_states:
                self.__dict__.update(state)
                self._draw_footer(page_count)
                super().showPage()
            super().save()

        def _draw_footer(self, page_count: int):
            width, _height = self._pagesize
            self.saveState()
            self.setFont("Helvetica", 8)
            self.setFillGray(0.6)
            self.drawCentredString(width / 2.0, 28, footer)
            self.drawRightString(width - 40, 28, f"Page {self._pageNumber} of {page_count}")
            self.restoreState()

    return NumberedCanvas

def _style_grid_table(TableStyle, colors, header_color):
    return TableStyle([
        ("BACKGROUND", (0, 0), (-1, 0), header_color),
        ("TEXTCOLOR", (0, 0), (-1, 0), colors.white),
        ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
        ("GRID", (0, 0), (-1, -1), 0.25, colors.grey),
        ("VALIGN", (0, 0), (-1, -1), "MIDDLE"),
        ("ROWBACKGROUNDS", (0, 1), (-1, -1), [colors.whitesmoke, colors.white]),
    ])

def _table(rows: List[List[str]], col_widths, style, Table, font_size: int = 9):
    if len(rows) == 1:
        rows = rows + [["(none)"] + [""] * (len(rows[0]) - 1)]
    tbl = Table(rows, colWidths=col_widths, repeatRows=1)
    style.add("FONTSIZE", (0, 0), (-1, -1), font_size)
    tbl.setStyle(style)
    return tbl

def yearly_table_rows(yearly: Sequence[dict]) -> List[List[str]]:
    rows = [["Year", "Income", "Expenses", "Savings", "Savings Rate"]]
    for y in yearly:
        rows.append([
            str(y["year"]),
            fmt_amount(y["income"]),
            fmt_amount(y["expenses"]),
            fmt_amount(y["savings"]),
            fmt_percent(y["savings_rate"]),
        ])
    return rows

def write_pdf_financial_report(
    income: Sequence[IncomeRecord],
    expenses: Sequence[ExpenseRecord],
    pdf_path: Path,
    year: Optional[int] = None,
    now: Optional[datetime] = None,
) -> Path:
    """
    Paginated yearly report: summary totals, top categories, notable
    transactions, yearly summary, monthly breakdown and full listings.
    """
    (A4, inch, colors, getSampleStyleSheet, canvas,
     SimpleDocTemplate, Paragraph, Spacer, Table, TableStyle, PageBreak) = require_reportlab()

    now = now or datetime.now()
    year = year or now.year
    start, end = year_bounds(year)
    year_income = filter_by_date_range(income, start, end)
    year_expenses = filter_by_date_range(expenses, start, end)

    totals = period_totals(year_income, year_expenses)
    top = category_shares(top_categories(year_expenses, TOP_LIMIT), totals["expenses"])
    notable = notable_transactions(year_income, year_expenses, TOP_LIMIT)
    yearly = yearly_breakdown(income, expenses)
    monthly = monthly_breakdown(year_income, year_expenses, year)

    dark = colors.Color(66 / 255, 66 / 255, 66 / 255)
    green = colors.Color(71 / 255, 129 / 255, 81 / 255)
    red = colors.Color(200 / 255, 70 / 255, 70 / 255)

    doc = SimpleDocTemplate(
        str(pdf_path),
        pagesize=A4,
        leftMargin=0.6 * inch,
        rightMargin=0.6 * inch,
        topMargin=0.6 * inch,
        bottomMargin=0.75 * inch,
        title=f"Financial Report - {year}",
    )
    styles = getSampleStyleSheet()

    story: List[Any] = []
    story.append(Paragraph(f"Financial Report - {year}", styles["Title"]))
    story.append(Paragraph(timestamp_line("Generated", now), styles["Normal"]))
    story.append(Spacer(1, 0.2 * inch))

    story.append(Paragraph("Summary", styles["Heading2"]))
    story.append(Paragraph(f"Total Income: <b>{fmt_amount(totals['income'])}</b>", styles["Normal"]))
    story.append(Paragraph(f"Total Expenses: <b>{fmt_amount(totals['expenses'])}</b>", styles["Normal"]))
    story.append(Paragraph(f"Net Savings: <b>{fmt_amount(totals['net_savings'])}</b>", styles["Normal"]))
    story.append(Paragraph(f"Savings Rate: <b>{fmt_percent(totals['savings_rate'])}</b>", styles["Normal"]))
    story.append(Spacer(1, 0.2 * inch))

    story.append(Paragraph("Top Spending Categories", styles["Heading2"]))
    rows = [["Category", "Amount", "Percentage"]]
    for i, item in enumerate(top, start=1):
        rows.append([f"{i}. {item['category']}", fmt_amount(item["amount"]), fmt_percent(item["percentage"])])
    st = _style_grid_table(TableStyle, colors, dark)
    st.add("ALIGN", (1, 1), (-1, -1), "RIGHT")
    story.append(_table(rows, [3.6 * inch, 1.5 * inch, 1.3 * inch], st, Table, 10))
    story.append(Spacer(1, 0.2 * inch))

    story.append(Paragraph("Notable Transactions", styles["Heading2"]))
    story.append(Paragraph("Highest Income Transactions:", styles["Normal"]))
    rows = [["Name", "Source", "Amount", "Date"]]
    for i, r in enumerate(notable["top_income"], start=1):
        rows.append([f"{i}. {r.name}", r.source, fmt_amount(r.amount), r.formatted_date])
    st = _style_grid_table(TableStyle, colors, green)
    st.add("ALIGN", (2, 1), (2, -1), "RIGHT")
    story.append(_table(rows, [2.2 * inch, 2.2 * inch, 1.1 * inch, 1.0 * inch], st, Table))
    story.append(Spacer(1, 0.12 * inch))

    story.append(Paragraph("Highest Expense Transactions:", styles["Normal"]))
    rows = [["Name", "Category", "Amount", "Date"]]
    for i, r in enumerate(notable["top_expenses"], start=1):
        rows.append([f"{i}. {r.name}", r.category, fmt_amount(r.amount), r.formatted_date])
    st = _style_grid_table(TableStyle, colors, red)
    st.add("ALIGN", (2, 1), (2, -1), "RIGHT")
    story.append(_table(rows, [2.2 * inch, 2.2 * inch, 1.1 * inch, 1.0 * inch], st, Table))

    story.append(PageBreak())

    story.append(Paragraph("Yearly Summary", styles["Heading2"]))
    rows = yearly_table_rows(yearly)
    st = _style_grid_table(TableStyle, colors, dark)
    st.add("ALIGN", (1, 1), (-1, -1), "RIGHT")
    story.append(_table(rows, [1.1 * inch, 1.4 * inch, 1.4 * inch, 1.4 * inch, 1.2 * inch], st, Table, 10))
    story.append(Spacer(1, 0.2 * inch))

    story.append(Paragraph(f"Monthly Breakdown ({year})", styles["Heading2"]))
    rows = [["Month", "Income", "Expenses", "Savings", "Savings Rate"]]
    for m in monthly:
        rows.append([
            m["month"],
            fmt_amount(m["income"]),
            fmt_amount(m["expenses"]),
            fmt_amount(m["savings"]),
            fmt_percent(m["savings_rate"]),
        ])
    st = _style_grid_table(TableStyle, colors, dark)
    st.add("ALIGN", (1, 1), (-1, -1), "RIGHT")
    story.append(_table(rows, [1.4 * inch, 1.3 * inch, 1.3 * inch, 1.3 * inch, 1.2 * inch], st, Table))

    story.append(PageBreak())

    story.append(Paragraph(f"All Income Transactions ({year})", styles["Heading2"]))
    if year_income:
        rows = [["#", "Name", "Source", "Amount", "Date"]]
        for i, r in enumerate(year_income, start=1):
            rows.append([str(i), r.name, r.source, fmt_amount(r.amount), r.formatted_date])
        st = _style_grid_table(TableStyle, colors, green)
        st.add("ALIGN", (3, 1), (3, -1), "RIGHT")
        story.append(_table(rows, [0.4 * inch, 2.2 * inch, 2.1 * inch, 1.1 * inch, 0.9 * inch], st, Table, 8))
    else:
        story.append(Paragraph("No income transactions found for this year.", styles["Normal"]))
    story.append(Spacer(1, 0.2 * inch))

    story.append(Paragraph(f"All Expense Transactions ({year})", styles["Heading2"]))
    if year_expenses:
        rows = [["#", "Name", "Category", "Amount", "Date", "Notes"]]
        for i, r in enumerate(year_expenses, start=1):
            rows.append([str(i), r.name, r.category, fmt_amount(r.amount), r.formatted_date, r.notes])
        st = _style_grid_table(TableStyle, colors, red)
        st.add("ALIGN", (3, 1), (3, -1), "RIGHT")
        story.append(_table(rows, [0.4 * inch, 1.6 * inch, 1.4 * inch, 1.0 * inch, 0.8 * inch, 1.5 * inch], st, Table, 8))
    else:
        story.append(Paragraph("No expense transactions found for this year.", styles["Normal"]))

    doc.build(story, canvasmaker=_numbered_canvas_class(canvas, REPORT_FOOTER))
    logging.info("PDF report written: %s", pdf_path)
    return pdf_path
