"""
fiscal_core.excel_reports
Excel creation (openpyxl): one sheet per derived view.
"""
from __future__ import annotations
import logging
from datetime import datetime
from pathlib import Path
from typing import Any, List, Optional, Sequence

from .config import TOP_LIMIT
from .records import ExpenseRecord, IncomeRecord
from .summaries import top_categories
from .filters import filter_by_date_range
from .utils import timestamp_line
from .views import (
    category_shares,
    cumulative_savings,
    daily_spending,
    monthly_trend,
    period_totals,
    transaction_listing,
    year_bounds,
    yearly_summary,
)

MONEY_FORMAT = '#,##0'
PERCENT_FORMAT = '0.0"%"'

def require_openpyxl():
    try:
        from openpyxl import Workbook  # noqa
        from openpyxl.styles import Font  # noqa
        return Workbook, Font
    except ImportError:
        raise SystemExit("Missing dependency: openpyxl\nInstall with: pip3 install openpyxl\n")

def _sheet(wb, title: str, headers: List[str], rows: List[List[Any]], BOLD,
           money_cols: Sequence[int] = (), percent_cols: Sequence[int] = (), first: bool = False):
    ws = wb.active if first else wb.create_sheet()
    ws.title = title[:31]
    ws.append(headers)
    for c in range(1, len(headers) + 1):
        ws.cell(row=1, column=c).font = BOLD
    for row in rows:
        ws.append(row)
    for r in range(2, ws.max_row + 1):
        for c in money_cols:
            ws.cell(row=r, column=c).number_format = MONEY_FORMAT
        for c in percent_cols:
            ws.cell(row=r, column=c).number_format = PERCENT_FORMAT
    ws.column_dimensions["A"].width = 28
    for letter in ("B", "C", "D", "E", "F", "G"):
        ws.column_dimensions[letter].width = 16
    return ws

def write_excel_financial_report(
    income: Sequence[IncomeRecord],
    expenses: Sequence[ExpenseRecord],
    xlsx_path: Path,
    year: Optional[int] = None,
    now: Optional[datetime] = None,
) -> Path:
    Workbook, Font = require_openpyxl()
    BOLD = Font(bold=True)

    now = now or datetime.now()
    year = year or now.year
    start, end = year_bounds(year)
    year_income = filter_by_date_range(income, start, end)
    year_expenses = filter_by_date_range(expenses, start, end)
    totals = period_totals(year_income, year_expenses)

    wb = Workbook()

    ws = _sheet(wb, "Summary", ["Metric", "Value"], [
        ["Total Income", totals["income"]],
        ["Total Expenses", totals["expenses"]],
        ["Net Savings", totals["net_savings"]],
        # None -> empty cell (not applicable)
        ["Savings Rate", totals["savings_rate"]],
    ], BOLD, first=True)
    for r in range(2, 5):
        ws.cell(row=r, column=2).number_format = MONEY_FORMAT
    ws.cell(row=5, column=2).number_format = PERCENT_FORMAT
    ws.append([])
    ws.append([f"Financial Report - {year}"])
    ws.append([timestamp_line("Generated", now)])
    ws.cell(row=ws.max_row - 1, column=1).font = BOLD

    _sheet(wb, "Monthly Trend", ["Period", "Label", "Income", "Expenses", "Savings"], [
        [m["period"], m["label"], m["income"], m["expenses"], m["savings"]]
        for m in monthly_trend(income, expenses)
    ], BOLD, money_cols=(3, 4, 5))

    _sheet(wb, "Yearly Summary", ["Year", "Income", "Expenses"], [
        [y["year"], y["income"], y["expenses"]] for y in yearly_summary(income, expenses)
    ], BOLD, money_cols=(2, 3))

    top = category_shares(top_categories(year_expenses, TOP_LIMIT), totals["expenses"])
    _sheet(wb, "Top Categories", ["Category", "Amount", "Percentage"], [
        [t["category"], t["amount"], t["percentage"]] for t in top
    ], BOLD, money_cols=(2,), percent_cols=(3,))

    _sheet(wb, "Cumulative Savings", ["Month", "Monthly Savings", "Cumulative Savings"], [
        [c["month_label"], c["monthly_savings"], c["cumulative_savings"]]
        for c in cumulative_savings(income, expenses, year)
    ], BOLD, money_cols=(2, 3))

    _sheet(wb, "Daily Spending", ["Date", "Amount"], [
        [d["date"], d["amount"]] for d in daily_spending(expenses, start, end)
    ], BOLD, money_cols=(2,))

    _sheet(wb, "Transactions", ["Type", "Date", "Name", "Category", "Amount", "Notes"], [
        [t["kind"], t["formatted_date"], t["name"], t["category"], t["amount"], t["notes"]]
        for t in transaction_listing(year_income, year_expenses)
    ], BOLD, money_cols=(5,))

    wb.save(xlsx_path)
    logging.info("Excel report written: %s", xlsx_path)
    return xlsx_path
