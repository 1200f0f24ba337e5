"""
fiscal_core.config
Central configuration/constants.
"""
from __future__ import annotations

DEFAULT_INCOME_CSV = "income.csv"
DEFAULT_EXPENSE_CSV = "expenses.csv"

# outputs (filenames)
DEFAULT_PDF_REPORT_OUT = "financial-report-{year}.pdf"
DEFAULT_EXCEL_REPORT_OUT = "financial-report-{year}.xlsx"

REPORT_FOOTER = "Fiscal Visuals Financial Report"

# exact, case-sensitive CSV headers
INCOME_COLUMNS = ("Name", "Sources", "Amount", "Date")
EXPENSE_COLUMNS = ("Name", "Categories", "Amount", "Date", "Expenses", "Notes")
REQUIRED_COLUMNS = ("Amount", "Date")

UNKNOWN_NAME = "Unknown"
UNCATEGORIZED = "Uncategorized"

# symbols stripped before an amount is parsed
CURRENCY_SYMBOLS = ("₹", "$", "€", "£", "¥")

CURRENCY_SYMBOL = "₹"
# "indian" -> 12,34,567   "western" -> 1,234,567
CURRENCY_GROUPING = "indian"

DATE_FORMATS = (
    "%Y-%m-%d",
    "%m/%d/%Y",
    "%m/%d/%y",
    "%m-%d-%Y",
    "%m-%d-%y",
    "%Y-%m-%dT%H:%M:%S",
    "%Y-%m-%d %H:%M:%S",
)

TOP_LIMIT = 5
