"""Shared fixtures: a fixed clock and small raw income/expense tables.

Normalization falls back to "now" for unreadable dates, so every test that
builds records passes ``NOW`` explicitly to keep results deterministic.
"""

from __future__ import annotations

from datetime import datetime

import pytest

from fiscal_core import config
from fiscal_core.records import normalize_expense, normalize_income

NOW = datetime(2024, 6, 15, 12, 0, 0)


@pytest.fixture(autouse=True)
def _default_currency(monkeypatch: pytest.MonkeyPatch) -> None:
    # the CLI may override these module settings; keep each test on the defaults
    monkeypatch.setattr(config, "CURRENCY_SYMBOL", "₹")
    monkeypatch.setattr(config, "CURRENCY_GROUPING", "indian")


@pytest.fixture
def now() -> datetime:
    return NOW


@pytest.fixture
def income_rows() -> list[dict[str, str]]:
    return [
        {"Name": "Acme Corp", "Sources": "[Salary](https://example.com/salary)", "Amount": "₹50,000", "Date": "2024-01-31"},
        {"Name": "Acme Corp", "Sources": "Salary", "Amount": "50,000", "Date": "2024-02-29"},
        {"Name": "", "Sources": "Freelance (https%3A%2F%2Fexample.com)", "Amount": "$12,500.50", "Date": "03/10/2024"},
        {"Name": "Bank", "Sources": "Interest", "Amount": "1,200", "Date": "2023-12-31"},
    ]


@pytest.fixture
def expense_rows() -> list[dict[str, str]]:
    return [
        {"Name": "Landlord", "Categories": "Rent", "Amount": "₹20,000", "Date": "2024-01-05",
         "Expenses": "Housing", "Notes": "January rent"},
        {"Name": "FreshMart", "Categories": "[Groceries](https://example.com/g)", "Amount": "4,500", "Date": "2024-01-12",
         "Expenses": "Food", "Notes": ""},
        {"Name": "FreshMart", "Categories": "Groceries", "Amount": "3,000", "Date": "2024-02-03",
         "Expenses": "Food", "Notes": "weekly shop"},
        {"Name": "Landlord", "Categories": "Rent", "Amount": "20,000", "Date": "2024-02-05",
         "Expenses": "Housing", "Notes": ""},
        {"Name": "Cinema", "Categories": "", "Amount": "800", "Date": "2023-11-20",
         "Expenses": "", "Notes": "Movie night"},
    ]


@pytest.fixture
def income(income_rows, now):
    return normalize_income(income_rows, now=now)


@pytest.fixture
def expenses(expense_rows, now):
    return normalize_expense(expense_rows, now=now)
