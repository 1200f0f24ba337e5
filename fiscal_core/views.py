"""
fiscal_core.views
Report/chart-ready series built from the summaries and filters.
Every builder recomputes from the records it is given.
"""
from __future__ import annotations
from datetime import datetime
from typing import Any, Dict, List, Optional, Sequence, Tuple

from .filters import filter_by_date_range, filter_by_year, search_text
from .records import ExpenseRecord, IncomeRecord
from .summaries import (
    group_by_date,
    group_by_month,
    group_by_year,
    month_sort_key,
    net_savings,
    sorted_month_keys,
    total_amount,
)
from .utils import month_label, percent_of, period_label

def year_bounds(year: int) -> Tuple[datetime, datetime]:
    return datetime(year, 1, 1), datetime(year, 12, 31, 23, 59, 59, 999999)

def savings_rate(income: float, expenses: float) -> Optional[float]:
    """Savings as a percentage of income; None when there is no income."""
    return percent_of(net_savings(income, expenses), income)

def yearly_summary(income: Sequence[IncomeRecord], expenses: Sequence[ExpenseRecord]) -> List[Dict[str, Any]]:
    income_by_year = group_by_year(income)
    expenses_by_year = group_by_year(expenses)
    years = sorted(set(income_by_year) | set(expenses_by_year))
    return [
        {
            "year": y,
            "income": income_by_year.get(y, 0.0),
            "expenses": expenses_by_year.get(y, 0.0),
        }
        for y in years
    ]

def yearly_breakdown(income: Sequence[IncomeRecord], expenses: Sequence[ExpenseRecord]) -> List[Dict[str, Any]]:
    """yearly_summary rows plus savings and savings_rate (None when income is 0)."""
    rows = []
    for y in yearly_summary(income, expenses):
        rows.append(dict(
            y,
            savings=net_savings(y["income"], y["expenses"]),
            savings_rate=savings_rate(y["income"], y["expenses"]),
        ))
    return rows

def _month_union(income: Sequence[IncomeRecord], expenses: Sequence[ExpenseRecord]):
    income_by_month = group_by_month(income)
    expenses_by_month = group_by_month(expenses)
    periods = sorted_month_keys(list(income_by_month) + list(expenses_by_month))
    return periods, income_by_month, expenses_by_month

def cash_flow_series(income: Sequence[IncomeRecord], expenses: Sequence[ExpenseRecord]) -> List[Dict[str, Any]]:
    periods, inc, exp = _month_union(income, expenses)
    return [
        {"period": p, "cash_flow": inc.get(p, 0.0) - exp.get(p, 0.0)}
        for p in periods
    ]

def monthly_trend(income: Sequence[IncomeRecord], expenses: Sequence[ExpenseRecord]) -> List[Dict[str, Any]]:
    periods, inc, exp = _month_union(income, expenses)
    out: List[Dict[str, Any]] = []
    for p in periods:
        year, month = month_sort_key(p)
        i, e = inc.get(p, 0.0), exp.get(p, 0.0)
        out.append({
            "period": p,
            "label": period_label(year, month),
            "income": i,
            "expenses": e,
            "savings": i - e,
        })
    return out

def daily_spending(expenses: Sequence[ExpenseRecord], start: Optional[datetime] = None,
                   end: Optional[datetime] = None, now: Optional[datetime] = None) -> List[Dict[str, Any]]:
    """Per-day expense totals between start (default Jan 1 this year) and end (default now)."""
    now = now or datetime.now()
    start = start or datetime(now.year, 1, 1)
    end = end or now
    by_day = group_by_date(filter_by_date_range(expenses, start, end))
    return [
        {"date": datetime.strptime(day, "%Y-%m-%d").date(), "amount": amount}
        for day, amount in sorted(by_day.items())
    ]

def _monthly_totals(records, year: int) -> List[float]:
    totals = [0.0] * 12
    for r in filter_by_year(records, year):
        totals[r.month] += r.amount
    return totals

def cumulative_savings(income: Sequence[IncomeRecord], expenses: Sequence[ExpenseRecord],
                       year: int) -> List[Dict[str, Any]]:
    inc = _monthly_totals(income, year)
    exp = _monthly_totals(expenses, year)
    running = 0.0
    out: List[Dict[str, Any]] = []
    for i in range(12):
        monthly = inc[i] - exp[i]
        running += monthly
        out.append({
            "month_label": month_label(i),
            "cumulative_savings": running,
            "monthly_savings": monthly,
        })
    return out

def monthly_breakdown(income: Sequence[IncomeRecord], expenses: Sequence[ExpenseRecord],
                      year: int) -> List[Dict[str, Any]]:
    inc = _monthly_totals(income, year)
    exp = _monthly_totals(expenses, year)
    return [
        {
            "month": month_label(i, long=True),
            "income": inc[i],
            "expenses": exp[i],
            "savings": inc[i] - exp[i],
            "savings_rate": savings_rate(inc[i], exp[i]),
        }
        for i in range(12)
    ]

def category_shares(top: Sequence[Dict[str, Any]], total_expenses: float) -> List[Dict[str, Any]]:
    return [
        {**item, "percentage": percent_of(item["amount"], total_expenses)}
        for item in top
    ]

def period_totals(income: Sequence[IncomeRecord], expenses: Sequence[ExpenseRecord]) -> Dict[str, Any]:
    ti = total_amount(income)
    te = total_amount(expenses)
    return {
        "income": ti,
        "expenses": te,
        "net_savings": net_savings(ti, te),
        "savings_rate": savings_rate(ti, te),
    }

SORT_FIELDS = ("date", "amount", "name", "category", "kind")

def transaction_listing(income: Sequence[IncomeRecord], expenses: Sequence[ExpenseRecord],
                        kind: str = "all", query: str = "", sort_field: str = "date",
                        descending: bool = True) -> List[Dict[str, Any]]:
    """Income and expense records merged into one table, filtered and sorted."""
    if sort_field not in SORT_FIELDS:
        raise ValueError(f"Unknown sort field: {sort_field}")

    rows: List[Dict[str, Any]] = []
    if kind in ("all", "income"):
        for r in search_text(income, query):
            rows.append({"kind": "income", "name": r.name, "category": r.source, "amount": r.amount,
                         "date": r.date, "formatted_date": r.formatted_date, "notes": ""})
    if kind in ("all", "expense"):
        for r in search_text(expenses, query):
            rows.append({"kind": "expense", "name": r.name, "category": r.category, "amount": r.amount,
                         "date": r.date, "formatted_date": r.formatted_date, "notes": r.notes})

    if sort_field in ("date", "amount"):
        key = lambda row: row[sort_field]
    else:
        key = lambda row: str(row[sort_field]).lower()
    return sorted(rows, key=key, reverse=descending)
