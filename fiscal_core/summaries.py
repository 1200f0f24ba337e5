"""
fiscal_core.summaries
Totals, grouping and ranking over normalized records.
"""
from __future__ import annotations
from typing import Any, Callable, Dict, Iterable, List, Sequence, Tuple, TypeVar

from .config import TOP_LIMIT, UNCATEGORIZED
from .records import ExpenseRecord, IncomeRecord

R = TypeVar("R")

def total_amount(records: Iterable[Any]) -> float:
    return sum((r.amount for r in records), 0.0)

def net_savings(income_total: float, expense_total: float) -> float:
    return income_total - expense_total

def group_by_key(records: Iterable[R], key_fn: Callable[[R], str],
                 fallback_key: str = UNCATEGORIZED) -> Dict[str, float]:
    """Sum amounts per key. Keys keep first-seen order; blank keys go to fallback_key."""
    grouped: Dict[str, float] = {}
    for r in records:
        k = key_fn(r) or fallback_key
        grouped[k] = grouped.get(k, 0.0) + r.amount
    return grouped

def group_by_category(expenses: Iterable[ExpenseRecord]) -> Dict[str, float]:
    return group_by_key(expenses, lambda r: r.category)

def group_by_source(income: Iterable[IncomeRecord]) -> Dict[str, float]:
    return group_by_key(income, lambda r: r.source)

def month_key(year: int, month_index: int) -> str:
    # 1-based month in the key, no zero padding: 2024-1 .. 2024-12
    return f"{year}-{month_index + 1}"

def month_sort_key(key: str) -> Tuple[int, int]:
    year, month = key.split("-", 1)
    return int(year), int(month)

def sorted_month_keys(keys: Iterable[str]) -> List[str]:
    return sorted(set(keys), key=month_sort_key)

def group_by_month(records: Iterable[Any]) -> Dict[str, float]:
    return group_by_key(records, lambda r: month_key(r.year, r.month))

def group_by_date(records: Iterable[Any]) -> Dict[str, float]:
    return group_by_key(records, lambda r: r.date.strftime("%Y-%m-%d"))

def group_by_year(records: Iterable[Any]) -> Dict[int, float]:
    grouped: Dict[int, float] = {}
    for r in records:
        grouped[r.year] = grouped.get(r.year, 0.0) + r.amount
    return grouped

def top_categories(expenses: Iterable[ExpenseRecord], limit: int = TOP_LIMIT) -> List[Dict[str, Any]]:
    # sorted() is stable: equal totals keep first-seen category order
    items = sorted(group_by_category(expenses).items(), key=lambda kv: -kv[1])
    return [{"category": name, "amount": amount} for name, amount in items[:max(0, int(limit))]]

def _top_by_amount(records: Sequence[R], limit: int) -> List[R]:
    return sorted(records, key=lambda r: -r.amount)[:max(0, int(limit))]

def notable_transactions(income: Sequence[IncomeRecord], expenses: Sequence[ExpenseRecord],
                         limit: int = TOP_LIMIT) -> Dict[str, List[Any]]:
    return {
        "top_income": _top_by_amount(income, limit),
        "top_expenses": _top_by_amount(expenses, limit),
    }
