"""
fiscal_core.filters
Range, category/source, calendar and text filters. Inputs are never modified.
"""
from __future__ import annotations
from datetime import datetime
from typing import Iterable, List, TypeVar

from .records import ExpenseRecord, IncomeRecord

R = TypeVar("R", IncomeRecord, ExpenseRecord)

def filter_by_date_range(records: Iterable[R], start: datetime, end: datetime) -> List[R]:
    # inclusive on both ends
    return [r for r in records if start <= r.date <= end]

def filter_by_category(expenses: Iterable[ExpenseRecord], category: str) -> List[ExpenseRecord]:
    return [r for r in expenses if r.category == category]

def filter_by_source(income: Iterable[IncomeRecord], source: str) -> List[IncomeRecord]:
    return [r for r in income if r.source == source]

def filter_by_year(records: Iterable[R], year: int) -> List[R]:
    return [r for r in records if r.year == year]

def filter_by_month(records: Iterable[R], month_index: int) -> List[R]:
    return [r for r in records if r.month == month_index]

def search_text(records: Iterable[R], query: str) -> List[R]:
    """
    Case-insensitive substring match against each record's searchable fields.
    A record matches when any one field contains the query; an empty query
    matches everything.
    """
    q = (query or "").lower()
    return [r for r in records if any(q in f.lower() for f in r.searchable_fields())]
