"""
fiscal_core.records
Canonical income/expense records and the row normalizers that build them.
"""
from __future__ import annotations
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Iterable, List, Mapping, Optional, Tuple

from .config import UNKNOWN_NAME
from .parsing import clean_text, parse_amount, parse_date
from .utils import fmt_date

@dataclass(frozen=True)
class _Record:
    name: str
    amount: float
    date: datetime

    # derived from `date`, never stored separately
    @property
    def month(self) -> int:
        return self.date.month - 1

    @property
    def year(self) -> int:
        return self.date.year

    @property
    def formatted_date(self) -> str:
        return fmt_date(self.date)

@dataclass(frozen=True)
class IncomeRecord(_Record):
    source: str = ""

    def searchable_fields(self) -> Tuple[str, ...]:
        return (self.name, self.source, self.formatted_date)

@dataclass(frozen=True)
class ExpenseRecord(_Record):
    category: str = ""
    raw_expense_tag: str = ""
    notes: str = ""

    def searchable_fields(self) -> Tuple[str, ...]:
        return (self.name, self.category, self.raw_expense_tag, self.notes, self.formatted_date)

def _text(value: Any) -> str:
    return "" if value is None else str(value)

def _name(value: Any) -> str:
    # kept as given; only a blank name gets the default
    s = _text(value)
    return s if s.strip() else UNKNOWN_NAME

def normalize_income(rows: Iterable[Mapping[str, Any]], now: Optional[datetime] = None) -> List[IncomeRecord]:
    """One record per row, in input order. Bad cells fall back, rows are never dropped."""
    now = now or datetime.now()
    out: List[IncomeRecord] = []
    for r in rows:
        out.append(IncomeRecord(
            name=_name(r.get("Name")),
            amount=parse_amount(r.get("Amount")),
            date=parse_date(r.get("Date"), now=now),
            source=clean_text(r.get("Sources")),
        ))
    return out

def normalize_expense(rows: Iterable[Mapping[str, Any]], now: Optional[datetime] = None) -> List[ExpenseRecord]:
    now = now or datetime.now()
    out: List[ExpenseRecord] = []
    for r in rows:
        out.append(ExpenseRecord(
            name=_name(r.get("Name")),
            amount=parse_amount(r.get("Amount")),
            date=parse_date(r.get("Date"), now=now),
            category=clean_text(r.get("Categories")),
            raw_expense_tag=_text(r.get("Expenses")),
            notes=_text(r.get("Notes")),
        ))
    return out
