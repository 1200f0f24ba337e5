"""
fiscal_core.utils
Small reusable helpers: money/percent/date formatting.
"""
from __future__ import annotations
import calendar
from datetime import datetime
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Optional

from . import config

def _group_digits(digits: str, grouping: str) -> str:
    if grouping == "indian" and len(digits) > 3:
        head, tail = digits[:-3], digits[-3:]
        pairs = []
        while len(head) > 2:
            pairs.insert(0, head[-2:])
            head = head[:-2]
        if head:
            pairs.insert(0, head)
        return ",".join(pairs + [tail])
    return f"{int(digits):,}"

def format_currency(amount: float, with_symbol: bool = True,
                    symbol: Optional[str] = None, grouping: Optional[str] = None) -> str:
    """
    Whole-unit currency string, rounded half away from zero.
    format_currency(1234567.5) -> '₹12,34,568' with the default indian grouping.
    """
    try:
        whole = Decimal(str(amount)).quantize(Decimal("1"), rounding=ROUND_HALF_UP)
    except InvalidOperation:
        whole = Decimal(0)
    sign = "-" if whole < 0 else ""
    body = _group_digits(str(abs(int(whole))), grouping or config.CURRENCY_GROUPING)
    sym = (symbol if symbol is not None else config.CURRENCY_SYMBOL) if with_symbol else ""
    return f"{sign}{sym}{body}"

def fmt_money(n: float) -> str:
    return format_currency(n, with_symbol=True)

def fmt_amount(n: float) -> str:
    return format_currency(n, with_symbol=False)

def percent_of(part: float, whole: float) -> Optional[float]:
    # zero denominator -> not applicable
    if not whole:
        return None
    return part / whole * 100.0

def fmt_percent(value: Optional[float]) -> str:
    if value is None:
        return "N/A"
    return f"{value:.1f}%"

def fmt_date(d: datetime) -> str:
    return f"{d.month}/{d.day}/{d.year}"

def month_label(month_index: int, long: bool = False) -> str:
    # month_index is 0-based
    if long:
        return calendar.month_name[month_index + 1]
    return calendar.month_abbr[month_index + 1]

def period_label(year: int, month_number: int) -> str:
    """'Jan 2024' for a 1-based month number."""
    return f"{calendar.month_abbr[month_number]} {year}"

def timestamp_line(prefix: str = "Generated", now: Optional[datetime] = None) -> str:
    dt = now or datetime.now()
    return f"{prefix} on {fmt_date(dt)} {dt.strftime('%H:%M')}"
