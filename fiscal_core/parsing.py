"""
fiscal_core.parsing
Field coercion: text/amount/date parsing. None of these raise on bad input.
"""
from __future__ import annotations
import logging
import math
import re
from datetime import datetime
from typing import Any, Optional

from dateutil import parser as date_parser

from .config import CURRENCY_SYMBOLS, DATE_FORMATS

MARKDOWN_LINK_RE = re.compile(r"\[([^\]]+)\]\([^)]+\)")
# "Salary (https%3A%2F%2F...)" -> "Salary"
ENCODED_ANNOTATION_RE = re.compile(r"(.+?)\s*\([^)]*%[^)]*\)")
AMOUNT_STRIP_RE = re.compile("[" + "".join(re.escape(s) for s in CURRENCY_SYMBOLS) + ",]")
LEADING_NUMBER_RE = re.compile(r"^[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")

def clean_text(raw: Any) -> str:
    if raw is None:
        return ""
    s = str(raw)
    if not s:
        return ""
    cleaned = s.strip()
    # repeat until stable so clean_text(clean_text(x)) == clean_text(x)
    while True:
        step = MARKDOWN_LINK_RE.sub(r"\1", cleaned).strip()
        step = ENCODED_ANNOTATION_RE.sub(r"\1", step).strip()
        if step == cleaned:
            return cleaned
        cleaned = step

def parse_amount(value: Any) -> float:
    """
    Strip currency symbols and thousands separators, then read the leading
    number. Anything unreadable, non-finite or negative becomes 0.0.
    """
    if value is None:
        return 0.0
    s = AMOUNT_STRIP_RE.sub("", str(value)).strip()
    if not s:
        return 0.0
    m = LEADING_NUMBER_RE.match(s)
    if not m:
        return 0.0
    try:
        n = float(m.group(0))
    except ValueError:
        return 0.0
    if not math.isfinite(n) or n < 0:
        return 0.0
    return n

def _to_local_naive(d: datetime) -> datetime:
    if d.tzinfo is None:
        return d
    return d.astimezone().replace(tzinfo=None)

def parse_date(value: Any, now: Optional[datetime] = None) -> datetime:
    """
    Parse a calendar string. Empty or unparsable input falls back to `now`
    (the current time unless injected); the record keeps that date.
    """
    fallback = now or datetime.now()
    s = ("" if value is None else str(value)).strip()
    if not s:
        return fallback

    for fmt in DATE_FORMATS:
        try:
            return datetime.strptime(s, fmt)
        except ValueError:
            continue

    try:
        return _to_local_naive(date_parser.parse(s, default=datetime(fallback.year, 1, 1)))
    except (ValueError, OverflowError):
        logging.warning("Invalid date: %s (using %s)", s, fallback.isoformat())
        return fallback
