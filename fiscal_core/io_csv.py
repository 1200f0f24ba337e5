"""
fiscal_core.io_csv
CSV reading + column validation.
"""
from __future__ import annotations
import csv
import logging
from pathlib import Path
from datetime import datetime
from typing import Any, Dict, List, Optional, Sequence, Tuple

from .config import EXPENSE_COLUMNS, INCOME_COLUMNS, REQUIRED_COLUMNS
from .records import ExpenseRecord, IncomeRecord, normalize_expense, normalize_income

def load_csv_rows(csv_path: Path) -> Tuple[List[str], List[Dict[str, Any]]]:
    # utf-8-sig: spreadsheet exports often carry a BOM on the first header
    with open(csv_path, newline="", encoding="utf-8-sig") as f:
        reader = csv.DictReader(f)
        rows = list(reader)
        headers = reader.fieldnames or []
    logging.info("Loaded %d rows from %s", len(rows), csv_path)
    return list(headers), rows

def ensure_required(headers: Sequence[str], required: Sequence[str] = REQUIRED_COLUMNS) -> None:
    missing = [h for h in required if h not in headers]
    if missing:
        raise ValueError(f"CSV missing required columns: {missing}")

def warn_missing_columns(headers: Sequence[str], expected: Sequence[str], label: str) -> None:
    absent = [h for h in expected if h not in headers]
    if absent:
        logging.warning("%s CSV has no %s column(s); defaults will be used", label, ", ".join(absent))

def load_income(csv_path: Path, now: Optional[datetime] = None) -> List[IncomeRecord]:
    headers, rows = load_csv_rows(csv_path)
    ensure_required(headers)
    warn_missing_columns(headers, INCOME_COLUMNS, "Income")
    return normalize_income(rows, now=now)

def load_expenses(csv_path: Path, now: Optional[datetime] = None) -> List[ExpenseRecord]:
    headers, rows = load_csv_rows(csv_path)
    ensure_required(headers)
    warn_missing_columns(headers, EXPENSE_COLUMNS, "Expense")
    return normalize_expense(rows, now=now)
