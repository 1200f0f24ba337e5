#!/usr/bin/env python3
"""
fiscal_visuals.py — income/expense CSVs -> console summaries, PDF and Excel reports

Input CSV columns (exact header names):
  income.csv   : Name, Sources, Amount, Date
  expenses.csv : Name, Categories, Amount, Date, Expenses, Notes

Install:
  pip3 install -e .

Run examples:
  python3 fiscal_visuals.py summary
  python3 fiscal_visuals.py --year 2024 trend
  python3 fiscal_visuals.py search "groceries" --kind expense
  python3 fiscal_visuals.py --income my_income.csv --expenses my_expenses.csv report_pdf
  python3 fiscal_visuals.py --currency-symbol '$' --grouping western report_xlsx
  python3 fiscal_visuals.py all

Outputs land in output/pdf, output/xlsx and output/logs.
"""

from __future__ import annotations

import argparse
import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import List, Optional, Sequence, Tuple

from fiscal_core import config
from fiscal_core.config import DEFAULT_EXCEL_REPORT_OUT, DEFAULT_EXPENSE_CSV, DEFAULT_INCOME_CSV, DEFAULT_PDF_REPORT_OUT
from fiscal_core.excel_reports import write_excel_financial_report
from fiscal_core.io_csv import load_expenses, load_income
from fiscal_core.paths import out_path
from fiscal_core.pdf_reports import write_pdf_financial_report
from fiscal_core.records import ExpenseRecord, IncomeRecord
from fiscal_core.summaries import group_by_source, top_categories
from fiscal_core.utils import fmt_money, fmt_percent, timestamp_line
from fiscal_core.views import monthly_trend, period_totals, transaction_listing


# -----------------------------
# Logging
# -----------------------------
def setup_logging(base_dir: Path) -> Path:
    stamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    log_path = out_path("log", f"fiscal_visuals_{stamp}.log", base_dir)

    root = logging.getLogger()
    root.setLevel(logging.INFO)

    # avoid duplicate handlers when main() runs more than once in a process
    if not root.handlers:
        fmt = logging.Formatter("%(asctime)s | %(levelname)s | %(message)s")

        fh = logging.FileHandler(str(log_path), encoding="utf-8")
        fh.setLevel(logging.INFO)
        fh.setFormatter(fmt)

        sh = logging.StreamHandler()
        sh.setLevel(logging.WARNING)
        sh.setFormatter(fmt)

        root.addHandler(fh)
        root.addHandler(sh)

    logging.info("Logging started: %s", log_path)
    return log_path


# ============================================================
# Helpers
# ============================================================
def resolve_input_path(path_str: str) -> Path:
    p = Path(path_str).expanduser()
    if p.exists():
        return p.resolve()
    alt = Path(__file__).resolve().parent / path_str
    if alt.exists():
        return alt.resolve()
    return p.resolve()  # may not exist; caller errors later


def load_inputs(income_csv: str, expense_csv: str,
                now: Optional[datetime] = None) -> Tuple[List[IncomeRecord], List[ExpenseRecord]]:
    """Both files are read and normalized before any aggregation starts."""
    in_income = resolve_input_path(income_csv)
    in_expenses = resolve_input_path(expense_csv)
    if not in_income.exists():
        raise FileNotFoundError(f"Income CSV not found: {income_csv}")
    if not in_expenses.exists():
        raise FileNotFoundError(f"Expense CSV not found: {expense_csv}")
    return load_income(in_income, now=now), load_expenses(in_expenses, now=now)


# ============================================================
# Commands
# ============================================================
def run_summary(income: Sequence[IncomeRecord], expenses: Sequence[ExpenseRecord], limit: int) -> None:
    totals = period_totals(income, expenses)
    print(timestamp_line("Generated"))
    print("Summary:")
    print(f"  Total Income:   {fmt_money(totals['income'])}")
    print(f"  Total Expenses: {fmt_money(totals['expenses'])}")
    print(f"  Net Savings:    {fmt_money(totals['net_savings'])}")
    print(f"  Savings Rate:   {fmt_percent(totals['savings_rate'])}")

    print("Top Spending Categories:")
    for item in top_categories(expenses, limit):
        print(f"  - {item['category']}: {fmt_money(item['amount'])}")

    print("Income by Source:")
    for source, amount in group_by_source(income).items():
        print(f"  - {source}: {fmt_money(amount)}")


def run_trend(income: Sequence[IncomeRecord], expenses: Sequence[ExpenseRecord]) -> None:
    print(f"{'Month':<10} {'Income':>14} {'Expenses':>14} {'Savings':>14}")
    for row in monthly_trend(income, expenses):
        print(f"{row['label']:<10} {fmt_money(row['income']):>14} "
              f"{fmt_money(row['expenses']):>14} {fmt_money(row['savings']):>14}")


def run_search(income: Sequence[IncomeRecord], expenses: Sequence[ExpenseRecord],
               query: str, kind: str, sort_field: str, ascending: bool) -> None:
    rows = transaction_listing(income, expenses, kind=kind, query=query,
                               sort_field=sort_field, descending=not ascending)
    print(f"{len(rows)} match(es) for '{query}':")
    for r in rows:
        notes = f" ({r['notes']})" if r["notes"] else ""
        print(f"  {r['formatted_date']:>10}  {r['kind']:<7} {r['name']} | {r['category']} | "
              f"{fmt_money(r['amount'])}{notes}")


def run_report_pdf(income, expenses, out_name: str, year: int, base_dir: Path) -> Path:
    pdf_path = out_path("pdf", out_name.format(year=year), base_dir)
    write_pdf_financial_report(income, expenses, pdf_path, year=year)
    print(f"PDF report created: {pdf_path}")
    return pdf_path


def run_report_xlsx(income, expenses, out_name: str, year: int, base_dir: Path) -> Path:
    xlsx_path = out_path("xlsx", out_name.format(year=year), base_dir)
    write_excel_financial_report(income, expenses, xlsx_path, year=year)
    print(f"Excel report created: {xlsx_path}")
    return xlsx_path


# ============================================================
# CLI
# ============================================================
def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Fiscal Visuals: income/expense summaries and reports.")
    p.add_argument("--income", default=DEFAULT_INCOME_CSV, help="Income CSV (Name, Sources, Amount, Date).")
    p.add_argument("--expenses", default=DEFAULT_EXPENSE_CSV,
                   help="Expense CSV (Name, Categories, Amount, Date, Expenses, Notes).")
    p.add_argument("--year", type=int, default=None, help="Report year (default: current year).")
    p.add_argument("--currency-symbol", default=None, help="Symbol used when formatting amounts.")
    p.add_argument("--grouping", choices=["indian", "western"], default=None, help="Digit grouping style.")
    p.add_argument("--outdir", default=".", help="Base folder for output/ (pdf, xlsx, logs).")

    sub = p.add_subparsers(dest="cmd", required=True)

    s = sub.add_parser("summary", help="Print totals, top categories and income sources.")
    s.add_argument("--limit", type=int, default=config.TOP_LIMIT)

    sub.add_parser("trend", help="Print the month-by-month income/expense/savings trend.")

    q = sub.add_parser("search", help="Search transactions (name, category, notes, tag, date).")
    q.add_argument("query")
    q.add_argument("--kind", choices=["all", "income", "expense"], default="all")
    q.add_argument("--sort", choices=["date", "amount", "name", "category", "kind"], default="date")
    q.add_argument("--asc", action="store_true", help="Ascending order (default: descending).")

    rp = sub.add_parser("report_pdf", help="Create the yearly PDF financial report.")
    rp.add_argument("--out", default=DEFAULT_PDF_REPORT_OUT)

    rx = sub.add_parser("report_xlsx", help="Create the yearly Excel workbook.")
    rx.add_argument("--out", default=DEFAULT_EXCEL_REPORT_OUT)

    sub.add_parser("all", help="summary + PDF report + Excel workbook.")
    return p


def run_command(args, base_dir: Path) -> int:
    try:
        income, expenses = load_inputs(args.income, args.expenses)
    except (FileNotFoundError, ValueError) as e:
        logging.error("Could not load input files: %s", e)
        return 1

    year = args.year or datetime.now().year
    logging.info("Loaded %d income and %d expense records; year=%d", len(income), len(expenses), year)

    if args.cmd == "summary":
        run_summary(income, expenses, args.limit)
    elif args.cmd == "trend":
        run_trend(income, expenses)
    elif args.cmd == "search":
        run_search(income, expenses, args.query, args.kind, args.sort, args.asc)
    elif args.cmd == "report_pdf":
        run_report_pdf(income, expenses, args.out, year, base_dir)
    elif args.cmd == "report_xlsx":
        run_report_xlsx(income, expenses, args.out, year, base_dir)
    elif args.cmd == "all":
        run_summary(income, expenses, config.TOP_LIMIT)
        run_report_pdf(income, expenses, DEFAULT_PDF_REPORT_OUT, year, base_dir)
        run_report_xlsx(income, expenses, DEFAULT_EXCEL_REPORT_OUT, year, base_dir)
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    base_dir = Path(args.outdir).expanduser().resolve()
    setup_logging(base_dir)

    # currency flags apply to this run only
    saved = (config.CURRENCY_SYMBOL, config.CURRENCY_GROUPING)
    if args.currency_symbol is not None:
        config.CURRENCY_SYMBOL = args.currency_symbol
    if args.grouping is not None:
        config.CURRENCY_GROUPING = args.grouping
    try:
        return run_command(args, base_dir)
    finally:
        config.CURRENCY_SYMBOL, config.CURRENCY_GROUPING = saved


if __name__ == "__main__":
    sys.exit(main())
