from datetime import datetime

import pytest
from openpyxl import load_workbook

from fiscal_core.excel_reports import write_excel_financial_report
from fiscal_core.pdf_reports import write_pdf_financial_report, yearly_table_rows
from fiscal_core.views import yearly_breakdown


def test_pdf_report_is_written(income, expenses, now, tmp_path):
    pdf_path = tmp_path / "report.pdf"
    out = write_pdf_financial_report(income, expenses, pdf_path, year=2024, now=now)
    assert out == pdf_path
    data = pdf_path.read_bytes()
    assert data.startswith(b"%PDF")
    assert len(data) > 1000


def test_pdf_report_handles_a_year_without_data(income, expenses, now, tmp_path):
    pdf_path = tmp_path / "empty.pdf"
    write_pdf_financial_report(income, expenses, pdf_path, year=2030, now=now)
    assert pdf_path.read_bytes().startswith(b"%PDF")


def test_pdf_report_with_no_records(now, tmp_path):
    pdf_path = tmp_path / "none.pdf"
    write_pdf_financial_report([], [], pdf_path, now=now)
    assert pdf_path.exists()


def test_excel_report_sheets_and_values(income, expenses, now, tmp_path):
    xlsx_path = tmp_path / "report.xlsx"
    write_excel_financial_report(income, expenses, xlsx_path, year=2024, now=now)

    wb = load_workbook(xlsx_path)
    assert wb.sheetnames == [
        "Summary",
        "Monthly Trend",
        "Yearly Summary",
        "Top Categories",
        "Cumulative Savings",
        "Daily Spending",
        "Transactions",
    ]

    summary = wb["Summary"]
    assert summary["A2"].value == "Total Income"
    assert summary["B2"].value == pytest.approx(112500.5)
    assert summary["B3"].value == pytest.approx(47500.0)
    assert summary["B4"].value == pytest.approx(65000.5)

    top = wb["Top Categories"]
    assert [top.cell(row=r, column=1).value for r in range(2, top.max_row + 1)] == ["Rent", "Groceries"]

    trend = wb["Monthly Trend"]
    assert [trend.cell(row=r, column=1).value for r in range(2, trend.max_row + 1)] == [
        "2023-11", "2023-12", "2024-1", "2024-2", "2024-3",
    ]

    assert wb["Cumulative Savings"].max_row == 13
    assert wb["Transactions"].max_row == 1 + 3 + 4


def test_excel_report_without_income_leaves_rate_blank(expenses, now, tmp_path):
    xlsx_path = tmp_path / "no_income.xlsx"
    write_excel_financial_report([], expenses, xlsx_path, year=2024, now=now)
    summary = load_workbook(xlsx_path)["Summary"]
    assert summary["A5"].value == "Savings Rate"
    assert summary["B5"].value is None


def test_excel_report_defaults_to_year_of_now(income, expenses, tmp_path):
    xlsx_path = tmp_path / "default.xlsx"
    write_excel_financial_report(income, expenses, xlsx_path, now=datetime(2023, 12, 31))
    summary = load_workbook(xlsx_path)["Summary"]
    assert summary["B2"].value == pytest.approx(1200.0)


def test_pdf_yearly_table_uses_view_savings(income, expenses):
    rows = yearly_table_rows(yearly_breakdown(income, expenses))
    assert rows[0] == ["Year", "Income", "Expenses", "Savings", "Savings Rate"]
    assert rows[1] == ["2023", "1,200", "800", "400", "33.3%"]
    assert rows[2] == ["2024", "1,12,501", "47,500", "65,001", "57.8%"]


def test_pdf_yearly_table_without_income_shows_na():
    rows = yearly_table_rows([{"year": 2024, "income": 0.0, "expenses": 100.0,
                               "savings": -100.0, "savings_rate": None}])
    assert rows[1] == ["2024", "0", "100", "-100", "N/A"]
