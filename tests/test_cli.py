import csv

import pytest

import fiscal_visuals
from fiscal_core import config


def _write_csv(path, headers, rows):
    with open(path, "w", newline="", encoding="utf-8") as f:
        w = csv.DictWriter(f, fieldnames=headers)
        w.writeheader()
        w.writerows(rows)
    return path


@pytest.fixture
def csv_inputs(tmp_path, income_rows, expense_rows):
    income_csv = _write_csv(tmp_path / "income.csv", ["Name", "Sources", "Amount", "Date"], income_rows)
    expense_csv = _write_csv(
        tmp_path / "expenses.csv",
        ["Name", "Categories", "Amount", "Date", "Expenses", "Notes"],
        expense_rows,
    )
    return ["--income", str(income_csv), "--expenses", str(expense_csv), "--outdir", str(tmp_path)]


def test_summary_command(csv_inputs, capsys):
    assert fiscal_visuals.main(csv_inputs + ["summary"]) == 0
    out = capsys.readouterr().out
    assert "Total Income:   ₹1,13,701" in out
    assert "- Rent: ₹40,000" in out
    assert "- Freelance: ₹12,501" in out


def test_summary_with_western_currency(csv_inputs, capsys):
    args = csv_inputs + ["--currency-symbol", "$", "--grouping", "western", "summary"]
    assert fiscal_visuals.main(args) == 0
    assert "Total Income:   $113,701" in capsys.readouterr().out


def test_trend_command(csv_inputs, capsys):
    assert fiscal_visuals.main(csv_inputs + ["trend"]) == 0
    lines = capsys.readouterr().out.splitlines()
    assert [line.split()[0:2] for line in lines[1:]] == [
        ["Nov", "2023"], ["Dec", "2023"], ["Jan", "2024"], ["Feb", "2024"], ["Mar", "2024"],
    ]


def test_search_command(csv_inputs, capsys):
    assert fiscal_visuals.main(csv_inputs + ["search", "fresh", "--kind", "expense"]) == 0
    out = capsys.readouterr().out
    assert "2 match(es) for 'fresh'" in out
    assert "weekly shop" in out


def test_report_commands_write_files(csv_inputs, tmp_path):
    assert fiscal_visuals.main(csv_inputs + ["--year", "2024", "report_pdf"]) == 0
    assert fiscal_visuals.main(csv_inputs + ["--year", "2024", "report_xlsx"]) == 0
    assert (tmp_path / "output" / "pdf" / "financial-report-2024.pdf").exists()
    assert (tmp_path / "output" / "xlsx" / "financial-report-2024.xlsx").exists()


def test_missing_input_file_returns_error(tmp_path, caplog):
    args = ["--income", str(tmp_path / "nope.csv"), "--expenses", str(tmp_path / "nope2.csv"),
            "--outdir", str(tmp_path), "summary"]
    assert fiscal_visuals.main(args) == 1
    assert "Income CSV not found" in caplog.text


def test_missing_required_column_returns_error(tmp_path, caplog):
    income_csv = _write_csv(tmp_path / "income.csv", ["Name", "Sources"], [{"Name": "a", "Sources": "b"}])
    expense_csv = _write_csv(tmp_path / "expenses.csv", ["Name", "Amount", "Date"], [])
    args = ["--income", str(income_csv), "--expenses", str(expense_csv), "--outdir", str(tmp_path), "summary"]
    assert fiscal_visuals.main(args) == 1
    assert "missing required columns" in caplog.text


def test_currency_flags_do_not_leak_into_later_runs(csv_inputs, capsys):
    args = csv_inputs + ["--currency-symbol", "$", "--grouping", "western", "summary"]
    assert fiscal_visuals.main(args) == 0
    capsys.readouterr()
    assert (config.CURRENCY_SYMBOL, config.CURRENCY_GROUPING) == ("₹", "indian")

    assert fiscal_visuals.main(csv_inputs + ["summary"]) == 0
    assert "Total Income:   ₹1,13,701" in capsys.readouterr().out
