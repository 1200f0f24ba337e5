import pytest

from fiscal_core import config
from fiscal_core.utils import fmt_percent, format_currency, month_label, percent_of, period_label


@pytest.mark.parametrize(
    "amount, expected",
    [
        (0, "₹0"),
        (999, "₹999"),
        (1000, "₹1,000"),
        (100000, "₹1,00,000"),
        (1234567, "₹12,34,567"),
        (1234567.5, "₹12,34,568"),
        (0.5, "₹1"),
        (-2500, "-₹2,500"),
    ],
)
def test_format_currency_indian_grouping(amount, expected):
    assert format_currency(amount) == expected


def test_format_currency_without_symbol():
    assert format_currency(1234567, with_symbol=False) == "12,34,567"


def test_format_currency_western_grouping_and_symbol():
    assert format_currency(1234567, symbol="$", grouping="western") == "$1,234,567"


def test_format_currency_follows_config(monkeypatch):
    monkeypatch.setattr(config, "CURRENCY_SYMBOL", "€")
    monkeypatch.setattr(config, "CURRENCY_GROUPING", "western")
    assert format_currency(1500000) == "€1,500,000"


def test_percent_of_zero_denominator_is_not_applicable():
    assert percent_of(10, 0) is None
    assert fmt_percent(percent_of(10, 0)) == "N/A"


def test_percent_of():
    assert percent_of(25, 200) == pytest.approx(12.5)
    assert fmt_percent(12.5) == "12.5%"


def test_month_labels():
    assert month_label(0) == "Jan"
    assert month_label(11, long=True) == "December"
    assert period_label(2024, 2) == "Feb 2024"
