from __future__ import annotations

import pytest

from retirewise.core.formatting import format_currency


@pytest.mark.parametrize(
    "amount, currency, expected",
    [
        (1_200_000, "HKD", "HK$1,200,000"),
        (942.45, "USD", "$942"),
        (1234.5, "usd", "$1,235"),
        (-1234.5, "USD", "-$1,235"),
        (0, "EUR", "€0"),
        (999.5, "GBP", "£1,000"),
        (50000, "XYZ", "XYZ 50,000"),
        (-0.4, "USD", "-$0"),
        (0.4, "USD", "$0"),
    ],
)
def test_format_currency(amount, currency, expected):
    assert format_currency(amount, currency) == expected


def test_default_currency_is_hkd():
    assert format_currency(4000) == "HK$4,000"


def test_non_finite_amounts():
    assert format_currency(float("nan"), "USD") == "$NaN"
    assert format_currency(float("-inf"), "USD") == "-$∞"
