"""Display formatting for money amounts."""

from __future__ import annotations

import math
from decimal import ROUND_HALF_UP, Decimal

# en-US currency symbols; codes not listed render as "CODE 1,234"
CURRENCY_SYMBOLS = {
    "USD": "$",
    "HKD": "HK$",
    "EUR": "€",
    "GBP": "£",
    "JPY": "¥",
    "CNY": "CN¥",
    "AUD": "A$",
    "CAD": "CA$",
    "NZD": "NZ$",
    "INR": "₹",
    "KRW": "₩",
    "TWD": "NT$",
    "ILS": "₪",
    "VND": "₫",
    "MXN": "MX$",
    "BRL": "R$",
    "PHP": "₱",
}


def format_currency(amount: float, currency: str = "HKD") -> str:
    """Format amount with no decimals, e.g. format_currency(-1234.5, "USD") == "-$1,235"."""
    code = currency.upper()
    symbol = CURRENCY_SYMBOLS.get(code, f"{code} ")
    if not math.isfinite(amount):
        text = "NaN" if math.isnan(amount) else "∞"
        return f"{'-' if amount < 0 else ''}{symbol}{text}"

    whole = Decimal(str(amount)).quantize(Decimal("1"), rounding=ROUND_HALF_UP)
    # -0.4 rounds to -0 and keeps its sign, like Intl.NumberFormat
    sign = "-" if whole.is_signed() else ""
    digits = f"{abs(whole):,.0f}"
    return f"{sign}{symbol}{digits}"
