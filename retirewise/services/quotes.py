from __future__ import annotations

import math
from typing import Any, Optional

import yfinance as yf
from loguru import logger

from retirewise.models import StockQuote

BASE_CURRENCY = "HKD"


def _fast_info_value(ticker: Any, key: str) -> Any:
    info = ticker.fast_info
    try:
        return info[key]
    except KeyError:
        return None


def _usable_price(value: Any) -> Optional[float]:
    if value is None:
        return None
    price = float(value)
    if not math.isfinite(price) or price <= 0:
        return None
    return price


class YahooQuoteService:
    """
    Stock lookup against Yahoo Finance.

    A free-text query is resolved to a symbol with yfinance's search; if search
    finds nothing the query itself is tried as a ticker. The price is the last
    traded price in the listing currency, converted to HKD with the matching
    currency pair (e.g. USDHKD=X).
    """

    def __init__(self, base_currency: str = BASE_CURRENCY):
        self.base_currency = base_currency.upper()

    def _resolve(self, query: str) -> tuple[str, Optional[str]]:
        matches = yf.Search(query, max_results=5, news_count=0).quotes
        for match in matches:
            symbol = match.get("symbol")
            if symbol:
                name = match.get("longname") or match.get("shortname")
                return symbol, name
        return query.strip().upper(), None

    def exchange_rate(self, currency: str) -> float:
        currency = currency.upper()
        if currency == self.base_currency:
            return 1.0
        pair = yf.Ticker(f"{currency}{self.base_currency}=X")
        rate = _usable_price(_fast_info_value(pair, "lastPrice"))
        if rate is None:
            logger.warning(f"No {currency}/{self.base_currency} rate, assuming 1.0")
            return 1.0
        return rate

    def lookup(self, query: str) -> Optional[StockQuote]:
        query = (query or "").strip()
        if not query:
            return None

        try:
            symbol, name = self._resolve(query)
            ticker = yf.Ticker(symbol)
            price = _usable_price(_fast_info_value(ticker, "lastPrice"))
            if price is None:
                logger.info(f"No price found for '{query}' (symbol {symbol})")
                return None
            currency = (_fast_info_value(ticker, "currency") or self.base_currency).upper()
            rate = self.exchange_rate(currency)
        except Exception as exc:
            # provider errors (network, parsing, delisted symbols) mean "not found"
            logger.warning(f"Stock lookup failed for '{query}': {exc}")
            return None

        logger.info(f"Resolved '{query}' to {symbol} at {price} {currency}")
        return StockQuote(
            symbol=symbol,
            name=name or symbol,
            price=price,
            currency=currency,
            exchangeRateToHKD=rate,
        )
