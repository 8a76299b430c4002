from __future__ import annotations

from typing import Dict, List, Optional

import pytest
from flask.testing import FlaskClient

from retirewise.app import create_app
from retirewise.config import Settings
from retirewise.models import CalculationResult, FinancialInputs, StockQuote
from retirewise.services import NewsDigest, NewsSource


class FakeAdvisor:
    def __init__(self):
        self.calls: List[tuple] = []

    def get_advice(self, inputs: FinancialInputs, result: CalculationResult) -> str:
        self.calls.append((inputs, result))
        return f"Save {round(result.monthlyContributionRequired)} a month."


class FakeQuotes:
    def __init__(self, quotes: Optional[Dict[str, StockQuote]] = None):
        self.quotes = quotes or {}

    def lookup(self, query: str) -> Optional[StockQuote]:
        return self.quotes.get(query.lower())


class FakeNews:
    def digest(self) -> NewsDigest:
        return NewsDigest(
            content="- **Markets rally** Stocks rose.",
            sources=[NewsSource(uri="https://example.com/rally", title="Markets rally")],
        )


TENCENT = StockQuote(
    symbol="0700.HK",
    name="Tencent Holdings",
    price=405.2,
    currency="HKD",
    exchangeRateToHKD=1.0,
)


@pytest.fixture()
def advisor() -> FakeAdvisor:
    return FakeAdvisor()


@pytest.fixture()
def flask_app(advisor):
    return create_app(
        settings=Settings(),
        advisory=advisor,
        quotes=FakeQuotes({"tencent": TENCENT}),
        news=FakeNews(),
    )


@pytest.fixture()
def client(flask_app) -> FlaskClient:
    with flask_app.test_client() as test_client:
        yield test_client
