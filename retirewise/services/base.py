"""Capability interfaces for the collaborators around the projection engine.

None of these feed back into calculate_retirement; they only produce display data.
"""

from __future__ import annotations

from typing import List, Optional, Protocol

from pydantic import BaseModel, Field

from retirewise.models import CalculationResult, FinancialInputs, StockQuote


class ServiceError(RuntimeError):
    """Base class for failures of an external collaborator."""


class NewsUnavailableError(ServiceError):
    pass


class NewsSource(BaseModel):
    uri: str
    title: str


class NewsDigest(BaseModel):
    content: str
    sources: List[NewsSource] = Field(default_factory=list)


class AdvisoryService(Protocol):
    def get_advice(self, inputs: FinancialInputs, result: CalculationResult) -> str:
        """Markdown narrative for the user."""
        ...


class QuoteService(Protocol):
    def lookup(self, query: str) -> Optional[StockQuote]:
        """Best match for a name or ticker, None when nothing usable is found."""
        ...


class NewsService(Protocol):
    def digest(self) -> NewsDigest:
        ...
