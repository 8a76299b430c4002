from retirewise.services.advisory import PlannerAdvisor, build_advice_prompt
from retirewise.services.base import (
    AdvisoryService,
    NewsDigest,
    NewsService,
    NewsSource,
    NewsUnavailableError,
    QuoteService,
    ServiceError,
)
from retirewise.services.news import YahooNewsService
from retirewise.services.quotes import YahooQuoteService

__all__ = [
    "AdvisoryService",
    "NewsDigest",
    "NewsService",
    "NewsSource",
    "NewsUnavailableError",
    "PlannerAdvisor",
    "QuoteService",
    "ServiceError",
    "YahooNewsService",
    "YahooQuoteService",
    "build_advice_prompt",
]
