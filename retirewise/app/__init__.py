"""Application factory and app-wide configuration."""

import sys
from typing import Optional

from flask import Flask
from flask_cors import CORS
from loguru import logger

from retirewise.app.api.routes import api_bp
from retirewise.config import Settings, load_settings
from retirewise.services import (
    AdvisoryService,
    NewsService,
    PlannerAdvisor,
    QuoteService,
    YahooNewsService,
    YahooQuoteService,
)

EXTENSION_KEY = "retirewise"


def configure_logging(settings: Settings) -> None:
    logger.remove()
    logger.add(
        sys.stderr,
        format=(
            "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | "
            "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - "
            "<level>{message}</level>"
        ),
        level=settings.log_level,
        colorize=True,
    )
    if settings.log_file:
        logger.add(
            settings.log_file,
            format="{time:YYYY-MM-DD HH:mm:ss} | {level} | {message}",
            level=settings.log_level,
            rotation="10 MB",
        )


def create_app(
    settings: Optional[Settings] = None,
    advisory: Optional[AdvisoryService] = None,
    quotes: Optional[QuoteService] = None,
    news: Optional[NewsService] = None,
) -> Flask:
    """Build the Flask app instance. Collaborators default to the shipped implementations."""
    settings = settings or load_settings()
    configure_logging(settings)

    app = Flask(__name__)
    CORS(
        app,
        resources={r"/api/*": {"origins": settings.cors_origins}},
        supports_credentials=True,
    )

    app.extensions[EXTENSION_KEY] = {
        "settings": settings,
        "advisory": advisory or PlannerAdvisor(currency=settings.default_currency),
        "quotes": quotes or YahooQuoteService(),
        "news": news or YahooNewsService(settings.news_tickers, limit=settings.news_limit),
    }

    app.register_blueprint(api_bp, url_prefix="/api")
    logger.info(f"Planner API ready, CORS origins: {', '.join(settings.cors_origins)}")
    return app
