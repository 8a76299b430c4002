import json
import os
from typing import Any, Dict, List, Mapping, Optional

from loguru import logger
from pydantic import BaseModel, Field, ValidationError, field_validator

ENV_PREFIX = "RETIREWISE_"


class ConfigurationError(Exception):
    """Raised when the settings file cannot be loaded or parsed."""


class Settings(BaseModel):
    """Runtime settings for the API process."""

    cors_origins: List[str] = Field(
        default_factory=lambda: [
            "http://localhost:3000",
            "http://localhost:5173",
            "http://127.0.0.1:3000",
            "http://127.0.0.1:5173",
        ],
        description="Origins allowed to call /api/*.",
    )
    log_level: str = Field("INFO", description="Minimum loguru level for all sinks.")
    log_file: Optional[str] = Field(
        None, description="Optional rotating log file; stderr only when unset."
    )
    default_currency: str = Field("HKD", min_length=3, max_length=3)
    news_tickers: List[str] = Field(
        default_factory=lambda: ["^HSI", "^GSPC"],
        description="Yahoo Finance symbols whose headlines make up the news digest.",
    )
    news_limit: int = Field(5, ge=1, le=20)

    @field_validator("log_level")
    @classmethod
    def normalise_level(cls, v: str) -> str:
        return v.upper()

    @field_validator("cors_origins", "news_tickers", mode="before")
    @classmethod
    def split_csv(cls, v: Any) -> Any:
        if isinstance(v, str):
            return [item.strip() for item in v.split(",") if item.strip()]
        return v


def load_config_from_json(file_path: str) -> Dict[str, Any]:
    """Loads and returns the settings dictionary from a JSON file."""
    if not os.path.exists(file_path):
        raise ConfigurationError(f"Settings file not found at: {file_path}")

    try:
        with open(file_path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise ConfigurationError(f"Error parsing JSON file '{file_path}': {e}") from e
    except OSError as e:
        raise ConfigurationError(f"Error reading settings file '{file_path}': {e}") from e

    if not isinstance(data, dict):
        raise ConfigurationError(f"Settings file '{file_path}' must hold a JSON object.")
    return data


def _env_overrides(environ: Mapping[str, str]) -> Dict[str, Any]:
    overrides: Dict[str, Any] = {}
    for name in Settings.model_fields:
        key = f"{ENV_PREFIX}{name.upper()}"
        if key in environ:
            overrides[name] = environ[key]
    return overrides


def load_settings(
    path: Optional[str] = None, environ: Optional[Mapping[str, str]] = None
) -> Settings:
    """
    Build Settings from an optional JSON file plus RETIREWISE_* environment variables.

    The file comes from ``path`` or RETIREWISE_CONFIG; environment values win
    over file values.
    """
    environ = os.environ if environ is None else environ
    path = path or environ.get(f"{ENV_PREFIX}CONFIG")

    values: Dict[str, Any] = {}
    if path:
        logger.info(f"Loading settings from: {path}")
        values.update(load_config_from_json(path))
    values.update(_env_overrides(environ))

    try:
        return Settings(**values)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid settings: {e}") from e
