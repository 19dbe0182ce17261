import logging
from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings

_config_logger = logging.getLogger(__name__)

_BACKEND_DIR = Path(__file__).resolve().parents[1]
_ENV_FILES = (
    _BACKEND_DIR / ".env",
    ".env",
)


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    app_title: str = "Quotes API"
    app_version: str = "0.1.0"
    app_env: str = "development"
    cors_origins: list[str] = ["http://localhost:3000"]

    # Upstream quote sources, tried in order
    quotable_url: str = "https://api.quotable.io/random"
    dummyjson_url: str = "https://dummyjson.com/quotes/random"
    external_api_timeout: float = 5.0

    # Random-quote policy
    refresh_probability: float = Field(default=0.3, ge=0.0, le=1.0)
    prioritize_probability: float = Field(default=0.7, ge=0.0, le=1.0)

    share_base_url: str = "https://quotes-service.com/share"
    seed_sample_quotes: bool = True

    # Logging: per-category log levels (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    log_level: str = "INFO"                  # Root / app-wide
    log_level_http: str = "WARNING"          # httpx / httpcore outbound HTTP
    log_level_uvicorn: str = "INFO"          # uvicorn.access / uvicorn.error
    log_level_pipeline: str = "INFO"         # QuoteService / RecommendationService stages
    log_level_external: str = "INFO"         # Upstream quote clients

    model_config = {
        "env_file": _ENV_FILES,
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }

    def model_post_init(self, __context: object) -> None:
        if self.app_env == "production" and self.seed_sample_quotes:
            _config_logger.warning("Sample quotes are seeded in a production environment")


@lru_cache
def get_settings() -> Settings:
    """Cached settings instance — reads .env once."""
    return Settings()
