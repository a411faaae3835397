"""Application configuration loaded from environment variables."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings
from sqlalchemy.engine import make_url
from sqlalchemy.exc import ArgumentError

from craftfunds.core.logging import get_logger

logger = get_logger(__name__)

PLACEHOLDER_USERNAME = "your_username_here"
PLACEHOLDER_PASSWORD = "your_password_here"
DEFAULT_TIMEOUT_SECONDS = 10


@dataclass(frozen=True)
class FundingConfig:
    """Business constants the reconciler needs, passed in explicitly."""

    currency: str = "USD"
    goal_threshold: Decimal = Decimal("15")
    display_cap: int = 10


class Settings(BaseSettings):
    """Application settings with defaults and env var overrides."""

    # Database
    database_url: str = "mysql+pymysql://localhost:3306/craftfunds"
    database_username: str = PLACEHOLDER_USERNAME
    database_password: str = PLACEHOLDER_PASSWORD
    database_timeout_seconds: int = DEFAULT_TIMEOUT_SECONDS

    # Funding rules
    funding_currency: str = "USD"
    funding_goal: Decimal = Decimal("15")
    display_cap: int = 10
    period_label: str = "month"

    # Donation link shown by /donate
    donation_url: str = ""

    log_level: str = "INFO"

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}

    @field_validator("database_timeout_seconds", mode="before")
    @classmethod
    def _fallback_timeout(cls, value):
        try:
            timeout = int(value)
        except (TypeError, ValueError):
            timeout = 0
        if timeout < 1:
            logger.warning(
                "Invalid database timeout %r in config, using default of %d seconds",
                value,
                DEFAULT_TIMEOUT_SECONDS,
            )
            return DEFAULT_TIMEOUT_SECONDS
        return timeout

    @field_validator("funding_currency")
    @classmethod
    def _upper_currency(cls, value: str) -> str:
        return value.strip().upper()

    def database_credentials(self) -> tuple[str, str]:
        """Username and password the engine will use.

        Credentials written into ``database_url`` win over the separate
        settings.  An unparseable URL falls back to the separate settings;
        building the engine reports the URL itself.
        """
        try:
            url = make_url(self.database_url)
        except ArgumentError:
            url = None
        if url is not None and url.username:
            return url.username, url.password or ""
        return self.database_username, self.database_password

    def has_valid_database_credentials(self) -> bool:
        """True when credentials are filled in and not left as placeholders."""
        username, password = self.database_credentials()
        username = username.strip()
        password = password.strip()
        return (
            bool(username)
            and bool(password)
            and username != PLACEHOLDER_USERNAME
            and password != PLACEHOLDER_PASSWORD
            and bool(self.database_url.strip())
        )

    def funding_config(self) -> FundingConfig:
        """Snapshot the funding rules into an immutable value."""
        return FundingConfig(
            currency=self.funding_currency,
            goal_threshold=self.funding_goal,
            display_cap=self.display_cap,
        )


@lru_cache
def get_settings() -> Settings:
    """Dependency returning the process-wide settings (overridable in tests)."""
    return Settings()
