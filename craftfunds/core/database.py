"""Database connection and session management."""

from __future__ import annotations

from functools import lru_cache

from sqlalchemy import create_engine
from sqlalchemy.engine import URL, Engine, make_url
from sqlalchemy.orm import DeclarativeBase, sessionmaker

from craftfunds.core.config import Settings
from craftfunds.core.logging import get_logger

logger = get_logger(__name__)


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy models."""

    pass


def build_url(settings: Settings) -> URL:
    """Combine the configured URL with the separately stored credentials."""
    url = make_url(settings.database_url)
    if url.get_backend_name() != "sqlite" and url.username is None:
        url = url.set(
            username=settings.database_username,
            password=settings.database_password,
        )
    return url


def _connect_args(url: URL, timeout: int) -> dict:
    backend = url.get_backend_name()
    if backend == "sqlite":
        return {"timeout": timeout, "check_same_thread": False}
    if backend in ("mysql", "mariadb", "postgresql"):
        return {"connect_timeout": timeout}
    return {}


def create_db_engine(settings: Settings) -> Engine:
    """Create an engine honouring the configured connect timeout."""
    url = build_url(settings)
    logger.debug(
        "Creating database engine for %s",
        url.render_as_string(hide_password=True),
    )
    return create_engine(
        url,
        echo=False,
        pool_pre_ping=True,
        connect_args=_connect_args(url, settings.database_timeout_seconds),
    )


@lru_cache(maxsize=8)
def _session_factory(
    database_url: str, username: str, password: str, timeout: int
) -> sessionmaker:
    settings = Settings(
        database_url=database_url,
        database_username=username,
        database_password=password,
        database_timeout_seconds=timeout,
    )
    engine = create_db_engine(settings)
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_session_factory(settings: Settings) -> sessionmaker:
    """Return the cached sessionmaker for these connection settings."""
    return _session_factory(
        settings.database_url,
        settings.database_username,
        settings.database_password,
        settings.database_timeout_seconds,
    )

