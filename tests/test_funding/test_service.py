"""Tests for the async funding service boundary.

Coroutines are driven with ``asyncio.run`` so no async plugin is needed.
"""

from __future__ import annotations

import asyncio
from datetime import date
from decimal import Decimal
from unittest.mock import MagicMock

from sqlalchemy.exc import OperationalError

from craftfunds.models import Donation, TotalSpending
from craftfunds.schemas.funding import FundingStatus
from craftfunds.services.funding.errors import (
    ConfigurationError,
    DataAccessError,
    FundingError,
)
from craftfunds.services.funding.service import FundingService, degraded_report


def _build(db, settings):
    return asyncio.run(FundingService(settings, db=db).build_report())


def _assert_degraded(report, message: str) -> None:
    assert report.status is FundingStatus.ERROR
    assert report.is_degraded
    assert report.summary_text == message
    assert report.total_donations == 0
    assert report.total_spending == 0
    assert report.net_amount == 0
    assert report.surplus_count == 0
    assert report.displayed_surplus == ()


def test_reconciles_database_snapshot(db_session, settings) -> None:
    db_session.add_all(
        [
            Donation(name="Alex", amount=Decimal("10"), date=date(2025, 1, 1), currency="USD"),
            Donation(name="Sam", amount=Decimal("10"), date=date(2025, 1, 2), currency="USD"),
            Donation(name="Euro", amount=Decimal("50"), date=date(2025, 1, 1), currency="EUR"),
            TotalSpending(total_spent=Decimal("15")),
        ]
    )
    db_session.commit()

    report = _build(db_session, settings)

    assert report.status is FundingStatus.SURPLUS
    assert report.total_donations == Decimal("20")
    assert report.net_amount == Decimal("5")
    assert report.surplus_count == 1
    assert report.displayed_surplus[0].donor_name == "Sam"
    assert report.summary_text == "$5.00 / $15 (1 donation)"


def test_placeholder_credentials_give_configuration_message(
    db_session, settings_factory
) -> None:
    settings = settings_factory(
        database_username="your_username_here",
        database_password="your_password_here",
    )

    report = _build(db_session, settings)

    _assert_degraded(report, ConfigurationError.public_message)


def test_database_failure_gives_data_access_message(settings) -> None:
    db = MagicMock()
    db.query.side_effect = OperationalError("SELECT", {}, Exception("refused"))

    report = _build(db, settings)

    _assert_degraded(report, DataAccessError.public_message)


def test_unexpected_failure_is_absorbed(settings) -> None:
    db = MagicMock()
    db.query.side_effect = ValueError("driver exploded")

    report = _build(db, settings)

    _assert_degraded(report, FundingError.public_message)


def test_degraded_report_keeps_currency() -> None:
    report = degraded_report("nope", currency="EUR")

    assert report.currency == "EUR"
    assert report.has_any_donations is False


def test_inline_url_credentials_pass_configuration_check(
    db_session, settings_factory
) -> None:
    """Credentials written into the URL are enough on their own."""
    settings = settings_factory(
        database_url="mysql+pymysql://funds:pw@db.internal/craftfunds",
        database_username="your_username_here",
        database_password="your_password_here",
    )

    report = _build(db_session, settings)

    assert report.status is FundingStatus.NO_DONATIONS


def test_malformed_url_gives_connection_message(settings_factory) -> None:
    """Without an injected session the engine is built inside the guard."""
    settings = settings_factory(database_url="not a url")

    report = asyncio.run(FundingService(settings).build_report())

    _assert_degraded(report, ConfigurationError.connection_message)


def test_missing_driver_gives_connection_message(settings_factory) -> None:
    settings = settings_factory(database_url="nosuchdialect://db.internal/funds")

    report = asyncio.run(FundingService(settings).build_report())

    _assert_degraded(report, ConfigurationError.connection_message)


def test_placeholder_checked_before_engine_is_built(settings_factory) -> None:
    settings = settings_factory(
        database_url="postgresql://localhost/x",
        database_password="your_password_here",
    )

    report = asyncio.run(FundingService(settings).build_report())

    _assert_degraded(report, ConfigurationError.public_message)


def test_opens_its_own_session(tmp_path, settings_factory) -> None:
    """With no injected session the service reads through its own engine."""
    settings = settings_factory(database_url=f"sqlite:///{tmp_path / 'funds.db'}")

    report = asyncio.run(FundingService(settings).build_report())

    # Tables were never created, so the query itself fails
    _assert_degraded(report, DataAccessError.public_message)
