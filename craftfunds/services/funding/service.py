"""Async boundary between the donation store and the pure reconciler.

``FundingService.build_report`` is what request handlers await:
  1. Refuse early when database credentials are not configured.
  2. Open a session and fetch the donation snapshot and spend total in a
     worker thread.  Engine construction happens here too, so a bad URL
     or a missing driver is reported like any other failure.
  3. Hand both to ``FundingReconciler``.

Every failure along the way becomes a degraded ``FundingReport`` with a
short message, so callers always get a value back.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Optional

from fastapi import Depends
from fastapi.concurrency import run_in_threadpool
from sqlalchemy.exc import ArgumentError
from sqlalchemy.orm import Session

from craftfunds.core.config import Settings, get_settings
from craftfunds.core.database import get_session_factory
from craftfunds.core.logging import get_logger
from craftfunds.schemas.funding import DonationRecord, FundingReport, FundingStatus
from craftfunds.services.funding.errors import ConfigurationError, FundingError
from craftfunds.services.funding.reconciler import FundingReconciler
from craftfunds.services.funding.repository import DonationRepository

logger = get_logger(__name__)


def degraded_report(message: str, currency: str = "USD") -> FundingReport:
    """A report carrying only an error message: zero amounts, no entries."""
    return FundingReport(
        status=FundingStatus.ERROR,
        currency=currency,
        summary_text=message,
    )


class FundingService:
    """Produces funding reports for one request.

    Pass ``db`` to read through an existing session; otherwise a session is
    opened from ``settings`` for each report and closed afterwards.
    """

    def __init__(self, settings: Settings, db: Optional[Session] = None) -> None:
        self.settings = settings
        self.db = db
        self.config = settings.funding_config()
        self.reconciler = FundingReconciler(self.config)

    async def build_report(self) -> FundingReport:
        """Fetch a snapshot and reconcile it.  Never raises."""
        try:
            self._check_configuration()
            records, spending = await run_in_threadpool(self._load_snapshot)
        except FundingError as exc:
            if isinstance(exc, ConfigurationError):
                logger.warning("Funding report unavailable: %s", exc)
            else:
                logger.error("Funding report unavailable [%s]: %s", exc.code, exc)
            return degraded_report(exc.public_message, self.config.currency)
        except Exception:
            logger.exception("Unexpected error while retrieving funding data")
            return degraded_report(FundingError.public_message, self.config.currency)

        report = self.reconciler.reconcile(records, spending)
        logger.info(
            "Funding report ready: status=%s net=%s surplus_count=%d",
            report.status.value,
            report.net_amount,
            report.surplus_count,
        )
        return report

    def _check_configuration(self) -> None:
        if not self.settings.has_valid_database_credentials():
            raise ConfigurationError(
                "Database credentials are missing or still set to placeholders"
            )

    def _load_snapshot(self) -> tuple[list[DonationRecord], Decimal]:
        if self.db is not None:
            return self._read(self.db)

        db = self._open_session()
        try:
            return self._read(db)
        finally:
            db.close()

    def _open_session(self) -> Session:
        try:
            return get_session_factory(self.settings)()
        except (ArgumentError, ImportError) as exc:
            raise ConfigurationError(
                f"Cannot create database engine: {exc}",
                public_message=ConfigurationError.connection_message,
            ) from exc

    def _read(self, db: Session) -> tuple[list[DonationRecord], Decimal]:
        repository = DonationRepository(db)
        records = repository.fetch_donations(self.config.currency)
        spending = repository.fetch_total_spending()
        return records, spending


def get_funding_service(settings: Settings = Depends(get_settings)) -> FundingService:
    """Dependency building a service that opens its own session."""
    return FundingService(settings)
