"""Read access to the donation store.

Wraps the two queries the funding report needs.  Anything that goes wrong
down here surfaces as a ``DataAccessError``; retrying is left to callers.
"""

from __future__ import annotations

from decimal import Decimal

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from craftfunds.core.logging import get_logger
from craftfunds.models.donation import Donation
from craftfunds.models.spending import TotalSpending
from craftfunds.schemas.funding import DonationRecord
from craftfunds.services.funding.errors import DataAccessError

logger = get_logger(__name__)


class DonationRepository:
    """Fetches donation snapshots and the spending total from the database."""

    def __init__(self, db: Session) -> None:
        self.db = db

    def fetch_donations(self, currency: str) -> list[DonationRecord]:
        """Load every donation in ``currency``, oldest first.

        Raises:
            DataAccessError: The query failed or a row has no amount/date.
        """
        try:
            rows = (
                self.db.query(Donation)
                .filter(Donation.currency == currency)
                .order_by(Donation.date.asc(), Donation.id.asc())
                .all()
            )
        except SQLAlchemyError as exc:
            raise DataAccessError(f"Could not load donations: {exc}") from exc

        records: list[DonationRecord] = []
        for row in rows:
            if row.amount is None or row.date is None:
                raise DataAccessError(
                    f"Donation row id={row.id} is missing its amount or date"
                )
            records.append(
                DonationRecord(
                    donor_name=row.name,
                    amount=row.amount,
                    occurred_on=row.date,
                    currency=row.currency,
                )
            )

        logger.info("Loaded %d %s donations", len(records), currency)
        return records

    def fetch_total_spending(self) -> Decimal:
        """Return cumulative spend, or zero when no spending row exists.

        Raises:
            DataAccessError: The query failed.
        """
        try:
            total = (
                self.db.query(TotalSpending.total_spent)
                .order_by(TotalSpending.id.asc())
                .limit(1)
                .scalar()
            )
        except SQLAlchemyError as exc:
            raise DataAccessError(f"Could not load total spending: {exc}") from exc

        if total is None:
            return Decimal(0)
        return Decimal(str(total))
