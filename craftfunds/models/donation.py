"""Donation model — one row per donation received by the server."""

from __future__ import annotations

import datetime as dt
from decimal import Decimal
from typing import Optional

from sqlalchemy import Date, Index, Integer, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column

from craftfunds.core.database import Base


class Donation(Base):
    """A donation as recorded by the payment integration.

    Rows are written by an external system; this service only reads them.
    """

    __tablename__ = "donations"

    id: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        autoincrement=True,
    )
    name: Mapped[str] = mapped_column(
        String(100),
        nullable=False,
        comment="Donor display name",
    )
    amount: Mapped[Optional[Decimal]] = mapped_column(
        Numeric(10, 2),
    )
    date: Mapped[Optional[dt.date]] = mapped_column(
        Date,
    )
    currency: Mapped[str] = mapped_column(
        String(3),
        nullable=False,
        comment="ISO 4217 currency code",
    )

    __table_args__ = (Index("ix_donations_currency_date", "currency", "date"),)

    def __repr__(self) -> str:
        return (
            f"<Donation(name={self.name!r}, amount={self.amount}, "
            f"currency={self.currency!r}, date={self.date})>"
        )
