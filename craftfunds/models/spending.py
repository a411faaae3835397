"""Running total of operational spending."""

from __future__ import annotations

from decimal import Decimal
from typing import Optional

from sqlalchemy import Integer, Numeric
from sqlalchemy.orm import Mapped, mapped_column

from craftfunds.core.database import Base


class TotalSpending(Base):
    """Single-row table holding cumulative spend to date."""

    __tablename__ = "total_spending"

    id: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        autoincrement=True,
    )
    total_spent: Mapped[Optional[Decimal]] = mapped_column(
        Numeric(12, 2),
    )

    def __repr__(self) -> str:
        return f"<TotalSpending(total_spent={self.total_spent})>"
