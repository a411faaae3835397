"""SQLAlchemy models for the CraftFunds donation store."""

from craftfunds.models.donation import Donation
from craftfunds.models.spending import TotalSpending

__all__ = [
    "Donation",
    "TotalSpending",
]
