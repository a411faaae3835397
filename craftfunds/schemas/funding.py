"""Pydantic schemas for donation snapshots and funding reports."""

from __future__ import annotations

from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class FundingStatus(str, Enum):
    """Which state a funding report describes."""

    SURPLUS = "surplus"
    FULLY_CONSUMED = "fully_consumed"
    NO_DONATIONS = "no_donations"
    ERROR = "error"


class DonationRecord(BaseModel):
    """A single donation as read from the store (immutable)."""

    model_config = ConfigDict(frozen=True)

    donor_name: str = Field(..., description="Donor display name")
    amount: Decimal = Field(
        ...,
        description="Donated amount; negative values are treated as zero",
    )
    occurred_on: date
    currency: str = Field(
        ...,
        min_length=3,
        max_length=3,
        description="ISO 4217 currency code",
    )


class SurplusEntry(BaseModel):
    """The unspent part of one donation, numbered in reconciliation order."""

    model_config = ConfigDict(frozen=True)

    sequence_number: int = Field(..., ge=1)
    donor_name: str
    surplus_amount: Decimal = Field(..., gt=0)
    occurred_on: date


class FundingReport(BaseModel):
    """Result of reconciling donations against total spending.

    ``surplus_count`` counts every donation with money left over, while
    ``displayed_surplus`` only holds the first entries up to the display cap.
    """

    model_config = ConfigDict(frozen=True)

    status: FundingStatus
    currency: str = "USD"
    total_donations: Decimal = Decimal(0)
    total_spending: Decimal = Decimal(0)
    net_amount: Decimal = Decimal(0)
    surplus_count: int = 0
    displayed_surplus: tuple[SurplusEntry, ...] = ()
    summary_text: str
    has_any_donations: bool = False

    @property
    def fully_consumed(self) -> bool:
        """True when donations exist but spending has absorbed all of them."""
        return self.status is FundingStatus.FULLY_CONSUMED

    @property
    def is_degraded(self) -> bool:
        return self.status is FundingStatus.ERROR


class GoalTone(str, Enum):
    """How the headline should be emphasised by the client."""

    BELOW_GOAL = "below_goal"
    GOAL_MET = "goal_met"
    NEUTRAL = "neutral"
    ERROR = "error"


class FundStatusView(BaseModel):
    """Render-ready funding status as shown to players."""

    header: str
    headline: str
    tone: GoalTone
    breakdown: list[str] = Field(
        default_factory=list,
        description="Hover text lines listing the unspent donations",
    )
    goal_messages: list[str] = Field(default_factory=list)
    periods_covered: int = 0
    report: FundingReport


class DonationLink(BaseModel):
    """Clickable donation link returned by /donate."""

    label: str
    url: str
    hover_text: Optional[str] = None
