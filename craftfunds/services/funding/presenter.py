"""Turn a ``FundingReport`` into the lines players see.

The headline is tinted by the funding goal: below ``goal`` it reads as a
warning, at or above it as met.  The hover breakdown lists the unspent
donations, and the goal line says how many periods the net amount covers.
"""

from __future__ import annotations

import math
from decimal import Decimal
from enum import Enum

from craftfunds.core.config import Settings
from craftfunds.schemas.funding import (
    FundingReport,
    FundingStatus,
    FundStatusView,
    GoalTone,
    SurplusEntry,
)
from craftfunds.services.funding.reconciler import format_money, pluralize

HEADER = "=== Server Fund ==="
FULLY_CONSUMED_TEXT = "All donations have been consumed by spending."
BELOW_GOAL_TEXT = "Server is below the funding goal"
DONATE_HINT = "Use '/donate' to fund the server"


class ViewContext(str, Enum):
    """Where the status is shown: an explicit /fund or the join greeting."""

    COMMAND = "command"
    JOIN = "join"


def periods_covered(net_amount: Decimal, goal: Decimal) -> int:
    """Whole funding periods the net amount pays for (never negative)."""
    if goal <= 0 or net_amount < goal:
        return 0
    return math.floor(net_amount / goal)


def breakdown_line(entry: SurplusEntry) -> str:
    return (
        f"{entry.sequence_number}. {entry.donor_name}: "
        f"{format_money(entry.surplus_amount)} "
        f"({entry.occurred_on.strftime('%m-%d')})"
    )


class FundStatusPresenter:
    """Builds ``FundStatusView`` values from reports."""

    def __init__(self, settings: Settings) -> None:
        self.goal = settings.funding_goal
        self.period_label = settings.period_label

    def present(
        self, report: FundingReport, context: ViewContext = ViewContext.COMMAND
    ) -> FundStatusView:
        if report.status is FundingStatus.ERROR:
            return FundStatusView(
                header=HEADER,
                headline=report.summary_text,
                tone=GoalTone.ERROR,
                report=report,
            )

        if report.status is FundingStatus.NO_DONATIONS:
            tone = GoalTone.NEUTRAL
            breakdown: list[str] = []
        else:
            tone = (
                GoalTone.BELOW_GOAL
                if report.net_amount < self.goal
                else GoalTone.GOAL_MET
            )
            breakdown = self._breakdown(report)

        periods = periods_covered(report.net_amount, self.goal)

        return FundStatusView(
            header=HEADER,
            headline=report.summary_text,
            tone=tone,
            breakdown=breakdown,
            goal_messages=self._goal_messages(report.net_amount, periods, context),
            periods_covered=periods,
            report=report,
        )

    def _breakdown(self, report: FundingReport) -> list[str]:
        if report.fully_consumed:
            return [FULLY_CONSUMED_TEXT]
        return ["Donations:"] + [breakdown_line(e) for e in report.displayed_surplus]

    def _goal_messages(
        self, net_amount: Decimal, periods: int, context: ViewContext
    ) -> list[str]:
        invite = context is ViewContext.JOIN

        if net_amount < self.goal:
            if invite:
                return [f"{BELOW_GOAL_TEXT}, use /donate"]
            return [BELOW_GOAL_TEXT]

        messages: list[str] = []
        if periods > 0:
            messages.append(
                f"Covers {pluralize(periods, self.period_label)} of server costs"
            )
            if invite:
                messages.append(DONATE_HINT)
        return messages
