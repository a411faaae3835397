"""FIFO reconciliation of donations against total spending.

Spending eats into the oldest money first:
  1. Keep only donations in the configured currency, oldest first.
     ``sorted`` is stable, so same-day donations keep their input order.
  2. Walk them, subtracting each amount from the remaining spend until
     the spend runs out.  A donation the spend fully covers is gone.
  3. Whatever is left of a donation is surplus: it gets the next sequence
     number and is counted, but only the first ``display_cap`` entries are
     kept for display.  The walk always runs to the end so the count is
     exact.

The reconciler is pure: no I/O, no shared state, no exceptions for bad
numbers (negative values are clamped to zero and logged).
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable, Optional, Union

from craftfunds.core.config import FundingConfig
from craftfunds.core.logging import get_logger
from craftfunds.schemas.funding import (
    DonationRecord,
    FundingReport,
    FundingStatus,
    SurplusEntry,
)

logger = get_logger(__name__)

CENT = Decimal("0.01")
NO_DONATIONS_TEXT = "No donations found."

Number = Union[Decimal, int, float, str]


# ── Formatting helpers ──────────────────────────────────────────────


def to_decimal(value: Optional[Number]) -> Decimal:
    """Coerce a numeric value to Decimal without float artefacts."""
    if value is None:
        return Decimal(0)
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def format_money(amount: Decimal) -> str:
    """Format an amount as ``$12.34`` (half-up to cents, ``-$`` when negative)."""
    rounded = amount.quantize(CENT, rounding=ROUND_HALF_UP)
    if rounded == 0:
        rounded = abs(rounded)
    if rounded < 0:
        return f"-${-rounded}"
    return f"${rounded}"


def format_goal(goal: Decimal) -> str:
    """Format the goal threshold, dropping decimals when it is whole (``$15``)."""
    if goal == goal.to_integral_value():
        return f"${int(goal)}"
    return format_money(goal)


def pluralize(count: int, singular: str, plural: Optional[str] = None) -> str:
    """Return ``"1 donation"`` / ``"3 donations"``."""
    word = singular if count == 1 else (plural or f"{singular}s")
    return f"{count} {word}"


# ── Reconciler ──────────────────────────────────────────────────────


class FundingReconciler:
    """Builds a ``FundingReport`` from a donation snapshot and a spend total."""

    def __init__(self, config: Optional[FundingConfig] = None) -> None:
        self.config = config or FundingConfig()

    def reconcile(
        self,
        records: Iterable[DonationRecord],
        spending: Optional[Number],
    ) -> FundingReport:
        """FIFO-consume ``records`` by ``spending`` and summarise what is left.

        Args:
            records: Donation snapshot, in any order and any currency.
                Records outside the configured currency are ignored.
            spending: Cumulative spend to date.  ``None`` or negative values
                count as zero.

        Returns:
            An immutable ``FundingReport``.
        """
        currency = self.config.currency.upper()
        cap = max(self.config.display_cap, 0)

        qualifying = [
            (record, self._non_negative(record.amount, record.donor_name))
            for record in records
            if record.currency.upper() == currency
        ]
        ordered = sorted(qualifying, key=lambda pair: pair[0].occurred_on)

        total_donations = sum((amount for _, amount in ordered), Decimal(0))
        total_spending = self._non_negative(to_decimal(spending), "total spending")

        remaining = total_spending
        displayed: list[SurplusEntry] = []
        surplus_count = 0

        for record, amount in ordered:
            if remaining >= amount:
                remaining -= amount
                continue

            surplus = amount - remaining
            remaining = Decimal(0)
            surplus_count += 1

            if len(displayed) < cap:
                displayed.append(
                    SurplusEntry(
                        sequence_number=surplus_count,
                        donor_name=record.donor_name,
                        surplus_amount=surplus,
                        occurred_on=record.occurred_on,
                    )
                )

        net_amount = total_donations - total_spending
        has_any_donations = total_donations > 0

        if not has_any_donations:
            status = FundingStatus.NO_DONATIONS
            summary_text = NO_DONATIONS_TEXT
        else:
            status = (
                FundingStatus.SURPLUS if surplus_count else FundingStatus.FULLY_CONSUMED
            )
            summary_text = (
                f"{format_money(net_amount)} / "
                f"{format_goal(self.config.goal_threshold)} "
                f"({pluralize(surplus_count, 'donation')})"
            )

        logger.debug(
            "Reconciled %d %s donations against spend %s: net=%s surplus_count=%d",
            len(ordered),
            currency,
            total_spending,
            net_amount,
            surplus_count,
        )

        return FundingReport(
            status=status,
            currency=currency,
            total_donations=total_donations,
            total_spending=total_spending,
            net_amount=net_amount,
            surplus_count=surplus_count,
            displayed_surplus=tuple(displayed),
            summary_text=summary_text,
            has_any_donations=has_any_donations,
        )

    @staticmethod
    def _non_negative(value: Decimal, label: str) -> Decimal:
        if value < 0:
            logger.warning("Negative amount %s for %s treated as zero", value, label)
            return Decimal(0)
        return value


def reconcile(
    records: Iterable[DonationRecord],
    spending: Optional[Number],
    config: Optional[FundingConfig] = None,
) -> FundingReport:
    """Module-level shortcut for ``FundingReconciler(config).reconcile(...)``."""
    return FundingReconciler(config).reconcile(records, spending)
