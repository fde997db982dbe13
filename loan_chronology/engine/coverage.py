"""Weekly coverage classification with surplus carry-forward.

Overpayment carries forward and silently covers later weeks. A shortfall
is not carried: a missed or partial week is counted once and the next
week starts from zero surplus.
"""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal

from loan_chronology.engine.buckets import PaymentBuckets
from loan_chronology.models.chronology import WeekCoverage, WeekSlot
from loan_chronology.models.enums import CoverageType

ZERO = Decimal("0")


def classify_week(
    expected: Decimal,
    paid: Decimal,
    surplus_before: Decimal,
) -> tuple[CoverageType, Decimal]:
    """Classify one week and compute the surplus carried out of it.

    Parameters
    ----------
    expected : Decimal
        Installment due this week.
    paid : Decimal
        Sum of payments received this week.
    surplus_before : Decimal
        Surplus carried in from earlier weeks (never negative).

    Returns
    -------
    tuple[CoverageType, Decimal]
        Coverage of the week and the surplus carried to the next one.
    """
    covered_total = surplus_before + paid

    if expected <= 0:
        # No obligation: nothing can be missed
        return CoverageType.FULL, covered_total

    if paid <= 0:
        coverage = CoverageType.COVERED_BY_SURPLUS if covered_total >= expected else CoverageType.MISS
    else:
        coverage = CoverageType.FULL if covered_total >= expected else CoverageType.PARTIAL

    return coverage, max(ZERO, covered_total - expected)


def classify_weeks(
    slots: list[WeekSlot],
    buckets: PaymentBuckets,
    expected: Decimal,
    cutoff: datetime,
    terminal_date: datetime | None = None,
    opening_surplus: Decimal = ZERO,
) -> list[WeekCoverage]:
    """Run the classifier over the weekly grid.

    A week without payments is evaluated only once its Sunday is before
    ``cutoff`` and its due date is not after ``terminal_date``. Weeks with
    payments are always evaluated.
    """
    surplus = opening_surplus
    weeks = []

    for slot in slots:
        payments = buckets.week_payments(slot.week_index)
        if not payments:
            if slot.end >= cutoff:
                continue
            if terminal_date is not None and slot.due_date > terminal_date:
                continue

        paid = buckets.week_total(slot.week_index)
        coverage, surplus_after = classify_week(expected, paid, surplus)
        weeks.append(
            WeekCoverage(
                week_index=slot.week_index,
                due_date=slot.due_date,
                coverage=coverage,
                amount_expected=expected,
                paid=paid,
                surplus_before=surplus,
                surplus_after=surplus_after,
                payments=tuple(payments),
            )
        )
        surplus = surplus_after

    return weeks
