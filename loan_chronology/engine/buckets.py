"""Assign payments to the weekly grid of a loan."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Iterable

from loan_chronology.engine.dates import to_datetime, week_index_of, week_slot
from loan_chronology.models.chronology import WeekSlot
from loan_chronology.models.loan import PaymentRecord

logger = logging.getLogger(__name__)


@dataclass
class PaymentBuckets:
    """Payments of one loan grouped by week."""

    by_week: dict[int, list[PaymentRecord]] = field(default_factory=dict)
    signing_week: list[PaymentRecord] = field(default_factory=list)
    outside_grid: list[PaymentRecord] = field(default_factory=list)
    before_signing: list[PaymentRecord] = field(default_factory=list)
    after_horizon: list[PaymentRecord] = field(default_factory=list)
    rejected: list[PaymentRecord] = field(default_factory=list)

    def week_payments(self, week_index: int) -> list[PaymentRecord]:
        return self.by_week.get(week_index, [])

    def week_total(self, week_index: int) -> Decimal:
        return sum_amounts(self.week_payments(week_index))


def sum_amounts(payments: Iterable[PaymentRecord]) -> Decimal:
    return sum((Decimal(p.amount) for p in payments), Decimal("0"))


def enumerate_weeks(sign_date: datetime, total_weeks: int) -> list[WeekSlot]:
    """Slots for weeks 1 through ``total_weeks``."""
    return [week_slot(sign_date, k) for k in range(1, total_weeks + 1)]


def sort_payments(payments: Iterable[PaymentRecord]) -> list[PaymentRecord]:
    """Payments in receipt order; ties keep their input order."""
    return sorted(payments, key=lambda p: to_datetime(p.received_at) or datetime.min)


def bucket_payments(
    sign_date: datetime,
    payments: Iterable[PaymentRecord],
    total_weeks: int,
    loan_id: str = "",
    end_date: datetime | None = None,
) -> PaymentBuckets:
    """Group payments into the weeks that contain them.

    Parameters
    ----------
    sign_date : datetime
        Loan signing date (week 0).
    payments : Iterable[PaymentRecord]
        Payments of the loan, any order.
    total_weeks : int
        Last week of the grid.
    loan_id : str
        Used only for log context.
    end_date : datetime | None
        Evaluation horizon. Payments received after it are set aside and
        never reach a week, even when they fall inside a grid week.

    Returns
    -------
    PaymentBuckets
        Payments per week in receipt order, plus the ones that fall in
        the signing week, after the grid, before signing, after the
        horizon, or carry a non-positive amount.
    """
    buckets = PaymentBuckets()

    for payment in sort_payments(payments):
        received_at = to_datetime(payment.received_at)
        if received_at is None or Decimal(payment.amount) <= 0:
            logger.warning(
                "Ignoring payment %s on loan %s: amount=%s received_at=%s",
                payment.payment_id,
                loan_id,
                payment.amount,
                payment.received_at,
                extra={"loan_id": loan_id, "payment_id": payment.payment_id},
            )
            buckets.rejected.append(payment)
            continue

        if received_at < sign_date:
            buckets.before_signing.append(payment)
            continue
        if end_date is not None and received_at > end_date:
            buckets.after_horizon.append(payment)
            continue

        week_index = week_index_of(sign_date, received_at)
        if week_index == 0:
            buckets.signing_week.append(payment)
        elif week_index > total_weeks:
            buckets.outside_grid.append(payment)
        else:
            buckets.by_week.setdefault(week_index, []).append(payment)

    return buckets
