"""Arrears (PAGO VDO) and partial-payment figures for the collections listing.

Both figures come from the same chronology the client history shows, so
the route sheet and the history page always agree on which weeks were
missed.
"""

from __future__ import annotations

import logging
from datetime import datetime
from decimal import Decimal

from loan_chronology.config import ChronologyConfig
from loan_chronology.engine.amounts import ZERO, expected_weekly_payment, pending_amount
from loan_chronology.engine.buckets import sum_amounts
from loan_chronology.engine.chronology import build_chronology
from loan_chronology.engine.dates import to_datetime, week_monday, week_sunday_end
from loan_chronology.models.chronology import ArrearsSummary, PartialPaymentSummary
from loan_chronology.models.enums import WeekMode
from loan_chronology.models.loan import LoanRecord

logger = logging.getLogger(__name__)


def calculate_arrears(
    loan: LoanRecord,
    now: datetime | None = None,
    config: ChronologyConfig | None = None,
    week_mode: WeekMode = WeekMode.CURRENT,
) -> ArrearsSummary:
    """Compute the arrears owed from missed weeks.

    Arrears are ``missed weeks * expected installment``, capped at the
    loan's pending balance: the chronology decides which weeks were
    missed, the ledger balance decides how much is actually owed.

    Parameters
    ----------
    loan : LoanRecord
        Loan with its payments.
    now : datetime | None
        Reference time.
    config : ChronologyConfig | None
        Engine rules.
    week_mode : WeekMode
        ``CURRENT`` counts weeks up to last Sunday, ``NEXT`` up to the
        coming Sunday.

    Returns
    -------
    ArrearsSummary
        Arrears figure and the surplus carried past the last week.
    """
    chronology = build_chronology(loan, now, config, week_mode)
    expected = chronology.expected_weekly_payment
    pending = pending_amount(loan)
    missed = chronology.missed_weeks
    raw_arrears = expected * missed
    arrears = min(raw_arrears, pending)

    if raw_arrears > pending:
        logger.info(
            "Loan %s arrears %s capped at pending balance %s",
            loan.loan_id,
            raw_arrears,
            pending,
            extra={"loan_id": loan.loan_id},
        )

    return ArrearsSummary(
        loan_id=loan.loan_id,
        expected_weekly_payment=expected,
        weeks_without_payment=missed,
        arrears_amount=arrears,
        partial_payment=max(ZERO, chronology.final_surplus),
        pending_amount=pending,
    )


def calculate_partial_payment(
    loan: LoanRecord,
    now: datetime | None = None,
) -> PartialPaymentSummary:
    """Overpayment received in the week that contains ``now``.

    Only positive excess counts; a short week yields zero.
    """
    now = to_datetime(now) or datetime.now()
    expected = expected_weekly_payment(loan)
    start, end = week_monday(now), week_sunday_end(now)

    payments = []
    for payment in loan.payments:
        received_at = to_datetime(payment.received_at)
        if received_at is None or Decimal(payment.amount) <= 0:
            continue
        if start <= received_at <= end:
            payments.append(payment)
    paid = sum_amounts(payments)

    return PartialPaymentSummary(
        expected_weekly_payment=expected,
        total_paid_in_current_week=paid,
        partial_payment_amount=max(ZERO, paid - expected),
        payments=payments,
    )
