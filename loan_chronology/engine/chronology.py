"""Week-by-week payment chronology of a loan.

``generate_chronology`` is the single entry point used by the client
history, the PDF export and the collections listing. It is a pure
function of the loan and the reference time.
"""

from __future__ import annotations

import logging
from datetime import datetime, timedelta
from decimal import Decimal

from loan_chronology.config import ChronologyConfig
from loan_chronology.engine.amounts import expected_weekly_payment
from loan_chronology.engine.buckets import bucket_payments, enumerate_weeks, sum_amounts
from loan_chronology.engine.coverage import ZERO, classify_weeks
from loan_chronology.engine.dates import format_date, to_datetime, week_index_of, week_sunday_end
from loan_chronology.engine.horizon import FullyPaidPolicy, last_payment_time, resolve_horizon
from loan_chronology.models.chronology import Chronology, ChronologyEvent, WeekCoverage
from loan_chronology.models.enums import CoverageType, EventKind, HorizonReason, WeekMode
from loan_chronology.models.loan import LoanRecord, PaymentRecord

logger = logging.getLogger(__name__)


def evaluation_cutoff(now: datetime, week_mode: WeekMode = WeekMode.CURRENT) -> datetime:
    """Instant before which a week must end to be considered closed.

    ``CURRENT`` closes weeks that ended before ``now``; ``NEXT`` also
    closes the week that contains ``now``.
    """
    if week_mode == WeekMode.NEXT:
        return week_sunday_end(now) + timedelta(microseconds=1)
    return now


def build_chronology(
    loan: LoanRecord,
    now: datetime | None = None,
    config: ChronologyConfig | None = None,
    week_mode: WeekMode = WeekMode.CURRENT,
    fully_paid: FullyPaidPolicy | None = None,
) -> Chronology:
    """Reconstruct the weekly payment history of a loan.

    Parameters
    ----------
    loan : LoanRecord
        Loan with its payments.
    now : datetime | None
        Reference time; defaults to the current local time. Every
        timestamp is compared as naive local time (see ``to_datetime``).
    config : ChronologyConfig | None
        Engine rules.
    week_mode : WeekMode
        Whether the week containing ``now`` counts as closed.
    fully_paid : FullyPaidPolicy | None
        Overrides the fully-paid policy named in ``config``.

    Returns
    -------
    Chronology
        Per-week classification and the sorted event list. Empty when
        the loan has no usable sign date.
    """
    config = config or ChronologyConfig()
    now = to_datetime(now) or datetime.now()
    expected = expected_weekly_payment(loan)

    sign_date = to_datetime(loan.sign_date)
    horizon = resolve_horizon(loan, now, config, fully_paid)
    if sign_date is None or horizon is None:
        logger.debug(
            "Loan %s has no usable sign date, empty chronology",
            loan.loan_id,
            extra={"loan_id": loan.loan_id},
        )
        return Chronology(loan_id=loan.loan_id, horizon=None, expected_weekly_payment=expected)

    paid_until = last_payment_time(horizon)
    buckets = bucket_payments(
        sign_date, loan.payments, horizon.total_weeks, loan.loan_id, end_date=paid_until
    )
    if buckets.after_horizon:
        logger.debug(
            "Loan %s: %d payment(s) after %s left out",
            loan.loan_id,
            len(buckets.after_horizon),
            paid_until,
            extra={"loan_id": loan.loan_id},
        )
    # Anything paid during the signing week is an advance on week 1
    opening_surplus = sum_amounts(buckets.signing_week)

    terminal_date = None
    if horizon.reason in (HorizonReason.FINISHED, HorizonReason.BAD_DEBT):
        terminal_date = horizon.end_date

    weeks = classify_weeks(
        enumerate_weeks(sign_date, horizon.total_weeks),
        buckets,
        expected,
        cutoff=evaluation_cutoff(now, week_mode),
        terminal_date=terminal_date,
        opening_surplus=opening_surplus,
    )
    final_surplus = weeks[-1].surplus_after if weeks else opening_surplus

    events: list[ChronologyEvent] = []
    for week in weeks:
        events.extend(_week_events(week, config.date_format))

    # Grid weeks reach the week of the horizon, so only signing-week
    # payments can be out of band here
    running = ZERO
    for payment in buckets.signing_week:
        surplus_before = running
        running += Decimal(payment.amount)
        events.append(
            _out_of_band_event(payment, sign_date, surplus_before, running, config.date_format)
        )

    events.sort(key=lambda e: e.date)

    return Chronology(
        loan_id=loan.loan_id,
        horizon=horizon,
        expected_weekly_payment=expected,
        weeks=tuple(weeks),
        events=tuple(events),
        final_surplus=final_surplus,
    )


def generate_chronology(
    loan: LoanRecord,
    now: datetime | None = None,
    config: ChronologyConfig | None = None,
    week_mode: WeekMode = WeekMode.CURRENT,
) -> list[ChronologyEvent]:
    """Ordered chronology events of a loan (see ``build_chronology``)."""
    return list(build_chronology(loan, now, config, week_mode).events)


def _week_events(week: WeekCoverage, date_format: str) -> list[ChronologyEvent]:
    if not week.payments:
        return [
            ChronologyEvent(
                event_id=f"no-payment-{week.week_index}",
                week_index=week.week_index,
                kind=EventKind.NO_PAYMENT,
                coverage_type=week.coverage,
                date=week.due_date,
                date_formatted=format_date(week.due_date, date_format),
                description="Covered by surplus"
                if week.coverage == CoverageType.COVERED_BY_SURPLUS
                else "No payment",
                amount_expected=week.amount_expected,
                amount_paid_this_week=ZERO,
                week_total_paid=ZERO,
                surplus_before=week.surplus_before,
                surplus_after=week.surplus_after,
            )
        ]

    count = len(week.payments)
    events = []
    for index, payment in enumerate(week.payments, start=1):
        if count > 1:
            description = f"Payment #{index} ({index}/{count})"
        else:
            description = f"Payment #{payment.payment_number or index}"
        received_at = to_datetime(payment.received_at)
        events.append(
            ChronologyEvent(
                event_id=f"payment-{payment.payment_id}",
                week_index=week.week_index,
                kind=EventKind.PAYMENT,
                coverage_type=week.coverage,
                date=received_at,
                date_formatted=format_date(received_at, date_format),
                description=description,
                amount_expected=week.amount_expected,
                amount_paid_this_week=Decimal(payment.amount),
                week_total_paid=week.paid,
                surplus_before=week.surplus_before,
                surplus_after=week.surplus_after,
                payment_id=payment.payment_id,
                payment_method=payment.payment_method,
                payment_number=payment.payment_number or index,
            )
        )
    return events


def _out_of_band_event(
    payment: PaymentRecord,
    sign_date: datetime,
    surplus_before: Decimal,
    surplus_after: Decimal,
    date_format: str,
) -> ChronologyEvent:
    received_at = to_datetime(payment.received_at)
    amount = Decimal(payment.amount)
    number = payment.payment_number
    return ChronologyEvent(
        event_id=f"payment-{payment.payment_id}",
        week_index=week_index_of(sign_date, received_at),
        kind=EventKind.PAYMENT,
        coverage_type=CoverageType.OUT_OF_BAND,
        date=received_at,
        date_formatted=format_date(received_at, date_format),
        description=f"Payment #{number}" if number else "Additional payment",
        amount_expected=ZERO,
        amount_paid_this_week=amount,
        week_total_paid=amount,
        surplus_before=surplus_before,
        surplus_after=surplus_after,
        payment_id=payment.payment_id,
        payment_method=payment.payment_method,
        payment_number=number,
    )
