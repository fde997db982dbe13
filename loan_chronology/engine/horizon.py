"""Evaluation horizon: how far a loan's weeks are evaluated."""

from __future__ import annotations

import math
from datetime import datetime, time
from decimal import Decimal
from typing import Callable

from loan_chronology.config import ChronologyConfig
from loan_chronology.engine.amounts import total_paid
from loan_chronology.engine.dates import END_OF_DAY, ONE_WEEK, to_datetime, weeks_between
from loan_chronology.exceptions import ConfigurationError
from loan_chronology.models.chronology import EvaluationHorizon
from loan_chronology.models.enums import HorizonReason
from loan_chronology.models.loan import LoanRecord

FullyPaidPolicy = Callable[[LoanRecord], bool]


def never_fully_paid(loan: LoanRecord) -> bool:
    """Open loans are never considered settled by amount.

    Closure is driven only by ``finished_date`` and ``bad_debt_date``.
    """
    return False


def paid_by_amount(loan: LoanRecord) -> bool:
    """Settled once positive payments reach the loan's total amount."""
    total = loan.total_amount
    if total <= 0:
        return False
    return total_paid(loan) >= total


FULLY_PAID_POLICIES: dict[str, FullyPaidPolicy] = {
    "never": never_fully_paid,
    "by_amount": paid_by_amount,
}


def get_fully_paid_policy(name: str) -> FullyPaidPolicy:
    """Look up a fully-paid policy by its configuration name."""
    try:
        return FULLY_PAID_POLICIES[name]
    except KeyError:
        raise ConfigurationError(f"Unknown fully-paid policy {name!r}") from None


def max_evaluation_weeks(loan: LoanRecord, config: ChronologyConfig) -> int:
    """Longest window evaluated for an open loan.

    Large loans get one extra week per ``principal_per_week`` lent when
    that exceeds the nominal term.
    """
    principal = Decimal(loan.amount_requested or 0)
    by_principal = math.ceil(principal / config.principal_per_week) if principal > 0 else 0
    return max(loan.week_duration or config.default_week_duration, by_principal)


def resolve_horizon(
    loan: LoanRecord,
    now: datetime,
    config: ChronologyConfig | None = None,
    fully_paid: FullyPaidPolicy | None = None,
) -> EvaluationHorizon | None:
    """Determine the last date and week count to evaluate.

    Parameters
    ----------
    loan : LoanRecord
        Loan being evaluated.
    now : datetime
        Reference "current" time.
    config : ChronologyConfig | None
        Engine rules; defaults apply when omitted.
    fully_paid : FullyPaidPolicy | None
        Overrides the policy named in ``config``.

    Returns
    -------
    EvaluationHorizon | None
        ``None`` when the loan has no usable sign date.
    """
    config = config or ChronologyConfig()
    sign_date = to_datetime(loan.sign_date)
    if sign_date is None:
        return None

    if fully_paid is None:
        fully_paid = get_fully_paid_policy(config.fully_paid_policy)

    finished_date = to_datetime(loan.finished_date)
    bad_debt_date = to_datetime(loan.bad_debt_date)

    if loan.is_closed and finished_date is not None:
        end_date = finished_date
        total_weeks = weeks_between(sign_date, end_date)
        reason = HorizonReason.FINISHED
    elif bad_debt_date is not None:
        end_date = bad_debt_date
        total_weeks = weeks_between(sign_date, end_date)
        reason = HorizonReason.BAD_DEBT
    elif fully_paid(loan):
        end_date = now
        total_weeks = weeks_between(sign_date, end_date)
        reason = HorizonReason.FULLY_PAID
    else:
        max_weeks = max_evaluation_weeks(loan, config)
        end_date = min(now, sign_date + max_weeks * ONE_WEEK)
        total_weeks = min(max_weeks, weeks_between(sign_date, end_date))
        reason = HorizonReason.ACTIVE

    return EvaluationHorizon(
        end_date=end_date,
        total_weeks=max(1, total_weeks),
        reason=reason,
    )


def last_payment_time(horizon: EvaluationHorizon) -> datetime:
    """Latest receipt time of a payment that still counts for the loan.

    A finished or bad-debt date recorded without a time of day covers that
    whole day, so the payment that closes a loan is counted.
    """
    end_date = horizon.end_date
    terminal = horizon.reason in (HorizonReason.FINISHED, HorizonReason.BAD_DEBT)
    if terminal and end_date.time() == time.min:
        return datetime.combine(end_date.date(), END_OF_DAY)
    return end_date
