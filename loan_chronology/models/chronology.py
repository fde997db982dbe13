"""Derived records produced by the chronology engine."""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal

from loan_chronology.models.enums import (
    CoverageType,
    EventKind,
    HorizonReason,
    PaymentMethod,
)
from loan_chronology.models.loan import PaymentRecord


@dataclass(frozen=True)
class WeekSlot:
    """Monday-to-Sunday window around the due date of week ``week_index``."""

    week_index: int
    due_date: datetime
    start: datetime
    end: datetime

    def contains(self, moment: datetime) -> bool:
        return self.start <= moment <= self.end


@dataclass(frozen=True)
class EvaluationHorizon:
    """Last date up to which a loan's weeks are evaluated."""

    end_date: datetime
    total_weeks: int
    reason: HorizonReason


@dataclass(frozen=True)
class WeekCoverage:
    """Classification of one evaluated week."""

    week_index: int
    due_date: datetime
    coverage: CoverageType
    amount_expected: Decimal
    paid: Decimal
    surplus_before: Decimal
    surplus_after: Decimal
    payments: tuple[PaymentRecord, ...] = ()


@dataclass(frozen=True)
class ChronologyEvent:
    """One row of a loan's payment chronology."""

    event_id: str
    week_index: int
    kind: EventKind
    coverage_type: CoverageType
    date: datetime
    date_formatted: str
    description: str
    amount_expected: Decimal
    amount_paid_this_week: Decimal  # This event's own contribution
    week_total_paid: Decimal
    surplus_before: Decimal
    surplus_after: Decimal
    payment_id: str | None = None
    payment_method: PaymentMethod | None = None
    payment_number: int | None = None


@dataclass(frozen=True)
class Chronology:
    """Full reconstruction of a loan's weekly payment history."""

    loan_id: str
    horizon: EvaluationHorizon | None
    expected_weekly_payment: Decimal
    weeks: tuple[WeekCoverage, ...] = ()
    events: tuple[ChronologyEvent, ...] = ()
    final_surplus: Decimal = Decimal("0")

    @property
    def missed_weeks(self) -> int:
        return sum(1 for w in self.weeks if w.coverage == CoverageType.MISS)


@dataclass(frozen=True)
class ArrearsSummary:
    """Arrears (PAGO VDO) figure for a loan."""

    loan_id: str
    expected_weekly_payment: Decimal
    weeks_without_payment: int
    arrears_amount: Decimal
    partial_payment: Decimal  # Surplus carried past the last evaluated week
    pending_amount: Decimal


@dataclass(frozen=True)
class PartialPaymentSummary:
    """Overpayment inside the week that contains the reference date."""

    expected_weekly_payment: Decimal
    total_paid_in_current_week: Decimal
    partial_payment_amount: Decimal
    payments: list[PaymentRecord] = field(default_factory=list)
