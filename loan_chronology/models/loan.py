"""Loan and payment input records."""

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal

from loan_chronology.models.enums import LoanStatus, PaymentMethod

TERMINAL_STATUSES = (LoanStatus.FINISHED, LoanStatus.RENEWED)


@dataclass(frozen=True)
class PaymentRecord:
    """Payment received against a loan (abono)."""

    payment_id: str
    received_at: datetime
    amount: Decimal
    payment_method: PaymentMethod = PaymentMethod.CASH
    payment_number: int | None = None  # Sequence hint from the ledger


@dataclass(frozen=True)
class LoanRecord:
    """Loan contract as read from the ledger.

    ``sign_date`` anchors week 0; the first installment is expected in the
    following week. ``payments`` may arrive in any order.
    """

    loan_id: str
    sign_date: date | datetime | str | None
    week_duration: int | None
    amount_requested: Decimal
    total_amount_due: Decimal | None = None
    rate: Decimal | None = None  # e.g. 0.40 for 40% over the whole term
    expected_weekly_payment: Decimal | None = None
    pending_amount_stored: Decimal | None = None
    status: LoanStatus = LoanStatus.ACTIVE
    finished_date: date | datetime | None = None
    bad_debt_date: date | datetime | None = None
    borrower_name: str = ""
    payments: tuple[PaymentRecord, ...] = ()

    @property
    def total_amount(self) -> Decimal:
        """Principal plus interest owed over the whole term."""
        if self.total_amount_due is not None:
            return Decimal(self.total_amount_due)
        rate = Decimal(self.rate) if self.rate is not None else Decimal("0")
        return Decimal(self.amount_requested) * (1 + rate)

    @property
    def is_closed(self) -> bool:
        """Finished or renewed with a recorded finish date."""
        return self.finished_date is not None and self.status in TERMINAL_STATUSES
