"""In-memory loan portfolio with referential integrity."""

from dataclasses import dataclass, field, replace

from loan_chronology.engine.buckets import sort_payments
from loan_chronology.exceptions import (
    EntityNotFoundError,
    InvalidEntityStateError,
    ReferentialIntegrityError,
)
from loan_chronology.models.enums import LoanStatus
from loan_chronology.models.loan import LoanRecord, PaymentRecord


@dataclass
class LoanStore:
    """Loans and their payments, fetched together the way the ledger serves them."""

    _loans: dict[str, LoanRecord] = field(default_factory=dict)
    _payments: list[PaymentRecord] = field(default_factory=list)

    # Relationship indexes
    _loan_payments: dict[str, list[int]] = field(default_factory=dict)
    _payment_ids: set[str] = field(default_factory=set)

    def add_loan(self, loan: LoanRecord) -> None:
        """Add a loan; payments already attached to it are indexed too."""
        if loan.loan_id in self._loans:
            raise InvalidEntityStateError(f"Loan {loan.loan_id} already registered")

        self._loans[loan.loan_id] = replace(loan, payments=())
        self._loan_payments[loan.loan_id] = []
        for payment in loan.payments:
            self.add_payment(loan.loan_id, payment)

    def add_payment(self, loan_id: str, payment: PaymentRecord) -> None:
        """Record a payment against a registered loan."""
        if loan_id not in self._loans:
            raise ReferentialIntegrityError(f"Loan {loan_id} not found")
        if payment.payment_id in self._payment_ids:
            raise InvalidEntityStateError(f"Payment {payment.payment_id} already registered")

        idx = len(self._payments)
        self._payments.append(payment)
        self._loan_payments[loan_id].append(idx)
        self._payment_ids.add(payment.payment_id)

    # Query methods
    def get_loan(self, loan_id: str) -> LoanRecord:
        """Get a loan with its payments attached in receipt order."""
        if loan_id not in self._loans:
            raise EntityNotFoundError(f"Loan {loan_id} not found")
        return replace(self._loans[loan_id], payments=tuple(self.get_loan_payments(loan_id)))

    def get_loan_payments(self, loan_id: str) -> list[PaymentRecord]:
        """Get all payments of a loan in receipt order."""
        indices = self._loan_payments.get(loan_id, [])
        return sort_payments(self._payments[i] for i in indices)

    def loans(self) -> list[LoanRecord]:
        """All loans, with payments attached."""
        return [self.get_loan(loan_id) for loan_id in self._loans]

    def active_loans(self) -> list[LoanRecord]:
        """Loans still being collected."""
        return [
            self.get_loan(loan_id)
            for loan_id, loan in self._loans.items()
            if loan.status == LoanStatus.ACTIVE and loan.bad_debt_date is None
        ]

    def summary(self) -> dict[str, int]:
        """Return summary counts of all entities."""
        return {
            "loans": len(self._loans),
            "payments": len(self._payments),
        }
