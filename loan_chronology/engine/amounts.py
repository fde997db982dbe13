"""Installment and balance amounts derived from a loan record."""

from decimal import ROUND_HALF_UP, Decimal

from loan_chronology.models.loan import LoanRecord

ZERO = Decimal("0")
CENT = Decimal("0.01")


def expected_weekly_payment(loan: LoanRecord) -> Decimal:
    """Weekly installment of a loan.

    A stored positive ``expected_weekly_payment`` wins. Otherwise the
    total amount is spread over ``week_duration`` and rounded to cents,
    the figure printed on the payment card. Loans with neither yield
    zero, which the classifier treats as "no obligation".
    """
    if loan.expected_weekly_payment is not None and Decimal(loan.expected_weekly_payment) > 0:
        return Decimal(loan.expected_weekly_payment)
    if loan.week_duration and loan.week_duration > 0:
        total = loan.total_amount
        if total > 0:
            return (total / loan.week_duration).quantize(CENT, rounding=ROUND_HALF_UP)
    return ZERO


def total_paid(loan: LoanRecord) -> Decimal:
    """Sum of positive payments on the loan."""
    return sum(
        (Decimal(p.amount) for p in loan.payments if Decimal(p.amount) > 0),
        ZERO,
    )


def pending_amount(loan: LoanRecord) -> Decimal:
    """Balance still owed.

    The stored ledger balance is authoritative when present.
    """
    if loan.pending_amount_stored is not None:
        return max(ZERO, Decimal(loan.pending_amount_stored))
    return max(ZERO, loan.total_amount - total_paid(loan))
