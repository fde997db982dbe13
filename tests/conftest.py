"""Pytest configuration and fixtures."""

from datetime import date, datetime
from decimal import Decimal
from typing import Callable

import pytest

from loan_chronology.models import LoanRecord, PaymentRecord


@pytest.fixture
def seed() -> int:
    """Fixed seed for reproducible tests."""
    return 42


@pytest.fixture
def sign_date() -> date:
    """Tuesday 2 September 2025; week 1 runs 8-14 September."""
    return date(2025, 9, 2)


@pytest.fixture
def make_payment() -> Callable[..., PaymentRecord]:
    """Factory for payments received at noon unless a time is given."""
    counter = {"n": 0}

    def _make(received_at: date | datetime, amount: str | int = 300) -> PaymentRecord:
        counter["n"] += 1
        if not isinstance(received_at, datetime):
            received_at = datetime(received_at.year, received_at.month, received_at.day, 12, 0)
        return PaymentRecord(
            payment_id=f"pay-{counter['n']:03d}",
            received_at=received_at,
            amount=Decimal(str(amount)),
        )

    return _make


@pytest.fixture
def make_loan(sign_date: date) -> Callable[..., LoanRecord]:
    """Factory for a 3000 loan over 10 weeks at 0% (300 per week)."""

    def _make(payments: list[PaymentRecord] | None = None, **overrides) -> LoanRecord:
        fields = {
            "loan_id": "loan-test-001",
            "sign_date": sign_date,
            "week_duration": 10,
            "amount_requested": Decimal("3000"),
            "rate": Decimal("0"),
            "borrower_name": "BERNARDINA",
            "payments": tuple(payments or ()),
        }
        fields.update(overrides)
        return LoanRecord(**fields)

    return _make


@pytest.fixture
def regression_loan(make_loan, make_payment) -> LoanRecord:
    """Missed week 1, then paid 300 in weeks 2 through 5."""
    return make_loan(
        payments=[
            make_payment(date(2025, 9, 16)),
            make_payment(date(2025, 9, 23)),
            make_payment(date(2025, 10, 1)),
            make_payment(date(2025, 10, 9)),
        ]
    )


@pytest.fixture
def regression_now() -> datetime:
    """Monday 13 October 2025, noon: weeks 1-5 are closed."""
    return datetime(2025, 10, 13, 12, 0)
