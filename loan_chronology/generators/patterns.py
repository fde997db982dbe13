"""Behavioral patterns for realistic weekly repayment."""

import random
from dataclasses import replace
from datetime import datetime, timedelta
from decimal import Decimal

from loan_chronology.engine.amounts import expected_weekly_payment
from loan_chronology.engine.dates import due_date, to_datetime, week_monday
from loan_chronology.generators.base import BaseGenerator
from loan_chronology.models.enums import PaymentMethod
from loan_chronology.models.loan import LoanRecord, PaymentRecord

CENT = Decimal("0.01")

BEHAVIORS = ("punctual", "double_payment", "advance", "late", "defaulter")


class PaymentBehavior(BaseGenerator):
    """Simulate how borrowers pay their weekly installments."""

    def apply(
        self,
        loan: LoanRecord,
        behavior: str = "punctual",
        reference_date: datetime | None = None,
        skip_rate: float = 0.3,
    ) -> LoanRecord:
        """Attach generated payments to a loan.

        Parameters
        ----------
        loan : LoanRecord
            Loan to pay; existing payments are replaced.
        behavior : str
            One of ``punctual`` (pays every week), ``double_payment``
            (two halves in the same week), ``advance`` (double installment
            every other week), ``late`` (skips weeks at ``skip_rate``) or
            ``defaulter`` (pays a few weeks, then stops).
        reference_date : datetime | None
            No payment is generated after this moment.
        skip_rate : float
            Probability of skipping a week for ``late`` payers.

        Returns
        -------
        LoanRecord
            Copy of the loan with its payments.
        """
        if behavior not in BEHAVIORS:
            raise ValueError(f"Unknown payment behavior {behavior!r}")

        reference_date = to_datetime(reference_date) or datetime.now()
        sign_date = to_datetime(loan.sign_date)
        expected = expected_weekly_payment(loan).quantize(CENT)
        weeks = loan.week_duration or 0
        stop_after = random.randint(2, 4) if behavior == "defaulter" else weeks

        payments: list[PaymentRecord] = []
        for week in range(1, weeks + 1):
            amounts = self._week_amounts(behavior, week, expected, stop_after, skip_rate)
            received_at = self._payment_time(sign_date, week)
            for amount in amounts:
                if received_at > reference_date:
                    break
                payments.append(
                    PaymentRecord(
                        payment_id=self.new_id(),
                        received_at=received_at,
                        amount=amount,
                        payment_method=random.choice(list(PaymentMethod)),
                        payment_number=len(payments) + 1,
                    )
                )
                received_at += timedelta(minutes=random.randint(1, 90))

        return replace(loan, payments=tuple(payments))

    def _week_amounts(
        self,
        behavior: str,
        week: int,
        expected: Decimal,
        stop_after: int,
        skip_rate: float,
    ) -> list[Decimal]:
        """Payments made in one week, in order."""
        if behavior == "double_payment":
            first = (expected / 2).quantize(CENT)
            return [first, expected - first]
        if behavior == "advance":
            return [expected * 2] if week % 2 == 1 else []
        if behavior == "late":
            return [] if random.random() < skip_rate else [expected]
        if behavior == "defaulter":
            return [expected] if week <= stop_after else []
        return [expected]

    def _payment_time(self, sign_date: datetime, week: int) -> datetime:
        """Random working-hours moment inside week ``week``."""
        monday = week_monday(due_date(sign_date, week))
        return monday + timedelta(
            days=random.randint(0, 5),
            hours=random.randint(8, 17),
            minutes=random.randint(0, 59),
        )
