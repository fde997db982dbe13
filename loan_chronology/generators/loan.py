"""Loan generator for weekly-installment loans."""

import random
from datetime import date, datetime, timedelta
from decimal import Decimal

from loan_chronology.generators.base import BaseGenerator
from loan_chronology.models.enums import LoanStatus
from loan_chronology.models.loan import LoanRecord

CENT = Decimal("0.01")


class LoanGenerator(BaseGenerator):
    """Generate synthetic loans signed on a weekly product."""

    # (week duration, rate over the whole term)
    PRODUCTS = [
        (10, Decimal("0.00")),
        (14, Decimal("0.40")),
        (20, Decimal("0.60")),
    ]

    def generate(
        self,
        sign_date: date | datetime | None = None,
        week_duration: int | None = None,
        amount_requested: Decimal | None = None,
        rate: Decimal | None = None,
        status: LoanStatus = LoanStatus.ACTIVE,
    ) -> LoanRecord:
        """Generate a loan without payments.

        Parameters
        ----------
        sign_date : date | datetime | None
            Signing date; random within the last year when omitted.
        week_duration : int | None
            Number of weekly installments.
        amount_requested : Decimal | None
            Principal lent.
        rate : Decimal | None
            Interest over the whole term.
        status : LoanStatus
            Loan status.

        Returns
        -------
        LoanRecord
            Generated loan, with the weekly installment rounded to cents.
        """
        product_weeks, product_rate = random.choice(self.PRODUCTS)
        week_duration = week_duration or product_weeks
        rate = product_rate if rate is None else rate

        if amount_requested is None:
            amount_requested = Decimal(random.randint(10, 60) * 100)

        if sign_date is None:
            sign_date = datetime.now() - timedelta(days=random.randint(30, 365))
        if not isinstance(sign_date, datetime):
            sign_date = datetime.combine(sign_date, datetime.min.time())

        total = amount_requested * (1 + rate)
        expected = (total / week_duration).quantize(CENT)

        return LoanRecord(
            loan_id=self.new_id(),
            sign_date=sign_date,
            week_duration=week_duration,
            amount_requested=amount_requested,
            total_amount_due=total,
            rate=rate,
            expected_weekly_payment=expected,
            status=status,
            borrower_name=self.borrower_name(),
        )
