"""Tests for the payment chronology engine."""

from dataclasses import replace
from datetime import date, datetime, timedelta
from decimal import Decimal

import pytest

from loan_chronology.config import ChronologyConfig
from loan_chronology.engine.chronology import (
    build_chronology,
    evaluation_cutoff,
    generate_chronology,
)
from loan_chronology.generators import BEHAVIORS, LoanGenerator, PaymentBehavior
from loan_chronology.engine.dates import to_datetime
from loan_chronology.engine.horizon import last_payment_time
from loan_chronology.models import CoverageType, EventKind, LoanStatus, PaymentRecord, WeekMode


class TestRegression:
    """Missed first week followed by four on-time payments."""

    def test_events(self, regression_loan, regression_now) -> None:
        events = generate_chronology(regression_loan, regression_now)

        assert len(events) == 5
        first = events[0]
        assert first.kind == EventKind.NO_PAYMENT
        assert first.coverage_type == CoverageType.MISS
        assert first.week_index == 1
        assert first.date == datetime(2025, 9, 9)
        assert first.date_formatted == "09/09/2025"
        assert first.description == "No payment"
        assert [e.coverage_type for e in events[1:]] == [CoverageType.FULL] * 4
        assert [e.week_index for e in events[1:]] == [2, 3, 4, 5]

    def test_single_missed_week(self, regression_loan, regression_now) -> None:
        chronology = build_chronology(regression_loan, regression_now)

        assert chronology.missed_weeks == 1
        assert chronology.expected_weekly_payment == Decimal("300")
        assert chronology.final_surplus == 0

    def test_next_week_mode_closes_current_week(self, regression_loan, regression_now) -> None:
        chronology = build_chronology(regression_loan, regression_now, week_mode=WeekMode.NEXT)

        assert chronology.missed_weeks == 2
        assert chronology.weeks[-1].week_index == 6

    def test_idempotent(self, regression_loan, regression_now) -> None:
        first = generate_chronology(regression_loan, regression_now)
        second = generate_chronology(regression_loan, regression_now)

        assert first == second


class TestSurplus:
    """Tests for overpayment carry-forward."""

    def test_overpayment_covers_next_week(self, make_loan, make_payment) -> None:
        loan = make_loan(payments=[make_payment(date(2025, 9, 10), 600)])

        chronology = build_chronology(loan, datetime(2025, 9, 22, 12, 0))

        week1, week2 = chronology.weeks
        assert week1.coverage == CoverageType.FULL
        assert week1.surplus_after == Decimal("300")
        assert week2.coverage == CoverageType.COVERED_BY_SURPLUS
        assert week2.surplus_before == Decimal("300")
        assert week2.surplus_after == 0
        assert chronology.events[-1].description == "Covered by surplus"

    def test_partial_does_not_carry_deficit(self, make_loan, make_payment) -> None:
        loan = make_loan(payments=[make_payment(date(2025, 9, 10), 200)])

        chronology = build_chronology(loan, datetime(2025, 9, 22, 12, 0))

        assert [w.coverage for w in chronology.weeks] == [CoverageType.PARTIAL, CoverageType.MISS]
        assert chronology.weeks[1].surplus_before == 0

    def test_signing_week_payment_seeds_surplus(self, make_loan, make_payment) -> None:
        loan = make_loan(payments=[make_payment(date(2025, 9, 4))])

        chronology = build_chronology(loan, datetime(2025, 9, 15, 12, 0))

        advance, week1 = chronology.events
        assert advance.coverage_type == CoverageType.OUT_OF_BAND
        assert advance.week_index == 0
        assert advance.amount_expected == 0
        assert advance.surplus_after == Decimal("300")
        assert week1.kind == EventKind.NO_PAYMENT
        assert week1.coverage_type == CoverageType.COVERED_BY_SURPLUS


class TestMultiplePayments:
    """Tests for weeks with several payments."""

    def test_two_half_payments_make_one_full_week(self, make_loan, make_payment) -> None:
        loan = make_loan(
            payments=[
                make_payment(date(2025, 9, 9), 150),
                make_payment(date(2025, 9, 11), 150),
            ]
        )

        events = generate_chronology(loan, datetime(2025, 9, 15, 12, 0))

        assert [e.description for e in events] == ["Payment #1 (1/2)", "Payment #2 (2/2)"]
        assert {e.coverage_type for e in events} == {CoverageType.FULL}
        assert [e.amount_paid_this_week for e in events] == [Decimal("150"), Decimal("150")]
        assert {e.week_total_paid for e in events} == {Decimal("300")}

    def test_stored_payment_number_used(self, make_loan, make_payment) -> None:
        payment = make_payment(date(2025, 9, 9))
        loan = make_loan(payments=[replace(payment, payment_number=7)])

        events = generate_chronology(loan, datetime(2025, 9, 15, 12, 0))

        assert events[0].description == "Payment #7"
        assert events[0].payment_number == 7


class TestTerminalLoans:
    """Tests for finished and bad-debt loans."""

    def test_finished_loan_stops_at_finished_date(self, make_loan, make_payment) -> None:
        loan = make_loan(
            status=LoanStatus.FINISHED,
            finished_date=date(2025, 10, 1),
            payments=[
                make_payment(date(2025, 9, 16)),
                make_payment(date(2025, 9, 23)),
                make_payment(date(2025, 10, 1)),
            ],
        )

        chronology = build_chronology(loan, datetime(2026, 1, 1))

        assert [w.week_index for w in chronology.weeks] == [1, 2, 3, 4]
        assert chronology.missed_weeks == 1

    def test_bad_debt_counts_every_week_up_to_date(self, make_loan) -> None:
        loan = make_loan(status=LoanStatus.BAD_DEBT, bad_debt_date=date(2025, 9, 30))

        chronology = build_chronology(loan, datetime(2026, 1, 1))

        assert chronology.missed_weeks == 4

    def test_payment_after_bad_debt_not_counted(self, make_loan, make_payment) -> None:
        loan = make_loan(
            status=LoanStatus.BAD_DEBT,
            bad_debt_date=date(2025, 9, 10),
            payments=[make_payment(date(2025, 9, 12))],
        )

        chronology = build_chronology(loan, datetime(2025, 10, 13, 12, 0))

        assert [(w.week_index, w.coverage) for w in chronology.weeks] == [
            (1, CoverageType.MISS)
        ]
        assert chronology.weeks[0].paid == 0
        assert all(e.kind == EventKind.NO_PAYMENT for e in chronology.events)

    def test_payment_on_finished_date_counted(self, make_loan, make_payment) -> None:
        closing = make_payment(datetime(2025, 10, 1, 18, 0))
        loan = make_loan(
            status=LoanStatus.FINISHED,
            finished_date=date(2025, 10, 1),
            payments=[closing, make_payment(date(2025, 10, 2))],
        )

        chronology = build_chronology(loan, datetime(2026, 1, 1))

        payment_ids = [e.payment_id for e in chronology.events if e.kind == EventKind.PAYMENT]
        assert payment_ids == [closing.payment_id]
        assert chronology.weeks[-1].paid == Decimal("300")

    def test_payment_past_active_window_not_counted(self, make_loan, make_payment) -> None:
        loan = make_loan(
            amount_requested=Decimal("200"),
            week_duration=2,
            payments=[make_payment(date(2025, 9, 10)), make_payment(date(2025, 9, 17))],
        )

        # Window is two weeks from signing: up to Tuesday 16 September
        chronology = build_chronology(loan, datetime(2025, 10, 13, 12, 0))

        events = chronology.events
        assert [e.payment_id for e in events if e.kind == EventKind.PAYMENT] == ["pay-001"]
        assert all(e.coverage_type != CoverageType.OUT_OF_BAND for e in events)


class TestTimestamps:
    """Tests for time-zone handling of payment timestamps."""

    def test_aware_sunday_evening_stays_in_its_week(self, make_loan) -> None:
        sunday_evening = datetime(2025, 9, 14, 20, 0).astimezone()
        loan = make_loan(
            payments=[
                PaymentRecord(
                    payment_id="pay-tz",
                    received_at=sunday_evening,
                    amount=Decimal("300"),
                )
            ]
        )

        chronology = build_chronology(loan, datetime(2025, 9, 15, 12, 0))

        assert chronology.weeks[0].week_index == 1
        assert chronology.weeks[0].coverage == CoverageType.FULL
        assert chronology.missed_weeks == 0


class TestEdgeCases:
    """Tests for malformed or unusual loans."""

    @pytest.mark.parametrize("sign_date", [None, "not-a-date"])
    def test_unusable_sign_date(self, make_loan, sign_date) -> None:
        loan = make_loan(sign_date=sign_date)

        assert generate_chronology(loan, datetime(2025, 10, 1)) == []

    def test_zero_expected_payment(self, make_loan) -> None:
        loan = make_loan(amount_requested=Decimal("0"))

        events = generate_chronology(loan, datetime(2025, 9, 22, 12, 0))

        assert len(events) == 2
        assert {e.coverage_type for e in events} == {CoverageType.FULL}
        assert {e.kind for e in events} == {EventKind.NO_PAYMENT}

    def test_non_positive_payment_ignored(self, make_loan, make_payment) -> None:
        loan = make_loan(payments=[make_payment(date(2025, 9, 10), -300)])

        chronology = build_chronology(loan, datetime(2025, 9, 15, 12, 0))

        assert chronology.missed_weeks == 1
        assert all(e.kind == EventKind.NO_PAYMENT for e in chronology.events)

    def test_custom_date_format(self, regression_loan, regression_now) -> None:
        config = ChronologyConfig(date_format="%Y-%m-%d")

        events = generate_chronology(regression_loan, regression_now, config)

        assert events[0].date_formatted == "2025-09-09"

    def test_evaluation_cutoff(self) -> None:
        now = datetime(2025, 10, 15, 12, 0)

        assert evaluation_cutoff(now) == now
        assert evaluation_cutoff(now, WeekMode.NEXT) == datetime(2025, 10, 20)


NOW = datetime(2025, 10, 15, 12, 0)


def _generated_loans():
    loan_gen = LoanGenerator(seed=7)
    behavior = PaymentBehavior(seed=7)
    loans = []
    for i, days in enumerate(range(10, 65, 3)):
        loan = loan_gen.generate(sign_date=(NOW - timedelta(days=days)).date())
        loans.append(behavior.apply(loan, BEHAVIORS[i % len(BEHAVIORS)], reference_date=NOW))
    return loans


class TestProperties:
    """Invariants over generated loans."""

    @pytest.fixture(scope="class")
    def loans(self):
        return _generated_loans()

    def test_events_sorted_by_date(self, loans) -> None:
        for loan in loans:
            dates = [e.date for e in generate_chronology(loan, NOW)]
            assert dates == sorted(dates)

    def test_every_payment_counted_once(self, loans) -> None:
        for loan in loans:
            chronology = build_chronology(loan, NOW)
            sign_date = to_datetime(loan.sign_date)
            paid_until = last_payment_time(chronology.horizon)
            in_horizon = [
                p.amount
                for p in loan.payments
                if p.amount > 0 and sign_date <= to_datetime(p.received_at) <= paid_until
            ]
            paid = sum(
                (e.amount_paid_this_week for e in chronology.events if e.kind == EventKind.PAYMENT),
                Decimal("0"),
            )
            assert paid == sum(in_horizon, Decimal("0"))

    def test_surplus_continuity(self, loans) -> None:
        for loan in loans:
            weeks = build_chronology(loan, NOW).weeks
            for previous, current in zip(weeks, weeks[1:]):
                assert current.surplus_before == previous.surplus_after
            assert all(w.surplus_after >= 0 for w in weeks)

    def test_idempotent(self, loans) -> None:
        for loan in loans:
            assert generate_chronology(loan, NOW) == generate_chronology(loan, NOW)
