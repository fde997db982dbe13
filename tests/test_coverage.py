"""Tests for the weekly coverage classifier."""

from datetime import date, datetime
from decimal import Decimal

import pytest

from loan_chronology.engine.buckets import bucket_payments, enumerate_weeks
from loan_chronology.engine.coverage import classify_week, classify_weeks
from loan_chronology.models import CoverageType

D = Decimal


class TestClassifyWeek:
    """Tests for a single week."""

    @pytest.mark.parametrize(
        "paid,surplus,coverage,surplus_after",
        [
            ("300", "0", CoverageType.FULL, "0"),
            ("450", "0", CoverageType.FULL, "150"),
            ("200", "100", CoverageType.FULL, "0"),
            ("200", "0", CoverageType.PARTIAL, "0"),
            ("0", "300", CoverageType.COVERED_BY_SURPLUS, "0"),
            ("0", "500", CoverageType.COVERED_BY_SURPLUS, "200"),
            ("0", "299", CoverageType.MISS, "0"),
            ("0", "0", CoverageType.MISS, "0"),
        ],
    )
    def test_outcomes(self, paid, surplus, coverage, surplus_after) -> None:
        result = classify_week(D("300"), D(paid), D(surplus))

        assert result == (coverage, D(surplus_after))

    def test_deficit_not_carried(self) -> None:
        """A short week never leaves a negative surplus."""
        _, surplus_after = classify_week(D("300"), D("50"), D("0"))

        assert surplus_after == 0

    def test_zero_expected_is_always_full(self) -> None:
        assert classify_week(D("0"), D("0"), D("0")) == (CoverageType.FULL, D("0"))
        assert classify_week(D("0"), D("100"), D("0")) == (CoverageType.FULL, D("100"))


class TestClassifyWeeks:
    """Tests for the grid walk."""

    @pytest.fixture
    def sign(self) -> datetime:
        return datetime(2025, 9, 2)

    def test_surplus_flows_between_weeks(self, sign, make_payment) -> None:
        buckets = bucket_payments(sign, [make_payment(date(2025, 9, 10), 900)], 4)

        weeks = classify_weeks(enumerate_weeks(sign, 4), buckets, D("300"), datetime(2025, 10, 6))

        assert [w.coverage for w in weeks] == [
            CoverageType.FULL,
            CoverageType.COVERED_BY_SURPLUS,
            CoverageType.COVERED_BY_SURPLUS,
            CoverageType.MISS,
        ]
        for previous, current in zip(weeks, weeks[1:]):
            assert current.surplus_before == previous.surplus_after

    def test_open_week_without_payment_skipped(self, sign) -> None:
        buckets = bucket_payments(sign, [], 3)

        weeks = classify_weeks(enumerate_weeks(sign, 3), buckets, D("300"), datetime(2025, 9, 17))

        assert [w.week_index for w in weeks] == [1]

    def test_open_week_with_payment_evaluated(self, sign, make_payment) -> None:
        buckets = bucket_payments(sign, [make_payment(date(2025, 9, 16), 100)], 2)

        weeks = classify_weeks(enumerate_weeks(sign, 2), buckets, D("300"), datetime(2025, 9, 17))

        assert [(w.week_index, w.coverage) for w in weeks] == [
            (1, CoverageType.MISS),
            (2, CoverageType.PARTIAL),
        ]

    def test_terminal_date_stops_empty_weeks(self, sign) -> None:
        buckets = bucket_payments(sign, [], 5)

        weeks = classify_weeks(
            enumerate_weeks(sign, 5),
            buckets,
            D("300"),
            datetime(2026, 1, 1),
            terminal_date=datetime(2025, 10, 1),
        )

        # Week 5 is due 7 October, after the terminal date
        assert [w.week_index for w in weeks] == [1, 2, 3, 4]

    def test_opening_surplus(self, sign) -> None:
        buckets = bucket_payments(sign, [], 2)

        weeks = classify_weeks(
            enumerate_weeks(sign, 2),
            buckets,
            D("300"),
            datetime(2025, 9, 22),
            opening_surplus=D("300"),
        )

        assert weeks[0].coverage == CoverageType.COVERED_BY_SURPLUS
        assert weeks[1].coverage == CoverageType.MISS
