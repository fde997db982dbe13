"""Enumeration types for loans and their payment chronology."""

from enum import Enum


class LoanStatus(str, Enum):
    ACTIVE = "ACTIVE"
    FINISHED = "FINISHED"
    RENEWED = "RENEWED"
    BAD_DEBT = "BAD_DEBT"
    CANCELLED = "CANCELLED"


class PaymentMethod(str, Enum):
    CASH = "CASH"
    MONEY_TRANSFER = "MONEY_TRANSFER"


class EventKind(str, Enum):
    PAYMENT = "PAYMENT"
    NO_PAYMENT = "NO_PAYMENT"


class CoverageType(str, Enum):
    """How a week's installment obligation was met."""

    FULL = "FULL"
    PARTIAL = "PARTIAL"
    COVERED_BY_SURPLUS = "COVERED_BY_SURPLUS"
    MISS = "MISS"
    # Payment outside the weekly grid (signing week, or after the last week)
    OUT_OF_BAND = "OUT_OF_BAND"


class WeekMode(str, Enum):
    """Which weeks the collections listing treats as already due."""

    CURRENT = "CURRENT"  # up to last Sunday
    NEXT = "NEXT"  # up to the coming Sunday


class HorizonReason(str, Enum):
    FINISHED = "FINISHED"
    BAD_DEBT = "BAD_DEBT"
    FULLY_PAID = "FULLY_PAID"
    ACTIVE = "ACTIVE"
