"""Domain models for loans and their payment chronology."""

from loan_chronology.models.chronology import (
    ArrearsSummary,
    Chronology,
    ChronologyEvent,
    EvaluationHorizon,
    PartialPaymentSummary,
    WeekCoverage,
    WeekSlot,
)
from loan_chronology.models.enums import (
    CoverageType,
    EventKind,
    HorizonReason,
    LoanStatus,
    PaymentMethod,
    WeekMode,
)
from loan_chronology.models.loan import LoanRecord, PaymentRecord

__all__ = [
    "ArrearsSummary",
    "Chronology",
    "ChronologyEvent",
    "CoverageType",
    "EvaluationHorizon",
    "EventKind",
    "HorizonReason",
    "LoanRecord",
    "LoanStatus",
    "PartialPaymentSummary",
    "PaymentMethod",
    "PaymentRecord",
    "WeekCoverage",
    "WeekMode",
    "WeekSlot",
]
