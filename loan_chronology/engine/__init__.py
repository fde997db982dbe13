"""Payment chronology and arrears engine."""

from loan_chronology.engine.amounts import expected_weekly_payment, pending_amount, total_paid
from loan_chronology.engine.arrears import calculate_arrears, calculate_partial_payment
from loan_chronology.engine.buckets import PaymentBuckets, bucket_payments, enumerate_weeks
from loan_chronology.engine.chronology import (
    build_chronology,
    evaluation_cutoff,
    generate_chronology,
)
from loan_chronology.engine.coverage import classify_week, classify_weeks
from loan_chronology.engine.horizon import (
    FullyPaidPolicy,
    get_fully_paid_policy,
    last_payment_time,
    never_fully_paid,
    paid_by_amount,
    resolve_horizon,
)

__all__ = [
    "FullyPaidPolicy",
    "PaymentBuckets",
    "bucket_payments",
    "build_chronology",
    "calculate_arrears",
    "calculate_partial_payment",
    "classify_week",
    "classify_weeks",
    "enumerate_weeks",
    "evaluation_cutoff",
    "expected_weekly_payment",
    "generate_chronology",
    "get_fully_paid_policy",
    "last_payment_time",
    "never_fully_paid",
    "paid_by_amount",
    "pending_amount",
    "resolve_horizon",
    "total_paid",
]
