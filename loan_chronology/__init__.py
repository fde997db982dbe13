"""Weekly payment chronology and arrears (VDO) engine for loan servicing."""

from loan_chronology.engine import (
    build_chronology,
    calculate_arrears,
    calculate_partial_payment,
    generate_chronology,
)

__version__ = "0.1.0"

__all__ = [
    "build_chronology",
    "calculate_arrears",
    "calculate_partial_payment",
    "generate_chronology",
]
