"""Synthetic loan and payment generators."""

from loan_chronology.generators.loan import LoanGenerator
from loan_chronology.generators.patterns import BEHAVIORS, PaymentBehavior

__all__ = ["BEHAVIORS", "LoanGenerator", "PaymentBehavior"]
