"""Loan data store."""

from loan_chronology.store.portfolio import LoanStore

__all__ = ["LoanStore"]
