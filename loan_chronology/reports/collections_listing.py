"""Weekly collections listing (route sheet) with the PAGO VDO of each loan."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Any

from loan_chronology.config import ChronologyConfig, ListingConfig
from loan_chronology.engine.arrears import calculate_arrears, calculate_partial_payment
from loan_chronology.engine.dates import to_datetime
from loan_chronology.models.enums import WeekMode
from loan_chronology.models.loan import LoanRecord

logger = logging.getLogger(__name__)

ZERO = Decimal("0")


@dataclass(frozen=True)
class ListingRow:
    """One line of the printed route sheet."""

    loan_id: str
    borrower_name: str
    expected_weekly_payment: Decimal
    weeks_without_payment: int
    arrears_amount: Decimal  # PAGO VDO
    partial_payment: Decimal  # Surplus already paid ahead (abono parcial)
    paid_this_week: Decimal
    pending_amount: Decimal


class CollectionsListingReport:
    """Build the collections listing for a set of loans.

    Every figure comes from the chronology engine, so the listing shows
    the same missed weeks as the client history and the PDF export.
    """

    def __init__(
        self,
        loans: list[LoanRecord],
        now: datetime | None = None,
        config: ChronologyConfig | None = None,
        week_mode: WeekMode | None = None,
        *,
        listing_config: ListingConfig | None = None,
    ) -> None:
        """Initialize collections listing.

        Parameters
        ----------
        loans : list[LoanRecord]
            Loans to list, usually the active loans of one route.
        now : datetime | None
            Reference time; defaults to the current time.
        config : ChronologyConfig | None
            Engine rules.
        week_mode : WeekMode | None
            Overrides ``listing_config.week_mode``.
        listing_config : ListingConfig | None
            Listing configuration (week mode, topic prefix).
        """
        self.loans = loans
        self.now = to_datetime(now) or datetime.now()
        self.config = config or ChronologyConfig()
        self.listing_config = listing_config or ListingConfig()
        self.week_mode = week_mode or self.listing_config.week_mode
        self.rows: list[ListingRow] = []

    def generate(self) -> list[ListingRow]:
        """Compute one row per loan, ordered by borrower name.

        Returns
        -------
        list[ListingRow]
            Listing rows.
        """
        logger.info(
            "Building collections listing: %d loans, week mode %s",
            len(self.loans),
            self.week_mode.value,
        )

        rows = []
        for loan in self.loans:
            arrears = calculate_arrears(loan, self.now, self.config, self.week_mode)
            current_week = calculate_partial_payment(loan, self.now)
            rows.append(
                ListingRow(
                    loan_id=loan.loan_id,
                    borrower_name=loan.borrower_name,
                    expected_weekly_payment=arrears.expected_weekly_payment,
                    weeks_without_payment=arrears.weeks_without_payment,
                    arrears_amount=arrears.arrears_amount,
                    partial_payment=arrears.partial_payment,
                    paid_this_week=current_week.total_paid_in_current_week,
                    pending_amount=arrears.pending_amount,
                )
            )

        self.rows = sorted(rows, key=lambda r: (r.borrower_name, r.loan_id))

        logger.info(
            "Collections listing ready: %d rows, %d in arrears",
            len(self.rows),
            sum(1 for r in self.rows if r.arrears_amount > 0),
        )
        return self.rows

    def export(self, sinks: list[Any]) -> None:
        """Export listing rows to sinks.

        Parameters
        ----------
        sinks : list[Any]
            List of sink instances (KafkaSink, JsonFileSink, etc.).
        """
        rows = self.rows or self.generate()
        entity = f"{self.listing_config.topic_prefix}.listing"
        for sink in sinks:
            sink.write_batch(entity, rows)

        logger.info("Exported collections listing to %d sinks", len(sinks))

    def get_summary(self) -> dict[str, Any]:
        """Get totals for the route sheet footer.

        Returns
        -------
        dict[str, Any]
            Listing summary statistics.
        """
        rows = self.rows or self.generate()
        if not rows:
            return {}

        return {
            "total_loans": len(rows),
            "loans_in_arrears": sum(1 for r in rows if r.arrears_amount > 0),
            "total_expected": sum((r.expected_weekly_payment for r in rows), ZERO),
            "total_arrears": sum((r.arrears_amount for r in rows), ZERO),
            "total_partial_payments": sum((r.partial_payment for r in rows), ZERO),
            "week_mode": self.week_mode.value,
        }
