"""Client payment history table, as shown in the admin page and the PDF export."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Any

from loan_chronology.config import ChronologyConfig
from loan_chronology.engine.chronology import build_chronology
from loan_chronology.engine.dates import to_datetime
from loan_chronology.models.chronology import Chronology
from loan_chronology.models.enums import CoverageType, EventKind
from loan_chronology.models.loan import LoanRecord

logger = logging.getLogger(__name__)

# Row background used by the PDF export
ROW_COLORS = {
    CoverageType.FULL: "white",
    CoverageType.COVERED_BY_SURPLUS: "blue",
    CoverageType.PARTIAL: "yellow",
    CoverageType.MISS: "red",
    CoverageType.OUT_OF_BAND: "white",
}


def row_color(coverage: CoverageType) -> str:
    return ROW_COLORS.get(coverage, "white")


@dataclass(frozen=True)
class HistoryRow:
    """One row of the client history table."""

    loan_id: str
    event_id: str
    week_index: int
    date: datetime
    date_formatted: str
    description: str
    kind: EventKind
    coverage_type: CoverageType
    amount_expected: Decimal
    amount_paid: Decimal
    surplus_after: Decimal
    color: str


class ClientHistoryReport:
    """Render a loan's chronology into table rows."""

    def __init__(
        self,
        loan: LoanRecord,
        now: datetime | None = None,
        config: ChronologyConfig | None = None,
    ) -> None:
        self.loan = loan
        self.now = to_datetime(now) or datetime.now()
        self.config = config or ChronologyConfig()
        self.chronology: Chronology | None = None

    def generate(self) -> list[HistoryRow]:
        """Build the history rows in chronological order.

        An empty list means there is nothing to display for the loan.
        """
        self.chronology = build_chronology(self.loan, self.now, self.config)
        rows = [
            HistoryRow(
                loan_id=self.loan.loan_id,
                event_id=event.event_id,
                week_index=event.week_index,
                date=event.date,
                date_formatted=event.date_formatted,
                description=event.description,
                kind=event.kind,
                coverage_type=event.coverage_type,
                amount_expected=event.amount_expected,
                amount_paid=event.amount_paid_this_week,
                surplus_after=event.surplus_after,
                color=row_color(event.coverage_type),
            )
            for event in self.chronology.events
        ]
        logger.debug("Client history for loan %s: %d rows", self.loan.loan_id, len(rows))
        return rows

    def export(self, sinks: list[Any]) -> None:
        """Export history rows to sinks."""
        rows = self.generate()
        for sink in sinks:
            sink.write_batch("client_history", rows)

        logger.info("Exported history of loan %s to %d sinks", self.loan.loan_id, len(sinks))

    def get_summary(self) -> dict[str, Any]:
        """Coverage counts for the history header."""
        if self.chronology is None:
            self.generate()
        chronology = self.chronology

        coverage_counts: dict[str, int] = {}
        for week in chronology.weeks:
            coverage_counts[week.coverage.value] = coverage_counts.get(week.coverage.value, 0) + 1

        return {
            "loan_id": self.loan.loan_id,
            "expected_weekly_payment": chronology.expected_weekly_payment,
            "weeks_evaluated": len(chronology.weeks),
            "missed_weeks": chronology.missed_weeks,
            "coverage_distribution": coverage_counts,
            "final_surplus": chronology.final_surplus,
        }
