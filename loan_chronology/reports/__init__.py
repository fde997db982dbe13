"""Reports that consume the payment chronology."""

from loan_chronology.reports.client_history import ClientHistoryReport, HistoryRow, row_color
from loan_chronology.reports.collections_listing import CollectionsListingReport, ListingRow

__all__ = [
    "ClientHistoryReport",
    "CollectionsListingReport",
    "HistoryRow",
    "ListingRow",
    "row_color",
]
