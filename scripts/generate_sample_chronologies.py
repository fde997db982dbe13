#!/usr/bin/env python3
"""Generate sample loans and export their chronologies and collections listing.

Writes one history file per loan plus the listing file to the output
directory (or publishes to Kafka with ``--kafka-bootstrap``) so the
history table and the route sheet can be checked by hand.
"""

import argparse
import logging
import sys
from datetime import datetime
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from loan_chronology.config import AppConfig
from loan_chronology.generators import BEHAVIORS, LoanGenerator, PaymentBehavior
from loan_chronology.logging import setup_logging
from loan_chronology.models.enums import WeekMode
from loan_chronology.reports import ClientHistoryReport, CollectionsListingReport
from loan_chronology.sinks import ConsoleSink, JsonFileSink, KafkaSink
from loan_chronology.store import LoanStore

logger = logging.getLogger(__name__)

LISTING_COLUMNS = [
    "borrower_name",
    "expected_weekly_payment",
    "weeks_without_payment",
    "arrears_amount",
    "partial_payment",
]


def build_store(num_loans: int, seed: int, now: datetime) -> LoanStore:
    """Generate loans cycling through every payment behavior."""
    store = LoanStore()
    loan_gen = LoanGenerator(seed=seed)
    payment_behavior = PaymentBehavior(seed=seed)

    for i in range(num_loans):
        behavior = BEHAVIORS[i % len(BEHAVIORS)]
        loan = loan_gen.generate()
        store.add_loan(payment_behavior.apply(loan, behavior, reference_date=now))

    logger.info("Generated %s", store.summary())
    return store


def main() -> None:
    """Generate sample chronologies and the collections listing."""
    parser = argparse.ArgumentParser(
        description="Export sample payment chronologies and collections listing"
    )
    parser.add_argument(
        "--loans",
        type=int,
        default=10,
        help="Number of loans to generate (default: 10)",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=42,
        help="Random seed for reproducibility (default: 42)",
    )
    parser.add_argument(
        "--week-mode",
        choices=[m.value for m in WeekMode],
        default=WeekMode.CURRENT.value,
        help="Listing week mode (default: CURRENT)",
    )
    parser.add_argument(
        "--output-dir",
        type=Path,
        default=None,
        help="Directory for JSON files (default: OUTPUT_DIR or ./output)",
    )
    parser.add_argument(
        "--kafka-bootstrap",
        type=str,
        default=None,
        help="Kafka bootstrap servers; publishes instead of writing files",
    )
    parser.add_argument(
        "--console",
        action="store_true",
        help="Also print the listing to stdout",
    )
    args = parser.parse_args()

    config = AppConfig.from_env()
    setup_logging(config.log_level)
    now = datetime.now()

    store = build_store(args.loans, args.seed, now)

    output_dir = args.output_dir or config.output.json_output_dir
    if args.kafka_bootstrap:
        config.kafka.bootstrap_servers = args.kafka_bootstrap
        kafka = KafkaSink(config.kafka)
        history_sinks, listing_sinks = [kafka], [kafka]
    else:
        history_sinks = [JsonFileSink(output_dir, pretty=True, split_by="loan_id")]
        listing_sinks = [JsonFileSink(output_dir, pretty=True)]
    if args.console:
        listing_sinks.append(ConsoleSink(fields=LISTING_COLUMNS))

    history_rows = []
    for loan in store.loans():
        history_rows.extend(ClientHistoryReport(loan, now, config.chronology).generate())
    for sink in history_sinks:
        sink.write_batch("client_history", history_rows)

    listing = CollectionsListingReport(
        store.active_loans(),
        now,
        config.chronology,
        WeekMode(args.week_mode),
        listing_config=config.listing,
    )
    listing.export(listing_sinks)

    for key, value in listing.get_summary().items():
        print(f"{key + ':':24}{value}")

    for sink in history_sinks + [s for s in listing_sinks if s not in history_sinks]:
        sink.close()


if __name__ == "__main__":
    main()
