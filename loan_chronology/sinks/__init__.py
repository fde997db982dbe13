"""Output sinks for exporting chronologies and listings."""

from loan_chronology.sinks.console import ConsoleSink
from loan_chronology.sinks.json_file import JsonFileSink
from loan_chronology.sinks.kafka import KafkaSink

__all__ = ["ConsoleSink", "JsonFileSink", "KafkaSink"]
