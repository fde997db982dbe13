"""Console sink for eyeballing listings and histories during development."""

import json
from typing import Any

from loan_chronology.sinks.serialization import to_dict


class ConsoleSink:
    """Print records to stdout.

    By default each record is a JSON document. With ``fields`` set, records
    are printed as one aligned line each, the way the route sheet reads.
    """

    def __init__(
        self,
        pretty: bool = True,
        max_records: int | None = None,
        fields: list[str] | None = None,
    ) -> None:
        """Initialize console sink.

        Parameters
        ----------
        pretty : bool
            Indent JSON output.
        max_records : int | None
            Maximum records to print per batch (None for all).
        fields : list[str] | None
            Print only these fields, one line per record.
        """
        self.pretty = pretty
        self.max_records = max_records
        self.fields = fields
        self._counts: dict[str, int] = {}

    def _format(self, data: dict[str, Any]) -> str:
        if self.fields:
            return " | ".join(f"{data.get(name, '')!s:>14}" for name in self.fields)
        return json.dumps(data, indent=2 if self.pretty else None, ensure_ascii=False, default=str)

    def write_batch(self, entity_type: str, records: list[Any]) -> None:
        """Print a batch under an ``entity_type`` banner."""
        print(f"\n{'='*60}")
        print(f"{entity_type} ({len(records)} records)")
        print("=" * 60)
        if self.fields:
            print(" | ".join(f"{name:>14}" for name in self.fields))

        shown = records[: self.max_records] if self.max_records else records
        for record in shown:
            print(self._format(to_dict(record)))

        hidden = len(records) - len(shown)
        if hidden > 0:
            print(f"... and {hidden} more records")

        self._counts[entity_type] = self._counts.get(entity_type, 0) + len(records)

    def close(self) -> None:
        """Print how many records each entity received."""
        print(f"\n{'='*60}")
        for entity_type, count in self._counts.items():
            print(f"  {entity_type}: {count} records")
