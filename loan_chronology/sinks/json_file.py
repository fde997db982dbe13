"""JSON file sink for exporting chronologies and listings to files."""

import json
from pathlib import Path
from typing import Any

from loan_chronology.exceptions import SinkError
from loan_chronology.sinks.serialization import to_dict


class JsonFileSink:
    """Write each batch as a JSON array.

    The listing goes to ``<entity_type>.json``. With ``split_by`` set (e.g.
    ``"loan_id"`` for client histories), records are grouped by that field
    into ``<entity_type>/<value>.json``, one file per loan.
    """

    def __init__(
        self,
        output_dir: str | Path,
        pretty: bool = False,
        split_by: str | None = None,
    ) -> None:
        """Initialize JSON file sink.

        Parameters
        ----------
        output_dir : str | Path
            Directory to write JSON files.
        pretty : bool
            Pretty-print JSON output.
        split_by : str | None
            Record field that selects the file of each record.
        """
        self.output_dir = Path(output_dir)
        self.output_dir.mkdir(parents=True, exist_ok=True)
        self.pretty = pretty
        self.split_by = split_by
        self._counts: dict[str, int] = {}

    def _dump(self, file_path: Path, data: list[dict]) -> None:
        try:
            file_path.parent.mkdir(parents=True, exist_ok=True)
            with open(file_path, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=2 if self.pretty else None, ensure_ascii=False, default=str)
        except OSError as exc:
            raise SinkError(f"Cannot write {file_path}: {exc}") from exc

    def write_batch(self, entity_type: str, records: list[Any]) -> None:
        """Write a batch, replacing any previous file for the same entity."""
        data = [to_dict(record) for record in records]

        if self.split_by is None:
            self._dump(self.output_dir / f"{entity_type}.json", data)
        else:
            groups: dict[str, list[dict]] = {}
            for item in data:
                groups.setdefault(str(item.get(self.split_by, "unknown")), []).append(item)
            for key, items in groups.items():
                self._dump(self.output_dir / entity_type / f"{key}.json", items)

        self._counts[entity_type] = len(records)

    def close(self) -> None:
        """Print summary."""
        print(f"JSON files written to: {self.output_dir}")
        for entity_type, count in self._counts.items():
            print(f"  {entity_type}: {count} records")
