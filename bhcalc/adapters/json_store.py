"""
Record store persisted to a JSON file.
"""

import json
import logging
from pathlib import Path
from typing import Dict, List

from ..domain.models import CalculatorRecord
from .memory_store import InMemoryRecordStore

logger = logging.getLogger(__name__)


class JsonFileRecordStore(InMemoryRecordStore):
    """
    In-memory store that mirrors its content to a JSON file.

    The file holds a JSON array of records using the camelCase wire names.
    It is read once on construction and rewritten after every change.
    """

    def __init__(self, path: Path):
        self.path = Path(path)
        super().__init__(self._load_records())

    def _load_records(self) -> List[CalculatorRecord]:
        """Load stored records from the JSON file."""
        if not self.path.exists():
            return []

        with open(self.path, "r", encoding="utf-8") as f:
            try:
                data = json.load(f)
            except json.JSONDecodeError as exc:
                logger.warning("Could not load record file %s: %s", self.path, exc)
                raise ValueError(f"Invalid JSON in record file {self.path}: {exc}") from exc

        if not isinstance(data, list):
            raise ValueError(f"Record file {self.path} must contain a JSON array")

        return [CalculatorRecord.from_wire(item) for item in data]

    def _write_records(self) -> None:
        payload = [record.to_wire() for record in self.find_all()]
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.path, "w", encoding="utf-8") as f:
                json.dump(payload, f, indent=2)
        except OSError as exc:
            logger.warning("Could not save records to %s: %s", self.path, exc)
            raise

    def _write_or_rollback(self, records: Dict[int, CalculatorRecord], next_id: int) -> None:
        """Write the file; on failure restore the in-memory state it was taken from."""
        try:
            self._write_records()
        except OSError:
            self._records = records
            self._next_id = next_id
            raise

    def save(self, record: CalculatorRecord) -> CalculatorRecord:
        records, next_id = dict(self._records), self._next_id
        saved = super().save(record)
        self._write_or_rollback(records, next_id)
        return saved

    def delete(self, record_id: int) -> None:
        records, next_id = dict(self._records), self._next_id
        super().delete(record_id)
        self._write_or_rollback(records, next_id)
