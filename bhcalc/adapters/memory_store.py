"""
In-memory record store.
"""

from dataclasses import replace
from typing import Dict, List, Optional

from ..domain.models import CalculatorRecord


class InMemoryRecordStore:
    """
    Keeps records in a dict keyed by id.

    Ids are assigned sequentially starting at 1. Saving a record that already
    has an id replaces the stored copy (or inserts it under that id).
    """

    def __init__(self, records: Optional[List[CalculatorRecord]] = None):
        self._records: Dict[int, CalculatorRecord] = {}
        self._next_id = 1
        for record in records or []:
            self._put(record)

    def _put(self, record: CalculatorRecord) -> CalculatorRecord:
        if record.id is None:
            record = record.with_id(self._next_id)
        self._records[record.id] = replace(record)
        self._next_id = max(self._next_id, record.id + 1)
        return replace(record)

    def save(self, record: CalculatorRecord) -> CalculatorRecord:
        return self._put(record)

    def find_all(self) -> List[CalculatorRecord]:
        return [replace(self._records[record_id]) for record_id in sorted(self._records)]

    def find_one(self, record_id: int) -> Optional[CalculatorRecord]:
        record = self._records.get(record_id)
        return replace(record) if record is not None else None

    def delete(self, record_id: int) -> None:
        self._records.pop(record_id, None)
