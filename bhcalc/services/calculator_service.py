"""
Application service for business hours calculator records.

The service validates incoming records, delegates the deadline calculation to
the domain-level ``BusinessHoursEngine`` and forwards results to a record
store. The store is described by a protocol so that the in-memory and
JSON-file adapters, or a stub in tests, can be plugged in.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import List, Optional, Protocol

from pendulum import DateTime

from ..domain.business_hours_engine import BusinessHoursEngine
from ..domain.exceptions import RecordIdAlreadyAssignedError, StartingDateTimeFormatError
from ..domain.models import CalculatorRecord
from ..domain.parsing import format_date_time, parse_starting_date_time

logger = logging.getLogger(__name__)


class RecordStoreProtocol(Protocol):
    """Protocol describing the record store behaviour needed by the service."""

    def save(self, record: CalculatorRecord) -> CalculatorRecord:
        """Persist the record, assigning an id if it has none."""

    def find_all(self) -> List[CalculatorRecord]:
        """Return every stored record."""

    def find_one(self, record_id: int) -> Optional[CalculatorRecord]:
        """Return the record with the given id, or None."""

    def delete(self, record_id: int) -> None:
        """Remove the record with the given id if present."""


class BusinessHoursCalculatorService:
    """
    Orchestrates validation, deadline calculation and persistence.

    The engine is built once from configuration and shared for the lifetime
    of the service.
    """

    def __init__(
        self,
        record_store: RecordStoreProtocol,
        engine: BusinessHoursEngine,
    ) -> None:
        self._record_store = record_store
        self._engine = engine

    @property
    def timezone(self) -> str:
        return self._engine.business_hours.timezone

    def create(self, record: CalculatorRecord) -> CalculatorRecord:
        """
        Compute the derived fields of a new record and persist it.

        Raises:
            RecordIdAlreadyAssignedError: If the record already has an id
            StartingDateTimeFormatError: If the starting datetime is malformed
        """
        if record.id is not None:
            raise RecordIdAlreadyAssignedError(record.id)

        parsed = parse_starting_date_time(record.starting_date_time, self.timezone)
        if not parsed.ok:
            raise StartingDateTimeFormatError(record.starting_date_time)

        deadline = self.calculate_deadline(record.time_interval, parsed.value)
        prepared = replace(
            record,
            expected_pickup_time=format_date_time(deadline),
            actual_business_hours=self.prepare_business_hours_data(),
        )
        return self._record_store.save(prepared)

    def update(self, record: CalculatorRecord) -> CalculatorRecord:
        """
        Persist the record as given; records without an id are created instead.

        Derived fields are not recomputed on update.
        """
        if record.id is None:
            return self.create(record)
        return self._record_store.save(record)

    def find_all(self) -> List[CalculatorRecord]:
        """Return all records with their business hours formatted for display."""
        return [
            replace(
                record,
                actual_business_hours=self._engine.format_actual_business_hours(
                    record.actual_business_hours or ""
                ),
            )
            for record in self._record_store.find_all()
        ]

    def find_one(self, record_id: int) -> Optional[CalculatorRecord]:
        return self._record_store.find_one(record_id)

    def delete(self, record_id: int) -> None:
        self._record_store.delete(record_id)

    def calculate_deadline(self, time_interval: int, starting_date_time: DateTime) -> DateTime:
        deadline = self._engine.calculate_deadline(time_interval, starting_date_time)
        logger.debug(
            "Calculated deadline %s for start %s and interval %s %s",
            deadline, starting_date_time, time_interval, self._engine.interval_unit,
        )
        return deadline

    def prepare_business_hours_data(self) -> str:
        return self._engine.prepare_business_hours_data()
