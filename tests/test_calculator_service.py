"""
Tests for the BusinessHoursCalculatorService orchestration layer.
"""

from typing import Dict, List, Optional

import pytest

from bhcalc.domain.exceptions import RecordIdAlreadyAssignedError, StartingDateTimeFormatError
from bhcalc.domain.models import CalculatorRecord
from bhcalc.services.calculator_service import BusinessHoursCalculatorService


class StubRecordStore:
    """Minimal stub matching RecordStoreProtocol."""

    def __init__(self):
        self.records: Dict[int, CalculatorRecord] = {}
        self.calls: List[str] = []

    def save(self, record: CalculatorRecord) -> CalculatorRecord:
        self.calls.append("save")
        if record.id is None:
            record = record.with_id(len(self.records) + 1)
        self.records[record.id] = record
        return record

    def find_all(self) -> List[CalculatorRecord]:
        self.calls.append("find_all")
        return list(self.records.values())

    def find_one(self, record_id: int) -> Optional[CalculatorRecord]:
        self.calls.append("find_one")
        return self.records.get(record_id)

    def delete(self, record_id: int) -> None:
        self.calls.append("delete")
        self.records.pop(record_id, None)


@pytest.fixture
def store() -> StubRecordStore:
    return StubRecordStore()


@pytest.fixture
def service(store, engine) -> BusinessHoursCalculatorService:
    return BusinessHoursCalculatorService(record_store=store, engine=engine)


def test_create_computes_derived_fields(service, store):
    """Creation fills pickup time and business hours before saving."""
    created = service.create(
        CalculatorRecord(starting_date_time="2024-11-25 9:30", time_interval=2)
    )

    assert created.id == 1
    assert created.expected_pickup_time == "2024-11-25 11:30"
    assert created.actual_business_hours == "Mon-Fri 9-17"
    assert store.records[1] == created


def test_create_overwrites_client_supplied_derived_fields(service):
    created = service.create(
        CalculatorRecord(
            starting_date_time="2024-11-25 9:30",
            time_interval=2,
            expected_pickup_time="tomorrow",
            actual_business_hours="always",
        )
    )

    assert created.expected_pickup_time == "2024-11-25 11:30"
    assert created.actual_business_hours == "Mon-Fri 9-17"


def test_create_with_malformed_start_never_reaches_store(service, store):
    with pytest.raises(StartingDateTimeFormatError, match="Wrong format of the starting datetime: 25.11.2024"):
        service.create(CalculatorRecord(starting_date_time="25.11.2024", time_interval=2))

    assert store.calls == []


def test_create_with_id_is_rejected_before_calculation(service, store):
    """A record with an id fails even if its start could not be parsed."""
    with pytest.raises(RecordIdAlreadyAssignedError):
        service.create(CalculatorRecord(id=5, starting_date_time="garbage", time_interval=2))

    assert store.calls == []


def test_update_without_id_creates(service):
    updated = service.update(CalculatorRecord(starting_date_time="2024-11-25 16:00", time_interval=3))

    assert updated.id == 1
    assert updated.expected_pickup_time == "2024-11-26 11:00"


def test_update_with_id_saves_record_as_given(service, store):
    record = CalculatorRecord(
        id=7,
        starting_date_time="2024-11-25 9:30",
        time_interval=40,
        expected_pickup_time="2024-11-25 11:30",
        actual_business_hours="Mon-Fri 9-17",
    )

    updated = service.update(record)

    assert updated == record
    assert store.records[7].expected_pickup_time == "2024-11-25 11:30"


def test_find_all_formats_business_hours_without_touching_store(service, store):
    service.create(CalculatorRecord(starting_date_time="2024-11-25 9:30", time_interval=2))

    records = service.find_all()

    assert records[0].actual_business_hours == "Mon-Fri 9-17\n\n"
    assert store.records[1].actual_business_hours == "Mon-Fri 9-17"


def test_find_one_returns_raw_record_or_none(service):
    service.create(CalculatorRecord(starting_date_time="2024-11-25 9:30", time_interval=2))

    assert service.find_one(1).actual_business_hours == "Mon-Fri 9-17"
    assert service.find_one(99) is None


def test_delete_forwards_to_store(service, store):
    service.create(CalculatorRecord(starting_date_time="2024-11-25 9:30", time_interval=2))

    service.delete(1)
    service.delete(1)

    assert store.records == {}
    assert store.calls.count("delete") == 2
