"""
Request and response schemas for the business hours calculator API.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from ..domain.models import CalculatorRecord


class BusinessHoursCalculatorSchema(BaseModel):
    """Wire representation of a calculator record (camelCase field names)."""
    model_config = ConfigDict(populate_by_name=True)

    id: Optional[int] = None
    starting_date_time: str = Field(alias="startingDateTime")
    time_interval: int = Field(alias="timeInterval", ge=0)
    expected_pickup_time: Optional[str] = Field(default=None, alias="expectedPickupTime")
    actual_business_hours: Optional[str] = Field(default=None, alias="actualBusinessHours")

    def to_record(self) -> CalculatorRecord:
        return CalculatorRecord(
            id=self.id,
            starting_date_time=self.starting_date_time,
            time_interval=self.time_interval,
            expected_pickup_time=self.expected_pickup_time,
            actual_business_hours=self.actual_business_hours,
        )

    @classmethod
    def from_record(cls, record: CalculatorRecord) -> "BusinessHoursCalculatorSchema":
        return cls(
            id=record.id,
            starting_date_time=record.starting_date_time,
            time_interval=record.time_interval,
            expected_pickup_time=record.expected_pickup_time,
            actual_business_hours=record.actual_business_hours,
        )
