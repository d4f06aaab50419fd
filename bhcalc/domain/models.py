"""
Domain models for business hours windows and calculator records.
"""

from dataclasses import dataclass, replace
from typing import Any, Dict, List, Optional, Tuple

from pendulum import DateTime

from .exceptions import BusinessHoursError

WEEKDAY_ABBREVIATIONS = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")

MINUTES_PER_DAY = 24 * 60


@dataclass(frozen=True)
class TimeRange:
    """
    Represents an immutable time range with start and end datetime.

    Invariant: start must be before end.
    """
    start: DateTime
    end: DateTime

    def __post_init__(self):
        if self.start >= self.end:
            raise ValueError(f"Start time {self.start} must be before end time {self.end}")


def _format_minute_of_day(minute_of_day: int) -> str:
    hour, minute = divmod(minute_of_day, 60)
    if minute == 0:
        return str(hour)
    return f"{hour}:{minute:02d}"


@dataclass(frozen=True)
class BusinessHoursSegment:
    """
    One line of the weekly window: a set of weekdays sharing an opening interval.

    Times are stored as minutes since midnight so that a segment may close at
    24:00.
    """
    days: Tuple[int, ...]  # 0=Monday, 6=Sunday
    start_minute: int
    end_minute: int

    def __post_init__(self):
        if not self.days:
            raise ValueError("A business hours segment needs at least one day")
        invalid_days = [day for day in self.days if day not in range(7)]
        if invalid_days:
            raise ValueError(f"Weekdays must be between 0 and 6, got {invalid_days}")
        if not 0 <= self.start_minute < self.end_minute <= MINUTES_PER_DAY:
            raise ValueError(
                f"Opening {self.start_minute} must be before closing {self.end_minute} "
                f"within one day"
            )

    def applies_to(self, weekday: int) -> bool:
        return weekday in self.days

    def days_label(self) -> str:
        """
        Render the weekdays compactly.

        Consecutive runs become ranges ("Mon-Fri"), everything else is
        listed ("Mon, Wed, Sat-Sun").
        """
        ordered = sorted(set(self.days))
        runs: List[List[int]] = []
        for day in ordered:
            if runs and day == runs[-1][-1] + 1:
                runs[-1].append(day)
            else:
                runs.append([day])

        parts = []
        for run in runs:
            if len(run) == 1:
                parts.append(WEEKDAY_ABBREVIATIONS[run[0]])
            else:
                parts.append(f"{WEEKDAY_ABBREVIATIONS[run[0]]}-{WEEKDAY_ABBREVIATIONS[run[-1]]}")
        return ", ".join(parts)

    def hours_label(self) -> str:
        return f"{_format_minute_of_day(self.start_minute)}-{_format_minute_of_day(self.end_minute)}"

    def label(self) -> str:
        """Human-readable label, e.g. ``Mon-Fri 9-17``."""
        return f"{self.days_label()} {self.hours_label()}"

    def range_for_day(self, day: DateTime) -> TimeRange:
        """Concrete opening range of this segment on the given calendar day."""
        midnight = day.start_of("day")
        start = midnight.set(hour=self.start_minute // 60, minute=self.start_minute % 60)
        if self.end_minute == MINUTES_PER_DAY:
            end = midnight.add(days=1)
        else:
            end = midnight.set(hour=self.end_minute // 60, minute=self.end_minute % 60)
        return TimeRange(start=start, end=end)


@dataclass(frozen=True)
class BusinessHours:
    """
    The configured weekly business hours window.

    Built once from configuration and never mutated afterwards.
    """
    segments: Tuple[BusinessHoursSegment, ...]
    timezone: str = "Europe/Berlin"

    def __post_init__(self):
        if not self.segments:
            raise ValueError("Business hours need at least one segment")

    def get_periods_for_day(self, day: DateTime) -> List[TimeRange]:
        """
        Get the merged opening periods for a specific day, sorted by start.
        Returns an empty list if it's not a business day.
        """
        ranges = [
            segment.range_for_day(day)
            for segment in self.segments
            if segment.applies_to(day.weekday())
        ]
        return _merge_adjacent_ranges(ranges)

    def next_period(self, moment: DateTime) -> TimeRange:
        """
        Return the period that contains ``moment`` or, if closed, the next one.

        Every weekday is visited at most once more than a full week ahead, so
        the search always terminates for a non-empty window.
        """
        current_day = moment.start_of("day")
        for _ in range(8):
            for period in self.get_periods_for_day(current_day):
                if period.end > moment:
                    return period
            current_day = current_day.add(days=1)

        raise BusinessHoursError(f"No business hours period found after {moment}")

    def weekly_minutes(self) -> int:
        """
        Total open minutes in one week, with overlapping segments counted once.
        """
        total = 0
        for weekday in range(7):
            intervals = sorted(
                (segment.start_minute, segment.end_minute)
                for segment in self.segments
                if segment.applies_to(weekday)
            )
            covered_until = 0
            for start, end in intervals:
                start = max(start, covered_until)
                if end > start:
                    total += end - start
                    covered_until = end
        return total

    def labels(self) -> List[str]:
        return [segment.label() for segment in self.segments]


def _merge_adjacent_ranges(ranges: List[TimeRange]) -> List[TimeRange]:
    """
    Merge overlapping or adjacent time ranges.

    Example: [09:00-12:00, 11:00-17:00] -> [09:00-17:00]
    """
    if not ranges:
        return []

    sorted_ranges = sorted(ranges, key=lambda r: r.start)
    merged: List[TimeRange] = [sorted_ranges[0]]

    for current in sorted_ranges[1:]:
        last = merged[-1]

        if current.start <= last.end:
            merged[-1] = TimeRange(
                start=last.start,
                end=max(last.end, current.end)
            )
        else:
            merged.append(current)

    return merged


# snake_case attribute -> camelCase name used on the wire and in stored files
WIRE_FIELDS = {
    "id": "id",
    "starting_date_time": "startingDateTime",
    "time_interval": "timeInterval",
    "expected_pickup_time": "expectedPickupTime",
    "actual_business_hours": "actualBusinessHours",
}


@dataclass
class CalculatorRecord:
    """
    A business hours calculator record.

    ``expected_pickup_time`` and ``actual_business_hours`` are filled in by the
    service on creation.
    """
    starting_date_time: str
    time_interval: int
    id: Optional[int] = None
    expected_pickup_time: Optional[str] = None
    actual_business_hours: Optional[str] = None

    def with_id(self, record_id: int) -> "CalculatorRecord":
        return replace(self, id=record_id)

    def to_wire(self) -> Dict[str, Any]:
        """Serialize using the camelCase field names."""
        return {wire: getattr(self, attr) for attr, wire in WIRE_FIELDS.items()}

    @classmethod
    def from_wire(cls, data: Dict[str, Any]) -> "CalculatorRecord":
        values = {attr: data.get(wire) for attr, wire in WIRE_FIELDS.items()}
        return cls(**values)
