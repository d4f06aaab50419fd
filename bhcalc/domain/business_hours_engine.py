"""
Core business logic for calculating pickup deadlines.

Pure domain logic without any external dependencies (no API calls, no
database, no I/O). The weekly window is handed in at construction time.
"""

from typing import List

from pendulum import DateTime

from .exceptions import DeadlineOutOfRangeError
from .models import BusinessHours

SEGMENT_SEPARATOR = "_"
DISPLAY_SEPARATOR = "\n\n"

INTERVAL_UNIT_MINUTES = {
    "minutes": 1,
    "hours": 60,
}


class BusinessHoursEngine:
    """
    Advances timestamps through business hours and renders the window.

    Algorithm for a deadline:
    1. Move the start into the current or next business period
    2. Consume as much of the interval as the period still offers
    3. Carry the remainder over to the start of the following period
    4. Stop once the remainder fits; the deadline may equal a closing time
    """

    def __init__(self, business_hours: BusinessHours, interval_unit: str = "hours"):
        if interval_unit not in INTERVAL_UNIT_MINUTES:
            raise ValueError(
                f"Unknown interval unit {interval_unit!r}, "
                f"expected one of {sorted(INTERVAL_UNIT_MINUTES)}"
            )
        self.business_hours = business_hours
        self.interval_unit = interval_unit

    def calculate_deadline(self, time_interval: int, starting_date_time: DateTime) -> DateTime:
        """
        Calculate the expected pickup time.

        Args:
            time_interval: Non-negative interval in the configured unit
            starting_date_time: Parsed, timezone-aware start

        Returns:
            The deadline, never earlier than ``starting_date_time``
        """
        if time_interval < 0:
            raise ValueError(f"Time interval must not be negative, got {time_interval}")

        remaining_seconds = int(time_interval * INTERVAL_UNIT_MINUTES[self.interval_unit] * 60)
        current = starting_date_time

        try:
            # Any seven consecutive days hold exactly one week of business
            # hours. At least one second is left for the walk below, so a
            # deadline on a closing time is not pushed to the next opening.
            week_seconds = self.business_hours.weekly_minutes() * 60
            whole_weeks = max(0, (remaining_seconds - 1) // week_seconds)
            if whole_weeks:
                current = current.add(weeks=whole_weeks)
                remaining_seconds -= whole_weeks * week_seconds

            while True:
                period = self.business_hours.next_period(current)
                if period.start > current:
                    current = period.start

                available_seconds = int((period.end - current).total_seconds())
                if remaining_seconds <= available_seconds:
                    return current.add(seconds=remaining_seconds)

                remaining_seconds -= available_seconds
                current = period.end
        except (OverflowError, ValueError) as exc:
            raise DeadlineOutOfRangeError(
                f"Deadline for {time_interval} {self.interval_unit} from "
                f"{starting_date_time} is out of range"
            ) from exc

    def prepare_business_hours_data(self) -> str:
        """Encode the configured window as underscore-joined segment labels."""
        return SEGMENT_SEPARATOR.join(self.business_hours.labels())

    @staticmethod
    def format_actual_business_hours(actual_business_hours: str) -> str:
        """
        Render an encoded window for display, one segment per paragraph.

        Example: "Mon-Fri 9-17_Sat 9-12" -> "Mon-Fri 9-17\\n\\nSat 9-12\\n\\n"
        """
        if not actual_business_hours:
            return ""

        segments: List[str] = actual_business_hours.split(SEGMENT_SEPARATOR)

        # Trailing empty segments carry no information ("a_b__" -> ["a", "b"])
        while segments and not segments[-1]:
            segments.pop()

        return "".join(segment + DISPLAY_SEPARATOR for segment in segments)
