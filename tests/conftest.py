"""
Shared fixtures.
"""

import pytest

from bhcalc.domain.business_hours_engine import BusinessHoursEngine
from bhcalc.domain.models import BusinessHours, BusinessHoursSegment

TZ = "Europe/Berlin"


def segment(days, start_hour, end_hour, start_minute=0, end_minute=0) -> BusinessHoursSegment:
    return BusinessHoursSegment(
        days=tuple(days),
        start_minute=start_hour * 60 + start_minute,
        end_minute=end_hour * 60 + end_minute,
    )


@pytest.fixture
def weekday_hours() -> BusinessHours:
    """Monday to Friday, 9:00 - 17:00."""
    return BusinessHours(segments=(segment(range(5), 9, 17),), timezone=TZ)


@pytest.fixture
def engine(weekday_hours) -> BusinessHoursEngine:
    return BusinessHoursEngine(business_hours=weekday_hours, interval_unit="hours")
