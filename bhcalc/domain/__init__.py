"""
Domain layer - Pure business logic without external dependencies.
"""

from .business_hours_engine import BusinessHoursEngine
from .models import BusinessHours, BusinessHoursSegment, CalculatorRecord, TimeRange
from .parsing import ParseResult, format_date_time, parse_starting_date_time

__all__ = [
    "BusinessHours",
    "BusinessHoursEngine",
    "BusinessHoursSegment",
    "CalculatorRecord",
    "ParseResult",
    "TimeRange",
    "format_date_time",
    "parse_starting_date_time",
]
