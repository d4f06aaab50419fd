"""
Parsing of the fixed-format starting datetime.

The parser reports failures through its result instead of raising, so the
service can decide how to surface a malformed value.
"""

import re
from dataclasses import dataclass
from typing import Optional

import pendulum
from pendulum import DateTime

# Four-digit year, two-digit month/day/minute, one or two digit hour: "2024-03-01 9:30"
STARTING_DATETIME_FORMAT = "YYYY-MM-DD H:mm"

# pendulum accepts one-digit MM, DD and mm tokens, so the shape is checked first
STARTING_DATETIME_PATTERN = re.compile(r"\d{4}-\d{2}-\d{2} \d{1,2}:\d{2}")


@dataclass(frozen=True)
class ParseResult:
    """Outcome of parsing a starting datetime."""
    raw: object
    value: Optional[DateTime] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.value is not None


def parse_starting_date_time(raw: object, timezone: str = "Europe/Berlin") -> ParseResult:
    """
    Parse ``raw`` against :data:`STARTING_DATETIME_FORMAT` in ``timezone``.

    Syntax errors and impossible calendar dates (e.g. February 30th) both
    yield a failed result naming the offending value.
    """
    if not isinstance(raw, str) or not STARTING_DATETIME_PATTERN.fullmatch(raw):
        return ParseResult(raw=raw, error=f"Wrong format of the starting datetime: {raw}")

    try:
        parsed = pendulum.from_format(raw, STARTING_DATETIME_FORMAT, tz=timezone)
    except ValueError:
        return ParseResult(raw=raw, error=f"Wrong format of the starting datetime: {raw}")

    return ParseResult(raw=raw, value=parsed)


def format_date_time(moment: DateTime) -> str:
    """Render a datetime in the same fixed format the input uses."""
    return moment.format(STARTING_DATETIME_FORMAT)
