"""
Domain-specific exception hierarchy for the business hours calculator.
"""


class BusinessHoursError(Exception):
    """Base class for all application-level errors."""


class StartingDateTimeFormatError(BusinessHoursError):
    """Raised when a starting datetime does not match the fixed input format."""

    def __init__(self, raw_value: str):
        self.raw_value = raw_value
        super().__init__(f"Wrong format of the starting datetime: {raw_value}")


class RecordIdAlreadyAssignedError(BusinessHoursError):
    """Raised when a record that already carries an id is submitted for creation."""

    error_key = "idexists"

    def __init__(self, record_id: int):
        self.record_id = record_id
        super().__init__("A new businessHoursCalculator cannot already have an ID")


class ConfigurationError(BusinessHoursError):
    """Raised when the configuration file is missing or invalid."""


class DeadlineOutOfRangeError(BusinessHoursError):
    """Raised when a deadline would fall outside the representable calendar."""
