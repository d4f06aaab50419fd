"""
Configuration management using Pydantic models loaded from YAML.
"""

from pathlib import Path
from typing import List, Literal

import pendulum
import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator, model_validator

from .domain.exceptions import ConfigurationError
from .domain.models import MINUTES_PER_DAY, BusinessHours, BusinessHoursSegment


def parse_clock_time(value: str) -> int:
    """
    Parse "H:mm" into minutes since midnight. "24:00" is accepted as end of day.

    Raises:
        ValueError: If the value is not a valid clock time
    """
    value = (value or "").strip()
    if ":" not in value:
        raise ValueError(f"Invalid H:mm time: {value!r}")
    hour_str, minute_str = value.split(":", 1)
    if not (hour_str.isdigit() and minute_str.isdigit() and len(minute_str) == 2):
        raise ValueError(f"Invalid H:mm time: {value!r}")
    hour, minute = int(hour_str), int(minute_str)
    if (hour, minute) == (24, 0):
        return MINUTES_PER_DAY
    if not (0 <= hour <= 23 and 0 <= minute <= 59):
        raise ValueError(f"Invalid time bounds: {value!r}")
    return hour * 60 + minute


class SegmentConfig(BaseModel):
    """One weekly business hours segment."""
    days: List[int]  # 0=Monday, 6=Sunday
    start: str = "9:00"
    end: str = "17:00"

    @field_validator("days")
    @classmethod
    def validate_days(cls, value: List[int]) -> List[int]:
        """Ensure weekdays are in valid range and deduplicated."""
        if not value:
            raise ValueError("days must contain at least one weekday")
        invalid_days = [day for day in value if day not in range(7)]
        if invalid_days:
            raise ValueError(f"days must be between 0 and 6, got {invalid_days}")
        # Preserve order while removing duplicates
        seen: set[int] = set()
        deduped: List[int] = []
        for day in value:
            if day not in seen:
                deduped.append(day)
                seen.add(day)
        return deduped

    @field_validator("start")
    @classmethod
    def validate_start(cls, value: str) -> str:
        if parse_clock_time(value) == MINUTES_PER_DAY:
            raise ValueError("24:00 is only allowed as an end time")
        return value

    @field_validator("end")
    @classmethod
    def validate_end(cls, value: str) -> str:
        parse_clock_time(value)
        return value

    @model_validator(mode="after")
    def validate_hours_order(self) -> "SegmentConfig":
        """Ensure the segment opens before it closes."""
        if parse_clock_time(self.end) <= parse_clock_time(self.start):
            raise ValueError("end must be later than start")
        return self

    def to_segment(self) -> BusinessHoursSegment:
        return BusinessHoursSegment(
            days=tuple(self.days),
            start_minute=parse_clock_time(self.start),
            end_minute=parse_clock_time(self.end),
        )


def _default_segments() -> List[SegmentConfig]:
    return [SegmentConfig(days=[0, 1, 2, 3, 4], start="9:00", end="17:00")]


class StorageConfig(BaseModel):
    """Record store selection."""
    backend: Literal["memory", "json"] = "memory"
    path: Path = Path("records.json")


class ServerConfig(BaseModel):
    """HTTP server binding."""
    host: str = "127.0.0.1"
    port: int = 8080

    @field_validator("port")
    @classmethod
    def validate_port(cls, value: int) -> int:
        if not 1 <= value <= 65535:
            raise ValueError(f"port must be between 1 and 65535, got {value}")
        return value


class LoggingConfig(BaseModel):
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"

    @field_validator("level", mode="before")
    @classmethod
    def normalize_level(cls, value: str) -> str:
        return str(value).upper()


class AppConfig(BaseModel):
    """Application configuration."""
    model_config = {"frozen": True}

    timezone: str = "Europe/Berlin"
    interval_unit: Literal["minutes", "hours"] = "hours"
    application_name: str = "bhcalcApp"
    business_hours: List[SegmentConfig] = Field(default_factory=_default_segments)
    storage: StorageConfig = Field(default_factory=StorageConfig)
    server: ServerConfig = Field(default_factory=ServerConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @field_validator("timezone")
    @classmethod
    def validate_timezone(cls, value: str) -> str:
        """Ensure the timezone is a known IANA zone."""
        try:
            pendulum.timezone(value)
        except (ValueError, KeyError) as exc:
            raise ValueError(f"Unknown timezone: {value!r}") from exc
        return value

    @field_validator("business_hours")
    @classmethod
    def validate_business_hours(cls, value: List[SegmentConfig]) -> List[SegmentConfig]:
        if not value:
            raise ValueError("business_hours must contain at least one segment")
        return value

    def build_business_hours(self) -> BusinessHours:
        """Create the immutable domain window from this configuration."""
        return BusinessHours(
            segments=tuple(segment.to_segment() for segment in self.business_hours),
            timezone=self.timezone,
        )

    @classmethod
    def load_from_yaml(cls, config_path: Path) -> "AppConfig":
        """
        Load configuration from YAML file.

        Args:
            config_path: Path to the YAML config file

        Returns:
            AppConfig instance

        Raises:
            ConfigurationError: If config file doesn't exist or is invalid
        """
        if not config_path.exists():
            raise ConfigurationError(
                f"Config file not found: {config_path}\n"
                f"Please create a config.yaml file. See config.example.yaml for reference."
            )

        try:
            with open(config_path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as exc:
            raise ConfigurationError(f"Invalid YAML in {config_path}: {exc}") from exc

        if not isinstance(data, dict):
            raise ConfigurationError("Config file must contain a mapping at the root level.")

        try:
            return cls(**data)
        except ValidationError as exc:
            raise ConfigurationError(f"Invalid configuration in {config_path}: {exc}") from exc

    @classmethod
    def load_or_default(cls, config_path: Path | None = None) -> "AppConfig":
        """Load the given or default config file, falling back to built-in defaults."""
        path = config_path or get_default_config_path()
        if config_path is None and not path.exists():
            return cls()
        return cls.load_from_yaml(path)


def get_default_config_path() -> Path:
    """Get the default configuration file path."""
    # Look for config.yaml in current directory
    current_dir = Path.cwd()
    config_path = current_dir / "config.yaml"

    if not config_path.exists():
        # Try in the project root (parent of the package)
        project_root = Path(__file__).parent.parent
        config_path = project_root / "config.yaml"

    return config_path
