"""
Tests for configuration loading and validation.
"""

import pytest
from pydantic import ValidationError

from bhcalc.config import AppConfig, SegmentConfig, parse_clock_time
from bhcalc.domain.exceptions import ConfigurationError


def _write(tmp_path, content: str):
    path = tmp_path / "config.yaml"
    path.write_text(content, encoding="utf-8")
    return path


class TestParseClockTime:

    @pytest.mark.parametrize("value, minutes", [("9:00", 540), ("09:30", 570), ("0:00", 0), ("24:00", 1440)])
    def test_valid(self, value, minutes):
        assert parse_clock_time(value) == minutes

    @pytest.mark.parametrize("value", ["", "9", "9:5", "24:30", "25:00", "ab:cd"])
    def test_invalid(self, value):
        with pytest.raises(ValueError):
            parse_clock_time(value)


class TestSegmentConfig:

    def test_days_are_deduplicated(self):
        assert SegmentConfig(days=[0, 1, 1, 0]).days == [0, 1]

    def test_invalid_day_is_rejected(self):
        with pytest.raises(ValidationError, match="between 0 and 6"):
            SegmentConfig(days=[7])

    def test_end_must_follow_start(self):
        with pytest.raises(ValidationError, match="end must be later than start"):
            SegmentConfig(days=[0], start="17:00", end="9:00")

    def test_midnight_only_allowed_as_end(self):
        assert SegmentConfig(days=[0], start="18:00", end="24:00").to_segment().end_minute == 1440
        with pytest.raises(ValidationError, match="only allowed as an end time"):
            SegmentConfig(days=[0], start="24:00", end="24:00")


class TestAppConfig:

    def test_defaults(self):
        config = AppConfig()

        assert config.interval_unit == "hours"
        assert config.storage.backend == "memory"
        assert config.build_business_hours().labels() == ["Mon-Fri 9-17"]

    def test_load_from_yaml(self, tmp_path):
        path = _write(
            tmp_path,
            """
timezone: Europe/Vienna
interval_unit: minutes
business_hours:
  - days: [0, 1, 2, 3, 4]
    start: "8:30"
    end: "16:00"
  - days: [5]
    start: "9:00"
    end: "12:00"
storage:
  backend: json
  path: data/records.json
server:
  port: 9000
logging:
  level: debug
""",
        )

        config = AppConfig.load_from_yaml(path)

        assert config.timezone == "Europe/Vienna"
        assert config.interval_unit == "minutes"
        assert config.build_business_hours().labels() == ["Mon-Fri 8:30-16", "Sat 9-12"]
        assert config.storage.backend == "json"
        assert config.server.port == 9000
        assert config.logging.level == "DEBUG"

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigurationError, match="Config file not found"):
            AppConfig.load_from_yaml(tmp_path / "missing.yaml")

    def test_invalid_yaml(self, tmp_path):
        path = _write(tmp_path, "business_hours: [unclosed")

        with pytest.raises(ConfigurationError, match="Invalid YAML"):
            AppConfig.load_from_yaml(path)

    def test_root_must_be_mapping(self, tmp_path):
        path = _write(tmp_path, "- 1\n- 2\n")

        with pytest.raises(ConfigurationError, match="mapping at the root level"):
            AppConfig.load_from_yaml(path)

    def test_empty_business_hours_rejected(self, tmp_path):
        path = _write(tmp_path, "business_hours: []\n")

        with pytest.raises(ConfigurationError, match="at least one segment"):
            AppConfig.load_from_yaml(path)

    def test_invalid_port_rejected(self, tmp_path):
        path = _write(tmp_path, "server:\n  port: 70000\n")

        with pytest.raises(ConfigurationError, match="port must be between"):
            AppConfig.load_from_yaml(path)

    def test_unknown_timezone_rejected(self):
        with pytest.raises(ValidationError, match="Unknown timezone"):
            AppConfig(timezone="Mars/Olympus")

    def test_unknown_timezone_in_file_rejected(self, tmp_path):
        path = _write(tmp_path, "timezone: Europe/Atlantis\n")

        with pytest.raises(ConfigurationError, match="Unknown timezone"):
            AppConfig.load_from_yaml(path)

    def test_load_or_default_without_file(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)

        assert AppConfig.load_or_default() == AppConfig()

    def test_load_or_default_with_explicit_missing_file(self, tmp_path):
        with pytest.raises(ConfigurationError):
            AppConfig.load_or_default(tmp_path / "missing.yaml")
