"""Tests for threshold parsing into raw sensor units."""

import pytest

from sensorwatch.exceptions import (
    ThresholdError,
    UnitError,
    UnsupportedSensorTypeError,
)
from sensorwatch.sensors.models import SensorType
from sensorwatch.watch.formatting import format_value
from sensorwatch.watch.models import INT64_MAX, INT64_MIN
from sensorwatch.watch.units import parse_threshold


class TestTemperature:
    def test_celsius(self):
        assert parse_threshold("25C", SensorType.TEMP, upper=True) == 298_150_000

    def test_celsius_formats_back(self):
        raw = parse_threshold("25C", SensorType.TEMP, upper=True)
        assert format_value(SensorType.TEMP, raw) == "25.00 degC"

    def test_fahrenheit(self):
        assert parse_threshold("77F", SensorType.TEMP, upper=True) == 298_150_000

    def test_negative_and_fractional(self):
        assert parse_threshold("-5.5C", SensorType.TEMP, upper=False) == 267_650_000

    def test_kelvin_rejected(self):
        with pytest.raises(UnitError, match="unknown unit"):
            parse_threshold("25K", SensorType.TEMP, upper=True)

    def test_bare_number_rejected(self):
        with pytest.raises(UnitError):
            parse_threshold("25", SensorType.TEMP, upper=True)


class TestVoltage:
    def test_volts(self):
        assert parse_threshold("12.5V", SensorType.VOLTS_DC, upper=True) == 12_500_000

    def test_missing_suffix_rejected(self):
        with pytest.raises(UnitError, match="voltage"):
            parse_threshold("12.5", SensorType.VOLTS_DC, upper=True)

    def test_wrong_suffix_rejected(self):
        with pytest.raises(UnitError):
            parse_threshold("12500mV", SensorType.VOLTS_DC, upper=True)


class TestUnvalidatedTypes:
    def test_percent_is_milli_percent(self):
        assert parse_threshold("40", SensorType.PERCENT, upper=True) == 40_000

    def test_percent_suffix_ignored(self):
        assert parse_threshold("40%", SensorType.PERCENT, upper=True) == 40_000

    def test_lux_is_micro_lux(self):
        assert parse_threshold("2.5", SensorType.LUX, upper=True) == 2_500_000

    def test_fan_rpm(self):
        assert parse_threshold("600", SensorType.FANRPM, upper=False) == 600
        assert parse_threshold("600rpm", SensorType.FANRPM, upper=False) == 600

    def test_integer_like_types(self):
        assert parse_threshold("1", SensorType.INDICATOR, upper=True) == 1
        assert parse_threshold("7", SensorType.INTEGER, upper=True) == 7
        assert parse_threshold("9", SensorType.DRIVE, upper=True) == 9


class TestDefaultsAndErrors:
    def test_absent_lower_is_minimum(self):
        assert parse_threshold(None, SensorType.TEMP, upper=False) == INT64_MIN

    def test_absent_upper_is_maximum(self):
        assert parse_threshold(None, SensorType.TEMP, upper=True) == INT64_MAX

    def test_absent_bound_allowed_for_unsupported_type(self):
        assert parse_threshold(None, SensorType.AMPS, upper=True) == INT64_MAX

    def test_not_a_number(self):
        with pytest.raises(ThresholdError, match="incorrect value: abc"):
            parse_threshold("abc", SensorType.FANRPM, upper=True)

    def test_unsupported_type(self):
        with pytest.raises(UnsupportedSensorTypeError):
            parse_threshold("1", SensorType.AMPS, upper=True)

    def test_out_of_range(self):
        with pytest.raises(ThresholdError, match="out of range"):
            parse_threshold("1e400C", SensorType.TEMP, upper=True)
        with pytest.raises(ThresholdError, match="out of range"):
            parse_threshold("1e30", SensorType.LUX, upper=True)
