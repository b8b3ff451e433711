"""Human-readable rendering of raw sensor values."""

from __future__ import annotations

from collections.abc import Callable

from ..sensors.models import SensorType

# Index 0 is not a drive state; 1..10 are.
DRIVE_STATES = (
    None,
    "empty",
    "ready",
    "powerup",
    "online",
    "idle",
    "active",
    "rebuild",
    "powerdown",
    "fail",
    "pfail",
)


def _unrecognized(value: int) -> str:
    return f"{value} ???"


def _temperature(value: int) -> str:
    return f"{(value - 273_150_000) / 1_000_000.0:.2f} degC"


def _drive(value: int) -> str:
    if 0 < value < len(DRIVE_STATES):
        return DRIVE_STATES[value]
    return _unrecognized(value)


_FORMATTERS: dict[SensorType, Callable[[int], str]] = {
    SensorType.TEMP: _temperature,
    SensorType.FANRPM: lambda v: f"{v} RPM",
    SensorType.VOLTS_DC: lambda v: f"{v / 1_000_000.0:.2f} V DC",
    SensorType.VOLTS_AC: _unrecognized,
    SensorType.OHMS: _unrecognized,
    SensorType.WATTS: _unrecognized,
    SensorType.AMPS: lambda v: f"{v / 1_000_000.0:.2f} A",
    SensorType.WATTHOUR: _unrecognized,
    SensorType.AMPHOUR: _unrecognized,
    SensorType.INDICATOR: lambda v: "On" if v else "Off",
    SensorType.INTEGER: lambda v: f"{v} raw",
    SensorType.PERCENT: lambda v: f"{v / 1000.0:.2f}%",
    SensorType.LUX: lambda v: f"{v / 1_000_000.0:.2f} lx",
    SensorType.DRIVE: _drive,
    SensorType.TIMEDELTA: _unrecognized,
}


def format_value(sensor_type: SensorType, value: int) -> str:
    """Render a raw value, e.g. ``format_value(SensorType.TEMP, 298150000)``
    gives ``"25.00 degC"``."""
    return _FORMATTERS[sensor_type](value)
