"""Threshold parsing: administrator text into raw sensor units.

A threshold is a number followed by an optional unit suffix, e.g. ``80C``,
``176F``, ``12.5V`` or ``40``. The result is an integer in the same unit
the live readings use, so bound checks are exact integer comparisons:

- temperature: micro-kelvin, suffix ``C`` or ``F`` required
- DC voltage: microvolt, suffix ``V`` required
- percent: milli-percent
- illuminance: micro-lux
- fan, indicator, raw integer, drive: the number itself

Only temperature and voltage check their suffix. Other types take the
number and ignore anything after it.
"""

from __future__ import annotations

import math
import re

from ..exceptions import ThresholdError, UnitError, UnsupportedSensorTypeError
from ..sensors.models import SensorType
from .models import INT64_MAX, INT64_MIN

_NUMBER_RE = re.compile(r"^\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)(.*)$", re.S)

KELVIN_OFFSET = 273.15


def _temperature(value: float, suffix: str) -> int:
    if suffix == "C":
        celsius = value
    elif suffix == "F":
        celsius = (value - 32.0) * 5.0 / 9.0
    else:
        raise UnitError(f"unknown unit {suffix!r} for temp sensor")
    return round((celsius + KELVIN_OFFSET) * 1_000_000)


def _volts(value: float, suffix: str) -> int:
    if suffix != "V":
        raise UnitError(f"unknown unit {suffix!r} for voltage sensor")
    return round(value * 1_000_000)


_CONVERTERS = {
    SensorType.TEMP: _temperature,
    SensorType.VOLTS_DC: _volts,
    SensorType.FANRPM: lambda v, _: int(v),
    SensorType.PERCENT: lambda v, _: round(v * 1000),
    SensorType.LUX: lambda v, _: round(v * 1_000_000),
    SensorType.INDICATOR: lambda v, _: int(v),
    SensorType.INTEGER: lambda v, _: int(v),
    SensorType.DRIVE: lambda v, _: int(v),
}


def parse_threshold(text: str | None, sensor_type: SensorType, upper: bool) -> int:
    """Convert a threshold string for ``sensor_type`` into raw units.

    ``None`` means the bound is unset: the lowest representable value for a
    lower bound, the highest for an upper one.

    Raises:
        ThresholdError: the text does not start with a number.
        UnitError: the suffix is not valid for the sensor type.
        UnsupportedSensorTypeError: the type cannot carry thresholds.
    """
    if text is None:
        return INT64_MAX if upper else INT64_MIN

    match = _NUMBER_RE.match(text)
    if match is None:
        raise ThresholdError(f"incorrect value: {text}")
    value = float(match.group(1))
    if not math.isfinite(value):
        raise ThresholdError(f"value out of range: {text}")
    suffix = match.group(2).strip()

    converter = _CONVERTERS.get(sensor_type)
    if converter is None:
        raise UnsupportedSensorTypeError(
            f"unsupported sensor type {sensor_type.value!r} for thresholds"
        )
    raw = converter(value, suffix)
    if not INT64_MIN <= raw <= INT64_MAX:
        raise ThresholdError(f"value out of range: {text}")
    return raw
