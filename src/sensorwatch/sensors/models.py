"""Sensor identity, type and reading models."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class SensorType(str, Enum):
    """Sensor kinds; the value is the name used in canonical keys."""

    TEMP = "temp"
    FANRPM = "fan"
    VOLTS_DC = "volt"
    VOLTS_AC = "acvolt"
    OHMS = "resistance"
    WATTS = "power"
    AMPS = "current"
    WATTHOUR = "watthour"
    AMPHOUR = "amphour"
    INDICATOR = "indicator"
    INTEGER = "raw"
    PERCENT = "percent"
    LUX = "illuminance"
    DRIVE = "drive"
    TIMEDELTA = "timedelta"


class DeviceStatus(str, Enum):
    """Status a device reports alongside its reading."""

    UNSPEC = "unspecified"
    OK = "ok"
    WARN = "warn"
    CRIT = "crit"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class SensorIdentity:
    """Uniquely identifies one sensor channel on one device."""

    device_name: str  # e.g. "coretemp0"
    device_index: int
    type: SensorType
    index: int  # sub-index within the type on this device

    @property
    def type_name(self) -> str:
        return self.type.value

    def key(self, namespace: str = "hw.sensors") -> str:
        """Canonical config key, e.g. ``hw.sensors.coretemp0.temp0``."""
        return f"{namespace}.{self.device_name}.{self.type_name}{self.index}"


@dataclass(frozen=True)
class Sample:
    """A single reading: raw integer value in internal units plus status."""

    value: int
    status: DeviceStatus = DeviceStatus.UNSPEC
