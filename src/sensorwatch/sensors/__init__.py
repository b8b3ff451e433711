"""Sensor backends — identity models, the SensorSource ABC, Linux hwmon."""

from .base import SensorSource
from .factory import create_source
from .hwmon import HwmonSource
from .models import DeviceStatus, Sample, SensorIdentity, SensorType

__all__ = [
    "SensorSource",
    "HwmonSource",
    "create_source",
    "DeviceStatus",
    "Sample",
    "SensorIdentity",
    "SensorType",
]
