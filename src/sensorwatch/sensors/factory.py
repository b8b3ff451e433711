"""Sensor source creation from config.

Supported backends:
- hwmon: Linux hwmon sysfs tree
"""

from __future__ import annotations

from ..config import SourceConfig
from .base import SensorSource
from .hwmon import HwmonSource


def create_source(config: SourceConfig) -> SensorSource:
    """Create a sensor source instance from configuration."""
    if config.type == "hwmon":
        return HwmonSource(root=config.root)
    raise ValueError(f"Unknown sensor source type: {config.type!r}. Supported: hwmon")
