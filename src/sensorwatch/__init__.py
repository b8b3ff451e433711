"""sensorwatch — hardware sensor threshold monitor."""

__version__ = "1.0.0"

from .exceptions import (
    ConfigError,
    NoSensorsError,
    NoWatchesError,
    SensorError,
    SensorNotFoundError,
    SensorReadError,
    SensorWatchError,
    TemplateError,
    ThresholdError,
    UnitError,
    UnsupportedSensorTypeError,
)

__all__ = [
    "__version__",
    "SensorWatchError",
    "ConfigError",
    "ThresholdError",
    "UnitError",
    "UnsupportedSensorTypeError",
    "SensorError",
    "SensorNotFoundError",
    "SensorReadError",
    "NoSensorsError",
    "NoWatchesError",
    "TemplateError",
]
