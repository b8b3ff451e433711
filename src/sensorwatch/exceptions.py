"""Custom exception hierarchy for sensorwatch.

All sensorwatch exceptions inherit from SensorWatchError, allowing callers
to catch broad or specific errors:

    try:
        config = load_config("/etc/sensorwatch.yaml")
    except ThresholdError as e:
        print(f"Bad threshold: {e}")
    except SensorWatchError as e:
        print(f"sensorwatch error: {e}")
"""

from __future__ import annotations


class SensorWatchError(Exception):
    """Base exception for all sensorwatch errors."""


class ConfigError(SensorWatchError):
    """Raised when the configuration file is unreadable or malformed."""


class ThresholdError(ConfigError):
    """Raised when a threshold value cannot be converted for its sensor."""


class UnitError(ThresholdError):
    """Raised when a threshold carries a unit suffix its sensor type rejects."""


class UnsupportedSensorTypeError(ThresholdError):
    """Raised when thresholds are configured for a type that has none."""


class SensorError(SensorWatchError):
    """Raised when a sensor operation fails (enumerate, sample)."""


class SensorNotFoundError(SensorError):
    """Raised when a sampled sensor no longer exists."""


class SensorReadError(SensorError):
    """Raised when a sensor exists but its reading could not be taken."""


class NoSensorsError(SensorError):
    """Raised when enumeration finds no sensors at all."""


class NoWatchesError(ConfigError):
    """Raised when the configuration enables no watch at startup."""


class TemplateError(SensorWatchError):
    """Raised when a notification command template cannot be expanded."""
