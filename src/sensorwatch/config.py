"""Configuration loading and validation."""

from __future__ import annotations

import os
import re
from pathlib import Path
from typing import Literal

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .exceptions import ConfigError

DEFAULT_CONFIG_PATH = "/etc/sensorwatch.yaml"


class WatchRecord(BaseModel):
    """One watch entry as written by the administrator. All fields raw strings."""

    model_config = ConfigDict(extra="forbid")

    low: str | None = None  # e.g. "10C", "11.5V", "40"
    high: str | None = None
    command: str | None = None  # Template with %x %t %n %2 %3 %4

    @field_validator("low", "high", mode="before")
    @classmethod
    def _scalar_to_str(cls, value: object) -> object:
        # YAML turns `high: 80` into an int; thresholds are parsed from text
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return str(value)
        return value


class SourceConfig(BaseModel):
    type: Literal["hwmon"] = "hwmon"
    root: str = "/sys/class/hwmon"


class SensorWatchConfig(BaseModel):
    check_period: float = Field(default=20.0, gt=0)  # seconds between sampling passes
    report_period: float = Field(default=60.0, gt=0)  # seconds between report passes
    namespace: str = "hw.sensors"
    command_max_length: int = Field(default=1024, gt=0)
    source: SourceConfig = Field(default_factory=SourceConfig)
    watches: dict[str, WatchRecord] = Field(default_factory=dict)

    @field_validator("watches", mode="before")
    @classmethod
    def _empty_records(cls, value: object) -> object:
        # A bare `hw.sensors.lm0.temp0:` line watches with default bounds
        if isinstance(value, dict):
            return {k: ({} if v is None else v) for k, v in value.items()}
        return value

    def lookup(self, key: str) -> WatchRecord | None:
        """Fetch the watch record for a canonical sensor key, if any."""
        return self.watches.get(key)


def _interpolate_env_vars(text: str) -> str:
    """Replace ${VAR_NAME} with environment variable values."""

    def replacer(match: re.Match) -> str:
        var_name = match.group(1)
        return os.environ.get(var_name, "")

    return re.sub(r"\$\{(\w+)\}", replacer, text)


def load_config(path: str | Path | None = None) -> SensorWatchConfig:
    """Load and validate the YAML config file.

    Unlike a missing optional setting, a missing or unparsable file is an
    error: the daemon has nothing to watch without it.
    """
    path = Path(path or DEFAULT_CONFIG_PATH).expanduser()

    try:
        raw_text = path.read_text()
    except OSError as e:
        raise ConfigError(f"cannot read config file {path}: {e}") from e

    try:
        data = yaml.safe_load(_interpolate_env_vars(raw_text))
    except yaml.YAMLError as e:
        raise ConfigError(f"malformed config file {path}: {e}") from e

    if data is None:
        return SensorWatchConfig()
    if not isinstance(data, dict):
        raise ConfigError(f"malformed config file {path}: expected a mapping")

    try:
        return SensorWatchConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"invalid config file {path}: {e}") from e
