"""Watch configuration and runtime state for a single sensor."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1


class WatchStatus(str, Enum):
    OK = "ok"
    WARN = "warn"
    CRIT = "crit"


@dataclass
class WatchConfig:
    """Bounds and command for one sensor, rebuilt on every config load.

    Bounds are raw integers in the sensor's internal unit. The defaults sit
    at the ends of the 64-bit range, so an unset bound never triggers.
    """

    lower: int = INT64_MIN
    upper: int = INT64_MAX
    command: str | None = None
    enabled: bool = False


@dataclass
class WatchState:
    """Debounce state for one watched sensor. Lives across reloads.

    A fresh state has no confirmed status, so the first OK sample confirms
    at once and shows up in the next report as a baseline.
    """

    last_value: int = 0
    status: WatchStatus | None = None  # confirmed
    pending: WatchStatus | None = None
    streak: int = 0
    status_changed: float | None = None  # time of last confirmed change
    previous_status: WatchStatus | None = None
