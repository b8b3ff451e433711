"""Threshold watches — unit parsing, formatting, debouncing and reporting."""

from .engine import CONFIRM_SAMPLES, WatchEngine, classify
from .formatting import format_value
from .loader import build_watch_configs, count_enabled
from .models import WatchConfig, WatchState, WatchStatus
from .reporter import Reporter, Transition
from .templating import CommandFields, expand_command
from .units import parse_threshold

__all__ = [
    "CONFIRM_SAMPLES",
    "WatchEngine",
    "classify",
    "format_value",
    "build_watch_configs",
    "count_enabled",
    "WatchConfig",
    "WatchState",
    "WatchStatus",
    "Reporter",
    "Transition",
    "CommandFields",
    "expand_command",
    "parse_threshold",
]
