"""Build per-sensor watch configuration from config records."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable

from ..config import WatchRecord
from ..exceptions import ThresholdError
from ..sensors.models import SensorIdentity
from .models import WatchConfig
from .units import parse_threshold

logger = logging.getLogger("sensorwatch")

RecordLookup = Callable[[str], WatchRecord | None]


def build_watch_configs(
    sensors: Iterable[SensorIdentity],
    lookup: RecordLookup,
    namespace: str = "hw.sensors",
) -> dict[SensorIdentity, WatchConfig]:
    """Produce a WatchConfig for every sensor, enabled where a record exists.

    Threshold errors propagate, prefixed with the sensor key; the caller
    decides whether they are fatal.
    """
    configs: dict[SensorIdentity, WatchConfig] = {}
    for identity in sensors:
        key = identity.key(namespace)
        record = lookup(key)
        if record is None:
            configs[identity] = WatchConfig()
            continue
        try:
            lower = parse_threshold(record.low, identity.type, upper=False)
            upper = parse_threshold(record.high, identity.type, upper=True)
        except ThresholdError as e:
            raise type(e)(f"{key}: {e}") from e
        configs[identity] = WatchConfig(
            lower=lower, upper=upper, command=record.command, enabled=True
        )
        logger.debug(
            f"Watching {key}: low={record.low} high={record.high} "
            f"command={record.command!r}"
        )
    return configs


def count_enabled(configs: dict[SensorIdentity, WatchConfig]) -> int:
    return sum(1 for c in configs.values() if c.enabled)
