"""Hysteresis engine — owns the watch list and debounces sensor status.

Escalation is slow and recovery is fast: a WARN or CRIT status must be
seen on CONFIRM_SAMPLES consecutive samples before it is confirmed, while
a single OK sample clears an alarm at once. With a fixed check period the
worst-case confirmation delay is CONFIRM_SAMPLES periods.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable, Iterator

from ..exceptions import SensorNotFoundError, SensorReadError
from ..sensors.base import SensorSource
from ..sensors.models import DeviceStatus, Sample, SensorIdentity
from .models import WatchConfig, WatchState, WatchStatus

logger = logging.getLogger("sensorwatch")

CONFIRM_SAMPLES = 3

_DEVICE_TO_WATCH = {
    DeviceStatus.OK: WatchStatus.OK,
    DeviceStatus.WARN: WatchStatus.WARN,
    DeviceStatus.CRIT: WatchStatus.CRIT,
    DeviceStatus.UNKNOWN: WatchStatus.WARN,  # unreadable is itself a warning
}


def classify(sample: Sample, config: WatchConfig) -> WatchStatus:
    """Candidate status for one sample, before debouncing.

    Bounds only apply when the device does not classify the value itself.
    A value equal to a bound is within limits.
    """
    if sample.status == DeviceStatus.UNSPEC:
        if sample.value > config.upper or sample.value < config.lower:
            return WatchStatus.CRIT
        return WatchStatus.OK
    return _DEVICE_TO_WATCH[sample.status]


class WatchEngine:
    """Watch configs for every known sensor plus state for watched ones."""

    def __init__(
        self,
        sensors: list[SensorIdentity],
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._sensors = list(sensors)
        self._clock = clock
        self._configs: dict[SensorIdentity, WatchConfig] = {
            s: WatchConfig() for s in self._sensors
        }
        self._states: dict[SensorIdentity, WatchState] = {}

    @property
    def sensors(self) -> list[SensorIdentity]:
        return list(self._sensors)

    def apply(self, configs: dict[SensorIdentity, WatchConfig]) -> int:
        """Install a freshly loaded config set. Returns the watch count.

        State survives for sensors still watched, so a pending streak
        carries over a reload. State for unwatched sensors is dropped.
        """
        self._configs = {s: configs.get(s, WatchConfig()) for s in self._sensors}
        for identity in list(self._states):
            if not self._configs[identity].enabled:
                del self._states[identity]
        return sum(1 for c in self._configs.values() if c.enabled)

    def config(self, identity: SensorIdentity) -> WatchConfig:
        return self._configs[identity]

    def state(self, identity: SensorIdentity) -> WatchState | None:
        return self._states.get(identity)

    def watches(self) -> Iterator[tuple[SensorIdentity, WatchConfig, WatchState | None]]:
        """Enabled watches in registry order."""
        for identity in self._sensors:
            config = self._configs[identity]
            if config.enabled:
                yield identity, config, self._states.get(identity)

    def evaluate(self, identity: SensorIdentity, sample: Sample) -> WatchState | None:
        """Feed one sample through the debounce rule; state is updated in place.

        Returns None for sensors that are not watched.
        """
        config = self._configs.get(identity)
        if config is None or not config.enabled:
            return None
        state = self._states.get(identity)
        if state is None:
            state = self._states[identity] = WatchState()

        state.last_value = sample.value
        candidate = classify(sample, config)

        if candidate == state.status:
            return state
        if candidate == WatchStatus.OK:
            self._confirm(state, candidate)
        elif candidate != state.pending:
            state.pending = candidate
            state.streak = 1
        else:
            state.streak += 1
            if state.streak >= CONFIRM_SAMPLES:
                self._confirm(state, candidate)
        return state

    def _confirm(self, state: WatchState, status: WatchStatus) -> None:
        state.previous_status = state.status
        state.status = state.pending = status
        state.streak = 0
        state.status_changed = self._clock()

    def check(self, source: SensorSource) -> None:
        """Sample every watched sensor once.

        A read failure counts as an unknown device status, so a sensor that
        stays unreadable escalates to WARN through the usual debounce. A
        sensor that has vanished is logged and skipped.
        """
        for identity, _, state in list(self.watches()):
            try:
                sample = source.sample(identity)
            except SensorNotFoundError as e:
                logger.error(f"Sensor disappeared: {e}")
                continue
            except SensorReadError as e:
                logger.warning(f"Sensor read failed: {e}")
                last = state.last_value if state else 0
                sample = Sample(value=last, status=DeviceStatus.UNKNOWN)
            self.evaluate(identity, sample)
