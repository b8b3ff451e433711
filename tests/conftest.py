"""Shared fixtures: an in-memory sensor source and a fake clock."""

from __future__ import annotations

import pytest

from sensorwatch.exceptions import SensorNotFoundError
from sensorwatch.sensors.base import SensorSource
from sensorwatch.sensors.models import DeviceStatus, Sample, SensorIdentity, SensorType


class FakeSource(SensorSource):
    """Sensor source whose readings are set directly by the test."""

    def __init__(self, sensors: list[SensorIdentity] | None = None) -> None:
        self._sensors = list(sensors or [])
        self.readings: dict[SensorIdentity, Sample | Exception] = {}

    @property
    def source_id(self) -> str:
        return "fake"

    def list_sensors(self) -> list[SensorIdentity]:
        return list(self._sensors)

    def set(self, identity: SensorIdentity, value: int, status=DeviceStatus.UNSPEC):
        self.readings[identity] = Sample(value=value, status=status)

    def sample(self, identity: SensorIdentity) -> Sample:
        reading = self.readings.get(identity)
        if reading is None:
            raise SensorNotFoundError(identity.key())
        if isinstance(reading, Exception):
            raise reading
        return reading


class FakeClock:
    def __init__(self, now: float = 1000.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


CPU_TEMP = SensorIdentity("cpu0", 0, SensorType.TEMP, 0)
BOARD_VOLT = SensorIdentity("lm0", 1, SensorType.VOLTS_DC, 1)
CASE_FAN = SensorIdentity("lm0", 1, SensorType.FANRPM, 0)


def celsius(value: float) -> int:
    return round((value + 273.15) * 1_000_000)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def source() -> FakeSource:
    return FakeSource([CPU_TEMP, BOARD_VOLT, CASE_FAN])


