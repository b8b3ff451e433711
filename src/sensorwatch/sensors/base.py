"""Sensor abstraction layer — the SensorSource ABC."""

from __future__ import annotations

from abc import ABC, abstractmethod

from .models import Sample, SensorIdentity


class SensorSource(ABC):
    """Abstract interface for all sensor backends.

    ``sample`` raises SensorNotFoundError when the sensor has disappeared
    and SensorReadError when it exists but could not be read.
    """

    @abstractmethod
    def list_sensors(self) -> list[SensorIdentity]: ...

    @abstractmethod
    def sample(self, identity: SensorIdentity) -> Sample: ...

    @property
    @abstractmethod
    def source_id(self) -> str: ...
