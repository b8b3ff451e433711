"""Linux hwmon backend — reads sensors from ``/sys/class/hwmon``.

Each ``hwmonN`` directory is one device. Devices are named after their
``name`` attribute plus an ordinal among devices of the same name
(``coretemp0``, ``nct6775`` twice gives ``nct67750`` and ``nct67751``).
Channels are numbered from zero per type in channel order, whatever
base the kernel driver uses.

Unit conversion into internal raw values:
- temp*_input      millidegree Celsius -> micro-kelvin
- fan*_input       RPM
- in*_input        millivolt -> microvolt
- curr*_input      milliampere -> microampere
- power*_input     microwatt
- humidity*_input  milli-percent
"""

from __future__ import annotations

import logging
import re
from collections.abc import Callable
from pathlib import Path

from ..exceptions import SensorNotFoundError, SensorReadError
from .base import SensorSource
from .models import DeviceStatus, Sample, SensorIdentity, SensorType

logger = logging.getLogger("sensorwatch")

DEFAULT_HWMON_ROOT = "/sys/class/hwmon"

_INPUT_RE = re.compile(r"^(temp|fan|in|curr|power|humidity)(\d+)_input$")
_DEVICE_RE = re.compile(r"^hwmon(\d+)$")


def _millicelsius_to_microkelvin(value: int) -> int:
    return value * 1000 + 273_150_000


def _milli_to_micro(value: int) -> int:
    return value * 1000


def _unchanged(value: int) -> int:
    return value


_CHANNEL_KINDS: dict[str, tuple[SensorType, Callable[[int], int]]] = {
    "temp": (SensorType.TEMP, _millicelsius_to_microkelvin),
    "fan": (SensorType.FANRPM, _unchanged),
    "in": (SensorType.VOLTS_DC, _milli_to_micro),
    "curr": (SensorType.AMPS, _milli_to_micro),
    "power": (SensorType.WATTS, _unchanged),
    "humidity": (SensorType.PERCENT, _unchanged),
}


def _read_int(path: Path) -> int:
    return int(path.read_text().strip())


class HwmonSource(SensorSource):
    """Sensor source backed by the Linux hwmon sysfs interface."""

    def __init__(self, root: str | Path = DEFAULT_HWMON_ROOT) -> None:
        self._root = Path(root)
        self._inputs: dict[SensorIdentity, Path] = {}

    @property
    def source_id(self) -> str:
        return f"hwmon:{self._root}"

    def list_sensors(self) -> list[SensorIdentity]:
        """Enumerate every readable channel. Unreadable channels are skipped."""
        self._inputs = {}
        if not self._root.is_dir():
            logger.warning(f"hwmon root {self._root} does not exist")
            return []

        devices = []
        for entry in self._root.iterdir():
            match = _DEVICE_RE.match(entry.name)
            if match:
                devices.append((int(match.group(1)), entry))
        devices.sort()

        name_counts: dict[str, int] = {}
        sensors: list[SensorIdentity] = []
        for dev_index, dev_dir in devices:
            try:
                base_name = (dev_dir / "name").read_text().strip() or "hwmon"
            except OSError:
                base_name = "hwmon"
            ordinal = name_counts.get(base_name, 0)
            name_counts[base_name] = ordinal + 1
            device_name = f"{base_name}{ordinal}"
            sensors.extend(self._scan_device(dev_dir, device_name, dev_index))
        return sensors

    def _scan_device(
        self, dev_dir: Path, device_name: str, dev_index: int
    ) -> list[SensorIdentity]:
        channels: dict[str, list[tuple[int, Path]]] = {}
        for entry in dev_dir.iterdir():
            match = _INPUT_RE.match(entry.name)
            if match:
                channels.setdefault(match.group(1), []).append(
                    (int(match.group(2)), entry)
                )

        found: list[SensorIdentity] = []
        for prefix, (sensor_type, _) in _CHANNEL_KINDS.items():
            numt = 0
            for _, path in sorted(channels.get(prefix, [])):
                try:
                    _read_int(path)
                except (OSError, ValueError) as e:
                    logger.debug(f"Skipping unreadable channel {path}: {e}")
                    continue
                identity = SensorIdentity(
                    device_name=device_name,
                    device_index=dev_index,
                    type=sensor_type,
                    index=numt,
                )
                self._inputs[identity] = path
                found.append(identity)
                numt += 1
        return found

    def sample(self, identity: SensorIdentity) -> Sample:
        path = self._inputs.get(identity)
        if path is None:
            raise SensorNotFoundError(f"unknown sensor {identity.key()}")
        prefix = path.name[: -len("_input")]
        kind = _INPUT_RE.match(path.name).group(1)
        _, convert = _CHANNEL_KINDS[kind]
        try:
            raw = _read_int(path)
        except FileNotFoundError as e:
            raise SensorNotFoundError(f"{identity.key()}: {e}") from e
        except (OSError, ValueError) as e:
            raise SensorReadError(f"{identity.key()}: {e}") from e
        return Sample(value=convert(raw), status=self._status(path.parent, prefix))

    def _status(self, dev_dir: Path, prefix: str) -> DeviceStatus:
        """Map the chip's fault/alarm attributes to a device status."""
        for suffix, status in (
            ("fault", DeviceStatus.UNKNOWN),
            ("crit_alarm", DeviceStatus.CRIT),
            ("alarm", DeviceStatus.WARN),
        ):
            flag = dev_dir / f"{prefix}_{suffix}"
            try:
                if _read_int(flag):
                    return status
            except (OSError, ValueError):
                continue
        return DeviceStatus.UNSPEC
