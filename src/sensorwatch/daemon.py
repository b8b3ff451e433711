"""The watch daemon control loop.

One loop alternates a sampling tick and a report tick and sleeps until
whichever is due next. A reload request only sets a flag; the flag is
consumed at the top of the next tick, never in the middle of a pass.
"""

from __future__ import annotations

import asyncio
import logging
import signal
import time
from collections.abc import Callable
from pathlib import Path

from .config import SensorWatchConfig, load_config
from .exceptions import ConfigError, NoSensorsError, NoWatchesError
from .executor import CommandExecutor
from .sensors.base import SensorSource
from .watch.engine import WatchEngine
from .watch.loader import build_watch_configs
from .watch.reporter import Reporter

logger = logging.getLogger("sensorwatch")


class WatchDaemon:
    """Owns the watch engine and drives it on the check/report schedule."""

    def __init__(
        self,
        config: SensorWatchConfig,
        source: SensorSource,
        config_path: str | Path | None = None,
        executor: CommandExecutor | None = None,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._config = config
        self._source = source
        self._config_path = config_path
        self._executor = executor or CommandExecutor()
        self._clock = clock
        self._engine: WatchEngine | None = None
        self._reporter: Reporter | None = None
        self._reload_requested = False
        self._wakeup: asyncio.Event | None = None
        self._stop: asyncio.Event | None = None
        self._next_check = 0.0
        self._next_report = 0.0
        self._last_report = 0.0

    @property
    def engine(self) -> WatchEngine:
        if self._engine is None:
            raise RuntimeError("daemon not started")
        return self._engine

    def start(self) -> int:
        """Discover sensors and load the initial watches.

        Any failure here is fatal to the caller: no sensors, a bad config,
        or a config that watches nothing.
        """
        sensors = self._source.list_sensors()
        if not sensors:
            raise NoSensorsError("no sensors found")

        self._engine = WatchEngine(sensors, clock=self._clock)
        configs = build_watch_configs(
            sensors, self._config.lookup, self._config.namespace
        )
        watch_count = self._engine.apply(configs)
        if watch_count == 0:
            raise NoWatchesError("no watches defined")

        self._reporter = Reporter(
            self._engine,
            self._executor,
            namespace=self._config.namespace,
            command_max_length=self._config.command_max_length,
        )
        logger.info(f"startup, {watch_count} watches for {len(sensors)} sensors")
        self._next_check = self._next_report = self._clock()
        return watch_count

    def reload(self) -> bool:
        """Re-read the watches from the config file.

        On any error the current watch list stays in force.
        """
        try:
            fresh = load_config(self._config_path)
            configs = build_watch_configs(
                self.engine.sensors, fresh.lookup, self._config.namespace
            )
        except ConfigError as e:
            logger.error(f"error in config file {self._config_path}: {e}")
            return False
        watch_count = self.engine.apply(configs)
        logger.info(f"configuration reloaded, {watch_count} watches")
        return True

    def request_reload(self) -> None:
        """Signal-safe: only flags the reload and wakes the loop."""
        self._reload_requested = True
        if self._wakeup is not None:
            self._wakeup.set()

    def stop(self) -> None:
        if self._stop is not None:
            self._stop.set()
        if self._wakeup is not None:
            self._wakeup.set()

    def tick(self, reload_requested: bool = False) -> float:
        """Run whatever is due and return the seconds until the next tick."""
        if reload_requested:
            self.reload()
        if self._next_check <= self._clock():
            self.engine.check(self._source)
            self._next_check = self._clock() + self._config.check_period
        now = self._clock()
        if self._next_report <= now:
            # Changes stamped by the check above are covered by this pass
            self._reporter.report(self._last_report)
            self._last_report = now
            self._next_report = now + self._config.report_period
        return max(0.0, min(self._next_check, self._next_report) - self._clock())

    async def run(self) -> None:
        """Loop until stop() is called or SIGTERM/SIGINT arrives."""
        self._stop = asyncio.Event()
        self._wakeup = asyncio.Event()
        loop = asyncio.get_running_loop()
        handlers = (
            (signal.SIGHUP, self.request_reload),
            (signal.SIGTERM, self.stop),
            (signal.SIGINT, self.stop),
        )
        for sig, handler in handlers:
            try:
                loop.add_signal_handler(sig, handler)
            except (NotImplementedError, RuntimeError, ValueError):
                logger.debug(f"Cannot install handler for {sig.name}")

        try:
            while not self._stop.is_set():
                reload_requested = self._reload_requested
                self._reload_requested = False
                delay = self.tick(reload_requested)
                self._wakeup.clear()
                if self._stop.is_set() or self._reload_requested:
                    continue
                try:
                    await asyncio.wait_for(self._wakeup.wait(), timeout=delay)
                except asyncio.TimeoutError:
                    pass
        finally:
            for sig, _ in handlers:
                try:
                    loop.remove_signal_handler(sig)
                except (NotImplementedError, RuntimeError, ValueError):
                    pass
            logger.info("shutting down")
