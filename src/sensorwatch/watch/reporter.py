"""Report cycle — surfaces confirmed transitions and runs their commands."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from ..exceptions import TemplateError
from ..executor import CommandExecutor
from ..sensors.models import SensorIdentity
from .engine import WatchEngine
from .formatting import format_value
from .models import WatchConfig, WatchState, WatchStatus
from .templating import DEFAULT_MAX_LENGTH, CommandFields, expand_command

logger = logging.getLogger("sensorwatch")


@dataclass(frozen=True)
class Transition:
    """One confirmed status change surfaced by a report pass."""

    identity: SensorIdentity
    old_status: WatchStatus | None  # None for the first report of a watch
    new_status: WatchStatus
    value: str
    command: str | None = None  # expanded command, if one was run


class Reporter:
    """Reports watches whose status changed since the previous report."""

    def __init__(
        self,
        engine: WatchEngine,
        executor: CommandExecutor,
        namespace: str = "hw.sensors",
        command_max_length: int = DEFAULT_MAX_LENGTH,
    ) -> None:
        self._engine = engine
        self._executor = executor
        self._namespace = namespace
        self._command_max_length = command_max_length

    def report(self, last_report: float) -> list[Transition]:
        """Log every transition stamped after ``last_report``.

        Alarms that are still active but were already reported stay silent.
        """
        transitions = []
        for identity, config, state in self._engine.watches():
            if state is None or state.status_changed is None:
                continue
            if state.status_changed <= last_report:
                continue

            value = format_value(identity.type, state.last_value)
            verdict = "within" if state.status == WatchStatus.OK else "exceed"
            logger.warning(
                f"{identity.key(self._namespace)}: {verdict} limits, value: {value}"
            )
            old = state.previous_status.value if state.previous_status else "unset"
            logger.debug(
                f"{identity.key(self._namespace)}: {old} -> {state.status.value}"
            )

            command = None
            if config.command:
                command = self._run_command(identity, config, state)
            transitions.append(
                Transition(
                    identity=identity,
                    old_status=state.previous_status,
                    new_status=state.status,
                    value=value,
                    command=command,
                )
            )
        return transitions

    def _run_command(
        self, identity: SensorIdentity, config: WatchConfig, state: WatchState
    ) -> str | None:
        fields = CommandFields.for_watch(identity, config, state)
        try:
            command = expand_command(
                config.command, fields, max_length=self._command_max_length
            )
        except TemplateError as e:
            logger.error(
                f"could not parse command for {identity.key(self._namespace)}: {e}"
            )
            return None
        if not command:
            return None
        self._executor.spawn(command)
        return command
