"""Notification command templates.

A template is copied left to right with these placeholders expanded:

    %x  device name          %2  current value
    %t  sensor type name     %3  lower bound
    %n  sensor sub-index     %4  upper bound
    %%  a literal percent sign

Values are rendered with ``format_value``. Any other ``%<char>`` pair is
kept as written, and a lone ``%`` at the very end is dropped.

The expansion has a hard length limit. Going past it fails the whole
template with TemplateError; a truncated command is never returned.
"""

from __future__ import annotations

from dataclasses import dataclass

from ..exceptions import TemplateError
from ..sensors.models import SensorIdentity
from .formatting import format_value
from .models import WatchConfig, WatchState

DEFAULT_MAX_LENGTH = 1024


@dataclass(frozen=True)
class CommandFields:
    """Values available to a command template."""

    device_name: str
    type_name: str
    index: int
    current: str
    lower: str
    upper: str

    @classmethod
    def for_watch(
        cls, identity: SensorIdentity, config: WatchConfig, state: WatchState
    ) -> CommandFields:
        return cls(
            device_name=identity.device_name,
            type_name=identity.type_name,
            index=identity.index,
            current=format_value(identity.type, state.last_value),
            lower=format_value(identity.type, config.lower),
            upper=format_value(identity.type, config.upper),
        )

    def placeholders(self) -> dict[str, str]:
        return {
            "x": self.device_name,
            "t": self.type_name,
            "n": str(self.index),
            "2": self.current,
            "3": self.lower,
            "4": self.upper,
            "%": "%",
        }


def expand_command(
    template: str, fields: CommandFields, max_length: int = DEFAULT_MAX_LENGTH
) -> str:
    """Expand ``template`` against ``fields``.

    Raises:
        TemplateError: the expansion would exceed ``max_length`` characters.
    """
    values = fields.placeholders()
    parts: list[str] = []
    length = 0
    i = 0
    while i < len(template):
        char = template[i]
        if char != "%":
            piece = char
            i += 1
        elif i + 1 == len(template):
            break
        else:
            key = template[i + 1]
            piece = values.get(key, f"%{key}")
            i += 2

        length += len(piece)
        if length > max_length:
            raise TemplateError(
                f"command template expands past {max_length} characters"
            )
        parts.append(piece)
    return "".join(parts)
