"""Fire-and-forget execution of notification commands.

Commands run through ``/bin/sh -c`` in their own session with no stdio.
The child is never waited on here; its exit status is of no interest and
its failure cannot affect watch state. Only a failed spawn is reported.
"""

from __future__ import annotations

import logging
import subprocess

logger = logging.getLogger("sensorwatch")

SHELL = "/bin/sh"


class CommandExecutor:
    """Spawns shell commands without waiting for them."""

    def __init__(self, shell: str = SHELL) -> None:
        self._shell = shell

    def spawn(self, command: str) -> bool:
        """Start ``command`` detached. Returns False if it could not start."""
        try:
            subprocess.Popen(
                [self._shell, "-c", command],
                stdin=subprocess.DEVNULL,
                stdout=subprocess.DEVNULL,
                stderr=subprocess.DEVNULL,
                start_new_session=True,
            )
        except OSError as e:
            logger.error(f"execute: could not spawn {command!r}: {e}")
            return False
        logger.debug(f"execute: {command}")
        return True
