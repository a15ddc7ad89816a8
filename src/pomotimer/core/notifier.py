"""Console and audible session notifications."""

from __future__ import annotations

import logging
import subprocess
from typing import Callable, Sequence

import click

DEFAULT_SOUND_FILE = "/usr/share/sounds/freedesktop/stereo/complete.oga"
DEFAULT_SOUND_PLAYER = "paplay"

BELL = "\x07"
KEY_HINT = "Press 'p' to pause, 's' to skip, 'q' to quit."


def default_sound_command(sound_file: str = DEFAULT_SOUND_FILE) -> tuple[str, ...]:
    """Return the player command line for *sound_file*."""
    return (DEFAULT_SOUND_PLAYER, sound_file)


class Notifier:
    """Announces session start and completion.

    Audible cues are fire-and-forget: the sound player is spawned detached
    and never waited on.  A failure to launch it, or to write to the console,
    is logged and otherwise ignored.
    """

    def __init__(
        self,
        *,
        sound_command: Sequence[str] | None = default_sound_command(),
        echo: Callable[..., None] = click.echo,
        logger: logging.Logger | None = None,
    ) -> None:
        self._sound_command = tuple(sound_command) if sound_command else None
        self._echo = echo
        self._logger = logger or logging.getLogger("pomotimer.notifier")

    def notify_session_started(self, label: str, ordinal: int) -> None:
        """Announce a new session and play the start cue."""
        self._write(f"\n--- {label} Session {ordinal} Started ---")
        self._play_sound()
        self._write(BELL, nl=False)
        self._write(KEY_HINT)

    def notify_session_resumed(self, label: str, ordinal: int) -> None:
        """Announce that a paused session is running again."""
        self._write(f"\n--- {label} Session {ordinal} Resumed ---")
        self._write(KEY_HINT)

    def notify_session_finished(self, label: str) -> None:
        """Ring the bell and announce a completed session."""
        self._write(BELL, nl=False)
        self._write(f"\n--- {label} Session Finished! ---")

    # -- private helpers -----------------------------------------------------

    def _play_sound(self) -> None:
        if self._sound_command is None:
            return
        try:
            subprocess.Popen(
                self._sound_command,
                stdin=subprocess.DEVNULL,
                stdout=subprocess.DEVNULL,
                stderr=subprocess.DEVNULL,
            )
        except (OSError, subprocess.SubprocessError) as error:
            self._logger.warning(
                "Could not play sound with %s: %s", self._sound_command[0], error
            )

    def _write(self, message: str, nl: bool = True) -> None:
        try:
            self._echo(message, nl=nl)
        except (OSError, ValueError) as error:
            self._logger.warning("Console write failed: %s", error)
