"""Input reader: turns keystroke lines from a text stream into commands."""

from __future__ import annotations

import logging
from typing import Callable, Iterable

import click

from pomotimer.core.channel import Command, CommandChannel, SendResult, ShutdownSignal

USAGE_HINT = "Unknown command. Use 'p' to pause, 'r' to resume, 's' to skip, 'q' to quit."

_KEYS: dict[str, Command] = {
    "p": Command.PAUSE,
    "r": Command.RESUME,
    "s": Command.SKIP,
    "q": Command.QUIT,
}


def parse_command(token: str) -> Command | None:
    """Map a trimmed, case-insensitive keystroke to a :class:`Command`."""
    return _KEYS.get(token.strip().lower())


class InputReader:
    """Reads command lines and pushes them onto a :class:`CommandChannel`.

    Stops after ``q``, at end of stream (treated as ``q``), or once the
    shutdown signal has been set by the other side.
    """

    def __init__(
        self,
        channel: CommandChannel,
        shutdown: ShutdownSignal,
        *,
        echo: Callable[..., None] = click.echo,
        logger: logging.Logger | None = None,
    ) -> None:
        self._channel = channel
        self._shutdown = shutdown
        self._echo = echo
        self._logger = logger or logging.getLogger("pomotimer.input")

    def run(self, stream: Iterable[str]) -> None:
        """Read *stream* line by line until quit, end of input or shutdown."""
        try:
            for line in stream:
                if self._shutdown.is_set():
                    return
                command = parse_command(line)
                if command is None:
                    self._echo(USAGE_HINT)
                    continue
                self._send(command)
                if command is Command.QUIT:
                    self._shutdown.set()
                    return
            self._logger.debug("End of input; quitting")
            self._send(Command.QUIT)
            self._shutdown.set()
        finally:
            self._channel.close()

    def _send(self, command: Command) -> None:
        """Send *command*, logging a drop when the timer has stopped."""
        if self._channel.send(command) is SendResult.DISCONNECTED:
            self._logger.debug("Timer already stopped; dropped %s", command.value)
