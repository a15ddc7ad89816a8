"""Timer loop — the work/break state machine driven by user commands."""

from __future__ import annotations

import logging
import threading
import time
from dataclasses import dataclass
from enum import Enum
from typing import Callable

import click

from pomotimer.core.channel import (
    ChannelDisconnectedError,
    Command,
    CommandChannel,
    ShutdownSignal,
)
from pomotimer.core.clock import ElapsedClock
from pomotimer.core.config import DEFAULT_BREAK_MINUTES, DEFAULT_WORK_MINUTES
from pomotimer.core.notifier import Notifier


class TimerState(Enum):
    """Possible states of the timer loop."""

    WORK = "work"
    BREAK = "break"
    PAUSED = "paused"
    STOPPED = "stopped"


_SESSION_LABELS = {TimerState.WORK: "Work", TimerState.BREAK: "Break"}
_IDLE_STATES = frozenset({TimerState.PAUSED, TimerState.STOPPED})
_NEXT_STATE = {TimerState.WORK: TimerState.BREAK, TimerState.BREAK: TimerState.WORK}


@dataclass(frozen=True)
class SessionConfig:
    """Work and break durations in whole minutes."""

    work_minutes: int = DEFAULT_WORK_MINUTES
    break_minutes: int = DEFAULT_BREAK_MINUTES

    def __post_init__(self) -> None:
        for name in ("work_minutes", "break_minutes"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise TypeError(f"{name} must be an integer, got {type(value).__name__}")
            if value <= 0:
                raise ValueError(f"{name} must be positive, got {value}")

    def duration_seconds(self, state: TimerState) -> float:
        if state == TimerState.WORK:
            return self.work_minutes * 60.0
        if state == TimerState.BREAK:
            return self.break_minutes * 60.0
        raise ValueError(f"{state.value} state has no duration")


def format_remaining(seconds: float) -> str:
    """Format *seconds* as ``MM:SS``, flooring to whole seconds."""
    total = max(int(seconds), 0)
    return f"{total // 60:02d}:{total % 60:02d}"


class TimerLoop:
    """Counts down alternating Work and Break sessions.

    Owns the timer state, the session counter and the elapsed-time tracking;
    nothing else mutates them.  Commands arrive on a :class:`CommandChannel`
    that is sampled once per tick while counting down, and waited on while
    paused.  The loop ends when the :class:`ShutdownSignal` is set, by either
    thread.

    Resume restores the state that was active before the pause and continues
    that session with the time already elapsed.  Skip abandons the session
    without a finish notification but still advances to the next one and
    counts it.
    """

    def __init__(
        self,
        config: SessionConfig,
        channel: CommandChannel,
        shutdown: ShutdownSignal,
        notifier: Notifier,
        *,
        clock: ElapsedClock | None = None,
        sleep: Callable[[float], None] = time.sleep,
        tick_seconds: float = 1.0,
        idle_seconds: float = 0.1,
        echo: Callable[..., None] = click.echo,
        logger: logging.Logger | None = None,
    ) -> None:
        self._config = config
        self._channel = channel
        self._shutdown = shutdown
        self._notifier = notifier
        self._clock = clock if clock is not None else ElapsedClock()
        self._sleep = sleep
        self._tick_seconds = tick_seconds
        self._idle_seconds = idle_seconds
        self._echo = echo
        self._logger = logger or logging.getLogger("pomotimer.timer")

        self._state: TimerState = TimerState.WORK
        self._session_count: int = 0
        self._paused_from: TimerState | None = None
        self._retained_elapsed: float = 0.0
        self._resuming: bool = False
        self.ready = threading.Event()

    # -- public interface ----------------------------------------------------

    @property
    def state(self) -> TimerState:
        """Return the current timer state."""
        return self._state

    @property
    def session_count(self) -> int:
        """Return the number of sessions completed or skipped so far."""
        return self._session_count

    def run(self) -> int:
        """Run until shutdown; return the number of sessions completed."""
        try:
            while not self._shutdown.is_set():
                if self._state in _IDLE_STATES:
                    self._idle()
                else:
                    self._run_session()
        finally:
            self._state = TimerState.STOPPED
            self._channel.close_receiver()
            self.ready.set()
            self._write("\nTimer thread stopped.")
            self._logger.info("Timer loop stopped after %d sessions", self._session_count)
        return self._session_count

    # -- session countdown ---------------------------------------------------

    def _run_session(self) -> None:
        state = self._state
        label = _SESSION_LABELS[state]
        duration = self._config.duration_seconds(state)
        resuming = self._resuming
        self._resuming = False

        elapsed = self._retained_elapsed
        self._clock.start(offset=elapsed)
        self._retained_elapsed = 0.0

        ordinal = self._session_count + 1
        if resuming:
            self._notifier.notify_session_resumed(label, ordinal)
        else:
            self._notifier.notify_session_started(label, ordinal)
        self._logger.debug("%s session %d running for %.0fs", label, ordinal, duration)
        self.ready.set()

        while elapsed < duration:
            self._write(f"\rTime remaining: {format_remaining(duration - int(elapsed))}", nl=False)
            if self._handle_running_command(elapsed):
                break
            if self._shutdown.is_set():
                break
            self._sleep(self._tick_seconds)
            elapsed = self._clock.elapsed()

        if self._state == TimerState.PAUSED or self._shutdown.is_set():
            return
        if elapsed >= duration:
            self._notifier.notify_session_finished(label)
        self._advance()

    def _handle_running_command(self, elapsed: float) -> bool:
        """Apply one pending command; return True to stop the countdown."""
        try:
            command = self._channel.poll()
        except ChannelDisconnectedError:
            self._logger.warning("Command channel disconnected; shutting down")
            self._shutdown.set()
            return True

        if command is Command.PAUSE:
            self._write("\nTimer Paused. Press 'r' to resume.")
            self._paused_from = self._state
            self._retained_elapsed = elapsed
            self._state = TimerState.PAUSED
            return True
        if command is Command.SKIP:
            self._write("\nSkipping current session.")
            return True
        if command is Command.QUIT:
            self._shutdown.set()
            return True
        if command is Command.RESUME:
            self._logger.debug("Resume ignored: timer is not paused")
        return False

    def _advance(self) -> None:
        """Move to the other session type and count the finished one."""
        self._state = _NEXT_STATE[self._state]
        self._session_count += 1

    # -- paused --------------------------------------------------------------

    def _idle(self) -> None:
        """Wait briefly for a command while paused."""
        try:
            command = self._channel.wait(self._idle_seconds)
        except ChannelDisconnectedError:
            self._logger.warning("Command channel disconnected; shutting down")
            self._shutdown.set()
            return

        if command is None or self._state != TimerState.PAUSED:
            return
        if command is Command.RESUME:
            self._state = self._paused_from or TimerState.WORK
            self._paused_from = None
            self._resuming = True
            self._logger.debug("Resumed %s session", self._state.value)
        elif command is Command.SKIP:
            self._write("Skipping paused session.")
            self._state = self._paused_from or TimerState.WORK
            self._paused_from = None
            self._retained_elapsed = 0.0
            self._advance()
        elif command is Command.QUIT:
            self._shutdown.set()

    def _write(self, message: str, nl: bool = True) -> None:
        """Echo *message*, logging rather than raising on a broken console."""
        try:
            self._echo(message, nl=nl)
        except (OSError, ValueError) as error:
            self._logger.warning("Console write failed: %s", error)
