"""Command channel and shutdown signal shared by the timer and input threads."""

from __future__ import annotations

import queue
import threading
from enum import Enum


class Command(Enum):
    """User commands carried from the input reader to the timer loop."""

    PAUSE = "pause"
    RESUME = "resume"
    SKIP = "skip"
    QUIT = "quit"


class SendResult(Enum):
    """Outcome of :meth:`CommandChannel.send`."""

    SENT = "sent"
    DISCONNECTED = "disconnected"


class ChannelDisconnectedError(Exception):
    """Raised on receive when the channel is empty and the sender has closed."""


class CommandChannel:
    """Single-producer/single-consumer FIFO of :class:`Command` values.

    Sends never block and never raise.  Receives either poll or wait with a
    timeout; once the sender closes, draining the remaining commands is still
    possible and only an empty, closed channel reports disconnection.
    """

    def __init__(self) -> None:
        self._queue: queue.Queue[Command] = queue.Queue()
        self._sender_closed = threading.Event()
        self._receiver_closed = threading.Event()

    # -- producer side -------------------------------------------------------

    def send(self, command: Command) -> SendResult:
        """Queue *command* unless the receiver has closed."""
        if self._receiver_closed.is_set():
            return SendResult.DISCONNECTED
        self._queue.put_nowait(command)
        return SendResult.SENT

    def close(self) -> None:
        """Close the sender side."""
        self._sender_closed.set()

    # -- consumer side -------------------------------------------------------

    def poll(self) -> Command | None:
        """Return the next command, or ``None`` if none is pending."""
        # Read the flag before the queue: anything sent before close() is
        # already queued by the time the flag is visible.
        closed = self._sender_closed.is_set()
        try:
            return self._queue.get_nowait()
        except queue.Empty:
            if closed:
                raise ChannelDisconnectedError("command sender has closed") from None
            return None

    def wait(self, timeout: float) -> Command | None:
        """Block up to *timeout* seconds for the next command."""
        closed = self._sender_closed.is_set()
        if closed:
            return self.poll()
        try:
            return self._queue.get(timeout=timeout)
        except queue.Empty:
            if self._sender_closed.is_set():
                return self.poll()
            return None

    def close_receiver(self) -> None:
        """Close the receiver side; later sends report ``DISCONNECTED``."""
        self._receiver_closed.set()

    @property
    def receiver_closed(self) -> bool:
        """Whether the receiver side has closed."""
        return self._receiver_closed.is_set()


class ShutdownSignal:
    """Process-wide stop flag.  Once set it stays set."""

    def __init__(self) -> None:
        self._event = threading.Event()

    def set(self) -> None:
        """Signal shutdown."""
        self._event.set()

    def is_set(self) -> bool:
        """Return True once shutdown has been signalled."""
        return self._event.is_set()
