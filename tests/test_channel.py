"""Tests for the CommandChannel and ShutdownSignal."""

import threading

import pytest

from pomotimer.core.channel import (
    ChannelDisconnectedError,
    Command,
    CommandChannel,
    SendResult,
    ShutdownSignal,
)


class TestCommandChannelSend:
    """send() buffers commands and reports a gone receiver."""

    def test_send_returns_sent(self) -> None:
        channel = CommandChannel()
        assert channel.send(Command.PAUSE) is SendResult.SENT

    def test_send_after_receiver_closed_is_disconnected(self) -> None:
        channel = CommandChannel()
        channel.close_receiver()
        assert channel.send(Command.QUIT) is SendResult.DISCONNECTED
        assert channel.receiver_closed

    def test_commands_are_delivered_in_order(self) -> None:
        channel = CommandChannel()
        for command in (Command.PAUSE, Command.RESUME, Command.SKIP, Command.QUIT):
            channel.send(command)
        received = [channel.poll() for _ in range(4)]
        assert received == [Command.PAUSE, Command.RESUME, Command.SKIP, Command.QUIT]


class TestCommandChannelPoll:
    """poll() never blocks."""

    def test_poll_empty_returns_none(self) -> None:
        assert CommandChannel().poll() is None

    def test_poll_drains_before_reporting_disconnect(self) -> None:
        channel = CommandChannel()
        channel.send(Command.SKIP)
        channel.close()
        assert channel.poll() is Command.SKIP
        with pytest.raises(ChannelDisconnectedError):
            channel.poll()


class TestCommandChannelWait:
    """wait() blocks up to a timeout."""

    def test_wait_times_out_with_none(self) -> None:
        assert CommandChannel().wait(0.01) is None

    def test_wait_on_closed_empty_channel_raises(self) -> None:
        channel = CommandChannel()
        channel.close()
        with pytest.raises(ChannelDisconnectedError):
            channel.wait(1.0)

    def test_wait_returns_pending_command_after_close(self) -> None:
        channel = CommandChannel()
        channel.send(Command.RESUME)
        channel.close()
        assert channel.wait(1.0) is Command.RESUME

    def test_wait_wakes_on_send_from_other_thread(self) -> None:
        channel = CommandChannel()
        sender = threading.Timer(0.05, channel.send, args=(Command.RESUME,))
        sender.start()
        try:
            assert channel.wait(2.0) is Command.RESUME
        finally:
            sender.join()


class TestShutdownSignal:
    """ShutdownSignal is a set-once flag."""

    def test_initially_clear(self) -> None:
        assert not ShutdownSignal().is_set()

    def test_set_stays_set(self) -> None:
        signal = ShutdownSignal()
        signal.set()
        signal.set()
        assert signal.is_set()

    def test_has_no_reset(self) -> None:
        assert not hasattr(ShutdownSignal(), "clear")

    def test_visible_across_threads(self) -> None:
        signal = ShutdownSignal()
        thread = threading.Thread(target=signal.set)
        thread.start()
        thread.join()
        assert signal.is_set()
