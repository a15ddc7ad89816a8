"""Tests for the ElapsedClock."""

from unittest.mock import patch

import pytest

from pomotimer.core.clock import ElapsedClock


class TestElapsedClock:
    """elapsed() measures monotonic time since start()."""

    def test_zero_before_start(self) -> None:
        assert ElapsedClock().elapsed() == 0.0

    def test_elapsed_uses_monotonic(self) -> None:
        clock = ElapsedClock()
        with patch("pomotimer.core.clock.time") as mock_time:
            mock_time.monotonic.return_value = 1000.0
            clock.start()
            mock_time.monotonic.return_value = 1010.0
            assert clock.elapsed() == pytest.approx(10.0)

    def test_offset_counts_as_elapsed(self) -> None:
        clock = ElapsedClock()
        with patch("pomotimer.core.clock.time") as mock_time:
            mock_time.monotonic.return_value = 0.0
            clock.start(offset=5.0)
            assert clock.elapsed() == pytest.approx(5.0)
            mock_time.monotonic.return_value = 10.0
            assert clock.elapsed() == pytest.approx(15.0)

    def test_never_goes_backward(self) -> None:
        clock = ElapsedClock()
        with patch("pomotimer.core.clock.time") as mock_time:
            mock_time.monotonic.return_value = 100.0
            clock.start()
            mock_time.monotonic.return_value = 130.0
            assert clock.elapsed() == pytest.approx(30.0)
            mock_time.monotonic.return_value = 120.0
            assert clock.elapsed() == pytest.approx(30.0)

    def test_restart_resets_elapsed(self) -> None:
        ticks = iter([0.0, 50.0, 60.0, 61.0])
        clock = ElapsedClock(monotonic=lambda: next(ticks))
        clock.start()
        assert clock.elapsed() == pytest.approx(50.0)
        clock.start()
        assert clock.elapsed() == pytest.approx(1.0)

    def test_negative_offset_raises_value_error(self) -> None:
        with pytest.raises(ValueError):
            ElapsedClock().start(offset=-1.0)
