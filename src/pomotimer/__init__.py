"""pomotimer: an interactive Pomodoro work/break timer."""

__version__ = "0.1.0"
