"""CLI entry point for pomotimer.

Uses Click to expose the ``pomotimer`` command, which prompts for the work
and break durations, then runs the timer loop on a background thread while
reading commands from standard input on the main thread.
"""

from __future__ import annotations

import logging
import sys
import threading

import click

import pomotimer
from pomotimer.core.channel import CommandChannel, ShutdownSignal
from pomotimer.core.config import DEFAULT_BREAK_MINUTES, DEFAULT_WORK_MINUTES, prompt_minutes
from pomotimer.core.input_reader import InputReader
from pomotimer.core.notifier import DEFAULT_SOUND_FILE, Notifier, default_sound_command
from pomotimer.core.timer import SessionConfig, TimerLoop

_READY_TIMEOUT_SECONDS = 5.0


def setup_logging(level: int = logging.WARNING) -> None:
    """Configure logging for the application (stderr)."""
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


@click.command()
@click.option(
    "--work",
    "work_minutes",
    type=click.IntRange(min=1),
    default=None,
    help="Work session length in minutes (prompted for if omitted).",
)
@click.option(
    "--break",
    "break_minutes",
    type=click.IntRange(min=1),
    default=None,
    help="Break session length in minutes (prompted for if omitted).",
)
@click.option(
    "--sound-file",
    default=DEFAULT_SOUND_FILE,
    show_default=True,
    help="Sound played when a session starts.",
)
@click.option("--no-sound", is_flag=True, help="Do not launch the sound player.")
@click.option("-v", "--verbose", is_flag=True, help="Log debug output to stderr.")
@click.version_option(version=pomotimer.__version__, prog_name="pomotimer")
def cli(
    work_minutes: int | None,
    break_minutes: int | None,
    sound_file: str,
    no_sound: bool,
    verbose: bool,
) -> None:
    """pomotimer: an interactive work/break timer for the terminal.

    While running, enter p to pause, r to resume, s to skip the current
    session and q to quit.
    """
    setup_logging(logging.DEBUG if verbose else logging.WARNING)
    logger = logging.getLogger("pomotimer")
    stdin = sys.stdin

    click.echo("--- Pomodoro Timer ---")
    if work_minutes is None:
        work_minutes = prompt_minutes(stdin, "work", DEFAULT_WORK_MINUTES)
    if break_minutes is None:
        break_minutes = prompt_minutes(stdin, "break", DEFAULT_BREAK_MINUTES)
    config = SessionConfig(work_minutes=work_minutes, break_minutes=break_minutes)
    logger.debug("Configured %s", config)

    channel = CommandChannel()
    shutdown = ShutdownSignal()
    notifier = Notifier(sound_command=None if no_sound else default_sound_command(sound_file))
    timer = TimerLoop(config, channel, shutdown, notifier)

    timer_thread = threading.Thread(target=timer.run, name="pomotimer-timer")
    timer_thread.start()
    if not timer.ready.wait(timeout=_READY_TIMEOUT_SECONDS):
        logger.warning("Timer did not start within %.0fs", _READY_TIMEOUT_SECONDS)

    try:
        InputReader(channel, shutdown).run(stdin)
    except KeyboardInterrupt:
        shutdown.set()
    finally:
        timer_thread.join()
    click.echo("\nPomodoro timer finished. Goodbye!")
