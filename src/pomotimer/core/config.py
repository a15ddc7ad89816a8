"""Startup configuration: work/break minutes read from interactive prompts."""

from __future__ import annotations

from typing import Callable, TextIO

import click

DEFAULT_WORK_MINUTES = 25
DEFAULT_BREAK_MINUTES = 5


def parse_minutes(raw: str, default: int) -> int:
    """Return *raw* as a positive integer, or *default* if it is not one."""
    try:
        value = int(raw.strip())
    except ValueError:
        return default
    return value if value > 0 else default


def prompt_minutes(
    stream: TextIO,
    label: str,
    default: int,
    echo: Callable[..., None] = click.echo,
) -> int:
    """Ask for a duration in minutes on *stream*.

    Malformed, non-positive, blank or missing input falls back to *default*
    without re-prompting.
    """
    echo(f"Enter {label} duration (minutes, default {default}):")
    return parse_minutes(stream.readline(), default)
