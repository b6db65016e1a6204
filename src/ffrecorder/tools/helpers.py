"""Utility functions for time parsing and status emission."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Callable
else:
    from collections import abc

    Callable = abc.Callable

from pytimeparse2 import parse as parse_duration

logger = logging.getLogger(__name__)


def parse_timespan_to_ms(s: str | None) -> int | None:
    """Convert a time string to milliseconds.

    Args:
        s: Timespan such as ``"90s"`` or ``"00:01:30"``. ``None`` or an empty
            string returns ``None``.

    Returns:
        The parsed duration in milliseconds rounded to the nearest integer.

    Raises:
        ValueError: If ``s`` cannot be parsed.

    """
    if not s:
        return None
    parsed = parse_duration(s)
    if parsed is None:
        raise ValueError(f"Unable to parse timespan: {s}")
    return round(float(parsed) * 1000)


def format_duration(seconds: float | None) -> str:
    """Format seconds as ``HH:MM:SS.mmm``; ``None`` renders as ``unknown``."""
    if seconds is None:
        return "unknown"
    seconds = round(seconds, 3)
    h, remainder = divmod(seconds, 3600)
    m, s = divmod(remainder, 60)
    return f"{int(h):02d}:{int(m):02d}:{s:06.3f}"


def emit_status(message: str, *, status_callback: Callable[[str], None] | None) -> None:
    """Send ``message`` to the CLI, logger, or a custom callback.

    The caller controls where status lines go:

    * ``print`` - used by the CLI for direct terminal updates.
    * ``None`` - route messages through ``logger.info``.
    * Any other ``Callable[[str], None]`` - for tests that capture status output.
    """
    if status_callback is None:
        logger.info(message)
        return
    if status_callback is print:
        print(message, flush=True)  # noqa: T201
        return
    status_callback(message)


def tail_lines(text: str, count: int = 2) -> list[str]:
    """Return the last ``count`` lines of ``text``."""
    lines = [line.rstrip() for line in text.splitlines()]
    return lines[-count:] if count else []


__all__ = [
    "emit_status",
    "format_duration",
    "parse_timespan_to_ms",
    "tail_lines",
]
