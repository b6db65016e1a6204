"""How much ffrecorder reports while it drives ffmpeg."""

import logging
from enum import IntEnum


class Verbosity(IntEnum):
    """Reporting levels, ordered so ``>=`` comparisons read naturally.

    ``COMMANDS`` echoes every ffmpeg and ffprobe command line through the
    status callback; ``OUTPUT`` additionally enables debug logging, which
    includes launcher and cache activity.
    """

    QUIET = 0
    COMMANDS = 1
    OUTPUT = 2

    @property
    def log_level(self) -> int:
        """Root logger level the CLI configures for this verbosity."""
        return {
            Verbosity.QUIET: logging.WARNING,
            Verbosity.COMMANDS: logging.INFO,
            Verbosity.OUTPUT: logging.DEBUG,
        }[self]


__all__ = ["Verbosity"]
