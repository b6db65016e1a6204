"""Options package exports."""

from .advanced import AdvancedOptions, FlagValue, render_flags
from .defaults import (
    DEFAULT_FPS,
    DEFAULT_LOG_FILE,
    DEFAULT_OUTPUT_FLAGS,
    DEFAULT_PIXEL_FORMAT,
    default_input_flags,
)
from .options import Options

__all__ = [
    "DEFAULT_FPS",
    "DEFAULT_LOG_FILE",
    "DEFAULT_OUTPUT_FLAGS",
    "DEFAULT_PIXEL_FORMAT",
    "AdvancedOptions",
    "FlagValue",
    "Options",
    "default_input_flags",
    "render_flags",
]
