"""Expose models and type definitions."""

from .context import RuntimeContext
from .options import AdvancedOptions, Options
from .types import CaptureDevice, OperatingSystem
from .verbosity import Verbosity
from .video import Video

__all__ = [
    "AdvancedOptions",
    "CaptureDevice",
    "OperatingSystem",
    "Options",
    "RuntimeContext",
    "Verbosity",
    "Video",
]
