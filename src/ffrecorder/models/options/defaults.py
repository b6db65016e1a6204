"""Default constants for option models."""

from __future__ import annotations

from pathlib import Path

from ffrecorder.models.types import CaptureDevice

DEFAULT_LOG_FILE = Path("ffmpeg.log")
DEFAULT_FPS = 15.0
DEFAULT_PIXEL_FORMAT = "yuv420p"
DEFAULT_OUTPUT_FLAGS: dict[str, object] = {"pix_fmt": DEFAULT_PIXEL_FORMAT}


def default_input_flags(device: CaptureDevice) -> dict[str, object]:
    """Return the input flags applied to ``device`` unless overridden."""
    if device.supports_framerate:
        return {"framerate": DEFAULT_FPS}
    return {}


__all__ = [
    "DEFAULT_FPS",
    "DEFAULT_LOG_FILE",
    "DEFAULT_OUTPUT_FLAGS",
    "DEFAULT_PIXEL_FORMAT",
    "default_input_flags",
]
