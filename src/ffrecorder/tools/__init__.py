"""FFmpeg-related helper utilities."""

from . import probe
from .cli import (
    check_ffmpeg_version,
    ffmpeg_binary,
    ffmpeg_exists,
    ffprobe_binary,
    get_ffmpeg_version,
    join_command,
    run_ffmpeg,
    run_ffprobe,
)
from .helpers import emit_status, format_duration, parse_timespan_to_ms
from .platform import current_os, default_capture_device, default_desktop_input

__all__ = [
    "check_ffmpeg_version",
    "current_os",
    "default_capture_device",
    "default_desktop_input",
    "emit_status",
    "ffmpeg_binary",
    "ffmpeg_exists",
    "ffprobe_binary",
    "format_duration",
    "get_ffmpeg_version",
    "join_command",
    "parse_timespan_to_ms",
    "probe",
    "run_ffmpeg",
    "run_ffprobe",
]
