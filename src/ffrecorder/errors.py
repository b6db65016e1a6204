"""Exceptions raised by recorder sessions."""

from __future__ import annotations


class RecorderError(RuntimeError):
    """Base class for ffrecorder errors."""


class DependencyNotFound(RecorderError):
    """The ffmpeg binary could not be located."""

    def __init__(self, message: str = "ffmpeg binary not found. Install ffmpeg or set FFRECORDER_FFMPEG.") -> None:
        super().__init__(message)


class StartupFailure(RecorderError):
    """The encoder exited before the warm-up window ended."""


class ArtifactProbeFailure(RecorderError):
    """ffprobe could not read the recorded file."""


class RecorderAlreadyRunning(RecorderError):
    """``start`` was called while a recording is in progress."""


class RecorderNotRunning(RecorderError):
    """``stop`` was called without a running recording."""


class UnsupportedPlatform(RecorderError):
    """The requested capture mode is not available on this OS."""


class ProcessTimeout(RecorderError):  # noqa: N818 - internal signal, never surfaced
    """A child process did not exit within the allotted time."""


__all__ = [
    "ArtifactProbeFailure",
    "DependencyNotFound",
    "ProcessTimeout",
    "RecorderAlreadyRunning",
    "RecorderError",
    "RecorderNotRunning",
    "StartupFailure",
    "UnsupportedPlatform",
]
