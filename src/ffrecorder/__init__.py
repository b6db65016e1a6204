"""Core package for ffrecorder utilities."""

from .backend import Desktop, Recorder, Window
from .errors import (
    ArtifactProbeFailure,
    DependencyNotFound,
    RecorderAlreadyRunning,
    RecorderError,
    RecorderNotRunning,
    StartupFailure,
    UnsupportedPlatform,
)
from .models import AdvancedOptions, Options, Video

__all__ = [
    "AdvancedOptions",
    "ArtifactProbeFailure",
    "DependencyNotFound",
    "Desktop",
    "Options",
    "Recorder",
    "RecorderAlreadyRunning",
    "RecorderError",
    "RecorderNotRunning",
    "StartupFailure",
    "UnsupportedPlatform",
    "Video",
    "Window",
]
