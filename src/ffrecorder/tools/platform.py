"""Host operating system detection."""

from __future__ import annotations

import os
import sys

from ffrecorder.models.types import CaptureDevice, OperatingSystem


def current_os(platform: str | None = None) -> OperatingSystem:
    """Return the host OS, raising ``ValueError`` for unknown platforms."""
    platform = sys.platform if platform is None else platform
    if platform == "win32" or platform == "cygwin":
        return OperatingSystem.WINDOWS
    if platform == "darwin":
        return OperatingSystem.MACOS
    if platform.startswith(("linux", "freebsd", "openbsd")):
        return OperatingSystem.LINUX
    raise ValueError(f"Unsupported platform: {platform}")


def default_capture_device() -> CaptureDevice:
    """Return the screen grab device for the current OS."""
    return current_os().capture_device


def default_desktop_input(system: OperatingSystem | None = None) -> str:
    """Return the ffmpeg ``-i`` value that captures the whole desktop.

    On Linux this is the X display from ``$DISPLAY`` (``:0`` if unset); on
    macOS the first avfoundation screen device.
    """
    system = current_os() if system is None else system
    if system is OperatingSystem.WINDOWS:
        return "desktop"
    if system is OperatingSystem.MACOS:
        return "1"
    return os.getenv("DISPLAY") or ":0"


__all__ = ["current_os", "default_capture_device", "default_desktop_input"]
