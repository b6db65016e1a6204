"""Platform and capture device definitions."""

from enum import Enum


class OperatingSystem(str, Enum):
    """Host operating systems with a known grab device."""

    WINDOWS = "windows"
    LINUX = "linux"
    MACOS = "macos"

    @property
    def capture_device(self) -> "CaptureDevice":
        """Screen grab device ffmpeg uses on this OS."""
        return {
            OperatingSystem.WINDOWS: CaptureDevice.GDIGRAB,
            OperatingSystem.LINUX: CaptureDevice.X11GRAB,
            OperatingSystem.MACOS: CaptureDevice.AVFOUNDATION,
        }[self]


class CaptureDevice(str, Enum):
    """ffmpeg input formats (``-f``) used for capture."""

    GDIGRAB = "gdigrab"
    X11GRAB = "x11grab"
    AVFOUNDATION = "avfoundation"
    DSHOW = "dshow"
    LAVFI = "lavfi"

    @property
    def supports_framerate(self) -> bool:
        """Whether the device accepts the ``-framerate`` input option."""
        return self is not CaptureDevice.LAVFI


__all__ = ["CaptureDevice", "OperatingSystem"]
