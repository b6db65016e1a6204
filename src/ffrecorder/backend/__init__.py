"""Backend for launching and controlling ffmpeg capture processes."""

from .launcher import ChildProcess, PosixShellLauncher, ProcessLauncher, WindowsShellLauncher, default_launcher
from .recorder import Desktop, Recorder, Window

__all__ = [
    "ChildProcess",
    "Desktop",
    "PosixShellLauncher",
    "ProcessLauncher",
    "Recorder",
    "Window",
    "WindowsShellLauncher",
    "default_launcher",
]
