"""Tests for the CLI entry point."""

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from ffrecorder import cli
from ffrecorder.cli import main
from ffrecorder.errors import StartupFailure
from ffrecorder.models import Verbosity, Video


class StubDesktop:
    """Records how the CLI drives the recorder."""

    instances: list[StubDesktop] = []
    fail_start = False
    interrupt_start = False
    screenshot_ok = True

    def __init__(self, output: Path, input: str | None = None, advanced: dict | None = None, **kwargs: object) -> None:  # noqa: A002
        self.output = Path(output)
        self.input = input
        self.advanced = advanced
        self.kwargs = kwargs
        self.calls: list[str] = []
        self.options = type("Opts", (), {"output": self.output})()
        StubDesktop.instances.append(self)

    def start(self) -> None:
        self.calls.append("start")
        if self.interrupt_start:
            raise KeyboardInterrupt
        if self.fail_start:
            raise StartupFailure("Failed to start ffmpeg. Reason: Cannot open display")

    def stop(self) -> Video:
        self.calls.append("stop")
        return Video(path=self.output, duration=2.0)

    def screenshot(self, filename: Path) -> Path | None:
        self.calls.append("screenshot")
        return filename if self.screenshot_ok else None


@pytest.fixture
def stub_desktop(monkeypatch: pytest.MonkeyPatch) -> type[StubDesktop]:
    StubDesktop.instances = []
    StubDesktop.fail_start = False
    StubDesktop.interrupt_start = False
    StubDesktop.screenshot_ok = True
    monkeypatch.setattr(cli, "Desktop", StubDesktop)
    return StubDesktop


def test_cli_help(capsys: pytest.CaptureFixture[str]) -> None:
    """Display help message without error."""
    code = main(["--help"])
    out = capsys.readouterr().out
    assert code in (0, None)
    assert "record" in out
    assert "screenshot" in out


def test_record_for_duration(
    tmp_path: Path, stub_desktop: type[StubDesktop], capsys: pytest.CaptureFixture[str]
) -> None:
    """Record, stop after the duration and print the result."""
    out = tmp_path / "rec.mkv"
    code = main(["record", str(out), "--duration", "0s", "--framerate", "30", "--log", str(tmp_path / "x.log")])
    assert code == 0
    rec = stub_desktop.instances[0]
    assert rec.calls == ["start", "stop"]
    assert rec.advanced == {"input": {"framerate": 30.0}, "log": tmp_path / "x.log"}
    printed = capsys.readouterr().out
    assert str(out) in printed
    assert "Duration: 00:00:02.000" in printed


def test_record_startup_failure(
    tmp_path: Path, stub_desktop: type[StubDesktop], capsys: pytest.CaptureFixture[str]
) -> None:
    """Return 1 and report why ffmpeg did not start."""
    stub_desktop.fail_start = True
    code = main(["record", str(tmp_path / "rec.mkv"), "--duration", "1s"])
    assert code == 1
    assert "Cannot open display" in capsys.readouterr().err
    assert stub_desktop.instances[0].calls == ["start"]


def test_record_rejects_bad_duration(tmp_path: Path, stub_desktop: type[StubDesktop]) -> None:
    """Fail before launching ffmpeg on an unparseable duration."""
    assert main(["record", str(tmp_path / "rec.mkv"), "--duration", "soon"]) == 1
    assert stub_desktop.instances == []


def test_screenshot(tmp_path: Path, stub_desktop: type[StubDesktop], capsys: pytest.CaptureFixture[str]) -> None:
    """Exit 0 on success and 1 on failure."""
    shot = tmp_path / "shot.png"
    assert main(["screenshot", str(shot), "--input", ":1", "--capture-device", "x11grab"]) == 0
    rec = stub_desktop.instances[0]
    assert rec.input == ":1"
    assert rec.kwargs["capture_device"] == "x11grab"
    assert rec.kwargs["ctx"].verbosity is Verbosity.QUIET
    assert str(shot.absolute()) in capsys.readouterr().out
    stub_desktop.screenshot_ok = False
    assert main(["screenshot", str(shot)]) == 1


def test_record_interrupted_during_startup(
    tmp_path: Path, stub_desktop: type[StubDesktop], capsys: pytest.CaptureFixture[str]
) -> None:
    """Exit 1 without stopping when Ctrl+C lands before ffmpeg is up."""
    stub_desktop.interrupt_start = True
    assert main(["record", str(tmp_path / "rec.mkv"), "--duration", "5s"]) == 1
    assert stub_desktop.instances[0].calls == ["start"]
    assert "cancelled" in capsys.readouterr().err


@pytest.mark.parametrize(
    ("verbosity", "level"),
    [(Verbosity.QUIET, logging.WARNING), (Verbosity.COMMANDS, logging.INFO), (Verbosity.OUTPUT, logging.DEBUG)],
)
def test_verbosity_log_level(verbosity: Verbosity, level: int) -> None:
    """Map each verbosity to the root logger level."""
    assert verbosity.log_level == level
