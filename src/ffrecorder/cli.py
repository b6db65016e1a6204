"""Command-line interface entry point."""

from __future__ import annotations

import logging
import sys
import time
from pathlib import Path
from typing import TYPE_CHECKING, Annotated

from cyclopts import App, Group, Parameter

from .backend import Desktop
from .errors import RecorderError
from .models import CaptureDevice, RuntimeContext, Verbosity
from .tools import emit_status, format_duration, parse_timespan_to_ms

if TYPE_CHECKING:
    from .models import Video

CAPTURE_GROUP = Group.create_ordered("Capture")
OUTPUT_GROUP = Group.create_ordered("Output")
RUNTIME_GROUP = Group.create_ordered("Runtime")

app = App(name="ffrecorder", help="Record the screen or grab screenshots with ffmpeg.")


def _configure_logging(verbosity: Verbosity) -> None:
    logging.basicConfig(level=verbosity.log_level, format="%(levelname)s %(name)s: %(message)s")


def _context(verbosity: Verbosity) -> RuntimeContext:
    return RuntimeContext(verbosity=verbosity, status_callback=print)


def _advanced(framerate: float | None, log: Path | None) -> dict[str, object]:
    advanced: dict[str, object] = {}
    if framerate is not None:
        advanced["input"] = {"framerate": framerate}
    if log is not None:
        advanced["log"] = log
    return advanced


def _fail(message: str) -> int:
    print(message, file=sys.stderr, flush=True)  # noqa: T201
    return 1


def _record_until_done(recorder: Desktop, duration_ms: int | None) -> Video:
    recorder.start()
    emit_status(f"Recording to {recorder.options.output}. Press Ctrl+C to stop.", status_callback=print)
    try:
        if duration_ms is None:
            while True:
                time.sleep(1)
        else:
            time.sleep(duration_ms / 1000)
    except KeyboardInterrupt:
        pass
    return recorder.stop()


@app.command
def record(
    output: Annotated[Path, Parameter(group=OUTPUT_GROUP)],
    *,
    input: Annotated[str | None, Parameter(group=CAPTURE_GROUP)] = None,  # noqa: A002
    capture_device: Annotated[CaptureDevice | None, Parameter(group=CAPTURE_GROUP)] = None,
    framerate: Annotated[float | None, Parameter(group=CAPTURE_GROUP)] = None,
    duration: Annotated[str | None, Parameter(group=CAPTURE_GROUP)] = None,
    log: Annotated[Path | None, Parameter(group=OUTPUT_GROUP)] = None,
    verbosity: Annotated[Verbosity, Parameter(group=RUNTIME_GROUP)] = Verbosity.QUIET,
) -> int:
    """Record the desktop to a file.

    Recording stops after ``--duration`` or on Ctrl+C.

    Parameters
    ----------
    output
        Path of the recorded file.
    input
        ffmpeg input to capture. Defaults to the whole desktop.
    capture_device
        ffmpeg input format. Defaults to the platform's screen grabber.
    framerate
        Capture framerate.
    duration
        How long to record, e.g. "10s" or "00:01:30".
    log
        File receiving ffmpeg's output.
    verbosity
        Logging verbosity.
    """
    _configure_logging(verbosity)
    try:
        duration_ms = parse_timespan_to_ms(duration)
    except ValueError as e:
        return _fail(str(e))
    try:
        with _context(verbosity) as ctx:
            recorder = Desktop(
                output,
                input=input,
                advanced=_advanced(framerate, log),
                capture_device=capture_device.value if capture_device else None,
                ctx=ctx,
            )
            video = _record_until_done(recorder, duration_ms)
    except KeyboardInterrupt:
        return _fail("Recording cancelled before ffmpeg started.")
    except (RecorderError, OSError, ValueError) as e:
        return _fail(f"Recording failed: {e}")
    emit_status(str(video.path), status_callback=print)
    emit_status(f"Duration: {format_duration(video.duration)}", status_callback=print)
    return 0


@app.command
def screenshot(
    filename: Annotated[Path, Parameter(group=OUTPUT_GROUP)],
    *,
    input: Annotated[str | None, Parameter(group=CAPTURE_GROUP)] = None,  # noqa: A002
    capture_device: Annotated[CaptureDevice | None, Parameter(group=CAPTURE_GROUP)] = None,
    verbosity: Annotated[Verbosity, Parameter(group=RUNTIME_GROUP)] = Verbosity.QUIET,
) -> int:
    """Save a single frame of the desktop.

    Parameters
    ----------
    filename
        Image file to write.
    input
        ffmpeg input to capture. Defaults to the whole desktop.
    capture_device
        ffmpeg input format. Defaults to the platform's screen grabber.
    verbosity
        Logging verbosity.
    """
    _configure_logging(verbosity)
    with _context(verbosity) as ctx:
        try:
            recorder = Desktop(
                filename,
                input=input,
                capture_device=capture_device.value if capture_device else None,
                ctx=ctx,
            )
        except (RecorderError, ValueError) as e:
            return _fail(f"Screenshot failed: {e}")
        if recorder.screenshot(filename) is None:
            return _fail("Screenshot failed.")
    emit_status(str(Path(filename).absolute()), status_callback=print)
    return 0


def main(argv: list[str] | None = None) -> int:
    """Run the ffrecorder CLI."""
    argv = sys.argv[1:] if argv is None else argv
    return app(argv)


if __name__ == "__main__":
    raise SystemExit(main())
