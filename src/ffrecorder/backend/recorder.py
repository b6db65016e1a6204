"""Record the screen with ffmpeg and inspect the result."""

from __future__ import annotations

import errno
import logging
import time
from typing import TYPE_CHECKING, Self

from ffrecorder.errors import (
    DependencyNotFound,
    ProcessTimeout,
    RecorderAlreadyRunning,
    RecorderNotRunning,
    StartupFailure,
    UnsupportedPlatform,
)
from ffrecorder.models import Options, OperatingSystem, RuntimeContext, Verbosity
from ffrecorder.tools.cli import ffmpeg_binary, ffmpeg_exists, quote_arg
from ffrecorder.tools.helpers import emit_status, tail_lines
from ffrecorder.tools.platform import current_os, default_desktop_input
from ffrecorder.tools.probe import probe_video

from .launcher import default_launcher

if TYPE_CHECKING:
    from collections.abc import Mapping
    from pathlib import Path
    from types import TracebackType

    from ffrecorder.models import Video

    from .launcher import ChildProcess, ProcessLauncher

OVERWRITE_FLAG = "-y"
PROCESS_TIMEOUT = 5.0  #: Seconds to wait for ffmpeg to quit before killing it.
WARMUP_SECONDS = 1.5  #: ffmpeg takes about this long to initialize a grab device.
PROBE_ATTEMPTS = 3
PROBE_RETRY_DELAY = 1.0
QUIT_COMMAND = "q\n"

_TRANSIENT_ERRNOS = frozenset({errno.EAGAIN, errno.EWOULDBLOCK, errno.EACCES})


class Recorder:
    """Drive one ffmpeg capture process at a time.

    ``start`` launches ffmpeg, ``stop`` asks it to quit and probes the output,
    ``screenshot`` grabs a single frame from the same input. A recorder can be
    started and stopped repeatedly; each ``start`` clears the previous
    ``video``.

    Pass a shared ``ctx`` when creating many recorders. Without one the
    recorder opens its own cache, which ``close`` (or leaving a ``with``
    block) releases.
    """

    def __init__(
        self,
        input: str,  # noqa: A002 - mirrors ffmpeg's -i
        output: str | Path,
        advanced: Mapping[str, object] | None = None,
        *,
        capture_device: str | None = None,
        ctx: RuntimeContext | None = None,
        launcher: ProcessLauncher | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        self._owns_ctx = ctx is None
        self.ctx = ctx if ctx is not None else RuntimeContext()
        self.logger = logger if logger is not None else logging.getLogger(__name__)
        if not ffmpeg_exists(self.ctx):
            if self._owns_ctx:
                self.ctx.close()
            raise DependencyNotFound
        fields: dict[str, object] = {"input": input, "output": output, "advanced": dict(advanced or {})}
        if capture_device is not None:
            fields["capture_device"] = capture_device
        self.options = Options.model_validate(fields)
        self.launcher = launcher if launcher is not None else default_launcher()
        self.video: Video | None = None
        self._process: ChildProcess | None = None
        self._started_at: float | None = None
        self._stopped_at: float | None = None

    @property
    def running(self) -> bool:
        """Whether a recording process is held."""
        return self._process is not None

    def start(self) -> ChildProcess:
        """Launch ffmpeg and return the live process.

        Raises:
            RecorderAlreadyRunning: If a recording is in progress.
            StartupFailure: If ffmpeg exits during the warm-up window.

        """
        if self._process is not None:
            raise RecorderAlreadyRunning(f"Already recording to {self.options.output}")
        self.logger.debug("Starting recorder...")
        self.video = None
        self._process = self._start_ffmpeg()
        self.logger.info("Recording...")
        return self._process

    def stop(self) -> Video:
        """Stop the recording and return the probed output file.

        Raises:
            RecorderNotRunning: If ``start`` was not called.

        """
        if self._process is None:
            raise RecorderNotRunning("Recorder is not running")
        self.logger.debug("Stopping ffmpeg...")
        try:
            self._stop_ffmpeg(self._process)
        finally:
            self._process = None
        self.logger.debug("Stopped ffmpeg.")
        self.logger.info("Recording complete.")
        self.video = self._prepare_video()
        return self.video

    def screenshot(self, filename: str | Path) -> str | Path | None:
        """Capture one frame from the input into ``filename``.

        Returns ``filename`` on success and ``None`` if ffmpeg fails.
        """
        command = self._screenshot_command(filename)
        self._announce(command)
        with self.launcher.spawn(command) as process:
            exit_code = self._wait_for_exit(process)
        if exit_code == 0:
            self.logger.info("Screenshot: %s", filename)
            return filename
        self.logger.error("Failed to take a screenshot.")
        return None

    def discard(self) -> None:
        """Delete the recorded file."""
        self.options.output.unlink()

    delete = discard

    def process_time(self) -> float | None:
        """Seconds between the last start and stop, if both happened."""
        if self._started_at is None or self._stopped_at is None:
            return None
        return self._stopped_at - self._started_at

    def close(self) -> None:
        """Kill a recording still in progress and close a cache this recorder opened."""
        if self._process is not None:
            process, self._process = self._process, None
            process.close()
        if self._owns_ctx:
            self.ctx.close()

    def __enter__(self) -> Self:
        """Return ``self`` when entering a context."""
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        """Release resources when exiting a context."""
        self.close()

    def _ffmpeg_bin(self) -> str:
        return f"{quote_arg(ffmpeg_binary())} {OVERWRITE_FLAG}"

    def _ffmpeg_command(self) -> str:
        return f"{self._ffmpeg_bin()} {self.options.parsed}"

    def _screenshot_command(self, filename: str | Path) -> str:
        opts = self.options
        args = ["-f", opts.capture_device.value]
        if opts.capture_device.supports_framerate:
            args.extend(["-framerate", "1"])
        args.extend(["-i", opts.input, "-frames:v", "1", str(filename)])
        return f"{self._ffmpeg_bin()} {' '.join(quote_arg(a) for a in args)}"

    def _announce(self, command: str) -> None:
        if self.ctx.verbosity >= Verbosity.COMMANDS:
            emit_status(f"Running: {command}", status_callback=self.ctx.status_callback)

    def _start_ffmpeg(self) -> ChildProcess:
        self.options.output.parent.mkdir(parents=True, exist_ok=True)
        command = self._ffmpeg_command()
        self._announce(command)
        process = self.launcher.spawn(command, self.options.log)
        self._started_at = time.monotonic()
        self._stopped_at = None
        try:
            time.sleep(WARMUP_SECONDS)
        except BaseException:
            process.close()
            raise
        if process.exited:
            process.close()
            raise StartupFailure(f"Failed to start ffmpeg. Reason: {self._log_tail(2)}")
        return process

    def _stop_ffmpeg(self, process: ChildProcess) -> None:
        self._stopped_at = time.monotonic()
        try:
            process.write(QUIT_COMMAND)
        except OSError as e:
            # A dead reader raises EPIPE on POSIX and EINVAL on Windows.
            if not isinstance(e, BrokenPipeError) and e.errno != errno.EINVAL:
                raise
            self.logger.warning("ffmpeg closed its input before the quit command was sent.")
        finally:
            process.close_stdin()
            process.close_log()
            self._wait_for_exit(process)

    def _wait_for_exit(self, process: ChildProcess) -> int | None:
        """Return the exit code, force killing after ``PROCESS_TIMEOUT``."""
        try:
            return process.poll_for_exit(PROCESS_TIMEOUT)
        except ProcessTimeout:
            self.logger.error("ffmpeg failed to stop. Force killing it...")
            exit_code = process.stop()
            self.logger.error("Forcefully killed ffmpeg.")
            return exit_code

    def _prepare_video(self) -> Video:
        """Probe the output, retrying while the OS still holds the file."""
        attempts_made = 0
        while True:
            self.logger.info("Running ffprobe to prepare video (output) file.")
            try:
                return probe_video(self.ctx, self.options.output)
            except OSError as e:
                if e.errno not in _TRANSIENT_ERRNOS:
                    raise
                attempts_made += 1
                if attempts_made >= PROBE_ATTEMPTS:
                    raise
                self.logger.error("Failed to run ffprobe. Retrying... (%d/%d)", attempts_made, PROBE_ATTEMPTS)
                time.sleep(PROBE_RETRY_DELAY)

    def _log_tail(self, count: int) -> str:
        try:
            text = self.options.log.read_text(encoding="utf-8", errors="replace")
        except OSError:
            return ""
        return " ".join(tail_lines(text, count))


class Desktop(Recorder):
    """Record the whole desktop."""

    def __init__(
        self,
        output: str | Path,
        input: str | None = None,  # noqa: A002
        advanced: Mapping[str, object] | None = None,
        **kwargs: object,
    ) -> None:
        super().__init__(
            input if input is not None else default_desktop_input(),
            output,
            advanced,
            **kwargs,  # type: ignore[arg-type]
        )


class Window(Recorder):
    """Record a single application window by title. Windows only."""

    def __init__(
        self,
        title: str,
        output: str | Path,
        advanced: Mapping[str, object] | None = None,
        **kwargs: object,
    ) -> None:
        if current_os() is not OperatingSystem.WINDOWS:
            raise UnsupportedPlatform("Window recording is only supported on Microsoft Windows.")
        if not title:
            raise ValueError("Window title must not be empty")
        self.title = title
        super().__init__(f"title={title}", output, advanced, **kwargs)  # type: ignore[arg-type]


__all__ = ["PROCESS_TIMEOUT", "WARMUP_SECONDS", "Desktop", "Recorder", "Window"]
