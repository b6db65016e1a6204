"""Spawn encoder processes through the platform shell."""

from __future__ import annotations

import errno
import logging
import os
import subprocess
from typing import IO, TYPE_CHECKING, Self

from ffrecorder.errors import ProcessTimeout

if TYPE_CHECKING:
    from pathlib import Path
    from types import TracebackType

logger = logging.getLogger(__name__)

KILL_TIMEOUT = 3.0  #: Seconds to wait after SIGTERM before escalating to SIGKILL.


class ChildProcess:
    """An owned subprocess with an optional log file.

    ``close`` releases stdin and the log file and reaps the process; it is safe
    to call more than once and runs automatically when used as a context
    manager.
    """

    def __init__(self, popen: subprocess.Popen[str], log_file: IO[str] | None = None) -> None:
        self._popen = popen
        self.log_file = log_file

    @property
    def pid(self) -> int:
        return self._popen.pid

    @property
    def exited(self) -> bool:
        """Whether the process has exited."""
        return self._popen.poll() is not None

    @property
    def exit_code(self) -> int | None:
        """Exit status, negative for signals on POSIX, ``None`` while running."""
        return self._popen.poll()

    def write(self, data: str) -> None:
        """Write ``data`` to stdin and flush.

        Raises:
            BrokenPipeError: If the process already closed its stdin.

        """
        stdin = self._popen.stdin
        if stdin is None or stdin.closed:
            raise BrokenPipeError("stdin is closed")
        stdin.write(data)
        stdin.flush()

    def close_stdin(self) -> None:
        stdin = self._popen.stdin
        if stdin is not None and not stdin.closed:
            # Closing flushes; a dead reader makes that raise EPIPE, or EINVAL on Windows.
            try:
                stdin.close()
            except BrokenPipeError:
                pass
            except OSError as e:
                if e.errno != errno.EINVAL:
                    raise

    def close_log(self) -> None:
        if self.log_file is not None and not self.log_file.closed:
            self.log_file.close()

    def poll_for_exit(self, timeout: float) -> int:
        """Wait up to ``timeout`` seconds and return the exit code.

        Raises:
            ProcessTimeout: If the process is still running.

        """
        try:
            return self._popen.wait(timeout=timeout)
        except subprocess.TimeoutExpired as e:
            raise ProcessTimeout(f"Process {self.pid} still running after {timeout}s") from e

    def stop(self, timeout: float = KILL_TIMEOUT) -> int:
        """Terminate the process with increasingly harsh signals and reap it."""
        if self.exited:
            return self._popen.returncode
        self._popen.terminate()
        try:
            return self._popen.wait(timeout=timeout)
        except subprocess.TimeoutExpired:
            logger.warning("Process %s ignored terminate, killing", self.pid)
        self._popen.kill()
        return self._popen.wait()

    def close(self) -> None:
        """Release stdin and the log file, stopping the process if still alive."""
        self.close_stdin()
        self.close_log()
        if not self.exited:
            self.stop()

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


class ProcessLauncher:
    """Start a shell command as a ``ChildProcess``.

    Subclasses supply ``shell_args``, the value handed to ``Popen``; everything
    else is shared.
    """

    creationflags = 0

    def shell_args(self, command: str) -> list[str] | str:
        raise NotImplementedError

    def spawn(self, command: str, log_path: Path | None = None) -> ChildProcess:
        """Run ``command`` with stdin piped.

        With ``log_path`` stdout and stderr go to a freshly truncated,
        line-buffered file opened ``w+``; otherwise both are discarded.
        """
        logger.debug("Executing command: %s", command)
        log_file: IO[str] | None = None
        if log_path is not None:
            log_path.parent.mkdir(parents=True, exist_ok=True)
            log_file = log_path.open("w+", encoding="utf-8", buffering=1)
        output: IO[str] | int = log_file if log_file is not None else subprocess.DEVNULL
        try:
            popen = subprocess.Popen(  # noqa: S603
                self.shell_args(command),
                stdin=subprocess.PIPE,
                stdout=output,
                stderr=subprocess.STDOUT if log_file is not None else subprocess.DEVNULL,
                text=True,
                creationflags=self.creationflags,
            )
        except OSError:
            if log_file is not None:
                log_file.close()
            raise
        return ChildProcess(popen, log_file)


class PosixShellLauncher(ProcessLauncher):
    """Run commands via ``sh -c``."""

    def shell_args(self, command: str) -> list[str]:
        return ["sh", "-c", command]


class WindowsShellLauncher(ProcessLauncher):
    """Run commands via ``cmd.exe /s /c`` without opening a console window.

    ``command`` is already quoted for Windows and is passed to ``Popen`` as a
    single string so it reaches ``cmd.exe`` unchanged; ``/s`` strips only the
    outer pair of quotes.
    """

    creationflags = getattr(subprocess, "CREATE_NO_WINDOW", 0)

    def shell_args(self, command: str) -> str:
        return f'cmd.exe /s /c "{command}"'


def default_launcher() -> ProcessLauncher:
    """Return the launcher for the current OS."""
    if os.name == "nt":
        return WindowsShellLauncher()
    return PosixShellLauncher()


__all__ = [
    "ChildProcess",
    "PosixShellLauncher",
    "ProcessLauncher",
    "WindowsShellLauncher",
    "default_launcher",
]
