"""Test doubles for launched processes."""

from __future__ import annotations

from typing import TYPE_CHECKING, Self

from ffrecorder.errors import ProcessTimeout

if TYPE_CHECKING:
    from pathlib import Path

KILLED_EXIT_CODE = -9


class FakeProcess:
    """Stand-in for ``ChildProcess`` that records what the recorder does to it."""

    pid = 4242

    def __init__(
        self,
        *,
        exit_code: int = 0,
        exited: bool = False,
        hang: bool = False,
        broken_pipe: bool = False,
        write_error: OSError | None = None,
    ) -> None:
        self._exit_code = exit_code
        self._exited = exited
        self.hang = hang
        self.broken_pipe = broken_pipe
        self.write_error = write_error
        self.written: list[str] = []
        self.stdin_closed = False
        self.log_closed = False
        self.killed = False
        self.poll_timeouts: list[float] = []

    @property
    def exited(self) -> bool:
        return self._exited

    @property
    def exit_code(self) -> int | None:
        return self._exit_code if self._exited else None

    def write(self, data: str) -> None:
        if self.broken_pipe:
            raise BrokenPipeError("stdin is closed")
        if self.write_error is not None:
            raise self.write_error
        self.written.append(data)

    def close_stdin(self) -> None:
        self.stdin_closed = True

    def close_log(self) -> None:
        self.log_closed = True

    def poll_for_exit(self, timeout: float) -> int:
        self.poll_timeouts.append(timeout)
        if self.hang:
            raise ProcessTimeout(f"Process {self.pid} still running after {timeout}s")
        self._exited = True
        return self._exit_code

    def stop(self, timeout: float = 3.0) -> int:
        self.killed = True
        self._exited = True
        self._exit_code = KILLED_EXIT_CODE
        return self._exit_code

    def close(self) -> None:
        self.close_stdin()
        self.close_log()
        if not self._exited:
            self.stop()

    def __enter__(self) -> Self:
        return self

    def __exit__(self, *_exc: object) -> None:
        self.close()


class FakeLauncher:
    """Hand out queued ``FakeProcess`` objects and remember the commands."""

    def __init__(self, *processes: FakeProcess, log_text: str = "") -> None:
        self.processes = list(processes)
        self.log_text = log_text
        self.commands: list[tuple[str, Path | None]] = []

    def spawn(self, command: str, log_path: Path | None = None) -> FakeProcess:
        self.commands.append((command, log_path))
        if log_path is not None:
            log_path.write_text(self.log_text, encoding="utf-8")
        return self.processes.pop(0)


class FakeClock:
    """Replacement for the ``time`` module inside the recorder."""

    def __init__(self, start: float = 100.0) -> None:
        self.now = start
        self.sleeps: list[float] = []

    def monotonic(self) -> float:
        return self.now

    def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.now += seconds
