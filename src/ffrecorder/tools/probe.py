"""ffprobe helpers for inspecting recorded files."""

from __future__ import annotations

import errno
import json
import logging
import subprocess
from pathlib import Path
from typing import TYPE_CHECKING

from ffrecorder.errors import ArtifactProbeFailure
from ffrecorder.models.verbosity import Verbosity
from ffrecorder.models.video import Video

from .cli import cache_key, join_command, run_ffprobe
from .helpers import emit_status

if TYPE_CHECKING:
    from ffrecorder.models.context import RuntimeContext

_QUIET = ["-v", "error"]
_JSON_OUTPUT = ["-of", "json"]
_SHOW_FORMAT = ["-show_format"]
_SHOW_STREAMS = ["-show_streams"]

# ffprobe reports OS-level failures with strerror text rather than errno.
_TRANSIENT_MESSAGES = {
    "Resource temporarily unavailable": errno.EAGAIN,
    "Permission denied": errno.EACCES,
}

logger = logging.getLogger(__name__)


def _ensure_readable(path: Path) -> None:
    """Raise the ``OSError`` the OS reports when ``path`` cannot be opened."""
    if not path.exists():
        raise FileNotFoundError(errno.ENOENT, f"the file '{path}' does not exist", str(path))
    with path.open("rb"):
        pass


def _raise_for_output(path: Path, cmd: list[str], exc: subprocess.CalledProcessError) -> None:
    output = exc.output or ""
    for message, code in _TRANSIENT_MESSAGES.items():
        if message in output:
            if code == errno.EACCES:
                raise PermissionError(code, message, str(path)) from exc
            raise BlockingIOError(code, message, str(path)) from exc
    raise ArtifactProbeFailure(
        f"ffprobe failed ({exc.returncode}) for {path}: {output.strip() or join_command('ffprobe', cmd)}"
    ) from exc


def probe_video(ctx: RuntimeContext, path: str | Path) -> Video:
    """Probe ``path`` and return its metadata.

    Raises:
        FileNotFoundError: If ``path`` does not exist.
        PermissionError: If the file is still locked or unreadable.
        BlockingIOError: If ffprobe reports the file is temporarily unavailable.
        ArtifactProbeFailure: If ffprobe fails for any other reason.

    """
    media = Path(path)
    _ensure_readable(media)
    cmd = _QUIET + _SHOW_FORMAT + _SHOW_STREAMS + _JSON_OUTPUT + [str(media)]
    key = cache_key(["ffprobe", *cmd])
    cached = ctx.cache.get(key)
    if isinstance(cached, str):
        logger.debug("Using cached ffprobe output for %s", media)
        out = cached
    else:
        if ctx.verbosity >= Verbosity.COMMANDS:
            emit_status(f"Running: {join_command('ffprobe', cmd)}", status_callback=ctx.status_callback)
        try:
            out = run_ffprobe(cmd)
        except subprocess.CalledProcessError as exc:
            _raise_for_output(media, cmd, exc)
            raise  # pragma: no cover - _raise_for_output always raises
        # Only successful probes are cached; a locked file may succeed later.
        ctx.cache[key] = out
    try:
        data = json.loads(out)
    except json.JSONDecodeError as exc:
        raise ArtifactProbeFailure(f"ffprobe returned invalid JSON for {media}") from exc
    return Video.from_ffprobe(media, data)


def get_video_duration_sec(ctx: RuntimeContext, path: str | Path) -> float | None:
    """Return the duration of ``path`` in seconds, or ``None`` if unknown."""
    return probe_video(ctx, path).duration


__all__ = ["get_video_duration_sec", "probe_video"]
