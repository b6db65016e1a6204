"""Helpers for locating and executing FFmpeg and ffprobe."""

import logging
import os
import shlex
import shutil
import subprocess
from collections.abc import Sequence
from pathlib import Path
from typing import Any

from ffrecorder.models.context import RuntimeContext

_FFMPEG = "ffmpeg"
_FFPROBE = "ffprobe"

_FFMPEG_ENV = "FFRECORDER_FFMPEG"
_FFPROBE_ENV = "FFRECORDER_FFPROBE"

_FFMPEG_VERSION_KEY = "__ffmpeg_version__"

logger = logging.getLogger(__name__)


def _resolve(name: str, env_var: str) -> str:
    """Return the absolute path of ``name`` or the ``env_var`` override.

    Raises:
        FileNotFoundError: If the binary cannot be found.

    """
    override = os.getenv(env_var)
    candidate = override or name
    found = shutil.which(candidate)
    if found is None:
        raise FileNotFoundError(f"{candidate} not found")
    return found


def ffmpeg_binary() -> str:
    """Return the path to the ``ffmpeg`` executable."""
    return _resolve(_FFMPEG, _FFMPEG_ENV)


def ffprobe_binary() -> str:
    """Return the path to the ``ffprobe`` executable."""
    return _resolve(_FFPROBE, _FFPROBE_ENV)


def cache_key(cmd: Sequence[str | Path]) -> tuple[Any, ...]:
    """Return a cache key for ``cmd`` based on tokens and file metadata."""
    key_parts: list[Any] = []
    for token in cmd:
        s = str(token)
        key_parts.append(s)
        if s.startswith("-"):
            continue
        path = Path(s)
        if path.is_file():
            try:
                stat = path.stat()
            except OSError:
                continue
            key_parts.extend([int(stat.st_mtime_ns), stat.st_size])
    return tuple(key_parts)


def run(exe: str | Path, args: Sequence[str | Path]) -> str:
    """Run an executable and return its combined stdout/stderr.

    Raises:
        subprocess.CalledProcessError: On a non-zero exit; ``output`` carries
            the combined output.

    """
    cmd = [str(exe), *[str(a) for a in args]]
    logger.debug("Running: %s", join_command(exe, args))
    proc = subprocess.run(  # noqa: S603
        cmd,
        stdout=subprocess.PIPE,
        stderr=subprocess.STDOUT,
        text=True,
        creationflags=getattr(subprocess, "CREATE_NO_WINDOW", 0),
        check=True,
    )
    return proc.stdout


def run_ffmpeg(args: Sequence[str | Path]) -> str:
    """Run ``ffmpeg`` with ``args``."""
    return run(ffmpeg_binary(), args)


def run_ffprobe(args: Sequence[str | Path]) -> str:
    """Run ``ffprobe`` with ``args``."""
    return run(ffprobe_binary(), args)


def get_ffmpeg_version() -> str:
    """Return the ``ffmpeg`` version string."""
    try:
        out = run_ffmpeg(["-version"])
    except subprocess.CalledProcessError as e:  # pragma: no cover - unlikely
        raise RuntimeError(f"ffmpeg failed: {e}") from e
    return out.splitlines()[0].strip()


def check_ffmpeg_version(ctx: RuntimeContext) -> str:
    """Return the ``ffmpeg`` version string using the shared cache.

    The cache entry is keyed by the resolved binary so a moved or removed
    install is detected.

    Raises:
        RuntimeError: If ffmpeg is missing or cannot report its version.

    """
    try:
        binary = ffmpeg_binary()
    except FileNotFoundError as e:
        raise RuntimeError("ffmpeg not found") from e
    key = (_FFMPEG_VERSION_KEY, *cache_key([binary]))
    version_obj = ctx.cache.get(key)
    if isinstance(version_obj, str):
        return version_obj
    try:
        version = get_ffmpeg_version()
    except OSError as e:  # pragma: no cover - system-dependent
        raise RuntimeError(f"ffmpeg failed: {e}") from e
    ctx.cache[key] = version
    return version


def ffmpeg_exists(ctx: RuntimeContext) -> bool:
    """Return ``True`` when a working ``ffmpeg`` binary is available."""
    try:
        check_ffmpeg_version(ctx)
    except RuntimeError:
        logger.debug("ffmpeg availability check failed", exc_info=True)
        return False
    return True


def quote_arg(arg: str) -> str:
    """Quote argument for the platform shell if needed."""
    if os.name == "nt":
        return subprocess.list2cmdline([arg])
    return shlex.quote(arg)


def join_command(exe: str | Path, args: Sequence[str | Path]) -> str:
    """Join a command into a single shell-safe string."""
    parts = [str(exe), *[str(a) for a in args]]
    return " ".join(quote_arg(part) for part in parts)


__all__ = [
    "cache_key",
    "check_ffmpeg_version",
    "ffmpeg_binary",
    "ffmpeg_exists",
    "ffprobe_binary",
    "get_ffmpeg_version",
    "join_command",
    "quote_arg",
    "run",
    "run_ffmpeg",
    "run_ffprobe",
]
