"""Shared pytest fixtures.

Keeps the diskcache in a per-test directory and stubs the ffmpeg
availability check so recorder tests run without a real install.
"""

from __future__ import annotations

import shutil
from typing import TYPE_CHECKING

import pytest
from diskcache import Cache

from ffrecorder.backend import recorder as recorder_module
from ffrecorder.models import RuntimeContext

from tests.fakes import FakeClock

if TYPE_CHECKING:  # pragma: no cover - typing only
    from collections.abc import Iterator
    from pathlib import Path

FFMPEG = shutil.which("ffmpeg")
FFPROBE = shutil.which("ffprobe")

requires_ffmpeg = pytest.mark.skipif(
    FFMPEG is None or FFPROBE is None,
    reason="ffmpeg and ffprobe must be available in PATH",
)


@pytest.fixture(autouse=True)
def _isolated_cache(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Point the default cache at a temporary directory."""
    monkeypatch.setenv("FFRECORDER_CACHE", str(tmp_path / "default-cache"))


@pytest.fixture(autouse=True)
def _tools_sanity(monkeypatch: pytest.MonkeyPatch) -> None:
    """Stub tool lookups to avoid flaky native calls in tests."""
    monkeypatch.setattr(recorder_module, "ffmpeg_exists", lambda _ctx: True)
    monkeypatch.setattr(recorder_module, "ffmpeg_binary", lambda: FFMPEG or "ffmpeg")


@pytest.fixture
def ctx(tmp_path: Path) -> Iterator[RuntimeContext]:
    """Runtime context backed by a throwaway cache."""
    with RuntimeContext(cache=Cache(str(tmp_path / "cache"))) as context:
        yield context


@pytest.fixture
def clock(monkeypatch: pytest.MonkeyPatch) -> FakeClock:
    """Replace sleeps and timestamps inside the recorder."""
    fake = FakeClock()
    monkeypatch.setattr(recorder_module, "time", fake)
    return fake
