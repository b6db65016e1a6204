"""Runtime context shared across ffrecorder components."""

from __future__ import annotations

import os
import tempfile
from contextlib import suppress
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Self

from diskcache import Cache

from ffrecorder.models.verbosity import Verbosity

if TYPE_CHECKING:
    from collections.abc import Callable
    from types import TracebackType


def _cache_dir() -> Path:
    return Path(os.getenv("FFRECORDER_CACHE", tempfile.gettempdir())) / "ffrecorder-cache"


def _default_cache() -> Cache:
    """Return a cache for tool checks and probe results."""
    return Cache(str(_cache_dir()))


@dataclass(slots=True)
class RuntimeContext:
    """Runtime flags and cache for probing and recording."""

    verbosity: Verbosity = Verbosity.QUIET
    status_callback: Callable[[str], None] | None = None
    cache: Cache = field(default_factory=_default_cache)

    def close(self) -> None:
        """Close any open resources."""
        self.cache.close()

    def __enter__(self) -> Self:
        """Return ``self`` when entering a context."""
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        """Close resources when exiting a context."""
        self.close()

    def __del__(self) -> None:  # pragma: no cover - cleanup
        """Ensure cache is closed on garbage collection."""
        with suppress(Exception):
            self.cache.close()


__all__ = ["RuntimeContext"]
