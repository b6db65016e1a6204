"""Metadata for a finished recording, built from ffprobe output."""

from __future__ import annotations

from dataclasses import dataclass
from fractions import Fraction
from pathlib import Path
from typing import Any


def _to_float(value: object) -> float | None:
    try:
        return float(value)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        return None


def _to_int(value: object) -> int | None:
    try:
        return int(value)  # type: ignore[call-overload]
    except (TypeError, ValueError):
        return None


def _parse_rate(value: object) -> float | None:
    """Parse ffprobe rationals like ``30000/1001``."""
    if not isinstance(value, str) or not value:
        return None
    try:
        rate = Fraction(value)
    except (ValueError, ZeroDivisionError):
        return None
    return float(rate) if rate else None


def _first_stream(streams: list[dict[str, Any]], codec_type: str) -> dict[str, Any]:
    return next((s for s in streams if s.get("codec_type") == codec_type), {})


@dataclass(frozen=True)
class Video:
    """A probed media file."""

    path: Path
    duration: float | None = None
    bitrate: int | None = None
    size: int | None = None
    format_name: str | None = None
    video_codec: str | None = None
    width: int | None = None
    height: int | None = None
    frame_rate: float | None = None
    pixel_format: str | None = None
    audio_codec: str | None = None
    audio_sample_rate: int | None = None
    audio_channels: int | None = None

    @property
    def resolution(self) -> str | None:
        """Frame size as ``WIDTHxHEIGHT``."""
        if self.width is None or self.height is None:
            return None
        return f"{self.width}x{self.height}"

    @property
    def has_video(self) -> bool:
        return self.video_codec is not None

    @property
    def has_audio(self) -> bool:
        return self.audio_codec is not None

    @classmethod
    def from_ffprobe(cls, path: str | Path, data: dict[str, Any]) -> Video:
        """Build from ``ffprobe -show_format -show_streams -of json`` output."""
        fmt = data.get("format", {})
        streams = data.get("streams", [])
        video = _first_stream(streams, "video")
        audio = _first_stream(streams, "audio")
        return cls(
            path=Path(path),
            duration=_to_float(fmt.get("duration")),
            bitrate=_to_int(fmt.get("bit_rate")),
            size=_to_int(fmt.get("size")),
            format_name=fmt.get("format_name"),
            video_codec=video.get("codec_name"),
            width=_to_int(video.get("width")),
            height=_to_int(video.get("height")),
            frame_rate=_parse_rate(video.get("avg_frame_rate")) or _parse_rate(video.get("r_frame_rate")),
            pixel_format=video.get("pix_fmt"),
            audio_codec=audio.get("codec_name"),
            audio_sample_rate=_to_int(audio.get("sample_rate")),
            audio_channels=_to_int(audio.get("channels")),
        )


__all__ = ["Video"]
