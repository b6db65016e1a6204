"""Advanced ffmpeg flag models."""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .defaults import DEFAULT_LOG_FILE

FlagValue = bool | int | float | str | None


def render_flags(flags: dict[str, FlagValue]) -> list[str]:
    """Render ``{"key": value}`` pairs as ffmpeg arguments.

    ``True`` and ``None`` produce a bare ``-key``; ``False`` drops the flag.
    """
    args: list[str] = []
    for key, value in flags.items():
        if value is False:
            continue
        args.append(f"-{key}")
        if value is True or value is None:
            continue
        args.append(_format_value(value))
    return args


def _format_value(value: int | float | str) -> str:
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


class AdvancedOptions(BaseModel):
    """Extra ffmpeg flags placed before (``input``) and after (``output``) the input."""

    input: dict[str, FlagValue] = Field(default_factory=dict, description="Flags applied to the capture input.")
    output: dict[str, FlagValue] = Field(default_factory=dict, description="Flags applied to the output file.")
    log: Path = Field(
        default=DEFAULT_LOG_FILE,
        validate_default=True,
        description="File receiving ffmpeg's stdout and stderr.",
    )

    model_config = ConfigDict(extra="forbid", frozen=True)

    @field_validator("input", "output")
    @classmethod
    def normalize_keys(cls, v: dict[str, FlagValue]) -> dict[str, FlagValue]:
        """Accept ``-framerate`` as well as ``framerate``."""
        normalized: dict[str, FlagValue] = {}
        for key, value in v.items():
            name = key.lstrip("-")
            if not name or any(ch.isspace() for ch in name):
                raise ValueError(f"Invalid ffmpeg flag name: {key!r}")
            normalized[name] = value
        return normalized

    @field_validator("log")
    @classmethod
    def validate_log(cls, v: Path) -> Path:
        """Normalize the log path."""
        return Path(v).expanduser().absolute()


__all__ = ["AdvancedOptions", "FlagValue", "render_flags"]
