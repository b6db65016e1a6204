"""Recorder option model."""

from __future__ import annotations

from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from ffrecorder.models.types import CaptureDevice
from ffrecorder.tools.cli import quote_arg
from ffrecorder.tools.platform import default_capture_device

from .advanced import AdvancedOptions, FlagValue, render_flags
from .defaults import DEFAULT_OUTPUT_FLAGS, default_input_flags


class Options(BaseModel):
    """Input, output and flags for one recorder session.

    Instances are immutable. ``advanced`` is merged over the defaults for the
    capture device at construction time, so ``options.advanced`` always shows
    the flags that will actually be passed to ffmpeg.
    """

    input: str = Field(min_length=1, description="ffmpeg ``-i`` value, e.g. ``desktop`` or ``:0.0``.")
    output: Path = Field(description="Path of the recorded file.")
    advanced: AdvancedOptions = Field(default_factory=AdvancedOptions)
    capture_device: CaptureDevice = Field(
        default_factory=default_capture_device,
        description="ffmpeg input format. Defaults to the platform's screen grabber.",
    )

    model_config = ConfigDict(extra="forbid", frozen=True)

    @model_validator(mode="before")
    @classmethod
    def merge_advanced_defaults(cls, data: Any) -> Any:
        """Fill in default input/output flags the caller did not override."""
        if not isinstance(data, dict):
            return data
        data = dict(data)
        raw_device = data.get("capture_device")
        device = CaptureDevice(raw_device) if raw_device is not None else default_capture_device()
        advanced = data.get("advanced") or {}
        if isinstance(advanced, AdvancedOptions):
            advanced = advanced.model_dump()
        advanced = dict(advanced)
        advanced["input"] = {**default_input_flags(device), **(advanced.get("input") or {})}
        advanced["output"] = {**DEFAULT_OUTPUT_FLAGS, **(advanced.get("output") or {})}
        data["advanced"] = advanced
        data["capture_device"] = device
        return data

    @field_validator("output")
    @classmethod
    def validate_output(cls, v: Path) -> Path:
        """Normalize output path; the parent directory is created on start."""
        path = Path(v).expanduser().absolute()
        if path.is_dir():
            raise ValueError(f"Output path is a directory: {path}")
        return path

    @property
    def framerate(self) -> FlagValue:
        """Capture framerate, if set."""
        return self.advanced.input.get("framerate")

    @property
    def log(self) -> Path:
        """Path of the ffmpeg log file."""
        return self.advanced.log

    @property
    def args(self) -> list[str]:
        """ffmpeg arguments for a continuous recording, without the binary."""
        args = ["-f", self.capture_device.value, *render_flags(self.advanced.input)]
        if "i" not in self.advanced.input:
            args.extend(["-i", self.input])
        args.extend(render_flags(self.advanced.output))
        args.append(str(self.output))
        return args

    @property
    def parsed(self) -> str:
        """``args`` rendered as a shell-quoted string."""
        return " ".join(quote_arg(arg) for arg in self.args)


__all__ = ["Options"]
