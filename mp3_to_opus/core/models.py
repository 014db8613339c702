"""Data models for conversion options and results."""

import math
from dataclasses import asdict, dataclass, fields
from typing import Any, Mapping, Optional, Union

from mp3_to_opus.config import (
    CHANNEL_COUNTS,
    DEFAULT_BITRATE_KBPS,
    DEFAULT_CHANNELS,
    DEFAULT_VBR,
    MAX_BITRATE_KBPS,
    MIN_BITRATE_KBPS,
    VBR_MODES,
)
from mp3_to_opus.exceptions import (
    InvalidBitrateError,
    InvalidChannelCountError,
    InvalidTimeOffsetError,
    InvalidVbrModeError,
    ValidationError,
)

# Alternate spellings accepted by ConversionOptions.merge()
_FIELD_ALIASES = {
    "startTime": "start_time",
    "start": "start_time",
}


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


@dataclass
class ConversionOptions:
    """Opus encoder settings for a single conversion."""

    bitrate: int = DEFAULT_BITRATE_KBPS
    """Target bitrate in kbps (6-510)."""

    vbr: int = DEFAULT_VBR
    """Variable bitrate mode: 0=off, 1=constrained, 2=full."""

    channels: int = DEFAULT_CHANNELS
    """Output channels: 1=mono, 2=stereo."""

    start_time: Optional[float] = None
    """Seek offset into the input in seconds."""

    duration: Optional[float] = None
    """Length of audio to encode in seconds."""

    @classmethod
    def merge(
        cls,
        overrides: Union["ConversionOptions", Mapping[str, Any], None] = None,
    ) -> "ConversionOptions":
        """Build options from a partial mapping layered over the defaults.

        Keys set to None keep their default.

        Args:
            overrides: Partial options mapping, existing options, or None

        Returns:
            ConversionOptions with every field populated

        Raises:
            ValidationError: If the mapping contains an unknown option name
        """
        if overrides is None:
            return cls()
        if isinstance(overrides, ConversionOptions):
            overrides = overrides.to_dict()

        known = {f.name for f in fields(cls)}
        values = {}

        for key, value in overrides.items():
            name = _FIELD_ALIASES.get(key, key)
            if name not in known:
                raise ValidationError(f"Unknown conversion option: {key}")
            if value is not None:
                values[name] = value

        return cls(**values)

    @property
    def vbr_mode(self) -> str:
        """libopus -vbr value for this VBR setting."""
        return VBR_MODES[self.vbr]

    def validate(self) -> None:
        """Check every field, raising on the first invalid one.

        Raises:
            InvalidBitrateError: If bitrate is not an integer in 6-510
            InvalidVbrModeError: If vbr is not 0, 1 or 2
            InvalidChannelCountError: If channels is not 1 or 2
            InvalidTimeOffsetError: If start_time or duration is invalid
        """
        if (
            not _is_number(self.bitrate)
            or not math.isfinite(self.bitrate)
            or not float(self.bitrate).is_integer()
            or not MIN_BITRATE_KBPS <= self.bitrate <= MAX_BITRATE_KBPS
        ):
            raise InvalidBitrateError(
                f"Bitrate must be between {MIN_BITRATE_KBPS} and {MAX_BITRATE_KBPS} kbps"
            )

        if not _is_number(self.vbr) or self.vbr not in VBR_MODES:
            raise InvalidVbrModeError("VBR must be 0, 1, or 2")

        if not _is_number(self.channels) or self.channels not in CHANNEL_COUNTS:
            raise InvalidChannelCountError("Channels must be 1 (mono) or 2 (stereo)")

        for name in ("start_time", "duration"):
            value = getattr(self, name)
            if value is None:
                continue
            if not _is_number(value) or not math.isfinite(value) or value < 0:
                raise InvalidTimeOffsetError(
                    f"{name} must be a non-negative number of seconds, got {value!r}"
                )

    def to_dict(self) -> dict[str, Any]:
        """Plain field mapping, e.g. for JSON output."""
        return asdict(self)


@dataclass(frozen=True)
class ConversionResult:
    """Outcome of a successful conversion."""

    input: str
    """Input MP3 path as given."""

    output: str
    """Resolved Opus output path."""

    message: str
    """Human-readable status message."""

    options: ConversionOptions
    """Effective options after merging defaults."""


@dataclass(frozen=True)
class ConversionRequest:
    """A validated conversion request, ready to hand to FFmpeg."""

    input_path: str
    output_path: str
    options: ConversionOptions
