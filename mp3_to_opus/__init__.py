"""Convert MP3 files to Opus with FFmpeg."""

from mp3_to_opus.core import (
    ConversionOptions,
    ConversionResult,
    Mp3ToOpusConverter,
    build_ffmpeg_args,
    convert_mp3_to_opus,
    convert_mp3_to_opus_async,
    convert_mp3_to_opus_with_callback,
    resolve_output_path,
)
from mp3_to_opus.exceptions import (
    ConversionError,
    InputNotFoundError,
    InvalidBitrateError,
    InvalidChannelCountError,
    InvalidInputFormatError,
    InvalidTimeOffsetError,
    InvalidVbrModeError,
    TranscodeFailedError,
    ValidationError,
)

__version__ = "0.1.0"

__all__ = [
    "ConversionOptions",
    "ConversionResult",
    "Mp3ToOpusConverter",
    "build_ffmpeg_args",
    "convert_mp3_to_opus",
    "convert_mp3_to_opus_async",
    "convert_mp3_to_opus_with_callback",
    "resolve_output_path",
    "ConversionError",
    "ValidationError",
    "InputNotFoundError",
    "InvalidInputFormatError",
    "InvalidBitrateError",
    "InvalidVbrModeError",
    "InvalidChannelCountError",
    "InvalidTimeOffsetError",
    "TranscodeFailedError",
]
