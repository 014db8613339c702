"""Core conversion modules."""

from mp3_to_opus.core.models import ConversionOptions, ConversionRequest, ConversionResult
from mp3_to_opus.core.converter import (
    Mp3ToOpusConverter,
    build_ffmpeg_args,
    convert_mp3_to_opus,
    convert_mp3_to_opus_async,
    convert_mp3_to_opus_with_callback,
    resolve_output_path,
)

__all__ = [
    "ConversionOptions",
    "ConversionRequest",
    "ConversionResult",
    "Mp3ToOpusConverter",
    "build_ffmpeg_args",
    "convert_mp3_to_opus",
    "convert_mp3_to_opus_async",
    "convert_mp3_to_opus_with_callback",
    "resolve_output_path",
]
