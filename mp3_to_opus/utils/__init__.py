"""Utility modules."""

from mp3_to_opus.utils.conversion import format_seconds, parse_int_or_default, parse_seconds
from mp3_to_opus.utils.ffmpeg import get_ffmpeg_path, run_ffmpeg, run_ffmpeg_async

__all__ = [
    "format_seconds",
    "parse_int_or_default",
    "parse_seconds",
    "get_ffmpeg_path",
    "run_ffmpeg",
    "run_ffmpeg_async",
]
