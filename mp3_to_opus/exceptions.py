"""Errors raised by mp3-to-opus."""

from typing import Optional


class ConversionError(Exception):
    """Base error for MP3 to Opus conversion."""


class ValidationError(ConversionError, ValueError):
    """Raised when a request is rejected before the transcoder runs."""


class InputNotFoundError(ValidationError):
    """Raised when the input path is empty or does not exist."""


class InvalidInputFormatError(ValidationError):
    """Raised when the input path does not end in .mp3."""


class InvalidBitrateError(ValidationError):
    """Raised when the bitrate is outside 6-510 kbps."""


class InvalidVbrModeError(ValidationError):
    """Raised when the VBR mode is not 0, 1 or 2."""


class InvalidChannelCountError(ValidationError):
    """Raised when the channel count is not 1 or 2."""


class InvalidTimeOffsetError(ValidationError):
    """Raised when start time or duration is negative or not a number."""


class TranscodeFailedError(ConversionError, RuntimeError):
    """Raised when FFmpeg cannot be run or exits with an error."""

    def __init__(
        self,
        message: str,
        stderr: Optional[str] = None,
        returncode: Optional[int] = None,
    ):
        super().__init__(message)
        self.stderr = stderr
        self.returncode = returncode
