"""MP3 to Opus conversion via FFmpeg."""

import logging
import os
import subprocess
from pathlib import Path
from typing import Any, Callable, Mapping, Optional, Union

from mp3_to_opus.config import FFMPEG_BINARY, INPUT_SUFFIX, OPUS_CODEC, OUTPUT_SUFFIX, SUCCESS_MESSAGE
from mp3_to_opus.core.models import ConversionOptions, ConversionRequest, ConversionResult
from mp3_to_opus.exceptions import (
    ConversionError,
    InputNotFoundError,
    InvalidInputFormatError,
    TranscodeFailedError,
)
from mp3_to_opus.utils.conversion import format_seconds
from mp3_to_opus.utils.ffmpeg import run_ffmpeg, run_ffmpeg_async

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]
OptionsLike = Union[ConversionOptions, Mapping[str, Any], None]
Callback = Callable[[Optional[ConversionError], Optional[ConversionResult]], None]


def resolve_output_path(input_path: PathLike) -> str:
    """Derive the Opus output path next to the input file.

    Args:
        input_path: Path to an .mp3 file

    Returns:
        Same directory and base name with the .mp3 suffix replaced by .opus
    """
    input_path = str(input_path)
    name = os.path.basename(input_path)
    if name.endswith(INPUT_SUFFIX):
        name = name[: -len(INPUT_SUFFIX)]
    return os.path.join(os.path.dirname(input_path), name + OUTPUT_SUFFIX)


def build_ffmpeg_args(
    input_path: PathLike,
    output_path: PathLike,
    options: ConversionOptions,
) -> list[str]:
    """Build the FFmpeg argument list for an Opus encode.

    Args:
        input_path: Input MP3 path
        output_path: Output Opus path
        options: Validated conversion options

    Returns:
        Arguments to pass to FFmpeg (excluding the executable itself)
    """
    args = [
        "-i", str(input_path),
        "-c:a", OPUS_CODEC,
        "-b:a", f"{int(options.bitrate)}k",
        "-vbr", options.vbr_mode,
        "-ac", str(int(options.channels)),
    ]

    if options.start_time is not None:
        args.extend(["-ss", format_seconds(options.start_time)])
    if options.duration is not None:
        args.extend(["-t", format_seconds(options.duration)])

    args.append(str(output_path))
    args.append("-y")  # Overwrite output

    return args


class Mp3ToOpusConverter:
    """Validate conversion requests and run them through FFmpeg."""

    def __init__(self, ffmpeg_binary: Optional[str] = None):
        self.ffmpeg_binary = ffmpeg_binary or FFMPEG_BINARY

    def prepare(
        self,
        input_path: PathLike,
        output_path: Optional[PathLike] = None,
        options: OptionsLike = None,
    ) -> ConversionRequest:
        """Validate inputs and resolve the output path.

        Checks run in order and the first failure is raised.

        Args:
            input_path: Path to the MP3 file
            output_path: Output path (defaults to input with .opus suffix)
            options: Partial options layered over the defaults

        Returns:
            ConversionRequest with merged options

        Raises:
            InputNotFoundError: If the input path is empty or missing
            InvalidInputFormatError: If the input is not an .mp3 file
            ValidationError: If any option is out of range
        """
        if not input_path or not os.path.exists(input_path):
            raise InputNotFoundError("Input file does not exist")

        input_path = str(input_path)
        if not input_path.endswith(INPUT_SUFFIX):
            raise InvalidInputFormatError("Input file must be an MP3")

        final_options = ConversionOptions.merge(options)
        final_options.validate()

        resolved_output = str(output_path) if output_path else resolve_output_path(input_path)

        return ConversionRequest(
            input_path=input_path,
            output_path=resolved_output,
            options=final_options,
        )

    def convert(
        self,
        input_path: PathLike,
        output_path: Optional[PathLike] = None,
        options: OptionsLike = None,
    ) -> ConversionResult:
        """Convert an MP3 file to Opus, blocking until FFmpeg exits.

        Args:
            input_path: Path to the MP3 file
            output_path: Output path (defaults to input with .opus suffix)
            options: Partial options layered over the defaults

        Returns:
            ConversionResult describing the finished conversion

        Raises:
            ValidationError: If the request is rejected before FFmpeg runs
            TranscodeFailedError: If FFmpeg cannot run or fails
        """
        request = self.prepare(input_path, output_path, options)
        args = build_ffmpeg_args(request.input_path, request.output_path, request.options)

        try:
            result = run_ffmpeg(args, binary=self.ffmpeg_binary)
        except (RuntimeError, OSError) as e:
            raise self._execution_error(e) from e

        return self._finish(request, result)

    async def convert_async(
        self,
        input_path: PathLike,
        output_path: Optional[PathLike] = None,
        options: OptionsLike = None,
    ) -> ConversionResult:
        """Convert an MP3 file to Opus without blocking the event loop.

        Validation happens before FFmpeg is started, as in convert().
        """
        request = self.prepare(input_path, output_path, options)
        args = build_ffmpeg_args(request.input_path, request.output_path, request.options)

        try:
            result = await run_ffmpeg_async(args, binary=self.ffmpeg_binary)
        except (RuntimeError, OSError) as e:
            raise self._execution_error(e) from e

        return self._finish(request, result)

    def convert_with_callback(
        self,
        input_path: PathLike,
        output_path: Optional[PathLike],
        options: OptionsLike,
        callback: Callback,
    ) -> None:
        """Convert and report the outcome through a callback.

        The callback is called exactly once, as callback(error, None) on
        failure or callback(None, result) on success.
        """
        try:
            result = self.convert(input_path, output_path, options)
        except ConversionError as e:
            callback(e, None)
            return
        callback(None, result)

    @staticmethod
    def _execution_error(error: Exception) -> TranscodeFailedError:
        logger.error("Could not run FFmpeg: %s", error)
        return TranscodeFailedError(f"FFmpeg error: {error}")

    @staticmethod
    def _finish(
        request: ConversionRequest,
        result: subprocess.CompletedProcess,
    ) -> ConversionResult:
        if result.returncode != 0:
            stderr = (result.stderr or b"").decode("utf-8", errors="replace")
            detail = stderr or f"FFmpeg exited with code {result.returncode}"
            logger.error("FFmpeg failed for %s: %s", request.input_path, detail)
            raise TranscodeFailedError(
                f"FFmpeg error: {detail}",
                stderr=stderr,
                returncode=result.returncode,
            )

        logger.info("Converted %s -> %s", request.input_path, request.output_path)

        return ConversionResult(
            input=request.input_path,
            output=request.output_path,
            message=SUCCESS_MESSAGE,
            options=request.options,
        )


_default_converter = Mp3ToOpusConverter()


def convert_mp3_to_opus(
    input_path: PathLike,
    output_path: Optional[PathLike] = None,
    options: OptionsLike = None,
) -> ConversionResult:
    """Convert an MP3 file to Opus. See Mp3ToOpusConverter.convert()."""
    return _default_converter.convert(input_path, output_path, options)


async def convert_mp3_to_opus_async(
    input_path: PathLike,
    output_path: Optional[PathLike] = None,
    options: OptionsLike = None,
) -> ConversionResult:
    """Awaitable variant. See Mp3ToOpusConverter.convert_async()."""
    return await _default_converter.convert_async(input_path, output_path, options)


def convert_mp3_to_opus_with_callback(
    input_path: PathLike,
    output_path: Optional[PathLike],
    options: OptionsLike,
    callback: Callback,
) -> None:
    """Callback variant. See Mp3ToOpusConverter.convert_with_callback()."""
    _default_converter.convert_with_callback(input_path, output_path, options, callback)
