"""FFmpeg subprocess utilities."""

import asyncio
import logging
import shutil
import subprocess
from typing import Optional

from mp3_to_opus.config import FFMPEG_BINARY

logger = logging.getLogger(__name__)


def get_ffmpeg_path(binary: Optional[str] = None) -> str:
    """Get the path to FFmpeg executable.

    Args:
        binary: Executable name or path (defaults to FFMPEG_BINARY)

    Returns:
        Path to FFmpeg executable

    Raises:
        RuntimeError: If FFmpeg is not found
    """
    path = shutil.which(binary or FFMPEG_BINARY)
    if path is None:
        raise RuntimeError(
            f"FFmpeg not found ({binary or FFMPEG_BINARY}). "
            "Please install FFmpeg and ensure it's in your PATH, "
            "or set FFMPEG_BINARY_PATH.\n"
            "Download from: https://ffmpeg.org/download.html"
        )
    return path


def run_ffmpeg(
    args: list[str],
    binary: Optional[str] = None,
) -> subprocess.CompletedProcess:
    """Run FFmpeg with the given arguments and wait for it to exit.

    Args:
        args: List of arguments to pass to FFmpeg (excluding 'ffmpeg' itself)
        binary: Executable name or path (defaults to FFMPEG_BINARY)

    Returns:
        CompletedProcess with stdout, stderr, and return code

    Raises:
        RuntimeError: If FFmpeg is not found
        OSError: If the process cannot be started
    """
    cmd = [get_ffmpeg_path(binary)] + args
    logger.debug("Running %s", " ".join(cmd))

    return subprocess.run(
        cmd,
        stdin=subprocess.DEVNULL,
        capture_output=True,
    )


async def run_ffmpeg_async(
    args: list[str],
    binary: Optional[str] = None,
) -> subprocess.CompletedProcess:
    """Run FFmpeg without blocking the event loop.

    Args:
        args: List of arguments to pass to FFmpeg (excluding 'ffmpeg' itself)
        binary: Executable name or path (defaults to FFMPEG_BINARY)

    Returns:
        CompletedProcess with stdout, stderr, and return code

    Raises:
        RuntimeError: If FFmpeg is not found
        OSError: If the process cannot be started
    """
    cmd = [get_ffmpeg_path(binary)] + args
    logger.debug("Running %s", " ".join(cmd))

    proc = await asyncio.create_subprocess_exec(
        *cmd,
        stdin=asyncio.subprocess.DEVNULL,
        stdout=asyncio.subprocess.PIPE,
        stderr=asyncio.subprocess.PIPE,
    )
    stdout, stderr = await proc.communicate()

    return subprocess.CompletedProcess(cmd, proc.returncode, stdout, stderr)
