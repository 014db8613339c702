"""Configuration constants for mp3-to-opus."""

import os
import shutil

# Transcoder executable, overridable via environment
FFMPEG_BINARY = os.getenv("FFMPEG_BINARY_PATH", shutil.which("ffmpeg") or "ffmpeg")

# Input/output suffixes
INPUT_SUFFIX = ".mp3"
OUTPUT_SUFFIX = ".opus"

# FFmpeg encoder for Opus
OPUS_CODEC = "libopus"

# Bitrate limits in kbps (libopus range)
MIN_BITRATE_KBPS = 6
MAX_BITRATE_KBPS = 510

# VBR mode -> libopus -vbr value
VBR_MODES = {
    0: "off",
    1: "constrained",
    2: "on",
}

# Supported channel counts
CHANNEL_COUNTS = {1, 2}

# Default conversion settings
DEFAULT_BITRATE_KBPS = 128
DEFAULT_VBR = 1
DEFAULT_CHANNELS = 2

SUCCESS_MESSAGE = "Conversion completed successfully"
