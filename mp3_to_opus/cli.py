"""Command-line interface for mp3-to-opus."""

import json
import logging
from typing import Annotated, Optional

import typer
from rich.console import Console
from rich.logging import RichHandler

from mp3_to_opus.config import (
    DEFAULT_BITRATE_KBPS,
    DEFAULT_CHANNELS,
    DEFAULT_VBR,
    MAX_BITRATE_KBPS,
    MIN_BITRATE_KBPS,
)
from mp3_to_opus.core.converter import convert_mp3_to_opus
from mp3_to_opus.exceptions import ConversionError
from mp3_to_opus.utils.conversion import parse_int_or_default, parse_seconds

app = typer.Typer(
    name="mp3-to-opus",
    help="Convert MP3 files to Opus using FFmpeg",
    context_settings={"help_option_names": ["-h", "--help"]},
    add_completion=False,
)
console = Console(soft_wrap=True)
err_console = Console(stderr=True, soft_wrap=True)

USAGE = f"""
Usage: mp3-to-opus <input.mp3> [output.opus] [options]
Options:
  --bitrate=<kbps>     Set bitrate ({MIN_BITRATE_KBPS}-{MAX_BITRATE_KBPS}, default: {DEFAULT_BITRATE_KBPS})
  --vbr=<0|1|2>        Variable bitrate mode (0=off, 1=constrained, 2=full, default: {DEFAULT_VBR})
  --channels=<1|2>     Audio channels (1=mono, 2=stereo, default: {DEFAULT_CHANNELS})
  --start=<seconds>    Start time in seconds
  --duration=<seconds> Duration in seconds
  --help, -h           Show this help message
"""


def setup_logging(verbose: bool = False) -> None:
    """Route log records to stderr through rich.

    Args:
        verbose: Log debug messages (including the FFmpeg command line)
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=err_console, show_time=False, show_path=False)],
        force=True,
    )


def build_options(
    bitrate: Optional[str],
    vbr: Optional[str],
    channels: Optional[str],
    start: Optional[str],
    duration: Optional[str],
) -> dict:
    """Turn raw flag values into a partial options mapping.

    Unparseable bitrate, vbr and channels values fall back to their
    defaults. Start and duration are left for validation to reject.

    Returns:
        Mapping containing only the flags that were given
    """
    options = {}

    if bitrate is not None:
        options["bitrate"] = parse_int_or_default(bitrate, DEFAULT_BITRATE_KBPS, "--bitrate")
    if vbr is not None:
        options["vbr"] = parse_int_or_default(vbr, DEFAULT_VBR, "--vbr")
    if channels is not None:
        options["channels"] = parse_int_or_default(channels, DEFAULT_CHANNELS, "--channels")
    if start is not None:
        options["start_time"] = parse_seconds(start)
    if duration is not None:
        options["duration"] = parse_seconds(duration)

    return options


@app.command()
def convert(
    input_file: Annotated[
        Optional[str],
        typer.Argument(help="MP3 file to convert", show_default=False),
    ] = None,
    output_file: Annotated[
        Optional[str],
        typer.Argument(help="Output Opus file (default: input path with .opus)", show_default=False),
    ] = None,
    bitrate: Annotated[
        Optional[str],
        typer.Option("--bitrate", metavar="KBPS", help=f"Bitrate ({MIN_BITRATE_KBPS}-{MAX_BITRATE_KBPS}, default: {DEFAULT_BITRATE_KBPS})"),
    ] = None,
    vbr: Annotated[
        Optional[str],
        typer.Option("--vbr", metavar="0|1|2", help=f"VBR mode (0=off, 1=constrained, 2=full, default: {DEFAULT_VBR})"),
    ] = None,
    channels: Annotated[
        Optional[str],
        typer.Option("--channels", metavar="1|2", help=f"Audio channels (1=mono, 2=stereo, default: {DEFAULT_CHANNELS})"),
    ] = None,
    start: Annotated[
        Optional[str],
        typer.Option("--start", metavar="SECONDS", help="Start time in seconds"),
    ] = None,
    duration: Annotated[
        Optional[str],
        typer.Option("--duration", metavar="SECONDS", help="Duration in seconds"),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option("-v", "--verbose", help="Show debug output, including the FFmpeg command"),
    ] = False,
) -> None:
    """Convert an MP3 file to Opus.

    The output defaults to the input path with the .mp3 suffix
    replaced by .opus. Existing output files are overwritten.
    """
    setup_logging(verbose)

    if input_file is None:
        console.print(USAGE, markup=False, highlight=False)
        raise typer.Exit(1)

    options = build_options(bitrate, vbr, channels, start, duration)

    try:
        result = convert_mp3_to_opus(input_file, output_file, options)
    except ConversionError as e:
        err_console.print(f"Error: {e}", style="red", markup=False, highlight=False)
        raise typer.Exit(1)

    console.print(f"[green]{result.message}[/green]")
    console.print(f"Input file: {result.input}", markup=False, highlight=False)
    console.print(f"Output file: {result.output}", markup=False, highlight=False)
    console.print("Settings:", json.dumps(result.options.to_dict(), indent=2), highlight=False)


if __name__ == "__main__":
    app()
