import asyncio
import math
import os
import subprocess

import pytest

from mp3_to_opus.config import SUCCESS_MESSAGE
from mp3_to_opus.core.converter import (
    Mp3ToOpusConverter,
    build_ffmpeg_args,
    convert_mp3_to_opus,
    convert_mp3_to_opus_async,
    convert_mp3_to_opus_with_callback,
    resolve_output_path,
)
from mp3_to_opus.core.models import ConversionOptions
from mp3_to_opus.exceptions import (
    InputNotFoundError,
    InvalidBitrateError,
    InvalidChannelCountError,
    InvalidInputFormatError,
    InvalidVbrModeError,
    TranscodeFailedError,
)


def test_resolve_output_path_same_directory():
    assert resolve_output_path(os.path.join("music", "input.mp3")) == os.path.join("music", "input.opus")
    assert resolve_output_path("input.mp3") == "input.opus"


def test_build_args_defaults():
    args = build_ffmpeg_args("in.mp3", "out.opus", ConversionOptions())
    assert args == [
        "-i", "in.mp3",
        "-c:a", "libopus",
        "-b:a", "128k",
        "-vbr", "constrained",
        "-ac", "2",
        "out.opus",
        "-y",
    ]
    assert "-ss" not in args
    assert "-t" not in args


def test_build_args_with_start_and_duration():
    options = ConversionOptions(bitrate=64, vbr=0, channels=1, start_time=5, duration=10)
    args = build_ffmpeg_args("in.mp3", "out.opus", options)
    assert args == [
        "-i", "in.mp3",
        "-c:a", "libopus",
        "-b:a", "64k",
        "-vbr", "off",
        "-ac", "1",
        "-ss", "5",
        "-t", "10",
        "out.opus",
        "-y",
    ]


def test_build_args_small_start_time_is_fixed_point():
    args = build_ffmpeg_args("in.mp3", "out.opus", ConversionOptions(start_time=0.00001))
    assert args[args.index("-ss") + 1] == "0.00001"


def test_build_args_duration_only():
    args = build_ffmpeg_args("in.mp3", "out.opus", ConversionOptions(vbr=2, duration=2.5))
    assert args[args.index("-vbr") + 1] == "on"
    assert args[args.index("-t") + 1] == "2.5"
    assert "-ss" not in args


def test_convert_success(mp3_file, fake_ffmpeg):
    result = convert_mp3_to_opus(mp3_file, options={"bitrate": 96})

    assert result.input == str(mp3_file)
    assert result.output == str(mp3_file.with_suffix(".opus"))
    assert result.message == SUCCESS_MESSAGE
    assert result.options == ConversionOptions(bitrate=96, vbr=1, channels=2)

    assert len(fake_ffmpeg.calls) == 1
    args = fake_ffmpeg.calls[0]
    assert args[args.index("-b:a") + 1] == "96k"
    assert args[-2:] == [result.output, "-y"]


def test_convert_explicit_output(mp3_file, tmp_path, fake_ffmpeg):
    output = tmp_path / "out" / "clip.opus"
    result = convert_mp3_to_opus(str(mp3_file), output)
    assert result.output == str(output)
    assert fake_ffmpeg.calls[0][-2] == str(output)


def test_missing_input_wins_over_bad_options(tmp_path, fake_ffmpeg):
    with pytest.raises(InputNotFoundError, match="Input file does not exist"):
        convert_mp3_to_opus(tmp_path / "missing.mp3", options={"bitrate": 1, "vbr": 7})
    assert fake_ffmpeg.calls == []


def test_empty_input_path(fake_ffmpeg):
    with pytest.raises(InputNotFoundError):
        convert_mp3_to_opus("")


def test_wav_input_rejected(tmp_path, fake_ffmpeg):
    wav = tmp_path / "song.wav"
    wav.write_bytes(b"")
    with pytest.raises(InvalidInputFormatError, match="must be an MP3"):
        convert_mp3_to_opus(wav)
    assert fake_ffmpeg.calls == []


@pytest.mark.parametrize(
    "options,error",
    [
        ({"bitrate": 5}, InvalidBitrateError),
        ({"bitrate": 511}, InvalidBitrateError),
        ({"vbr": 3}, InvalidVbrModeError),
        ({"channels": 6}, InvalidChannelCountError),
    ],
)
def test_invalid_options_never_spawn_ffmpeg(mp3_file, fake_ffmpeg, options, error):
    with pytest.raises(error):
        convert_mp3_to_opus(mp3_file, options=options)
    assert fake_ffmpeg.calls == []


def test_ffmpeg_failure_carries_stderr(mp3_file, fake_ffmpeg):
    fake_ffmpeg.returncode = 1
    fake_ffmpeg.stderr = b"Unknown encoder 'libopus'"

    with pytest.raises(TranscodeFailedError) as exc_info:
        convert_mp3_to_opus(mp3_file)

    assert str(exc_info.value) == "FFmpeg error: Unknown encoder 'libopus'"
    assert exc_info.value.stderr == "Unknown encoder 'libopus'"
    assert exc_info.value.returncode == 1


def test_ffmpeg_failure_without_stderr(mp3_file, fake_ffmpeg):
    fake_ffmpeg.returncode = 69
    with pytest.raises(TranscodeFailedError, match="exited with code 69"):
        convert_mp3_to_opus(mp3_file)


def test_missing_ffmpeg_binary(mp3_file):
    converter = Mp3ToOpusConverter(ffmpeg_binary="no-such-ffmpeg-binary")
    with pytest.raises(TranscodeFailedError, match="FFmpeg not found"):
        converter.convert(mp3_file)


def test_launch_error_becomes_transcode_failed(mp3_file, monkeypatch):
    def broken(args, binary=None):
        raise PermissionError("Permission denied")

    monkeypatch.setattr("mp3_to_opus.core.converter.run_ffmpeg", broken)
    with pytest.raises(TranscodeFailedError, match="FFmpeg error: Permission denied"):
        convert_mp3_to_opus(mp3_file)


def test_callback_success(mp3_file, fake_ffmpeg):
    calls = []
    returned = convert_mp3_to_opus_with_callback(
        mp3_file, None, {"channels": 1}, lambda err, res: calls.append((err, res))
    )

    assert returned is None
    assert len(calls) == 1
    error, result = calls[0]
    assert error is None
    assert result.options.channels == 1


def test_callback_error(tmp_path, fake_ffmpeg):
    calls = []
    convert_mp3_to_opus_with_callback(
        tmp_path / "missing.mp3", None, {}, lambda err, res: calls.append((err, res))
    )

    assert len(calls) == 1
    error, result = calls[0]
    assert isinstance(error, InputNotFoundError)
    assert result is None


@pytest.mark.parametrize("bitrate", [math.nan, math.inf])
def test_callback_receives_non_finite_bitrate_error(mp3_file, fake_ffmpeg, bitrate):
    calls = []
    convert_mp3_to_opus_with_callback(
        mp3_file, None, {"bitrate": bitrate}, lambda err, res: calls.append((err, res))
    )

    assert len(calls) == 1
    error, result = calls[0]
    assert isinstance(error, InvalidBitrateError)
    assert result is None
    assert fake_ffmpeg.calls == []


def test_callback_exception_is_not_redelivered(mp3_file, fake_ffmpeg):
    calls = []

    def callback(err, res):
        calls.append((err, res))
        raise KeyError("boom")

    with pytest.raises(KeyError):
        convert_mp3_to_opus_with_callback(mp3_file, None, None, callback)
    assert len(calls) == 1


def test_convert_async(mp3_file, monkeypatch):
    calls = []

    async def fake_run(args, binary=None):
        calls.append(args)
        return subprocess.CompletedProcess(["ffmpeg"] + args, 0, b"", b"")

    monkeypatch.setattr("mp3_to_opus.core.converter.run_ffmpeg_async", fake_run)

    result = asyncio.run(convert_mp3_to_opus_async(mp3_file, options={"startTime": 5, "duration": 10}))

    assert result.message == SUCCESS_MESSAGE
    assert result.options.start_time == 5
    args = calls[0]
    assert args[args.index("-ss") + 1] == "5"
    assert args[args.index("-t") + 1] == "10"


def test_convert_async_validation_before_spawn(tmp_path, monkeypatch):
    async def fake_run(args, binary=None):
        raise AssertionError("FFmpeg should not run")

    monkeypatch.setattr("mp3_to_opus.core.converter.run_ffmpeg_async", fake_run)

    with pytest.raises(InputNotFoundError):
        asyncio.run(convert_mp3_to_opus_async(tmp_path / "missing.mp3"))


def test_convert_async_failure(mp3_file, monkeypatch):
    async def fake_run(args, binary=None):
        return subprocess.CompletedProcess(["ffmpeg"] + args, 1, b"", b"Invalid data found")

    monkeypatch.setattr("mp3_to_opus.core.converter.run_ffmpeg_async", fake_run)

    with pytest.raises(TranscodeFailedError, match="Invalid data found"):
        asyncio.run(convert_mp3_to_opus_async(mp3_file))
