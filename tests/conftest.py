import subprocess

import pytest


@pytest.fixture
def mp3_file(tmp_path):
    """An empty file with an .mp3 suffix (contents are never read)."""
    path = tmp_path / "song.mp3"
    path.write_bytes(b"")
    return path


class FakeFFmpeg:
    """Stands in for the FFmpeg runners and records each call."""

    def __init__(self, returncode=0, stderr=b""):
        self.returncode = returncode
        self.stderr = stderr
        self.calls = []

    def __call__(self, args, binary=None):
        self.calls.append(args)
        return subprocess.CompletedProcess(["ffmpeg"] + args, self.returncode, b"", self.stderr)


@pytest.fixture
def fake_ffmpeg(monkeypatch):
    """Replace the blocking FFmpeg runner used by the converter."""
    fake = FakeFFmpeg()
    monkeypatch.setattr("mp3_to_opus.core.converter.run_ffmpeg", fake)
    return fake
