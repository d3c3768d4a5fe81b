"""Shared test fixtures for walkmanlist."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest
import tomli_w

from walkmanlist.prober import ProbeResult


class FakeProber:
    """Stands in for ffprobe: answers from a filename -> metadata table."""

    def __init__(self, table: dict[str, dict[str, Any]]) -> None:
        self.table = table
        self.calls: list[Path] = []

    def __call__(self, file_path: Path) -> ProbeResult:
        self.calls.append(file_path)
        meta = self.table.get(file_path.name)
        if meta is None:
            return ProbeResult(is_valid=False, error="ffprobe failed, not a readable media file")
        return ProbeResult(
            is_valid=True,
            format_names=tuple(meta.get("format", "mp3").split(",")),
            duration_secs=meta.get("duration", 0.0),
            tags=meta.get("tags", {}),
        )


@pytest.fixture
def music_dir(tmp_path: Path) -> Path:
    """Create a temporary music directory."""
    d = tmp_path / "music"
    d.mkdir()
    return d


@pytest.fixture
def make_track(music_dir: Path) -> Callable[[str], Path]:
    """Return a helper that creates a dummy file under music_dir."""

    def _make(relative: str) -> Path:
        path = music_dir / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(b"\x00" * 16)
        return path

    return _make


@pytest.fixture
def sample_config_file(tmp_path: Path, music_dir: Path) -> Path:
    """Write a sample config TOML file and return its path."""
    config_path = tmp_path / "config.toml"
    data = {"dir": str(music_dir), "output": "from-file", "log_level": "DEBUG"}
    config_path.write_bytes(tomli_w.dumps(data).encode())
    return config_path


@pytest.fixture
def make_prober() -> Callable[[dict[str, dict[str, Any]]], FakeProber]:
    """Return the FakeProber factory."""
    return FakeProber
