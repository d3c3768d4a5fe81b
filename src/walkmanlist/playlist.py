"""EXTM3U playlist rendering and writing."""

from __future__ import annotations

import os
from collections.abc import Sequence
from pathlib import Path

from walkmanlist.scanner import WalkMatch

M3U_HEADER = "#EXTM3U"


def relative_entry_path(track_path: Path, base_dir: Path) -> str:
    """Return track_path relative to the directory holding the playlist."""
    return str(track_path.relative_to(base_dir)).lstrip(os.sep)


def render_playlist(matches: Sequence[WalkMatch], base_dir: Path) -> str:
    """Render matches as EXTM3U text, one EXTINF/path pair per track.

    Every line is newline-terminated and the document ends with a blank line.
    """
    lines = [M3U_HEADER]
    for match in matches:
        lines.append(f"#EXTINF:{match.duration_secs};{match.title}")
        lines.append(relative_entry_path(match.path, base_dir))
    return "\n".join(lines) + "\n\n"


def write_playlist(content: str, output_path: Path) -> None:
    """Write the playlist text to output_path, replacing any existing file."""
    output_path.write_text(content, encoding="utf-8")
