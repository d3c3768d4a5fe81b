"""Directory walking and track discovery."""

from __future__ import annotations

import logging
import math
import os
from collections.abc import Callable, Iterator
from dataclasses import dataclass
from pathlib import Path

from walkmanlist.config import PlaylistConfig
from walkmanlist.filters import matches_format, matches_name, matches_title
from walkmanlist.prober import ProbeResult, probe_file

logger = logging.getLogger(__name__)

Prober = Callable[[Path], ProbeResult]


@dataclass(frozen=True)
class WalkMatch:
    """A discovered track that passed every active filter."""

    path: Path
    duration_secs: int
    title: str


def walk_directory(cfg: PlaylistConfig, probe: Prober | None = None) -> list[WalkMatch]:
    """Walk cfg.base_dir and return matching tracks in discovery order.

    Name filters run before probing so rejected files are never probed.
    Files ffprobe cannot read are skipped; errors listing the tree propagate.
    """
    if probe is None:
        probe = probe_file

    matches: list[WalkMatch] = []

    for file_path in iter_files(cfg.base_dir):
        if not matches_name(cfg.name_filter, file_path.name):
            continue

        probed = probe(file_path)
        if not probed.is_valid:
            logger.debug("Skipping %s: %s", file_path, probed.error)
            continue

        if not matches_format(probed.format_names, cfg.format):
            continue

        title = resolve_title(file_path, probed.tags)
        if not matches_title(cfg.name_filter, title):
            continue

        match = WalkMatch(
            path=file_path,
            duration_secs=round_duration(probed.duration_secs or 0.0),
            title=title,
        )
        logger.debug("Matched %s (%ds, %r)", file_path, match.duration_secs, title)
        matches.append(match)

    return matches


def iter_files(directory: Path) -> Iterator[Path]:
    """Yield regular files under directory, depth-first in name order.

    Subdirectories are descended into where they sort among their siblings.
    Symlinked directories are not followed.
    """
    with os.scandir(directory) as it:
        entries = sorted(it, key=lambda e: e.name)

    for entry in entries:
        if entry.is_dir(follow_symlinks=False):
            yield from iter_files(Path(entry.path))
        elif entry.is_file():
            yield Path(entry.path)


def resolve_title(file_path: Path, tags: dict[str, str]) -> str:
    """Return the TITLE tag if non-empty, else the filename without its extension."""
    for key, value in tags.items():
        if key.upper() == "TITLE" and value:
            return value
    return file_path.stem


def round_duration(duration_secs: float) -> int:
    """Round a duration to whole seconds, halves away from zero."""
    return int(math.copysign(math.floor(abs(duration_secs) + 0.5), duration_secs))
