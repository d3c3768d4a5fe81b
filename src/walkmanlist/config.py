"""Configuration loading, merging, and validation."""

from __future__ import annotations

import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from walkmanlist.filters import (
    SUPPORTED_FORMATS,
    ContainsFilter,
    NameFilter,
    NoFilter,
    PrefixFilter,
    SuffixFilter,
    TitleContainsFilter,
)
from walkmanlist.sanitizer import sanitize_filename

PLAYLIST_EXTENSION = ".m3u8"
DEFAULT_OUTPUT_FILENAME = f"playlist{PLAYLIST_EXTENSION}"

FILTER_KEYS: tuple[str, ...] = (
    "filter_prefix",
    "filter_suffix",
    "filter_contains",
    "filter_title_contains",
)

_FILTER_TYPES = {
    "filter_prefix": PrefixFilter,
    "filter_suffix": SuffixFilter,
    "filter_contains": ContainsFilter,
    "filter_title_contains": TitleContainsFilter,
}


class UsageError(ValueError):
    """Invalid combination of command-line values."""


@dataclass(frozen=True)
class PlaylistConfig:
    """Immutable configuration for a single playlist run."""

    base_dir: Path
    output_filename: str = DEFAULT_OUTPUT_FILENAME
    format: str | None = None
    name_filter: NameFilter = NoFilter()
    log_level: str = "INFO"
    log_file: Path | None = None

    @property
    def output_path(self) -> Path:
        return self.base_dir / self.output_filename


_DEFAULTS: dict[str, Any] = {
    "dir": "",
    "format": "",
    "filter_prefix": "",
    "filter_suffix": "",
    "filter_contains": "",
    "filter_title_contains": "",
    "output": "",
    "log_level": "INFO",
    "log_file": None,
}


def load_config(path: Path) -> dict[str, Any]:
    """Read a TOML config file and return a dict."""
    with path.open("rb") as f:
        return tomllib.load(f)


def merge_config(
    file_config: dict[str, Any],
    cli_overrides: dict[str, Any],
) -> PlaylistConfig:
    """Merge defaults, file config, and CLI overrides into a validated config.

    Priority: defaults < file config < CLI overrides.
    """
    merged: dict[str, Any] = {**_DEFAULTS}
    merged.update({k: v for k, v in file_config.items() if v is not None})
    merged.update({k: v for k, v in cli_overrides.items() if v is not None})
    return build_config(
        base_dir=merged["dir"],
        select_format=merged["format"],
        filter_prefix=merged["filter_prefix"],
        filter_suffix=merged["filter_suffix"],
        filter_contains=merged["filter_contains"],
        filter_title_contains=merged["filter_title_contains"],
        output=merged["output"],
        log_level=merged["log_level"],
        log_file=merged["log_file"],
    )


def build_config(
    base_dir: str,
    select_format: str = "",
    filter_prefix: str = "",
    filter_suffix: str = "",
    filter_contains: str = "",
    filter_title_contains: str = "",
    output: str = "",
    log_level: str = "INFO",
    log_file: str | Path | None = None,
) -> PlaylistConfig:
    """Validate raw values and return a PlaylistConfig.

    Raises UsageError for a missing base directory or conflicting filters,
    and ValueError for other invalid values.
    """
    if not base_dir:
        raise UsageError("missing base dir")

    name_filter = build_name_filter({
        "filter_prefix": filter_prefix,
        "filter_suffix": filter_suffix,
        "filter_contains": filter_contains,
        "filter_title_contains": filter_title_contains,
    })

    base_path = Path(base_dir).expanduser().absolute()
    if not base_path.is_dir():
        raise ValueError(f"base dir does not exist or is not a directory: {base_path}")

    selected_format = select_format.lower() if select_format else None
    if selected_format is not None and selected_format not in SUPPORTED_FORMATS:
        raise ValueError(
            f"unsupported format {select_format!r}, supported formats are "
            f"{', '.join(SUPPORTED_FORMATS)}"
        )

    return PlaylistConfig(
        base_dir=base_path,
        output_filename=normalize_output_filename(output),
        format=selected_format,
        name_filter=name_filter,
        log_level=log_level,
        log_file=Path(log_file) if log_file else None,
    )


def build_name_filter(values: dict[str, str]) -> NameFilter:
    """Turn the four filter options into a single NameFilter.

    Raises UsageError when more than one filter is non-empty.
    """
    active = [(key, values[key]) for key in FILTER_KEYS if values.get(key)]
    if len(active) > 1:
        raise UsageError(
            "You can only use one of these parameters: --filter-prefix, "
            "--filter-suffix, --filter-contains, and --filter-title-contains. "
            "You can't use two or more filtering parameters simultaneously."
        )
    if not active:
        return NoFilter()
    key, value = active[0]
    return _FILTER_TYPES[key](value)


def normalize_output_filename(output: str) -> str:
    """Default, extend and sanitize the playlist filename."""
    if not output:
        name = DEFAULT_OUTPUT_FILENAME
    elif not output.endswith(PLAYLIST_EXTENSION):
        name = f"{output}{PLAYLIST_EXTENSION}"
    else:
        name = output
    return sanitize_filename(name, replacement="_") or name
