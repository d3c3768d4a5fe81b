"""Filename, title and format predicates applied to discovered files."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

SUPPORTED_FORMATS: tuple[str, ...] = ("flac", "mp3")


@dataclass(frozen=True)
class NoFilter:
    """Every filename and title passes."""


@dataclass(frozen=True)
class PrefixFilter:
    """Filename must start with ``value``."""

    value: str


@dataclass(frozen=True)
class SuffixFilter:
    """Filename, including its extension, must end with ``value``."""

    value: str


@dataclass(frozen=True)
class ContainsFilter:
    """Filename must contain ``value``."""

    value: str


@dataclass(frozen=True)
class TitleContainsFilter:
    """Resolved title must contain ``value``. Checked after probing."""

    value: str


NameFilter = Union[NoFilter, PrefixFilter, SuffixFilter, ContainsFilter, TitleContainsFilter]


def matches_name(name_filter: NameFilter, filename: str) -> bool:
    """Check a base filename against the active name filter.

    Title filters need probed metadata, so they always pass here.
    """
    if isinstance(name_filter, PrefixFilter):
        return filename.startswith(name_filter.value)
    if isinstance(name_filter, SuffixFilter):
        return filename.endswith(name_filter.value)
    if isinstance(name_filter, ContainsFilter):
        return name_filter.value in filename
    return True


def matches_title(name_filter: NameFilter, title: str) -> bool:
    """Check a resolved title against a title-contains filter."""
    if isinstance(name_filter, TitleContainsFilter):
        return name_filter.value in title
    return True


def matches_format(format_names: tuple[str, ...], selected: str | None) -> bool:
    """Check probed format names against the selected or supported formats."""
    names = {name.lower() for name in format_names}
    if selected:
        return selected.lower() in names
    return any(fmt in names for fmt in SUPPORTED_FORMATS)
