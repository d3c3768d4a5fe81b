"""Filesystem-safe filename conversion."""

from __future__ import annotations

import re

# Characters rejected by Windows/FAT filesystems, which Walkman storage uses.
_RESERVED_CHARS = re.compile(r'[<>:"/\\|?*\x00-\x1f]')
_RESERVED_NAMES = frozenset(
    {"con", "prn", "aux", "nul"}
    | {f"com{i}" for i in range(1, 10)}
    | {f"lpt{i}" for i in range(1, 10)}
)
MAX_FILENAME_BYTES = 255


def sanitize_filename(name: str, replacement: str = "_") -> str:
    """Replace characters that are unsafe in a filename.

    Reserved characters are substituted with ``replacement``, consecutive
    replacements are collapsed, and trailing dots and spaces are dropped.
    Relative path names (``.``/``..``) and Windows device names are replaced
    outright. Returns an empty string when nothing usable remains.
    """
    result = _RESERVED_CHARS.sub(replacement, name)
    if replacement:
        result = re.sub(f"(?:{re.escape(replacement)})+", replacement, result)

    result = result.rstrip(". ")
    if result in {"", ".", ".."}:
        return ""

    stem = result.split(".", 1)[0]
    if stem.lower() in _RESERVED_NAMES:
        result = replacement + result

    return _truncate(result, MAX_FILENAME_BYTES)


def _truncate(name: str, max_bytes: int) -> str:
    """Shorten name to max_bytes of UTF-8, keeping its extension."""
    if len(name.encode("utf-8")) <= max_bytes:
        return name

    stem, dot, ext = name.rpartition(".")
    suffix = dot + ext
    if not stem or len(suffix.encode("utf-8")) >= max_bytes:
        stem, suffix = name, ""

    budget = max_bytes - len(suffix.encode("utf-8"))
    return stem.encode("utf-8")[:budget].decode("utf-8", "ignore") + suffix
