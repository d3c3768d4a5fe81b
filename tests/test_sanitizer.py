"""Tests for sanitizer module."""

from __future__ import annotations

import pytest

from walkmanlist.sanitizer import MAX_FILENAME_BYTES, sanitize_filename


def test_safe_name_unchanged() -> None:
    assert sanitize_filename("My List.m3u8") == "My List.m3u8"


@pytest.mark.parametrize("char", list('<>:"/\\|?*'))
def test_reserved_characters_replaced(char: str) -> None:
    assert sanitize_filename(f"a{char}b.m3u8") == "a_b.m3u8"


def test_consecutive_replacements_collapsed() -> None:
    assert sanitize_filename("a//??b.m3u8") == "a_b.m3u8"


def test_control_characters_replaced() -> None:
    assert sanitize_filename("a\x00\tb") == "a_b"


def test_custom_replacement() -> None:
    assert sanitize_filename("a/b", replacement="-") == "a-b"


def test_trailing_dots_and_spaces_stripped() -> None:
    assert sanitize_filename("list. . ") == "list"


@pytest.mark.parametrize("name", ["", ".", "..", "  "])
def test_unusable_names_return_empty(name: str) -> None:
    assert sanitize_filename(name) == ""


def test_reserved_device_name_prefixed() -> None:
    assert sanitize_filename("con.m3u8") == "_con.m3u8"
    assert sanitize_filename("LPT1") == "_LPT1"


def test_long_names_truncated() -> None:
    result = sanitize_filename("x" * 300)
    assert len(result) == MAX_FILENAME_BYTES


def test_truncation_counts_utf8_bytes_and_keeps_extension() -> None:
    result = sanitize_filename("日本語" * 34 + ".m3u8")
    assert result.endswith(".m3u8")
    assert len(result.encode("utf-8")) <= MAX_FILENAME_BYTES
    assert result == "日本語" * 27 + "日本" + ".m3u8"
