"""Walkman .m3u8 playlist generator."""

__version__ = "0.1.0"
