"""Media probing using ffprobe."""

from __future__ import annotations

import json
import math
import shutil
import subprocess
from dataclasses import dataclass, field
from pathlib import Path

PROBE_TIMEOUT_SECS = 30


@dataclass(frozen=True)
class ProbeResult:
    """Result of probing a media file."""

    is_valid: bool
    format_names: tuple[str, ...] = ()
    duration_secs: float | None = None
    tags: dict[str, str] = field(default_factory=dict)
    error: str | None = None


def check_ffprobe_available() -> None:
    """Verify that ffprobe is on PATH. Raises RuntimeError if not found."""
    if shutil.which("ffprobe") is None:
        raise RuntimeError(
            "ffprobe not found on PATH. Install ffmpeg to continue."
        )


def probe_file(file_path: Path) -> ProbeResult:
    """Probe a file with ffprobe and return its format, duration and tags.

    A file ffprobe cannot read as a media container yields an invalid
    result rather than an exception.
    """
    try:
        result = subprocess.run(
            [
                "ffprobe",
                "-v", "quiet",
                "-print_format", "json",
                "-show_format",
                str(file_path),
            ],
            capture_output=True,
            text=True,
            timeout=PROBE_TIMEOUT_SECS,
        )
    except subprocess.TimeoutExpired:
        return ProbeResult(is_valid=False, error="ffprobe timed out")
    except OSError as e:
        return ProbeResult(is_valid=False, error=f"ffprobe error: {e}")

    if result.returncode != 0:
        return ProbeResult(
            is_valid=False,
            error="ffprobe failed, not a readable media file",
        )

    try:
        probe_data = json.loads(result.stdout)
    except json.JSONDecodeError:
        return ProbeResult(is_valid=False, error="ffprobe returned invalid JSON")

    fmt = probe_data.get("format") if isinstance(probe_data, dict) else None
    if not isinstance(fmt, dict):
        return ProbeResult(is_valid=False, error="No format section found")

    format_names = _split_format_names(fmt.get("format_name"))
    if not format_names:
        return ProbeResult(is_valid=False, error="Could not determine format")

    duration_secs = _extract_duration(fmt)
    if duration_secs is None:
        return ProbeResult(
            is_valid=False,
            format_names=format_names,
            error="Could not determine duration",
        )

    return ProbeResult(
        is_valid=True,
        format_names=format_names,
        duration_secs=duration_secs,
        tags=_extract_tags(fmt),
    )


def _split_format_names(raw: object) -> tuple[str, ...]:
    """Split ffprobe's comma-separated format_name into lower-cased names."""
    if not isinstance(raw, str):
        return ()
    return tuple(name.strip().lower() for name in raw.split(",") if name.strip())


def _extract_duration(fmt: dict[str, object]) -> float | None:
    dur_str = fmt.get("duration")
    if dur_str is None:
        return None
    try:
        duration = float(str(dur_str))
    except (ValueError, TypeError):
        return None
    return duration if math.isfinite(duration) else None


def _extract_tags(fmt: dict[str, object]) -> dict[str, str]:
    tags = fmt.get("tags", {})
    if not isinstance(tags, dict):
        return {}
    return {str(k): str(v) for k, v in tags.items() if v is not None}
