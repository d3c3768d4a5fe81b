"""Logging configuration: rich stderr plus an optional rotating file."""

from __future__ import annotations

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path

from rich.console import Console
from rich.logging import RichHandler


def setup_logging(log_level: str, log_file: Path | None = None) -> None:
    """Configure the root logger with a rich handler and, optionally, a file.

    Args:
        log_level: Logging level string (e.g. "INFO", "DEBUG").
        log_file: Optional log file path. Parent directories are created if needed.
    """
    level = getattr(logging, log_level.upper(), logging.INFO)

    root = logging.getLogger()
    root.setLevel(level)

    # Remove any existing handlers to avoid duplicate output
    root.handlers.clear()

    # stderr keeps stdout free for playlist output
    stdout_handler = RichHandler(
        console=Console(stderr=True),
        level=level,
        rich_tracebacks=True,
        show_path=False,
    )
    stdout_handler.setFormatter(logging.Formatter("%(message)s"))
    root.addHandler(stdout_handler)

    if log_file is None:
        return

    log_file.parent.mkdir(parents=True, exist_ok=True)

    # Rotating file handler (10 MB, keep 3 backups)
    file_handler = RotatingFileHandler(
        log_file,
        maxBytes=10 * 1024 * 1024,
        backupCount=3,
        encoding="utf-8",
    )
    file_handler.setLevel(level)
    file_handler.setFormatter(
        logging.Formatter(
            "%(asctime)s [%(levelname)s] %(name)s: %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    )
    root.addHandler(file_handler)
