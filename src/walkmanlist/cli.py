"""CLI entry point for walkmanlist."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Optional

import typer

from walkmanlist import __version__
from walkmanlist.config import PlaylistConfig, UsageError, load_config, merge_config
from walkmanlist.filters import SUPPORTED_FORMATS
from walkmanlist.logging_setup import setup_logging
from walkmanlist.playlist import render_playlist, write_playlist
from walkmanlist.prober import check_ffprobe_available
from walkmanlist.scanner import walk_directory

logger = logging.getLogger(__name__)

FILTER_EPILOG = (
    "Attention: you can only use one of these four filters: --filter-prefix, "
    "--filter-suffix, --filter-contains, and --filter-title-contains. "
    "They conflict with each other, and mixed filters are not supported."
)

app = typer.Typer(
    name="walkmanlist",
    help="A generator of Sony Walkman .m3u8 music playlists.",
    no_args_is_help=True,
)


def _build_config(
    config_path: Optional[Path],
    cli_overrides: dict[str, Any],
) -> PlaylistConfig:
    """Load the optional TOML config and merge it with CLI overrides."""
    file_config: dict[str, Any] = {}
    if config_path is not None:
        if not config_path.exists():
            raise ValueError(f"Config file not found: {config_path}")
        file_config = load_config(config_path)
    return merge_config(file_config, cli_overrides)


@app.command(epilog=FILTER_EPILOG)
def generate(
    ctx: typer.Context,
    base_dir: Optional[str] = typer.Option(None, "--dir", help="An absolute path of the directory to scan for music"),
    select_format: Optional[str] = typer.Option(
        None, "--format", "--ext",
        help=f"Select a format for scanning music, supported formats are {', '.join(SUPPORTED_FORMATS)}",
    ),
    filter_prefix: Optional[str] = typer.Option(None, "--filter-prefix", help="A filter for prefixes of music filenames"),
    filter_suffix: Optional[str] = typer.Option(
        None, "--filter-suffix",
        help="A filter for suffixes of music filenames, be warned this filter includes the file extension",
    ),
    filter_contains: Optional[str] = typer.Option(None, "--filter-contains", help="A filter for music filenames containing a partial string"),
    filter_title_contains: Optional[str] = typer.Option(
        None, "--filter-title-contains",
        help="A filter for music titles containing a partial string, files without a title tag use their filename",
    ),
    output: Optional[str] = typer.Option(None, "-o", "--output", help="Output filename, the playlist is written into the scanned directory"),
    config: Optional[Path] = typer.Option(None, "--config", help="Path to an optional TOML config file"),
    log_level: Optional[str] = typer.Option(None, "--log-level", help="Logging level (default: INFO)"),
    log_file: Optional[Path] = typer.Option(None, "--log-file", help="Also write logs to this file"),
    dry_run: bool = typer.Option(False, "--dry-run", help="Print the playlist instead of writing it"),
) -> None:
    """Scan a directory and write a playlist of the matching tracks."""
    cli_overrides: dict[str, Any] = {
        "dir": base_dir,
        "format": select_format,
        "filter_prefix": filter_prefix,
        "filter_suffix": filter_suffix,
        "filter_contains": filter_contains,
        "filter_title_contains": filter_title_contains,
        "output": output,
        "log_level": log_level,
        "log_file": log_file,
    }

    try:
        cfg = _build_config(config, cli_overrides)
    except UsageError as e:
        typer.echo(ctx.get_help(), err=True)
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)
    except ValueError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)

    setup_logging(cfg.log_level, cfg.log_file)

    # Fail fast if ffprobe is not installed
    try:
        check_ffprobe_available()
    except RuntimeError as e:
        logger.error("%s", e)
        raise typer.Exit(code=1)

    logger.info("walkmanlist v%s, scanning %s", __version__, cfg.base_dir)
    logger.debug("Format: %s, filter: %s", cfg.format or "any supported", cfg.name_filter)

    _run_generate(cfg, dry_run=dry_run)


def _run_generate(cfg: PlaylistConfig, *, dry_run: bool = False) -> None:
    """Walk, render and write the playlist for cfg."""
    try:
        matches = walk_directory(cfg)
    except OSError as e:
        logger.error("Failed to scan %s: %s", cfg.base_dir, e)
        raise typer.Exit(code=1)

    if not matches:
        typer.echo("no music files found after filtering, exit", err=True)
        raise typer.Exit(code=1)

    logger.info("Found %d matching tracks", len(matches))
    content = render_playlist(matches, cfg.base_dir)

    if dry_run:
        logger.info("Dry-run mode: %s not written", cfg.output_path)
        typer.echo(content, nl=False)
        return

    try:
        write_playlist(content, cfg.output_path)
    except OSError as e:
        logger.error("Failed to write %s: %s", cfg.output_path, e)
        raise typer.Exit(code=1)

    typer.echo(f"done, {cfg.output_path} has been generated")


@app.command()
def version() -> None:
    """Show the walkmanlist version."""
    typer.echo(f"walkmanlist {__version__}")
