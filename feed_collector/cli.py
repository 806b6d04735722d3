"""
Command-line interface for the feed collector.

Uses Typer to provide a CLI with options for the main configuration
settings. Each option can also come from an environment variable, and a
.env file is loaded first when present.
"""

from __future__ import annotations

from pathlib import Path

from dotenv import load_dotenv
import typer
from rich.console import Console
from rich.markup import escape

from .config import AppConfig, load_config
from .errors import CollectorError, ConfigError
from .runner import rebuild_digest, run_pipeline

app = typer.Typer(add_completion=False)
console = Console()


def _apply_overrides(
    cfg: AppConfig,
    *,
    url: str | None = None,
    storage: Path | None = None,
    output: Path | None = None,
    user_name: str | None = None,
    week_offset: int | None = None,
    log_level: str | None = None,
    log_file: bool | None = None,
) -> AppConfig:
    if url:
        cfg.feed.url = url
    if storage is not None:
        cfg.storage.path = str(storage)
    if output is not None:
        cfg.digest.output_dir = str(output)
    if user_name:
        cfg.digest.user_name = user_name
    if week_offset is not None:
        cfg.digest.week_offset_hours = week_offset
    if log_level:
        cfg.logging.level = log_level
    if log_file is not None:
        cfg.logging.file = log_file
    return cfg


def _report(exc: CollectorError) -> int:
    """Print a pipeline failure and return the process exit code."""
    console.print(f"[bold red]error:[/bold red] {escape(str(exc))}")
    return 2 if isinstance(exc, ConfigError) else 1


@app.command()
def run(
    url: str | None = typer.Option(None, "--url", "-u", envvar="RSS_URL", help="RSS feed URL."),
    storage: Path | None = typer.Option(None, "--storage", "-s", help="Archive JSON file."),
    output: Path | None = typer.Option(None, "--output", "-o", help="Base directory for documents."),
    config: Path | None = typer.Option(None, "--config", "-c", exists=True, readable=True),
    user_name: str | None = typer.Option(
        None, "--user-name", envvar="USERNAME", help="Display name shown in the documents."
    ),
    week_offset: int | None = typer.Option(
        None,
        "--week-offset",
        envvar="WEEK_OFFSET",
        help="Hours added before computing the ISO week (47 = Saturday 01:00 cut-off).",
    ),
    log_level: str | None = typer.Option(None, "--log-level", help="Logging level."),
    log_file: bool | None = typer.Option(
        None, "--log-file/--no-log-file", help="Enable or disable file logging."
    ),
):
    """Fetch the feed, merge new items into the archive and rebuild the digest."""
    try:
        cfg = _apply_overrides(
            load_config(str(config) if config else None),
            url=url,
            storage=storage,
            output=output,
            user_name=user_name,
            week_offset=week_offset,
            log_level=log_level,
            log_file=log_file,
        )
        result = run_pipeline(cfg, console=console)
    except CollectorError as exc:
        raise typer.Exit(code=_report(exc)) from exc

    if result.changed:
        console.print(f"Added {result.added} items ({result.total} total)")
    else:
        console.print(f"No new items ({result.total} total)")
    console.print(f"Digest written: {len(result.documents)} documents")


@app.command()
def digest(
    storage: Path | None = typer.Option(None, "--storage", "-s", help="Archive JSON file."),
    output: Path | None = typer.Option(None, "--output", "-o", help="Base directory for documents."),
    config: Path | None = typer.Option(None, "--config", "-c", exists=True, readable=True),
    user_name: str | None = typer.Option(None, "--user-name", envvar="USERNAME"),
    week_offset: int | None = typer.Option(None, "--week-offset", envvar="WEEK_OFFSET"),
):
    """Rebuild the digest documents from the stored archive without fetching."""
    try:
        cfg = _apply_overrides(
            load_config(str(config) if config else None),
            storage=storage,
            output=output,
            user_name=user_name,
            week_offset=week_offset,
        )
        written = rebuild_digest(cfg)
    except CollectorError as exc:
        raise typer.Exit(code=_report(exc)) from exc

    console.print(f"Digest written: {len(written)} documents")


@app.callback()
def main() -> None:
    """Collect an RSS feed into a JSON archive and weekly markdown digests."""
    load_dotenv()


if __name__ == "__main__":
    app()
