"""
Main pipeline orchestration for the feed collector.

This module coordinates the whole run, strictly in sequence:
1. Load the stored archive
2. Fetch the feed
3. Parse it into entries
4. Merge new entries into the archive (saved only if something was added)
5. Render the weekly digest and summary from the final archive
6. Write the documents

Any stage failure raises a CollectorError subclass. Fetch and parse run
before the archive is written, so their failures leave storage untouched.
"""

from __future__ import annotations

from dataclasses import dataclass, field
import logging
from pathlib import Path

from rich.console import Console

from .config import AppConfig
from .core.archive import ArchiveStore
from .core.types import Archive
from .errors import ConfigError
from .fetch.fetcher import FeedFetcher
from .input.rss_parser import parse_feed
from .logging_utils import log_event, setup_logging
from .output.digest import generate, write_digest
from .output.renderer import MarkdownRenderer


@dataclass
class RunResult:
    """Outcome of one pipeline run.

    Attributes:
        added: Number of entries added to the archive
        total: Archive size after the merge
        changed: Whether the archive file was rewritten
        documents: Paths of all generated documents
    """
    added: int = 0
    total: int = 0
    changed: bool = False
    documents: list[Path] = field(default_factory=list)


def run_pipeline(
    cfg: AppConfig,
    console: Console | None = None,
    fetcher: FeedFetcher | None = None,
) -> RunResult:
    """Run fetch, merge and digest generation once.

    Args:
        cfg: Application configuration; cfg.feed.url must be set
        console: Rich console for status output (creates default if None)
        fetcher: Fetcher to use instead of one built from cfg.feed

    Returns:
        RunResult describing what changed

    Raises:
        ConfigError: If no feed URL is configured
        CollectorError: Any fetch, parse, storage or digest failure
    """
    if not cfg.feed.url:
        raise ConfigError("feed URL is required (set RSS_URL or --url)")

    console = console or Console()
    output_dir = Path(cfg.digest.output_dir)
    logger = setup_logging(cfg.logging, output_dir)
    store = ArchiveStore(Path(cfg.storage.path))
    fetcher = fetcher or FeedFetcher(
        timeout=cfg.feed.timeout_seconds,
        max_bytes=cfg.feed.max_bytes,
        user_agent=cfg.feed.user_agent,
        trust_env=cfg.feed.trust_env,
    )

    log_event(logger, "Pipeline start", event="pipeline_start", url=cfg.feed.url, storage=str(store.path))

    archive = store.load()
    before = len(archive.items)
    log_event(logger, f"Loaded {before} archived items", event="archive_loaded", total=before)

    with console.status("Fetching feed..."):
        raw = fetcher.fetch(cfg.feed.url)
    log_event(logger, f"Fetched {len(raw)} bytes", event="fetch_done", bytes=len(raw))

    feed = parse_feed(raw)
    log_event(
        logger,
        f"Parsed {len(feed.entries)} entries",
        event="parse_done",
        entries=len(feed.entries),
        skipped=feed.skipped,
    )

    archive, changed = store.merge(archive, feed.entries, title=feed.title)
    result = RunResult(added=len(archive.items) - before, total=len(archive.items), changed=changed)
    log_event(
        logger,
        f"Merged {result.added} new entries ({result.total} total)",
        event="merge_done",
        added=result.added,
        total=result.total,
        changed=changed,
    )

    if changed:
        store.save(archive)
        log_event(logger, f"Saved archive to {store.path}", event="archive_saved", path=str(store.path))

    result.documents = _write_documents(archive, cfg, logger)
    return result


def rebuild_digest(cfg: AppConfig) -> list[Path]:
    """Regenerate all documents from the stored archive without fetching."""
    logger = setup_logging(cfg.logging, Path(cfg.digest.output_dir))
    archive = ArchiveStore(Path(cfg.storage.path)).load()
    return _write_documents(archive, cfg, logger)


def _write_documents(archive: Archive, cfg: AppConfig, logger: logging.Logger) -> list[Path]:
    digest = cfg.digest
    renderer = MarkdownRenderer(weekly_dir=digest.weekly_dir)
    documents = generate(archive, digest.week_offset_hours, digest.user_name, render=renderer)
    written = write_digest(
        documents,
        Path(digest.output_dir),
        weekly_dir=digest.weekly_dir,
        index_name=digest.index_name,
        extension=digest.extension,
    )
    log_event(
        logger,
        f"Wrote {len(written)} digest documents",
        event="digest_written",
        weeks=len(written) - 1,
        documents=len(written),
    )
    return written
