"""
Weekly digest generation.

Archive items are walked once in published order and grouped into ISO
calendar weeks after shifting each timestamp by a configurable number of
hours. The shift moves the week cut-off away from Monday 00:00 UTC: an
offset of 47 hours makes the week end on Saturday 01:00.

Every document is rendered in memory before anything is written, so a
corrupt timestamp aborts the run without touching the output directory.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
import logging
from pathlib import Path

from ..core.types import Archive, DigestPage, Entry, WeekBucket
from ..errors import DigestError
from ..utils.fs import atomic_write_text
from .renderer import MarkdownRenderer, Renderer


SUMMARY_ID = "index"

logger = logging.getLogger("feed_collector.digest")


def parse_rfc3339(value: str) -> datetime:
    """Parse a stored published timestamp into an aware UTC datetime.

    Naive values are taken as UTC.

    Raises:
        ValueError: If the value is not an ISO 8601 timestamp
    """
    raw = value.strip()
    if raw.endswith(("Z", "z")):
        raw = f"{raw[:-1]}+00:00"
    parsed = datetime.fromisoformat(raw)
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


def bucket_key(published: str, offset_hours: int = 0) -> WeekBucket:
    """Return the ISO week that published falls in after the offset shift.

    Raises:
        DigestError: If published is not a parseable timestamp, or the
            shifted instant falls outside the supported calendar range
    """
    try:
        instant = parse_rfc3339(published)
        year, week, _ = (instant + timedelta(hours=offset_hours)).isocalendar()
    except (ValueError, OverflowError) as exc:
        raise DigestError(f"cannot bucket published time {published!r}: {exc}") from exc

    return WeekBucket(year=year, week=week)


def iter_week_buckets(items: list[Entry], offset_hours: int = 0):
    """Yield (bucket, entries) for each contiguous run of same-week items.

    Items must already be sorted by published; unsorted input produces
    fragmented buckets.
    """
    current: WeekBucket | None = None
    bucket_items: list[Entry] = []

    for item in items:
        key = bucket_key(item.published, offset_hours)
        if key != current:
            if current is not None:
                yield current, bucket_items
            current = key
            bucket_items = []
        bucket_items.append(item)

    if current is not None:
        yield current, bucket_items


def generate(
    archive: Archive,
    offset_hours: int,
    user_name: str,
    render: Renderer | None = None,
) -> dict[str, str]:
    """Render one document per week bucket plus the summary document.

    Args:
        archive: Archive with items sorted ascending by published
        offset_hours: Hours added to each timestamp before taking its ISO week
        user_name: Display name passed to the renderer
        render: Rendering function; defaults to the markdown template

    Returns:
        Mapping of document identifier to text. Weekly identifiers ("YYYY-WW")
        come first in bucket order, followed by SUMMARY_ID.

    Raises:
        DigestError: If any item's published time cannot be parsed, or a
            week reappears after another week (items out of time order)
    """
    render = render or MarkdownRenderer()
    documents: dict[str, str] = {}
    last_items: list[Entry] = []

    for bucket, entries in iter_week_buckets(archive.items, offset_hours):
        if bucket.key in documents:
            raise DigestError(
                f"week {bucket.key} appears twice; archive items are not in time order"
            )
        page = DigestPage(
            title=bucket.key,
            user_name=user_name,
            items=entries,
            count=len(entries),
            updated=archive.updated,
        )
        documents[bucket.key] = render(page, False)
        last_items = entries

    summary = DigestPage(
        title=archive.title,
        user_name=user_name,
        items=list(last_items),
        count=len(archive.items),
        updated=archive.updated,
    )
    documents[SUMMARY_ID] = render(summary, True)

    logger.debug(
        "Generated %d weekly documents from %d items",
        len(documents) - 1,
        len(archive.items),
    )
    return documents


def document_path(
    doc_id: str,
    output_dir: Path,
    weekly_dir: str = "data",
    index_name: str = "README.md",
    extension: str = ".md",
) -> Path:
    """Map a document identifier to its file path under output_dir."""
    if doc_id == SUMMARY_ID:
        return output_dir / index_name
    return output_dir / weekly_dir / f"{doc_id}{extension}"


def write_digest(
    documents: dict[str, str],
    output_dir: Path,
    weekly_dir: str = "data",
    index_name: str = "README.md",
    extension: str = ".md",
) -> list[Path]:
    """Write rendered documents to disk, each through an atomic rename.

    Raises:
        StorageWriteError: If a document cannot be written
    """
    written: list[Path] = []
    for doc_id, text in documents.items():
        path = document_path(doc_id, output_dir, weekly_dir, index_name, extension)
        atomic_write_text(path, text)
        written.append(path)
    return written
