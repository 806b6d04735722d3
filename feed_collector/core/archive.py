"""Archive store: load, merge and atomically persist the item archive.

The archive is a single JSON document:

    {
        "title": "...",
        "updated": "2025-02-28T10:00:00Z",
        "items": [{"title": ..., "link": ..., "description": ..., "published": ...}]
    }

Items are kept sorted ascending by published and unique by link.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Callable, Iterable

from ..errors import CorruptStorageError
from ..utils.fs import atomic_write_text, utc_now_rfc3339
from .types import Archive, Entry


logger = logging.getLogger("feed_collector.archive")


class ArchiveStore:
    """Owns one persisted archive file for the duration of a run."""

    def __init__(self, path: Path, clock: Callable[[], str] = utc_now_rfc3339):
        """Initialize the store.

        Args:
            path: Location of the archive JSON file
            clock: Returns the current UTC time in RFC 3339 form
        """
        self.path = Path(path)
        self._clock = clock

    def load(self) -> Archive:
        """Read the archive, or return an empty one if the file is absent.

        Items with an empty link, and repeated links after the first
        occurrence, are dropped so the returned archive satisfies the
        uniqueness invariant.

        Raises:
            CorruptStorageError: If the file exists but cannot be read as an archive
        """
        if not self.path.exists():
            return Archive()

        try:
            raw = json.loads(self.path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as exc:
            raise CorruptStorageError(f"invalid JSON in {self.path}: {exc}") from exc
        except (OSError, UnicodeDecodeError) as exc:
            raise CorruptStorageError(f"cannot read {self.path}: {exc}") from exc

        if not isinstance(raw, dict):
            raise CorruptStorageError(f"{self.path}: archive must be a JSON object")

        raw_items = raw.get("items")
        if raw_items is None:
            raw_items = []
        if not isinstance(raw_items, list):
            raise CorruptStorageError(f"{self.path}: 'items' must be a list")

        archive = Archive(
            title=_as_str(raw.get("title")),
            updated=_as_str(raw.get("updated")) or None,
        )
        dropped = 0
        for index, raw_item in enumerate(raw_items):
            if not isinstance(raw_item, dict):
                raise CorruptStorageError(f"{self.path}: item {index} must be a JSON object")
            entry = _entry_from_dict(raw_item)
            if not entry.link.strip() or archive.has_link(entry.link):
                dropped += 1
                continue
            archive.items.append(entry)
            archive.links.add(entry.link)

        if dropped:
            logger.warning(
                "Dropped %d stored items with empty or duplicate links",
                dropped,
                extra={"event": "archive_load_dropped", "dropped": dropped, "path": str(self.path)},
            )
        return archive

    def merge(
        self,
        archive: Archive,
        entries: Iterable[Entry],
        title: str | None = None,
    ) -> tuple[Archive, bool]:
        """Add entries whose link is not yet archived.

        Duplicates inside `entries` are rejected too, since the link set is
        updated on each insertion. After any addition the items are stably
        re-sorted by published and `updated` is set to the current time.

        Args:
            archive: Archive to update in place
            entries: Candidate entries in feed order
            title: Channel title, adopted only when something was added and
                the archive has no title yet

        Returns:
            The archive and whether at least one entry was added
        """
        added = 0
        for entry in entries:
            if archive.has_link(entry.link):
                continue
            archive.items.append(entry)
            archive.links.add(entry.link)
            added += 1

        if not added:
            return archive, False

        archive.items.sort(key=lambda item: item.published)
        archive.updated = self._clock()
        if title and not archive.title:
            archive.title = title
        return archive, True

    def save(self, archive: Archive) -> None:
        """Persist the archive atomically.

        Raises:
            StorageWriteError: On any I/O failure; the previous file stays intact
        """
        atomic_write_text(self.path, dump_archive(archive))


def dump_archive(archive: Archive) -> str:
    """Serialize an archive as indented, human-diffable JSON."""
    return json.dumps(archive.to_dict(), indent=4, ensure_ascii=False) + "\n"


def _entry_from_dict(raw: dict[str, Any]) -> Entry:
    return Entry(
        title=_as_str(raw.get("title")),
        link=_as_str(raw.get("link")),
        description=_as_str(raw.get("description")),
        published=_as_str(raw.get("published")),
    )


def _as_str(value: Any) -> str:
    if value is None:
        return ""
    return value if isinstance(value, str) else str(value)
