"""
Core data types for the feed collector.

This module defines the structures shared by every pipeline stage:
- Entry: One normalized feed item, immutable once created
- Archive: The persisted, deduplicated collection of entries
- WeekBucket: ISO (year, week) grouping key used by the digest
- DigestPage: Structured input handed to the rendering function
"""

from __future__ import annotations

from dataclasses import dataclass, field


UNTITLED = "Untitled"


@dataclass(frozen=True)
class Entry:
    """A single feed item.

    Attributes:
        title: The item headline, never empty (defaults to "Untitled")
        link: The item URL, unique key within an archive
        description: Optional summary text, may be empty
        published: UTC timestamp in RFC 3339 form (e.g. "2025-02-28T10:00:00Z")
    """
    title: str
    link: str
    published: str
    description: str = ""

    def to_dict(self) -> dict[str, str]:
        """Serialize with stable field order, omitting empty fields."""
        data = {
            "title": self.title,
            "link": self.link,
            "description": self.description,
            "published": self.published,
        }
        return {key: value for key, value in data.items() if value}


@dataclass
class Archive:
    """Deduplicated collection of entries sorted ascending by published.

    The `links` set mirrors the links of `items` and is only used for
    duplicate checks. It is rebuilt on load and never persisted.

    Attributes:
        title: Archive title, adopted from the feed channel title
        updated: RFC 3339 time of the last merge that added items, or None
        items: Entries ordered by published (stable for equal values)
    """
    title: str = ""
    updated: str | None = None
    items: list[Entry] = field(default_factory=list)
    links: set[str] = field(default_factory=set, repr=False, compare=False)

    def rebuild_links(self) -> None:
        self.links = {item.link for item in self.items}

    def has_link(self, link: str) -> bool:
        return link in self.links

    def to_dict(self) -> dict[str, object]:
        return {
            "title": self.title,
            "updated": self.updated,
            "items": [item.to_dict() for item in self.items],
        }


@dataclass(frozen=True, order=True)
class WeekBucket:
    """ISO calendar week used to group entries into weekly documents."""
    year: int
    week: int

    @property
    def key(self) -> str:
        """File identifier in YYYY-WW form, e.g. "2025-09"."""
        return f"{self.year}-{self.week:02d}"

    @property
    def label(self) -> str:
        """ISO 8601 week notation, e.g. "2025-W09"."""
        return f"{self.year}-W{self.week:02d}"


@dataclass
class DigestPage:
    """Everything the renderer needs for one document.

    Attributes:
        title: Document heading (week key, or the archive title for the summary)
        user_name: Display name of the archive owner
        items: Entries listed in the document, in published order
        count: Total archive size (summary) or bucket size (weekly)
        updated: Archive last-update time, if any
    """
    title: str
    user_name: str
    items: list[Entry]
    count: int
    updated: str | None = None
