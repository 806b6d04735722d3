"""
RSS 2.0 parser producing normalized Entry objects.

The expected structure:
    <rss>
      <channel>
        <title>Feed title</title>
        <item>
          <title>...</title>          optional, defaults to "Untitled"
          <link>...</link>            required, items without one are skipped
          <description>...</description>
          <pubDate>...</pubDate>      required, see PUB_DATE_FORMATS
        </item>
      </channel>
    </rss>

Parsing is all-or-nothing: one malformed document or date fails the whole
batch with ParseError.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
import re
import xml.etree.ElementTree as ET

from ..core.types import UNTITLED, Entry
from ..errors import ParseError
from ..utils.fs import RFC3339_UTC


# (name, strptime pattern, zone style). "named" zones are split off and
# resolved through _ZONE_OFFSETS because strptime's %Z only knows UTC/GMT.
PUB_DATE_FORMATS: tuple[tuple[str, str, str], ...] = (
    ("RFC1123", "%a, %d %b %Y %H:%M:%S", "named"),
    ("RFC1123Z", "%a, %d %b %Y %H:%M:%S %z", "numeric"),
    ("RFC822", "%d %b %y %H:%M", "named"),
    ("RFC822Z", "%d %b %y %H:%M %z", "numeric"),
    ("RFC850", "%A, %d-%b-%y %H:%M:%S", "named"),
    ("RFC3339", "", "rfc3339"),
)

# RFC 822 section 5.1 zone names, in hours east of UTC.
_ZONE_OFFSETS = {
    "UT": 0,
    "UTC": 0,
    "GMT": 0,
    "Z": 0,
    "EST": -5,
    "EDT": -4,
    "CST": -6,
    "CDT": -5,
    "MST": -7,
    "MDT": -6,
    "PST": -8,
    "PDT": -7,
}

_ZONE_NAME_RE = re.compile(r"^[A-Za-z]{1,5}$")
_RFC3339_RE = re.compile(
    r"^\d{4}-\d{2}-\d{2}[Tt]\d{2}:\d{2}:\d{2}(\.\d+)?([Zz]|[+-]\d{2}:\d{2})$"
)


@dataclass
class ParsedFeed:
    """Result of parsing one feed document.

    Attributes:
        title: Channel title, empty if the feed has none
        entries: Normalized entries in document order
        skipped: Number of items dropped for an empty link
    """
    title: str = ""
    entries: list[Entry] = field(default_factory=list)
    skipped: int = 0


def parse(data: bytes) -> list[Entry]:
    """Parse a feed document into entries in document order."""
    return parse_feed(data).entries


def parse_feed(data: bytes) -> ParsedFeed:
    """Parse a feed document, keeping the channel title and skip count.

    Raises:
        ParseError: If the XML is malformed or an item's pubDate is missing
            or in none of the accepted formats
    """
    try:
        root = ET.fromstring(data)
    except ET.ParseError as exc:
        raise ParseError(f"failed to parse RSS: {exc}") from exc

    channel = root.find("channel")
    if channel is None:
        return ParsedFeed()

    feed = ParsedFeed(title=_text(channel, "title"))
    for item in channel.findall("item"):
        link = _text(item, "link")
        if not link:
            feed.skipped += 1
            continue

        pub_date = _text(item, "pubDate")
        if not pub_date:
            raise ParseError(f"item {link!r} has no pubDate")
        published = normalize_pub_date(pub_date)

        feed.entries.append(
            Entry(
                title=_text(item, "title") or UNTITLED,
                link=link,
                description=_text(item, "description"),
                published=published,
            )
        )

    return feed


def normalize_pub_date(value: str) -> str:
    """Convert a feed date to UTC RFC 3339 ("2025-02-28T10:00:00Z").

    Formats in PUB_DATE_FORMATS are tried in order; the first that parses
    wins.

    Raises:
        ParseError: If no accepted format matches
    """
    raw = value.strip()
    for _name, pattern, zone_style in PUB_DATE_FORMATS:
        parsed = _try_format(raw, pattern, zone_style)
        if parsed is not None:
            return parsed.astimezone(timezone.utc).strftime(RFC3339_UTC)
    raise ParseError(f"failed to parse pubDate {value!r}: unsupported date format")


def _try_format(raw: str, pattern: str, zone_style: str) -> datetime | None:
    if zone_style == "rfc3339":
        if not _RFC3339_RE.match(raw):
            return None
        normalized = raw.upper()
        if normalized.endswith("Z"):
            normalized = f"{normalized[:-1]}+00:00"
        try:
            return datetime.fromisoformat(normalized)
        except ValueError:
            return None

    if zone_style == "numeric":
        try:
            return datetime.strptime(raw, pattern)
        except ValueError:
            return None

    head, _, zone = raw.rpartition(" ")
    if not head or not _ZONE_NAME_RE.match(zone):
        return None
    try:
        parsed = datetime.strptime(head, pattern)
    except ValueError:
        return None
    offset = timedelta(hours=_ZONE_OFFSETS.get(zone.upper(), 0))
    return parsed.replace(tzinfo=timezone(offset))


def _text(element: ET.Element, tag: str) -> str:
    child = element.find(tag)
    if child is None:
        return ""
    return "".join(child.itertext()).strip()
