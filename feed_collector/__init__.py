"""
Feed Collector - incremental RSS archive with weekly digests.

This package fetches an RSS feed, merges its items into a deduplicated
JSON archive, and renders the archive into one markdown document per
calendar week plus a rolling summary.

Main entry point is the CLI via `feed-collector run` command.

Example:
    $ RSS_URL=https://example.com/rss feed-collector run -o site/
"""

__all__ = [
    "__version__",
    "Archive",
    "ArchiveStore",
    "Entry",
    "FeedFetcher",
    "generate",
    "parse",
    "run_pipeline",
]
__version__ = "0.1.0"

from .core.archive import ArchiveStore
from .core.types import Archive, Entry
from .fetch.fetcher import FeedFetcher
from .input.rss_parser import parse
from .output.digest import generate
from .runner import run_pipeline
