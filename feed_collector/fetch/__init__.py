"""
Feed fetching.

This package handles the bounded HTTP retrieval of the feed document.
"""

from .fetcher import DEFAULT_MAX_BYTES, DEFAULT_TIMEOUT, FeedFetcher, fetch_feed

__all__ = [
    "DEFAULT_MAX_BYTES",
    "DEFAULT_TIMEOUT",
    "FeedFetcher",
    "fetch_feed",
]
