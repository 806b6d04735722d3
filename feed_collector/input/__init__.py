"""
Feed input parsing.

This package turns raw syndication documents into normalized entries.
"""

from .rss_parser import PUB_DATE_FORMATS, ParsedFeed, normalize_pub_date, parse, parse_feed

__all__ = [
    "PUB_DATE_FORMATS",
    "ParsedFeed",
    "normalize_pub_date",
    "parse",
    "parse_feed",
]
