"""
Core domain models and archive storage.

This package contains data types and the archive store, independent
of how feeds are fetched or how digests are rendered.
"""

from .types import Archive, DigestPage, Entry, UNTITLED, WeekBucket
from .archive import ArchiveStore, dump_archive

__all__ = [
    "Archive",
    "ArchiveStore",
    "DigestPage",
    "Entry",
    "UNTITLED",
    "WeekBucket",
    "dump_archive",
]
