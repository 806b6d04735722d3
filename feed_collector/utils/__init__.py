"""
Shared utility functions.

This package contains utility code used by both the archive store
and the digest writer.
"""

from .fs import atomic_write_text, utc_now_rfc3339

__all__ = [
    "atomic_write_text",
    "utc_now_rfc3339",
]
