"""
Digest output generation.

This package handles week bucketing and rendering of the digest documents.
"""

from .digest import (
    SUMMARY_ID,
    bucket_key,
    document_path,
    generate,
    iter_week_buckets,
    parse_rfc3339,
    write_digest,
)
from .renderer import MarkdownRenderer, Renderer

__all__ = [
    "SUMMARY_ID",
    "MarkdownRenderer",
    "Renderer",
    "bucket_key",
    "document_path",
    "generate",
    "iter_week_buckets",
    "parse_rfc3339",
    "write_digest",
]
