"""
Error taxonomy for the collector pipeline.

Every failure surfaced by a pipeline stage is a subclass of CollectorError,
so the CLI can report it and exit non-zero without inspecting library
exceptions. The underlying library exception is always chained as __cause__.
"""

from __future__ import annotations


class CollectorError(Exception):
    """Base class for all attributable pipeline failures."""


class ConfigError(CollectorError):
    """Missing or invalid run configuration (e.g. no feed URL)."""


class FetchError(CollectorError):
    """Network failure, non-2xx status, timeout or oversized feed response."""

    def __init__(self, message: str, url: str | None = None, status_code: int | None = None):
        super().__init__(message)
        self.url = url
        self.status_code = status_code


class ParseError(CollectorError):
    """Malformed feed document or an unparseable publication date."""


class CorruptStorageError(CollectorError):
    """Persisted archive exists but is not a valid archive document."""


class StorageWriteError(CollectorError):
    """I/O failure while atomically persisting a file."""


class DigestError(CollectorError):
    """An archive item could not be bucketed into a calendar week."""
