"""
Bounded-time, bounded-size HTTP retrieval of a feed document.

The fetcher performs exactly one request per call and never retries; any
failure is raised as FetchError so the run stops before storage is touched.
"""

from __future__ import annotations

import logging
from urllib.parse import urlparse

import httpx

from ..errors import FetchError


DEFAULT_TIMEOUT = 30.0
DEFAULT_MAX_BYTES = 10 * 1024 * 1024
DEFAULT_USER_AGENT = "feed-collector/0.1"

logger = logging.getLogger("feed_collector.fetch")


class FeedFetcher:
    """Fetches raw feed bytes over HTTP(S).

    A client may be injected to reuse connections across calls or to
    substitute a transport in tests. When none is given, a client is
    created per call and closed afterwards.

    Attributes:
        timeout: Request timeout in seconds (connect, read, write and pool)
        max_bytes: Largest accepted response body
        user_agent: User-Agent header string
        trust_env: Whether to respect system proxy settings
    """

    def __init__(
        self,
        timeout: float = DEFAULT_TIMEOUT,
        max_bytes: int = DEFAULT_MAX_BYTES,
        user_agent: str = DEFAULT_USER_AGENT,
        trust_env: bool = True,
        client: httpx.Client | None = None,
    ):
        self.timeout = timeout
        self.max_bytes = max_bytes
        self.user_agent = user_agent
        self.trust_env = trust_env
        self._client = client

    def fetch(self, url: str) -> bytes:
        """Download the document at url.

        Args:
            url: Absolute http:// or https:// URL

        Returns:
            The raw response body

        Raises:
            FetchError: On an invalid URL, network error, timeout, non-2xx
                status, or a body larger than max_bytes
        """
        _validate_url(url)

        if self._client is not None:
            return self._fetch_with(self._client, url)

        with httpx.Client(
            timeout=self.timeout,
            follow_redirects=True,
            trust_env=self.trust_env,
        ) as client:
            return self._fetch_with(client, url)

    def _fetch_with(self, client: httpx.Client, url: str) -> bytes:
        headers = {"User-Agent": self.user_agent}
        try:
            with client.stream(
                "GET",
                url,
                headers=headers,
                timeout=self.timeout,
                follow_redirects=True,
            ) as resp:
                if not resp.is_success:
                    raise FetchError(
                        f"feed returned status {resp.status_code}",
                        url=url,
                        status_code=resp.status_code,
                    )
                body = self._read_capped(resp, url)
        except httpx.TimeoutException as exc:
            raise FetchError(f"timed out fetching feed: {exc}", url=url) from exc
        except httpx.InvalidURL as exc:
            raise FetchError(f"not an HTTP(S) URL: {url!r}: {exc}", url=url) from exc
        except httpx.HTTPError as exc:
            raise FetchError(f"failed to fetch feed: {type(exc).__name__}: {exc}", url=url) from exc

        logger.debug("Fetched %d bytes from %s", len(body), url)
        return body

    def _read_capped(self, resp: httpx.Response, url: str) -> bytes:
        chunks: list[bytes] = []
        size = 0
        for chunk in resp.iter_bytes():
            size += len(chunk)
            if size > self.max_bytes:
                raise FetchError(
                    f"feed response exceeds {self.max_bytes} bytes",
                    url=url,
                    status_code=resp.status_code,
                )
            chunks.append(chunk)
        return b"".join(chunks)


def fetch_feed(
    url: str,
    timeout: float = DEFAULT_TIMEOUT,
    max_bytes: int = DEFAULT_MAX_BYTES,
    user_agent: str = DEFAULT_USER_AGENT,
    trust_env: bool = True,
) -> bytes:
    """Fetch a feed with a one-off client. See FeedFetcher.fetch."""
    fetcher = FeedFetcher(
        timeout=timeout,
        max_bytes=max_bytes,
        user_agent=user_agent,
        trust_env=trust_env,
    )
    return fetcher.fetch(url)


def _validate_url(url: str) -> None:
    try:
        parsed = urlparse(url)
    except ValueError as exc:
        raise FetchError(f"not an HTTP(S) URL: {url!r}: {exc}", url=url) from exc
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        raise FetchError(f"not an HTTP(S) URL: {url!r}", url=url)
