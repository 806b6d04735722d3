"""Integration tests for the full pipeline with a mocked HTTP transport."""

from pathlib import Path

import httpx
import pytest
from rich.console import Console

from feed_collector.config import AppConfig
from feed_collector.errors import ConfigError, CorruptStorageError, FetchError, ParseError
from feed_collector.fetch.fetcher import FeedFetcher
from feed_collector.runner import rebuild_digest, run_pipeline


def _config(tmp_path: Path, offset: int = 0) -> AppConfig:
    cfg = AppConfig()
    cfg.feed.url = "https://example.com/rss"
    cfg.storage.path = str(tmp_path / "data.json")
    cfg.digest.output_dir = str(tmp_path / "site")
    cfg.digest.user_name = "juev"
    cfg.digest.week_offset_hours = offset
    cfg.logging.console = False
    return cfg


def _fetcher(body: bytes, status: int = 200) -> FeedFetcher:
    transport = httpx.MockTransport(lambda request: httpx.Response(status, content=body))
    return FeedFetcher(client=httpx.Client(transport=transport))


def _quiet() -> Console:
    return Console(quiet=True)


def test_first_run_creates_archive_and_documents(tmp_path: Path, feed_bytes):
    cfg = _config(tmp_path)

    result = run_pipeline(cfg, console=_quiet(), fetcher=_fetcher(feed_bytes))

    assert result.changed is True
    assert result.added == 3
    assert result.total == 3
    site = tmp_path / "site"
    assert sorted(p.name for p in (site / "data").iterdir()) == ["2025-09.md", "2025-10.md"]
    readme = (site / "README.md").read_text(encoding="utf-8")
    assert readme.startswith("# Instapaper: Unread\n")
    assert "(2/3 items)" in readme
    assert "Article Three" in readme
    assert "Article One" not in readme
    assert len(result.documents) == 3


def test_second_run_is_byte_stable(tmp_path: Path, feed_bytes):
    cfg = _config(tmp_path)
    run_pipeline(cfg, console=_quiet(), fetcher=_fetcher(feed_bytes))
    archive_path = Path(cfg.storage.path)
    first = archive_path.read_bytes()
    first_mtime = archive_path.stat().st_mtime_ns

    result = run_pipeline(cfg, console=_quiet(), fetcher=_fetcher(feed_bytes))

    assert result.changed is False
    assert result.added == 0
    assert archive_path.read_bytes() == first
    assert archive_path.stat().st_mtime_ns == first_mtime
    assert len(result.documents) == 3


def test_fetch_error_leaves_storage_untouched(tmp_path: Path, feed_bytes):
    cfg = _config(tmp_path)
    run_pipeline(cfg, console=_quiet(), fetcher=_fetcher(feed_bytes))
    before = Path(cfg.storage.path).read_bytes()

    with pytest.raises(FetchError):
        run_pipeline(cfg, console=_quiet(), fetcher=_fetcher(b"", status=502))

    assert Path(cfg.storage.path).read_bytes() == before


def test_parse_error_writes_nothing(tmp_path: Path):
    cfg = _config(tmp_path)

    with pytest.raises(ParseError):
        run_pipeline(cfg, console=_quiet(), fetcher=_fetcher(b"<rss><channel>"))

    assert not Path(cfg.storage.path).exists()
    assert not (tmp_path / "site").exists()


def test_corrupt_storage_is_fatal(tmp_path: Path, feed_bytes):
    cfg = _config(tmp_path)
    Path(cfg.storage.path).write_text("not json", encoding="utf-8")

    with pytest.raises(CorruptStorageError):
        run_pipeline(cfg, console=_quiet(), fetcher=_fetcher(feed_bytes))

    assert Path(cfg.storage.path).read_text(encoding="utf-8") == "not json"


def test_missing_url_is_config_error(tmp_path: Path):
    cfg = _config(tmp_path)
    cfg.feed.url = None

    with pytest.raises(ConfigError):
        run_pipeline(cfg, console=_quiet())


def test_week_offset_changes_partitioning(tmp_path: Path, feed_bytes):
    """A Monday 09:00 item falls back into week 9 when the cut moves to Monday 10:00."""
    cfg = _config(tmp_path, offset=-10)

    run_pipeline(cfg, console=_quiet(), fetcher=_fetcher(feed_bytes))

    weekly = sorted(p.name for p in (tmp_path / "site" / "data").iterdir())
    assert weekly == ["2025-09.md", "2025-10.md"]
    week9 = (tmp_path / "site" / "data" / "2025-09.md").read_text(encoding="utf-8")
    assert "Article One" in week9
    assert "Article Two" in week9
    assert "Article Three" not in week9


def test_rebuild_digest_uses_stored_archive(tmp_path: Path, feed_bytes):
    cfg = _config(tmp_path)
    run_pipeline(cfg, console=_quiet(), fetcher=_fetcher(feed_bytes))
    (tmp_path / "site" / "README.md").unlink()

    written = rebuild_digest(cfg)

    assert (tmp_path / "site" / "README.md").exists()
    assert len(written) == 3
