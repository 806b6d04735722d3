"""Tests for YAML configuration loading."""

from pathlib import Path

import pytest

from feed_collector.config import AppConfig, load_config
from feed_collector.errors import ConfigError


def test_load_config_without_path_returns_defaults():
    cfg = load_config(None)

    assert cfg == AppConfig()
    assert cfg.feed.timeout_seconds == 30.0
    assert cfg.feed.max_bytes == 10 * 1024 * 1024
    assert cfg.digest.week_offset_hours == 47
    assert cfg.storage.path == "data.json"


def test_load_config_returns_fresh_instances():
    first = load_config(None)
    first.feed.url = "https://example.com/rss"

    assert load_config(None).feed.url is None


def test_load_config_merges_sections(tmp_path: Path):
    path = tmp_path / "config.yaml"
    path.write_text(
        "feed:\n"
        "  url: https://example.com/rss\n"
        "digest:\n"
        "  week_offset_hours: 0\n"
        "  user_name: reader\n"
        "unknown_section:\n"
        "  ignored: true\n",
        encoding="utf-8",
    )

    cfg = load_config(str(path))

    assert cfg.feed.url == "https://example.com/rss"
    assert cfg.feed.timeout_seconds == 30.0
    assert cfg.digest.week_offset_hours == 0
    assert cfg.digest.user_name == "reader"
    assert cfg.digest.index_name == "README.md"


def test_load_config_empty_file(tmp_path: Path):
    path = tmp_path / "config.yaml"
    path.write_text("", encoding="utf-8")

    assert load_config(str(path)) == AppConfig()


def test_load_config_invalid_yaml_raises(tmp_path: Path):
    path = tmp_path / "config.yaml"
    path.write_text("feed: [unclosed\n", encoding="utf-8")

    with pytest.raises(ConfigError):
        load_config(str(path))


def test_load_config_unknown_setting_raises(tmp_path: Path):
    path = tmp_path / "config.yaml"
    path.write_text("feed:\n  adress: https://example.com/rss\n", encoding="utf-8")

    with pytest.raises(ConfigError, match="adress"):
        load_config(str(path))


def test_load_config_non_mapping_raises(tmp_path: Path):
    path = tmp_path / "config.yaml"
    path.write_text("- feed\n- digest\n", encoding="utf-8")

    with pytest.raises(ConfigError):
        load_config(str(path))
