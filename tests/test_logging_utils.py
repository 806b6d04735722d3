"""Tests for logging setup and the JSONL formatter."""

import json
import logging
from pathlib import Path

from rich.logging import RichHandler

from feed_collector.config import LoggingConfig
from feed_collector.logging_utils import log_event, setup_logging


def test_setup_logging_console_only():
    logger = setup_logging(LoggingConfig(level="debug"), None)

    assert logger.name == "feed_collector"
    assert logger.level == logging.DEBUG
    assert logger.propagate is False
    assert [type(h) for h in logger.handlers] == [RichHandler]


def test_log_event_writes_jsonl(tmp_path: Path):
    cfg = LoggingConfig(console=False, file=True, format="jsonl", filename="run.jsonl")
    logger = setup_logging(cfg, tmp_path)

    log_event(logger, "Merged entries", event="merge_done", added=2, changed=True)
    for handler in logger.handlers:
        handler.flush()
        handler.close()

    lines = (tmp_path / "run.jsonl").read_text(encoding="utf-8").strip().split("\n")
    assert len(lines) == 1

    record = json.loads(lines[0])
    assert record["message"] == "Merged entries"
    assert record["event"] == "merge_done"
    assert record["added"] == 2
    assert record["changed"] is True
    assert record["level"] == "INFO"
    assert "timestamp" in record
    assert "pathname" not in record


def test_log_event_ignores_missing_logger():
    log_event(None, "nothing happens")


def test_plain_file_format(tmp_path: Path):
    cfg = LoggingConfig(console=False, file=True, format="plain", filename="run.log")
    logger = setup_logging(cfg, tmp_path)

    logger.warning("plain message")
    for handler in logger.handlers:
        handler.flush()
        handler.close()

    text = (tmp_path / "run.log").read_text(encoding="utf-8")
    assert "WARNING plain message" in text
