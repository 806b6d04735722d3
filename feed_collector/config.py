"""
Configuration management using YAML files and dataclasses.

This module defines all configuration dataclasses and provides loading
from YAML files with defaults. Configuration sections:
- FeedConfig: Feed URL and HTTP fetching limits
- StorageConfig: Location of the archive file
- DigestConfig: Week boundary offset, display name and output layout
- LoggingConfig: Logging behavior
- AppConfig: Root configuration container
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any

import yaml

from .errors import ConfigError
from .fetch.fetcher import DEFAULT_MAX_BYTES, DEFAULT_TIMEOUT, DEFAULT_USER_AGENT


@dataclass
class FeedConfig:
    """Configuration for the feed source.

    Attributes:
        url: RSS feed URL (http or https)
        timeout_seconds: HTTP request timeout
        max_bytes: Maximum accepted response size
        user_agent: HTTP User-Agent header string
        trust_env: Whether to respect system proxy settings
    """

    url: str | None = None
    timeout_seconds: float = DEFAULT_TIMEOUT
    max_bytes: int = DEFAULT_MAX_BYTES
    user_agent: str = DEFAULT_USER_AGENT
    trust_env: bool = True


@dataclass
class StorageConfig:
    """Configuration for archive persistence.

    Attributes:
        path: Path of the archive JSON file
    """

    path: str = "data.json"


@dataclass
class DigestConfig:
    """Configuration for digest generation.

    Attributes:
        user_name: Display name shown in the documents
        week_offset_hours: Hours added before computing the ISO week
            (47 ends the week on Saturday 01:00, 0 on Monday 00:00)
        output_dir: Base directory for generated documents
        weekly_dir: Subdirectory of output_dir for weekly documents
        index_name: File name of the summary document in output_dir
        extension: File extension of weekly documents
    """

    user_name: str = ""
    week_offset_hours: int = 47
    output_dir: str = "."
    weekly_dir: str = "data"
    index_name: str = "README.md"
    extension: str = ".md"


@dataclass
class LoggingConfig:
    """Configuration for logging behavior.

    Attributes:
        level: Logging level ("DEBUG", "INFO", "WARNING", "ERROR")
        console: Whether to log to console
        file: Whether to log to file
        format: Log file format ("jsonl" or "plain")
        filename: Name of the log file, relative to the output directory
    """

    level: str = "INFO"
    console: bool = True
    file: bool = False
    format: str = "jsonl"
    filename: str = "run.jsonl"


@dataclass
class AppConfig:
    """Root configuration container aggregating all config sections."""

    feed: FeedConfig = field(default_factory=FeedConfig)
    storage: StorageConfig = field(default_factory=StorageConfig)
    digest: DigestConfig = field(default_factory=DigestConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


def load_config(path: str | None) -> AppConfig:
    """Load configuration from a YAML file with defaults.

    Raises:
        ConfigError: If the file cannot be read, is not valid YAML, or
            contains unknown settings or sections of the wrong shape
    """
    if not path:
        return AppConfig()

    try:
        with open(path, "r", encoding="utf-8") as f:
            raw = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as exc:
        raise ConfigError(f"cannot load config {path}: {exc}") from exc

    if not isinstance(raw, dict):
        raise ConfigError(f"config {path} must be a mapping of sections")

    try:
        return _merge_config(AppConfig(), raw)
    except TypeError as exc:
        raise ConfigError(f"invalid setting in config {path}: {exc}") from exc


def _merge_config(base: AppConfig, raw: dict[str, Any]) -> AppConfig:
    """Merge raw YAML config into base AppConfig."""
    data = asdict(base)
    for key, value in raw.items():
        if key not in data:
            continue
        if isinstance(value, dict) and isinstance(data[key], dict):
            data[key].update(value)
        else:
            data[key] = value
    return _fromdict(data)


def _fromdict(data: dict[str, Any]) -> AppConfig:
    """Reconstruct AppConfig from nested dictionary."""
    return AppConfig(
        feed=FeedConfig(**data["feed"]),
        storage=StorageConfig(**data["storage"]),
        digest=DigestConfig(**data["digest"]),
        logging=LoggingConfig(**data["logging"]),
    )
