"""Configuration management for the news aggregator."""

from .feeds import default_feeds
from .loader import Config, load_config, load_feeds, save_config, save_feeds
from .models import ConfigModel, FeedConfig, PostgresConfig, SyncSettings

__all__ = [
    "Config",
    "ConfigModel",
    "FeedConfig",
    "PostgresConfig",
    "SyncSettings",
    "default_feeds",
    "load_config",
    "load_feeds",
    "save_config",
    "save_feeds",
]
