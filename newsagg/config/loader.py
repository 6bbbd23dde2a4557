"""Configuration loader."""

import os
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml
from pydantic import ValidationError
from rich.console import Console

from .models import ConfigModel, FeedConfig, SyncSettings

console = Console(stderr=True)


class Config:
    """Configuration manager."""

    def __init__(self, config_path: Optional[Path] = None) -> None:
        """Initialize config manager."""
        if config_path is None:
            env_path = os.environ.get("NEWSAGG_CONFIG")
            if env_path:
                config_path = Path(env_path).expanduser()
            else:
                config_path = Path.home() / ".config" / "newsagg" / "config.yaml"
        self.config_path = config_path
        self._config: Optional[ConfigModel] = None

    @property
    def config(self) -> ConfigModel:
        """Get loaded config."""
        if self._config is None:
            self._config = load_config(self.config_path)
        return self._config

    @property
    def feeds_path(self) -> Path:
        """Path of the feeds file next to the config file."""
        return self.config_path.parent / "feeds.yaml"

    def get_feeds(self) -> List[FeedConfig]:
        """Load the configured feeds."""
        return load_feeds(self.feeds_path)

    def get_sync_settings(self) -> SyncSettings:
        """Get sync tunables."""
        return self.config.sync

    def get_db_config(self) -> Dict[str, Any]:
        """Get database configuration dict."""
        db_config = self.config.postgres.model_dump()

        # Handle password from environment if specified
        if db_config.get("password_env"):
            password = os.environ.get(db_config["password_env"])
            if password:
                db_config["password"] = password

        if db_config.get("url_env"):
            url = os.environ.get(db_config["url_env"])
            if url:
                db_config["url"] = url

        return db_config


def load_config(config_path: Path) -> ConfigModel:
    """Load configuration from YAML file."""
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    try:
        with open(config_path, encoding="utf-8") as f:
            config_data = yaml.safe_load(f)

        if config_data is None:
            config_data = {}

        return ConfigModel(**config_data)
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML in config file: {e}")
    except ValidationError as e:
        raise ValueError(f"Invalid configuration: {e}")


def load_feeds(feeds_path: Path) -> List[FeedConfig]:
    """Load feeds from YAML file."""
    if not feeds_path.exists():
        raise FileNotFoundError(f"Feeds file not found: {feeds_path}")

    try:
        with open(feeds_path, encoding="utf-8") as f:
            feeds_data = yaml.safe_load(f)

        if feeds_data is None or "feeds" not in feeds_data:
            return []

        feeds = []
        for feed_data in feeds_data["feeds"]:
            try:
                feeds.append(FeedConfig(**feed_data))
            except ValidationError as e:
                console.print(
                    f"[yellow]Skipping invalid feed {feed_data.get('name', 'unknown')}: {e}[/yellow]"
                )

        return feeds
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML in feeds file: {e}")


def save_config(config: ConfigModel, config_path: Path) -> None:
    """Save configuration to YAML file."""
    config_path.parent.mkdir(parents=True, exist_ok=True)

    with open(config_path, "w", encoding="utf-8") as f:
        yaml.dump(config.model_dump(mode="json"), f, default_flow_style=False, sort_keys=False)


def save_feeds(feeds: List[FeedConfig], feeds_path: Path) -> None:
    """Save feeds to YAML file."""
    feeds_path.parent.mkdir(parents=True, exist_ok=True)

    feeds_data = {"feeds": [feed.model_dump(mode="json") for feed in feeds]}

    with open(feeds_path, "w", encoding="utf-8") as f:
        yaml.dump(
            feeds_data,
            f,
            default_flow_style=False,
            sort_keys=False,
            allow_unicode=True,
        )
