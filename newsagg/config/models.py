"""Configuration models."""

from typing import Optional

from pydantic import BaseModel, Field

from ..models import Language


class PostgresConfig(BaseModel):
    """Postgres configuration."""

    host: str = Field("localhost", description="Database host")
    port: int = Field(5432, description="Database port")
    database: str = Field("newsagg", description="Database name")
    user: str = Field("newsagg", description="Database user")
    password: Optional[str] = Field(None, description="Database password")
    password_env: Optional[str] = Field(
        "NEWSAGG_DB_PASSWORD", description="Environment variable for password"
    )
    url_env: Optional[str] = Field(
        "DATABASE_URL",
        description="Environment variable holding a full connection URL; wins when set",
    )
    pool_size: int = Field(10, description="Maximum pooled connections", ge=1)


class SyncSettings(BaseModel):
    """Tunables for a sync run."""

    fetch_timeout: float = Field(10.0, description="Per-feed HTTP timeout (seconds)", gt=0)
    retention_hours: int = Field(24, description="Freshness window (hours)", ge=1)
    interval_minutes: int = Field(5, description="Interval for the watch command", ge=1)
    max_concurrent: int = Field(10, description="Feeds fetched at once", ge=1, le=100)
    run_timeout: Optional[float] = Field(
        120.0, description="Overall deadline for one run (seconds), null to disable"
    )
    user_agent: str = Field("newsagg/1.0 (News Aggregator)", description="HTTP User-Agent")


class ConfigModel(BaseModel):
    """Main configuration model."""

    postgres: PostgresConfig = Field(default_factory=PostgresConfig)
    sync: SyncSettings = Field(default_factory=SyncSettings)


class FeedConfig(BaseModel):
    """Feed configuration from feeds.yaml."""

    name: str = Field(..., description="Publisher label stored as the article source", min_length=1)
    url: str = Field(..., description="RSS feed URL", min_length=1)
    language: Language = Field(Language.EN, description="Language of the feed")
    enabled: bool = Field(True, description="Whether feed is synced")
