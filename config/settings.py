"""Configuration management using pydantic-settings."""
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Origin sources
    json_url: str = ""
    livetxt_url: str = ""

    # Channel rules ("k1=v1,k2=v2" and "k1,k2")
    maps: str = ""
    removes: str = ""

    # Drop the "wallpaper" and "ads" fields from the served feed
    strip_noise_fields: bool = False

    # Cache settings
    # The root route re-runs the pipeline on every request unless this is set
    feed_cache_enabled: bool = False
    cache_populate_workers: int = 2
    cache_max_entries: int = 1024

    # Upstream HTTP client deadline
    upstream_timeout_seconds: float = 30.0

    log_level: str = "INFO"

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"


settings = Settings()
