"""Application settings and configuration management."""
from pydantic_settings import BaseSettings
from functools import lru_cache
import yaml
from pathlib import Path

class Settings(BaseSettings):
    """Application settings from environment variables."""

    # Database
    DATABASE_URL: str = "sqlite:///./signal_monitor.db"

    # Redis (Celery broker for background notification delivery)
    REDIS_HOST: str = "redis"
    REDIS_PORT: int = 6379

    # API
    API_HOST: str = "0.0.0.0"
    API_PORT: int = 8000

    # Notifications
    OWNER_ID: str = ""
    NOTIFICATION_BACKEND: str = "log"  # log, webhook, celery
    NOTIFICATION_WEBHOOK_URL: str = ""
    NOTIFICATION_TIMEOUT: float = 5.0
    HIGH_CONFIDENCE_THRESHOLD: float = 70.0

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_JSON: bool = False

    # Environment
    ENV: str = "development"

    class Config:
        env_file = ".env"

@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()

@lru_cache()
def get_assets_config() -> dict:
    """Load default monitored assets from YAML."""
    config_path = Path(__file__).parent / "assets.yaml"
    with open(config_path, 'r') as f:
        return yaml.safe_load(f)
