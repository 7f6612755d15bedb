from pydantic_settings import BaseSettings
from functools import lru_cache
from typing import Optional
import logging

from .types import ExecEnv

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://backend.composio.dev/api"


class Settings(BaseSettings):
    """Toolset settings loaded from COMPOSIO_* environment variables."""

    # API
    api_key: Optional[str] = None
    base_url: str = DEFAULT_BASE_URL
    request_timeout: float = 60.0

    # Execution
    entity_id: str = "default"
    workspace_env: ExecEnv = ExecEnv.HOST
    workspace_url: Optional[str] = None

    # Local credentials file, defaults to $HOME/.composio/userData.json
    user_data_path: Optional[str] = None

    class Config:
        env_prefix = "COMPOSIO_"
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False
        extra = "ignore"


def mask_secret(value: Optional[str]) -> str:
    """Render a secret for logs without exposing it."""
    if not value:
        return "<unset>"
    return f"{value[:4]}... (length: {len(value)})"


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    settings = Settings()
    logger.info(f"Settings loaded - Base URL: {settings.base_url}")
    logger.info(f"Settings loaded - API Key: {mask_secret(settings.api_key)}")
    return settings
