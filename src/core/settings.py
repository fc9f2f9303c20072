"""
Application Configuration

Centralized configuration using Pydantic Settings for type-safe
environment variable management with validation.
"""

from functools import lru_cache
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

# Get the directory containing this file, then go up to the project root
_CONFIG_DIR = Path(__file__).parent.parent.parent


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    All settings can be overridden via environment variables or .env file.
    Example: JWT_SECRET=xxx or jwt_secret=xxx
    """

    model_config = SettingsConfigDict(
        env_file=_CONFIG_DIR / ".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Server Configuration
    server_host: str = "0.0.0.0"
    server_port: int = 8080
    environment: str = "development"  # "production" turns on secure cookies
    debug: bool = False
    allowed_origins: str = "http://localhost:3000"  # Comma-separated

    # Authentication Configuration
    # Both must be set, the application refuses to start otherwise
    jwt_secret: str = ""
    admin_password: str = ""
    session_ttl: int = 8 * 60 * 60  # 8 hours

    # Remote store (Upstash Redis REST). Empty means local-only mode.
    kv_rest_api_url: str = ""
    kv_rest_api_token: str = ""
    remote_timeout: float = 3.0  # seconds

    # Local storage
    data_dir: str = str(_CONFIG_DIR / "data")  # bundled default documents
    cache_dir: str | None = str(_CONFIG_DIR / ".cache")  # None disables the local cache

    # Write rate limiting on the menu endpoint
    rate_limit_window: float = 60.0
    rate_limit_max: int = 10

    @property
    def is_production(self) -> bool:
        return self.environment.lower() == "production"

    @property
    def has_remote_config(self) -> bool:
        return bool(self.kv_rest_api_url and self.kv_rest_api_token)


@lru_cache
def get_settings() -> Settings:
    """
    Get cached application settings.

    Uses lru_cache to ensure settings are only loaded once
    and reused throughout the application lifecycle.
    """
    return Settings()


def get_allowed_origins(settings: Settings | None = None) -> list[str]:
    """Parse allowed origins from comma-separated string."""
    settings = settings or get_settings()
    if not settings.allowed_origins:
        return []
    return [origin.strip() for origin in settings.allowed_origins.split(",") if origin.strip()]
