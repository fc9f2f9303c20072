"""
Core Module

Provides foundational utilities used across the application:
- Configuration management
- Logging setup
- Error taxonomy
"""

from .exceptions import (
    ConfigurationError,
    InvalidCredentials,
    MalformedInput,
    MenuServerError,
    NotAuthenticated,
    RateLimitExceeded,
    StorageTierFailure,
)
from .logger import get_logger, setup_logging
from .settings import Settings, get_allowed_origins, get_settings

__all__ = [
    # Config
    "Settings",
    "get_settings",
    "get_allowed_origins",
    # Logging
    "setup_logging",
    "get_logger",
    # Errors
    "MenuServerError",
    "ConfigurationError",
    "InvalidCredentials",
    "NotAuthenticated",
    "MalformedInput",
    "RateLimitExceeded",
    "StorageTierFailure",
]
