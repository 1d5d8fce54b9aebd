"""Application configuration helpers."""

from __future__ import annotations

from .env import positive_float_env, require_env_vars
from .errors import ConfigurationError, MissingConfigurationError
from .http_resilience import RateLimit, ResilienceConfig, RetryPolicy
from .logging import configure_logging
from .rebuild import RebuildConfig, get_rebuild_config
from .sheets import SheetsConfig, get_sheets_config
from .storage import DatabaseConfig, StorageConfig, get_database_config, get_storage_config

__all__ = [
    "ConfigurationError",
    "DatabaseConfig",
    "MissingConfigurationError",
    "RateLimit",
    "RebuildConfig",
    "ResilienceConfig",
    "RetryPolicy",
    "SheetsConfig",
    "StorageConfig",
    "configure_logging",
    "get_database_config",
    "get_rebuild_config",
    "get_sheets_config",
    "get_storage_config",
    "positive_float_env",
    "require_env_vars",
]
