"""Application configuration helpers."""

from __future__ import annotations

from .dspace import (
    DSPACE_PAGE_SIZE,
    CollectionNames,
    DSpaceConfig,
    get_collection_names,
    get_dspace_config,
)
from .env import optional_env_var, require_env_vars
from .errors import ConfigurationError, MissingConfigurationError
from .http_resilience import CacheConfig, RateLimit, ResilienceConfig, RetryPolicy
from .logging import configure_logging
from .paths import PathsConfig, get_paths_config
from .storage import StorageConfig, get_storage_config

__all__ = [
    "DSPACE_PAGE_SIZE",
    "CacheConfig",
    "CollectionNames",
    "ConfigurationError",
    "DSpaceConfig",
    "MissingConfigurationError",
    "PathsConfig",
    "RateLimit",
    "ResilienceConfig",
    "RetryPolicy",
    "StorageConfig",
    "configure_logging",
    "get_collection_names",
    "get_dspace_config",
    "get_paths_config",
    "get_storage_config",
    "optional_env_var",
    "require_env_vars",
]
