"""Shared utilities for the type generator."""

from .config import (
    DEFAULT_ANCHOR,
    DEFAULT_BANNER,
    DEFAULT_EXCLUDED_TABLES,
    TypegenConfig,
    load_config,
    resolve_config,
)
from .naming import (
    to_pascal_case,
    singularize,
    sanitize_member_key,
)
from .errors import (
    TypegenError,
    ConfigError,
    CatalogError,
    MergeError,
)

__all__ = [
    # Configuration
    "DEFAULT_ANCHOR",
    "DEFAULT_BANNER",
    "DEFAULT_EXCLUDED_TABLES",
    "TypegenConfig",
    "load_config",
    "resolve_config",
    # Naming utilities
    "to_pascal_case",
    "singularize",
    "sanitize_member_key",
    # Errors
    "TypegenError",
    "ConfigError",
    "CatalogError",
    "MergeError",
]
