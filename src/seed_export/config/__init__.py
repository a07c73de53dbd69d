"""Configuration management for Seed Export.

Usage:
    >>> from seed_export.config import get_settings, load_table_registry
    >>> settings = get_settings()
    >>> registry = load_table_registry(settings.registry_path)
"""

from seed_export.config.settings import Settings, get_settings
from seed_export.config.table_registry import (
    EncoderOptions,
    TableRegistry,
    TableRegistryError,
    TableSpec,
    default_registry,
    load_table_registry,
)

__all__ = [
    "Settings",
    "get_settings",
    "EncoderOptions",
    "TableRegistry",
    "TableRegistryError",
    "TableSpec",
    "default_registry",
    "load_table_registry",
]
