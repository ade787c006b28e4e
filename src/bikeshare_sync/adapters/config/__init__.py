"""Configuration adapters."""

from bikeshare_sync.adapters.config.app_config import AppConfig
from bikeshare_sync.adapters.config.system_catalog import JsonSystemCatalog

__all__ = ["AppConfig", "JsonSystemCatalog"]
