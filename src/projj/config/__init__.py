"""Configuration for projj."""

from projj.config.resolver import ConfigResolver, resolve_config
from projj.config.settings import Settings, get_settings

__all__ = ["ConfigResolver", "Settings", "get_settings", "resolve_config"]
