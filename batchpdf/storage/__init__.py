"""
Storage Layer.

This package handles persisted settings: loading, validating and writing the
INI configuration file.
"""

from .config_manager import ConfigManager

__all__ = ["ConfigManager"]
