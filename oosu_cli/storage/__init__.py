"""
Storage Layer.

This package manages the persistent INI settings file.
"""

from .config_manager import ConfigManager

__all__ = ["ConfigManager"]
