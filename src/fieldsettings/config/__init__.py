"""
Configuration module for fieldsettings.

Uses pydantic-settings for environment variable loading.
"""

from fieldsettings.config.settings import Settings, get_settings
from fieldsettings.config.sources import DefaultsFileError, load_defaults_file

__all__ = ["DefaultsFileError", "Settings", "get_settings", "load_defaults_file"]
