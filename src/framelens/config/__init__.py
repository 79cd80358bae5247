"""Configuration management for framelens.

Loads and validates YAML-based configuration with Pydantic models.
Supports environment variable overrides for every section.
"""

from framelens.config.settings import Settings, load_settings

__all__ = ["Settings", "load_settings"]
