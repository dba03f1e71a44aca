# src/tolarate/config/__init__.py
"""
Configuration Module

Provides centralized configuration management using Pydantic Settings,
plus discovery of the GOLDAPI_KEY* API key pool.
"""

from tolarate.config.settings import Settings, discover_credentials, load_settings

__all__ = ["Settings", "discover_credentials", "load_settings"]
