"""
Configuration
=============

Validated configuration for arangokit connections.

- BaseConfig: pydantic foundation with semantic validation and JSON/YAML loading
- ConnectionConfig: server URL, credentials, auth method and transport knobs
"""

from .config_base import BaseConfig, ConfigError, ConfigValidationError, ConnectionConfig

__all__ = [
    "BaseConfig",
    "ConfigError",
    "ConfigValidationError",
    "ConnectionConfig",
]
