"""
Base Configuration Classes
==========================

Pydantic-based configuration models with validation and serialization.
Values resolve in priority order: explicit overrides, then environment, then
defaults. Files may be JSON or YAML.
"""

from __future__ import annotations

import json
import logging
import os
from abc import ABC, abstractmethod
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Literal, TypeVar

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from arangokit.client.httpx_client import TransportSettings

logger = logging.getLogger(__name__)

T = TypeVar("T", bound="BaseConfig")


class ConfigError(Exception):
    """Configuration-related errors."""


class ConfigValidationError(ConfigError):
    """Configuration validation errors."""

    def __init__(self, message: str, errors: list[str]):
        self.errors = errors
        super().__init__(f"{message}: {'; '.join(errors)}" if errors else message)


class BaseConfig(BaseModel, ABC):
    """
    Abstract base for configuration models.

    Subclasses implement validate_semantics() for rules that go beyond the
    field schema.
    """

    config_version: str = Field(default="1.0", description="Configuration schema version")
    source: str | None = Field(default=None, description="Configuration source identifier")

    model_config = ConfigDict(
        extra="forbid",
        validate_assignment=True,
        use_enum_values=True,
    )

    @abstractmethod
    def validate_semantics(self) -> list[str]:
        """
        Validate semantic consistency beyond schema validation.

        Returns:
            List of validation error messages (empty if valid)
        """

    def validate_full(self) -> None:
        """
        Run the semantic checks (schema validation already ran at construction).

        Raises:
            ConfigValidationError: If validation fails
        """
        semantic_errors = self.validate_semantics()
        if semantic_errors:
            raise ConfigValidationError("Semantic validation failed", semantic_errors)

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump(exclude_none=True)

    def to_json(self, indent: int = 2) -> str:
        return self.model_dump_json(exclude_none=True, indent=indent)

    @classmethod
    def from_dict(cls: type[T], data: Mapping[str, Any]) -> T:
        """
        Create configuration from a mapping.

        Raises:
            ConfigValidationError: If schema or semantic validation fails
        """
        try:
            instance = cls(**dict(data))
        except ValidationError as e:
            raise ConfigValidationError(
                "Failed to create from dict",
                [f"{err['loc']}: {err['msg']}" for err in e.errors()],
            ) from e
        instance.validate_full()
        return instance

    @classmethod
    def from_json(cls: type[T], json_str: str) -> T:
        try:
            data = json.loads(json_str)
        except json.JSONDecodeError as e:
            raise ConfigValidationError("Invalid JSON format", [str(e)]) from e
        return cls.from_dict(data)

    @classmethod
    def from_yaml(cls: type[T], yaml_str: str) -> T:
        try:
            data = yaml.safe_load(yaml_str) or {}
        except yaml.YAMLError as e:
            raise ConfigValidationError("Invalid YAML format", [str(e)]) from e
        if not isinstance(data, dict):
            raise ConfigValidationError("Invalid YAML format", ["top level must be a mapping"])
        return cls.from_dict(data)

    @classmethod
    def from_file(cls: type[T], file_path: str | Path) -> T:
        """
        Load configuration from a JSON or YAML file (chosen by suffix).

        Args:
            file_path: Path to a ``.json``, ``.yaml`` or ``.yml`` file

        Returns:
            Configuration instance with source set to the file path

        Raises:
            ConfigValidationError: If the file cannot be read or parsed
        """
        path = Path(file_path)
        if not path.exists():
            raise ConfigValidationError(f"Configuration file not found: {path}", [])

        try:
            content = path.read_text(encoding="utf-8")
        except OSError as e:
            raise ConfigValidationError(f"Failed to read configuration file: {path}", [str(e)]) from e

        if path.suffix.lower() in (".yaml", ".yml"):
            instance = cls.from_yaml(content)
        else:
            instance = cls.from_json(content)
        instance.source = str(path)
        logger.debug(f"Configuration loaded from {path}")
        return instance

    def merge(self: T, other: T) -> T:
        """
        Merge with another configuration of the same type.

        Values from ``other`` override values from ``self``; nested dicts are
        deep-merged.
        """
        merged_data = self._deep_merge_dicts(self.to_dict(), other.to_dict())
        return self.__class__.from_dict(merged_data)

    @staticmethod
    def _deep_merge_dicts(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
        result = base.copy()
        for key, value in override.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = BaseConfig._deep_merge_dicts(result[key], value)
            else:
                result[key] = value
        return result


def _parse_timeout(value: str | None, default: float) -> float:
    if value is None:
        return default
    try:
        return float(value)
    except (TypeError, ValueError):
        return default


def _parse_bool(value: str | None, default: bool) -> bool:
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


class ConnectionConfig(BaseConfig):
    """
    Configuration for a connection to an ArangoDB server.

    ``socket_path`` routes every request over a Unix domain socket; the URL
    host is then only used for the ``Host`` header.
    """

    url: str = Field(default="http://localhost:8529", description="Server URL")
    database: str = Field(default="_system", description="Database to open")
    username: str | None = Field(default=None, description="User name")
    password: str | None = Field(default=None, repr=False, description="Password")
    auth: Literal["none", "basic", "jwt"] = Field(default="jwt", description="Authentication method")
    socket_path: str | None = Field(default=None, description="Unix socket path")
    http2: bool = Field(default=True, description="Negotiate HTTP/2")
    connect_timeout: float = Field(default=5.0, description="Connect timeout in seconds")
    read_timeout: float = Field(default=30.0, description="Read timeout in seconds")
    write_timeout: float = Field(default=30.0, description="Write timeout in seconds")
    validate_server: bool = Field(default=True, description="Check the Server header on connect")

    def validate_semantics(self) -> list[str]:
        errors = []

        if self.auth in ("basic", "jwt"):
            if not self.username:
                errors.append(f"{self.auth} authentication requires a username")
            if self.password is None:
                errors.append(f"{self.auth} authentication requires a password")

        for name in ("connect_timeout", "read_timeout", "write_timeout"):
            if getattr(self, name) <= 0:
                errors.append(f"{name} must be positive")

        if not self.url.startswith(("http://", "https://")):
            errors.append(f"url must use http or https: {self.url}")

        return errors

    @classmethod
    def from_env(cls, env: Mapping[str, str] | None = None, **overrides: Any) -> ConnectionConfig:
        """
        Resolve configuration from ``ARANGO_*`` environment variables.

        Explicit ``overrides`` win over the environment. Timeouts that do not
        parse as numbers fall back to their defaults.
        """
        env = os.environ if env is None else env
        data: dict[str, Any] = {
            "url": env.get("ARANGO_URL", "http://localhost:8529"),
            "database": env.get("ARANGO_DATABASE", "_system"),
            "username": env.get("ARANGO_USERNAME"),
            "password": env.get("ARANGO_PASSWORD"),
            "auth": env.get("ARANGO_AUTH", "jwt").lower(),
            "socket_path": env.get("ARANGO_SOCKET"),
            "http2": _parse_bool(env.get("ARANGO_HTTP2"), True),
            "connect_timeout": _parse_timeout(env.get("ARANGO_CONNECT_TIMEOUT"), 5.0),
            "read_timeout": _parse_timeout(env.get("ARANGO_READ_TIMEOUT"), 30.0),
            "write_timeout": _parse_timeout(env.get("ARANGO_WRITE_TIMEOUT"), 30.0),
            "validate_server": _parse_bool(env.get("ARANGO_VALIDATE_SERVER"), True),
            "source": "environment",
        }
        data.update({key: value for key, value in overrides.items() if value is not None})
        return cls.from_dict(data)

    def to_transport_settings(self) -> TransportSettings:
        return TransportSettings(
            socket_path=self.socket_path,
            http2=self.http2,
            connect_timeout=self.connect_timeout,
            read_timeout=self.read_timeout,
            write_timeout=self.write_timeout,
        )
