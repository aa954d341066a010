"""Server-level payloads: permissions, version and database descriptions."""

from __future__ import annotations

from enum import Enum

from arangokit.serialization import ApiModel, OptionsModel


class Permission(str, Enum):
    NO_ACCESS = "none"
    READ_ONLY = "ro"
    READ_WRITE = "rw"


class Role(str, Enum):
    """Local capability level of a connection; never sent to the server."""

    NORMAL = "normal"
    ADMIN = "admin"


class Version(ApiModel):
    server: str
    version: str
    license: str | None = None


class DatabaseInfo(ApiModel):
    name: str
    id: str
    path: str | None = None
    is_system: bool = False


class CreateDatabaseOptions(OptionsModel):
    """Cluster options of a new database."""

    sharding: str | None = None
    replication_factor: int | None = None
    write_concern: int | None = None


class CreateDatabase(OptionsModel):
    """Body of ``POST _api/database``."""

    name: str
    options: CreateDatabaseOptions | None = None


__all__ = [
    "CreateDatabase",
    "CreateDatabaseOptions",
    "DatabaseInfo",
    "Permission",
    "Role",
    "Version",
]
