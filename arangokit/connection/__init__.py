"""
Connections
===========

``Connection`` (blocking) and ``AsyncConnection`` (asyncio) establish an
authenticated session against an ArangoDB server and hand out ``Database``
handles that share it.
"""

from .auth import Auth, AuthMethod
from .connection import AsyncConnection, Connection, GenericConnection
from .model import CreateDatabaseOptions, DatabaseInfo, Permission, Role, Version

__all__ = [
    "AsyncConnection",
    "Auth",
    "AuthMethod",
    "Connection",
    "CreateDatabaseOptions",
    "DatabaseInfo",
    "GenericConnection",
    "Permission",
    "Role",
    "Version",
]
