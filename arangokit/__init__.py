"""
arangokit
=========

Typed client for the ArangoDB HTTP API, usable with blocking calls or with
asyncio from the same operation surface.

    from arangokit import Connection

    conn = Connection.establish_jwt("http://localhost:8529", "root", "secret")
    db = conn.db("test_db")
    rows = db.aql_str("FOR u IN users RETURN u")
"""

from .aql import AqlOptions, AqlQuery, Cursor
from .client import AsyncHttpxClient, ClientExt, HttpxClient, TransportSettings
from .collection import Collection, CollectionType
from .connection import AsyncConnection, Connection, GenericConnection, Permission, Role
from .database import Database
from .document import Document, DocumentResponse, Header, IfMatch, IfNoneMatch, NoHeader
from .errors import (
    ArangoError,
    ClientError,
    HttpClientError,
    InsufficientPermissionError,
    InvalidServerError,
    SerdeError,
)
from .transaction import Transaction, TransactionCollections, TransactionSettings

__version__ = "0.1.0"

__all__ = [
    "AqlOptions",
    "AqlQuery",
    "ArangoError",
    "AsyncConnection",
    "AsyncHttpxClient",
    "ClientError",
    "ClientExt",
    "Collection",
    "CollectionType",
    "Connection",
    "Cursor",
    "Database",
    "Document",
    "DocumentResponse",
    "GenericConnection",
    "Header",
    "HttpClientError",
    "HttpxClient",
    "IfMatch",
    "IfNoneMatch",
    "InsufficientPermissionError",
    "InvalidServerError",
    "NoHeader",
    "Permission",
    "Role",
    "SerdeError",
    "Transaction",
    "TransactionCollections",
    "TransactionSettings",
    "TransportSettings",
]
