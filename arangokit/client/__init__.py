"""
HTTP Transport Capability
=========================

``ClientExt`` is the only thing the rest of arangokit depends on; the httpx
bindings are the concrete implementations shipped with the package. A custom
stack plugs in by subclassing ``SyncClient`` or ``AsyncClient`` and
implementing ``request``, ``with_headers`` and ``close``.
"""

from .base import (
    TRANSACTION_HEADER,
    AsyncClient,
    ClientExt,
    Flow,
    RawResponse,
    Request,
    SyncClient,
    single,
)
from .httpx_client import AsyncHttpxClient, HttpxClient, TransportSettings

__all__ = [
    "AsyncClient",
    "AsyncHttpxClient",
    "ClientExt",
    "Flow",
    "HttpxClient",
    "RawResponse",
    "Request",
    "SyncClient",
    "TRANSACTION_HEADER",
    "TransportSettings",
    "single",
]
