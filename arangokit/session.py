"""Binding of handles to a server-side stream transaction.

Binding never touches the handle it starts from: the result is a new handle
whose every request carries ``x-arango-trx-id``. Handles that were never
bound keep sending requests outside the transaction.
"""

from __future__ import annotations

from typing import TypeVar

from arangokit.client.base import TRANSACTION_HEADER, ClientExt

H = TypeVar("H", bound=ClientExt)


def bind(handle: H, transaction_id: str) -> H:
    """Return a copy of ``handle`` tagged with ``transaction_id``."""
    return handle.clone_with_transaction(transaction_id)


def bound_transaction(handle: ClientExt) -> str | None:
    return handle.headers.get(TRANSACTION_HEADER)


__all__ = ["TRANSACTION_HEADER", "bind", "bound_transaction"]
