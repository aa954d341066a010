"""Stream transactions.

A ``Transaction`` is created by ``Database.begin_transaction``. Its session is
bound to the transaction id, so collections obtained through
``Transaction.collection`` (and AQL run through the transaction) take part in
the server-side transaction until it is committed or aborted.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Any
from urllib.parse import quote

from pydantic import Field

from arangokit.aql import AqlExecutor
from arangokit.client.base import TRANSACTION_HEADER, ClientExt, Request
from arangokit.collection.collection import Collection
from arangokit.collection.response import Info
from arangokit.response import expect, expect_result
from arangokit.serialization import ApiModel, OptionsModel
from arangokit.session import bind

logger = logging.getLogger(__name__)


class Status(str, Enum):
    RUNNING = "running"
    COMMITTED = "committed"
    ABORTED = "aborted"


class TransactionCollections(OptionsModel):
    """Collections a transaction reads from and writes to."""

    read: list[str] | None = None
    write: list[str]


class TransactionSettings(OptionsModel):
    """Body of ``POST _api/transaction/begin``."""

    collections: TransactionCollections
    wait_for_sync: bool | None = None
    allow_implicit: bool = True
    lock_timeout: int | None = None
    max_transaction_size: int | None = None


class ArangoTransaction(ApiModel):
    id: str
    status: Status


class TransactionState(ApiModel):
    id: str
    state: Status


class TransactionList(ApiModel):
    transactions: list[TransactionState] = Field(default_factory=list)


class Transaction(AqlExecutor):
    """A running stream transaction.

    ``commit`` and ``abort`` only talk to the server; neither is guarded
    locally, so repeating one simply dispatches it again and the server's
    answer (or error) is returned as is. ``status`` tracks the last status
    the server reported.
    """

    def __init__(self, tx: ArangoTransaction, session: ClientExt, base_url: str) -> None:
        self._id = tx.id
        self._status = tx.status
        self._base_url = base_url
        self._session = session
        if session.headers.get(TRANSACTION_HEADER) != tx.id:
            self._session = bind(session, tx.id)

    def __repr__(self) -> str:
        return f"<Transaction {self._id} ({self._status.value})>"

    @property
    def id(self) -> str:
        return self._id

    @property
    def status(self) -> Status:
        return self._status

    @property
    def url(self) -> str:
        """Root URL of the owning database."""
        return self._base_url

    @property
    def session(self) -> ClientExt:
        """Session carrying the ``x-arango-trx-id`` header."""
        return self._session

    def clone_with_transaction(self, transaction_id: str) -> Transaction:
        """Same database, bound to another transaction id."""
        return Transaction(
            ArangoTransaction(id=transaction_id, status=Status.RUNNING),
            bind(self._session, transaction_id),
            self._base_url,
        )

    def commit(self) -> Any:
        """Commit the transaction; resolves to the reported ``Status``.

        A transaction can be committed more than once.
        """
        request = Request("PUT", self._transaction_url())
        return self._session.execute(request, self._status_handler("committed"))

    def commit_transaction(self) -> Any:
        return self.commit()

    def abort(self) -> Any:
        """Abort the transaction; resolves to the reported ``Status``.

        Aborting discards the transaction on the server; the handle should
        not be used for further operations afterwards.
        """
        request = Request("DELETE", self._transaction_url())
        return self._session.execute(request, self._status_handler("aborted"))

    def collection(self, name: str) -> Any:
        """Collection handle sharing this transaction's session."""
        url = f"{self._base_url}_api/collection/{quote(name, safe='')}"
        decode = expect(Info)

        def handle(response):
            info = decode(response)
            return Collection.from_response(info, self._base_url, self._session)

        return self._session.execute(Request("GET", url), handle)

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------
    def _transaction_url(self) -> str:
        return f"{self._base_url}_api/transaction/{quote(self._id, safe='')}"

    def _status_handler(self, action: str):
        decode = expect_result(ArangoTransaction)

        def handle(response):
            tx = decode(response)
            self._status = tx.status
            logger.debug("Transaction %s %s: %s", self._id, action, tx.status.value)
            return tx.status

        return handle


__all__ = [
    "ArangoTransaction",
    "Status",
    "TRANSACTION_HEADER",
    "Transaction",
    "TransactionCollections",
    "TransactionList",
    "TransactionSettings",
    "TransactionState",
]
