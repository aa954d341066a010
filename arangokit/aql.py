"""AQL query submission and cursor pagination.

Query text is opaque to the client. A submission returns the first batch
of a cursor; while the cursor reports ``hasMore`` the next batch is fetched
with ``PUT _api/cursor/{id}`` until the server says it is exhausted.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Generic, TypeVar

from pydantic import Field

from arangokit.client.base import ClientExt, Flow, Request, single
from arangokit.response import expect
from arangokit.serialization import ApiModel, OptionsModel, to_json

T = TypeVar("T")


class AqlOptions(OptionsModel):
    """Extra options nested under ``options`` in a cursor request."""

    fail_on_warning: bool | None = None
    profile: bool | None = None
    max_warning_count: int | None = None
    full_count: bool | None = None
    max_plans: int | None = None
    optimizer: dict[str, Any] | None = None
    stream: bool | None = None
    intermediate_commit_count: int | None = None
    intermediate_commit_size: int | None = None
    max_transaction_size: int | None = None
    satellite_sync_wait: float | None = None


class AqlQuery(OptionsModel):
    """Body of ``POST _api/cursor``."""

    query: str
    bind_vars: dict[str, Any] | None = None
    count: bool | None = None
    batch_size: int | None = None
    cache: bool | None = None
    memory_limit: int | None = None
    ttl: int | None = None
    options: AqlOptions | None = None

    def bind_var(self, name: str, value: Any) -> AqlQuery:
        """Return a copy of the query with one more bind variable."""
        bind_vars = dict(self.bind_vars or {})
        bind_vars[name] = value
        return self.model_copy(update={"bind_vars": bind_vars})


class QueryStats(ApiModel):
    writes_executed: int = 0
    writes_ignored: int = 0
    scanned_full: int = 0
    scanned_index: int = 0
    filtered: int = 0
    full_count: int | None = None
    http_requests: int | None = None
    execution_time: float | None = None


class QueryExtra(ApiModel):
    stats: QueryStats | None = None
    warnings: list[Any] | None = None


class Cursor(ApiModel, Generic[T]):
    """One batch of a query result."""

    result: list[T]
    more: bool = Field(default=False, alias="hasMore")
    id: str | None = None
    count: int | None = None
    cached: bool = False
    extra: QueryExtra | None = None


def cursor_type(type_: Any = None) -> Any:
    return Cursor[Any] if type_ is None else Cursor[type_]


def query_batch_flow(base_url: str, aql: AqlQuery, type_: Any = None) -> Flow[Cursor[Any]]:
    request = Request("POST", f"{base_url}_api/cursor", to_json(aql))
    return (yield from single(request, expect(cursor_type(type_))))


def next_batch_flow(base_url: str, cursor_id: str, type_: Any = None) -> Flow[Cursor[Any]]:
    request = Request("PUT", f"{base_url}_api/cursor/{cursor_id}")
    return (yield from single(request, expect(cursor_type(type_))))


def fetch_all_flow(base_url: str, aql: AqlQuery, type_: Any = None) -> Flow[list[Any]]:
    """Submit ``aql`` and follow the cursor until the last batch.

    A cursor reporting more results without an id breaks the protocol and
    is raised immediately instead of ending pagination early.
    """
    cursor = yield from query_batch_flow(base_url, aql, type_)
    results = list(cursor.result)
    while cursor.more:
        if cursor.id is None:
            raise RuntimeError("cursor reported more results but carried no cursor id")
        cursor = yield from next_batch_flow(base_url, cursor.id, type_)
        results.extend(cursor.result)
    return results


class AqlExecutor:
    """AQL operations for handles that own a session and a database URL."""

    _session: ClientExt
    _base_url: str

    def aql_query_batch(self, aql: AqlQuery, type_: Any = None) -> Any:
        """Submit a query and return only its first batch."""
        return self._session.run(query_batch_flow(self._base_url, aql, type_))

    def aql_next_batch(self, cursor_id: str, type_: Any = None) -> Any:
        return self._session.run(next_batch_flow(self._base_url, cursor_id, type_))

    def aql_query(self, aql: AqlQuery, type_: Any = None) -> Any:
        """Execute an AQL query and fetch every batch of the result.

        Do not use this for result sets that do not fit in memory, and do not
        set a tiny ``batch_size``: each batch costs one HTTP round trip.
        """
        return self._session.run(fetch_all_flow(self._base_url, aql, type_))

    def aql_str(self, query: str, type_: Any = None) -> Any:
        return self.aql_query(AqlQuery(query=query), type_)

    def aql_bind_vars(self, query: str, bind_vars: Mapping[str, Any], type_: Any = None) -> Any:
        return self.aql_query(AqlQuery(query=query, bind_vars=dict(bind_vars)), type_)


__all__ = [
    "AqlExecutor",
    "AqlOptions",
    "AqlQuery",
    "Cursor",
    "QueryExtra",
    "QueryStats",
    "fetch_all_flow",
    "next_batch_flow",
    "query_batch_flow",
]
