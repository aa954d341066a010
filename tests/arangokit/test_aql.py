"""Unit tests for arangokit.aql (query submission and cursor pagination)."""

import asyncio

import pytest
from pydantic import BaseModel

from arangokit.aql import AqlOptions, AqlQuery, Cursor
from arangokit.database import Database
from arangokit.errors import ArangoError

from conftest import AsyncRecordingClient, RecordingClient, reply

ROOT = "http://db:8529/"
DB_URL = f"{ROOT}_db/test_db/"


class Row(BaseModel):
    n: int


def _batches():
    return [
        reply({"result": [1, 2], "hasMore": True, "id": "c42", "count": 5, "cached": False}, status=201),
        reply({"result": [3, 4], "hasMore": True, "id": "c42", "cached": False}),
        reply({"result": [5], "hasMore": False, "id": "c42", "cached": False}),
    ]


class TestAqlQuery:
    """Tests for the AqlQuery body."""

    def test_serializes_only_set_fields(self) -> None:
        """Unset fields should be omitted and names camelCased."""
        query = AqlQuery(query="FOR d IN c RETURN d", batch_size=2, options=AqlOptions(full_count=True))
        assert query.model_dump(by_alias=True, exclude_none=True) == {
            "query": "FOR d IN c RETURN d",
            "batchSize": 2,
            "options": {"fullCount": True},
        }

    def test_bind_var_returns_copy(self) -> None:
        """bind_var should not mutate the original query."""
        query = AqlQuery(query="RETURN @x")
        bound = query.bind_var("x", 1)
        assert query.bind_vars is None
        assert bound.bind_vars == {"x": 1}


class TestCursor:
    """Tests for Cursor decoding."""

    def test_has_more_alias(self) -> None:
        """hasMore should map to more and default to false."""
        cursor = Cursor[int].model_validate({"result": [1], "cached": False})
        assert cursor.more is False
        assert cursor.id is None


class TestPagination:
    """Tests for fetching every batch of a cursor."""

    def test_accumulates_all_batches_in_order(self, client: RecordingClient) -> None:
        """2+2+1 results should come back as 5 in batch order."""
        client.queue(*_batches())
        db = Database("test_db", ROOT, client)

        result = db.aql_query(AqlQuery(query="FOR i IN 1..5 RETURN i", batch_size=2))

        assert result == [1, 2, 3, 4, 5]
        assert [(sent.method, sent.url) for sent in client.log] == [
            ("POST", f"{DB_URL}_api/cursor"),
            ("PUT", f"{DB_URL}_api/cursor/c42"),
            ("PUT", f"{DB_URL}_api/cursor/c42"),
        ]
        assert client.log[0].json() == {"query": "FOR i IN 1..5 RETURN i", "batchSize": 2}
        assert not client.responses

    def test_single_batch_makes_one_call(self, client: RecordingClient) -> None:
        """A cursor without more results should not be continued."""
        client.queue(reply({"result": [{"n": 1}], "hasMore": False, "cached": False}))
        db = Database("test_db", ROOT, client)
        assert db.aql_str("RETURN 1", Row) == [Row(n=1)]
        assert len(client.log) == 1

    def test_missing_cursor_id_fails_loudly(self, client: RecordingClient) -> None:
        """more=true without an id should raise instead of stopping early."""
        client.queue(reply({"result": [1], "hasMore": True, "cached": False}))
        db = Database("test_db", ROOT, client)
        with pytest.raises(RuntimeError, match="cursor id"):
            db.aql_str("FOR i IN 1..5 RETURN i")
        assert len(client.log) == 1

    def test_failure_on_later_batch_propagates(self, client: RecordingClient) -> None:
        """An error on a continuation should fail the whole query."""
        client.queue(
            reply({"result": [1], "hasMore": True, "id": "c1", "cached": False}),
            reply({"error": True, "code": 404, "errorNum": 1600, "errorMessage": "cursor not found"}, status=404),
        )
        db = Database("test_db", ROOT, client)
        with pytest.raises(ArangoError) as exc_info:
            db.aql_str("FOR i IN 1..5 RETURN i")
        assert exc_info.value.error_num == 1600

    def test_bind_vars_are_sent(self, client: RecordingClient) -> None:
        """aql_bind_vars should send bindVars in the body."""
        client.queue(reply({"result": [], "hasMore": False, "cached": False}))
        db = Database("test_db", ROOT, client)
        db.aql_bind_vars("FOR u IN users FILTER u.name == @name RETURN u", {"name": "ada"})
        assert client.log[0].json()["bindVars"] == {"name": "ada"}

    def test_first_batch_only(self, client: RecordingClient) -> None:
        """aql_query_batch should return one cursor and never continue."""
        client.queue(_batches()[0])
        db = Database("test_db", ROOT, client)
        cursor = db.aql_query_batch(AqlQuery(query="FOR i IN 1..5 RETURN i"), int)
        assert cursor.result == [1, 2]
        assert cursor.more is True
        assert cursor.id == "c42"
        assert cursor.count == 5

    def test_async_pagination(self, async_client: AsyncRecordingClient) -> None:
        """The asyncio driver should follow the cursor the same way."""
        async_client.queue(*_batches())
        db = Database("test_db", ROOT, async_client)
        result = asyncio.run(db.aql_str("FOR i IN 1..5 RETURN i", int))
        assert result == [1, 2, 3, 4, 5]
        assert len(async_client.log) == 3
