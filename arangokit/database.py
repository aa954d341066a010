"""Database handle.

Everything scoped to one database hangs off ``Database``: collections, AQL,
stream transactions, indexes, views, analyzers, named graphs and users. The
handle is cheap; it holds a name, a URL and a session, and every method
issues its request through that session.
"""

from __future__ import annotations

import logging
from typing import Any
from urllib.parse import quote

from arangokit.analyzer import AnalyzerDescription, AnalyzerInfo
from arangokit.aql import AqlExecutor
from arangokit.client.base import ClientExt, Request
from arangokit.collection.collection import Collection
from arangokit.collection.options import CreateOptions, CreateParameters
from arangokit.collection.response import CollectionType, Info
from arangokit.connection.model import DatabaseInfo, Version
from arangokit.graph import GHARIAL_API_PATH, Graph, GraphCollection
from arangokit.index import DeleteIndexResponse, Index, IndexCollection
from arangokit.response import expect, expect_field, expect_result
from arangokit.serialization import to_json, with_query
from arangokit.session import bind
from arangokit.transaction import ArangoTransaction, Transaction, TransactionList, TransactionSettings
from arangokit.user import User, UserAccessLevel
from arangokit.view import ArangoSearchViewProperties, ArangoSearchViewPropertiesOptions, View, ViewDescription, ViewOptions

logger = logging.getLogger(__name__)


def _segment(value: str) -> str:
    return quote(value, safe="")


class Database(AqlExecutor):
    """One database on an ArangoDB server.

    Args:
        name: Database name.
        arango_url: Server root URL, ending with ``/``.
        session: Transport capability used for every request.
    """

    def __init__(self, name: str, arango_url: str, session: ClientExt) -> None:
        self._name = name
        self._arango_url = arango_url
        self._base_url = f"{arango_url}_db/{_segment(name)}/"
        self._session = session

    def __repr__(self) -> str:
        return f"<Database {self._name!r} at {self._arango_url}>"

    @property
    def name(self) -> str:
        return self._name

    @property
    def url(self) -> str:
        """``http://server:port/_db/{name}/``"""
        return self._base_url

    @property
    def session(self) -> ClientExt:
        return self._session

    def clone_with_transaction(self, transaction_id: str) -> Database:
        """Same database, with every request tagged with ``transaction_id``."""
        return Database(self._name, self._arango_url, bind(self._session, transaction_id))

    # ------------------------------------------------------------------
    # Database
    # ------------------------------------------------------------------
    def arango_version(self) -> Any:
        return self._session.execute(Request("GET", f"{self._base_url}_api/version"), expect(Version))

    def info(self) -> Any:
        """Information about the current database (``_api/database/current``)."""
        request = Request("GET", f"{self._base_url}_api/database/current")
        return self._session.execute(request, expect_result(DatabaseInfo))

    # ------------------------------------------------------------------
    # Collections
    # ------------------------------------------------------------------
    def accessible_collections(self) -> Any:
        """Every collection visible to the current user, system ones included."""
        request = Request("GET", f"{self._base_url}_api/collection")
        return self._session.execute(request, expect_result(list[Info]))

    def collection(self, name: str) -> Any:
        request = Request("GET", f"{self._base_url}_api/collection/{_segment(name)}")
        return self._session.execute(request, self._collection_handler())

    def create_collection_with_options(
        self,
        options: CreateOptions,
        parameters: CreateParameters | None = None,
    ) -> Any:
        url = with_query(f"{self._base_url}_api/collection", parameters)
        request = Request("POST", url, to_json(options))
        return self._session.execute(request, self._collection_handler())

    def create_collection(self, name: str) -> Any:
        return self.create_collection_with_options(CreateOptions(name=name))

    def create_edge_collection(self, name: str) -> Any:
        options = CreateOptions(name=name, collection_type=CollectionType.EDGE)
        return self.create_collection_with_options(options)

    def drop_collection(self, name: str) -> Any:
        """Drop a collection; resolves to the dropped collection id."""
        request = Request("DELETE", f"{self._base_url}_api/collection/{_segment(name)}")
        return self._session.execute(request, expect_field("id", str))

    # ------------------------------------------------------------------
    # Stream transactions
    # ------------------------------------------------------------------
    def begin_transaction(self, settings: TransactionSettings) -> Any:
        """Start a stream transaction; resolves to a bound ``Transaction``."""
        request = Request("POST", f"{self._base_url}_api/transaction/begin", to_json(settings))
        decode = expect_result(ArangoTransaction)

        def handle(response):
            tx = decode(response)
            logger.debug("Began transaction %s on database %s", tx.id, self._name)
            return Transaction(tx, self._session, self._base_url)

        return self._session.execute(request, handle)

    def list_transactions(self) -> Any:
        """Running stream transactions, as ``TransactionState`` entries."""
        decode = expect(TransactionList)

        def handle(response):
            return decode(response).transactions

        return self._session.execute(Request("GET", f"{self._base_url}_api/transaction"), handle)

    # ------------------------------------------------------------------
    # Indexes
    # ------------------------------------------------------------------
    def create_index(self, collection: str, index: Index) -> Any:
        url = with_query(f"{self._base_url}_api/index", collection=collection)
        return self._session.execute(Request("POST", url, to_json(index)), expect(Index))

    def indexes(self, collection: str) -> Any:
        url = with_query(f"{self._base_url}_api/index", collection=collection)
        return self._session.execute(Request("GET", url), expect(IndexCollection))

    def index(self, id: str) -> Any:
        """Fetch an index by its ``collection/number`` id."""
        request = Request("GET", f"{self._base_url}_api/index/{quote(id, safe='/')}")
        return self._session.execute(request, expect(Index))

    def delete_index(self, id: str) -> Any:
        request = Request("DELETE", f"{self._base_url}_api/index/{quote(id, safe='/')}")
        return self._session.execute(request, expect(DeleteIndexResponse))

    # ------------------------------------------------------------------
    # Views
    # ------------------------------------------------------------------
    def create_view(self, options: ViewOptions) -> Any:
        request = Request("POST", f"{self._base_url}_api/view", to_json(options))
        return self._session.execute(request, expect(View))

    def view(self, name: str) -> Any:
        request = Request("GET", self._view_url(name))
        return self._session.execute(request, expect(ViewDescription))

    def list_views(self) -> Any:
        request = Request("GET", f"{self._base_url}_api/view")
        return self._session.execute(request, expect_result(list[ViewDescription]))

    def view_properties(self, name: str) -> Any:
        request = Request("GET", f"{self._view_url(name)}/properties")
        return self._session.execute(request, expect(ArangoSearchViewProperties))

    def replace_view_properties(self, name: str, properties: ArangoSearchViewPropertiesOptions) -> Any:
        request = Request("PUT", f"{self._view_url(name)}/properties", to_json(properties))
        return self._session.execute(request, expect(View))

    def update_view_properties(self, name: str, properties: ArangoSearchViewPropertiesOptions) -> Any:
        request = Request("PATCH", f"{self._view_url(name)}/properties", to_json(properties))
        return self._session.execute(request, expect(View))

    def drop_view(self, name: str) -> Any:
        request = Request("DELETE", self._view_url(name))
        return self._session.execute(request, expect_result(bool))

    # ------------------------------------------------------------------
    # Analyzers
    # ------------------------------------------------------------------
    def create_analyzer(self, analyzer: AnalyzerInfo) -> Any:
        request = Request("POST", f"{self._base_url}_api/analyzer", to_json(analyzer))
        return self._session.execute(request, expect(AnalyzerInfo))

    def analyzer(self, name: str) -> Any:
        request = Request("GET", f"{self._base_url}_api/analyzer/{_segment(name)}")
        return self._session.execute(request, expect(AnalyzerInfo))

    def list_analyzers(self) -> Any:
        request = Request("GET", f"{self._base_url}_api/analyzer")
        return self._session.execute(request, expect_result(list[AnalyzerInfo]))

    def drop_analyzer(self, name: str) -> Any:
        request = Request("DELETE", f"{self._base_url}_api/analyzer/{_segment(name)}")
        return self._session.execute(request, expect(AnalyzerDescription))

    # ------------------------------------------------------------------
    # Named graphs
    # ------------------------------------------------------------------
    def create_graph(self, graph: Graph, wait_for_sync: bool = False) -> Any:
        url = with_query(f"{self._base_url}{GHARIAL_API_PATH}", waitForSync=wait_for_sync)
        return self._session.execute(Request("POST", url, to_json(graph)), expect_field("graph", Graph))

    def graph(self, name: str) -> Any:
        request = Request("GET", f"{self._base_url}{GHARIAL_API_PATH}/{_segment(name)}")
        return self._session.execute(request, expect_field("graph", Graph))

    def graphs(self) -> Any:
        request = Request("GET", f"{self._base_url}{GHARIAL_API_PATH}")
        return self._session.execute(request, expect(GraphCollection))

    def drop_graph(self, name: str, drop_collections: bool = False) -> Any:
        """Drop a named graph, and optionally the collections it owns."""
        url = with_query(
            f"{self._base_url}{GHARIAL_API_PATH}/{_segment(name)}",
            dropCollections=drop_collections,
        )
        return self._session.execute(Request("DELETE", url), expect_field("removed", bool))

    # ------------------------------------------------------------------
    # Users
    # ------------------------------------------------------------------
    def users(self) -> Any:
        request = Request("GET", f"{self._base_url}_api/user")
        return self._session.execute(request, expect_result(list[User]))

    def user(self, name: str) -> Any:
        return self._session.execute(Request("GET", self._user_url(name)), expect(User))

    def create_user(self, user: User) -> Any:
        request = Request("POST", f"{self._base_url}_api/user", to_json(user))
        return self._session.execute(request, expect(User))

    def update_user(self, name: str, user: User) -> Any:
        request = Request("PATCH", self._user_url(name), to_json(user))
        return self._session.execute(request, expect(User))

    def delete_user(self, name: str) -> Any:
        return self._session.execute(Request("DELETE", self._user_url(name)), expect(dict[str, Any]))

    def user_databases(self, name: str, full: bool = False) -> Any:
        """Databases the user can access.

        With ``full`` the result also lists collection-level access, so it is
        returned as a plain mapping.
        """
        url = with_query(f"{self._user_url(name)}/database", full=full)
        return self._session.execute(Request("GET", url), expect_result(dict[str, Any]))

    def user_db_access_level(self, name: str, db: str) -> Any:
        request = Request("GET", f"{self._user_url(name)}/database/{_segment(db)}")
        return self._session.execute(request, expect_result(UserAccessLevel))

    def user_db_access_put(self, name: str, db: str, level: UserAccessLevel) -> Any:
        body = to_json({"grant": UserAccessLevel(level).value})
        request = Request("PUT", f"{self._user_url(name)}/database/{_segment(db)}", body)
        return self._session.execute(request, expect(dict[str, Any]))

    def user_db_collection_access(self, name: str, db: str, collection: str) -> Any:
        url = f"{self._user_url(name)}/database/{_segment(db)}/{_segment(collection)}"
        return self._session.execute(Request("GET", url), expect_result(UserAccessLevel))

    def user_db_collection_access_put(
        self, name: str, db: str, collection: str, level: UserAccessLevel
    ) -> Any:
        url = f"{self._user_url(name)}/database/{_segment(db)}/{_segment(collection)}"
        body = to_json({"grant": UserAccessLevel(level).value})
        return self._session.execute(Request("PUT", url, body), expect(dict[str, Any]))

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------
    def _collection_handler(self):
        decode = expect(Info)

        def handle(response):
            return Collection.from_response(decode(response), self._base_url, self._session)

        return handle

    def _view_url(self, name: str) -> str:
        return f"{self._base_url}_api/view/{_segment(name)}"

    def _user_url(self, name: str) -> str:
        return f"{self._base_url}_api/user/{_segment(name)}"


__all__ = ["Database"]
