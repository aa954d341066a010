"""Collection handle: collection management and document operations.

A collection is identified by its id and addressed by its name. Every
operation builds one request against the collection or document endpoint
and hands it to the session; the session decides whether the call blocks
or returns an awaitable.
"""

from __future__ import annotations

import copy
import logging
from typing import TYPE_CHECKING, Any
from urllib.parse import quote, unquote

from pydantic import BaseModel

from arangokit.client.base import ClientExt, RawResponse, Request
from arangokit.collection.options import ChecksumOptions, PropertiesOptions
from arangokit.collection.response import (
    Checksum,
    CollectionType,
    Info,
    Properties,
    Revision,
    Statistics,
)
from arangokit.document.header import Document, Header
from arangokit.document.options import (
    NO_HEADER,
    InsertOptions,
    ReadOptions,
    RemoveOptions,
    ReplaceOptions,
    UpdateOptions,
)
from arangokit.document.response import expect_document_response
from arangokit.errors import ArangoError
from arangokit.response import check_error, expect, expect_field, expect_result
from arangokit.serialization import parse_json, to_json, with_query
from arangokit.session import bind

if TYPE_CHECKING:
    from arangokit.database import Database

logger = logging.getLogger(__name__)


def _raise_not_modified(response: RawResponse) -> None:
    """A read guarded by ``If-None-Match`` answers 304 with an empty body."""
    if response.status_code == 304 and not response.body.strip():
        raise ArangoError(304, 0, "not modified")


def _document_body(doc: Any) -> str:
    if isinstance(doc, Document):
        return to_json(doc.to_payload())
    return to_json(doc)


def _document_type(doc: Any, type_: Any) -> Any:
    """Decode ``old``/``new`` into the caller's model when none is given."""
    if type_ is not None:
        return type_
    if isinstance(doc, Document):
        doc = doc.document
    if isinstance(doc, BaseModel):
        return type(doc)
    return None


class Collection:
    """A collection of documents or edges in one database.

    ``db_url`` is the database root (``http://server:port/_db/mydb/``).
    """

    def __init__(
        self,
        name: str,
        id: str,
        collection_type: CollectionType,
        db_url: str,
        session: ClientExt,
    ) -> None:
        self._name = name
        self._id = id
        self._collection_type = collection_type
        self._db_url = db_url
        self._session = session

    @classmethod
    def from_response(cls, info: Info, db_url: str, session: ClientExt) -> Collection:
        return cls(info.name, info.id, info.collection_type, db_url, session)

    def __repr__(self) -> str:
        return f"<Collection {self._name!r} ({self._collection_type.name.lower()})>"

    # ------------------------------------------------------------------
    # Identity
    # ------------------------------------------------------------------
    @property
    def name(self) -> str:
        return self._name

    @property
    def id(self) -> str:
        return self._id

    @property
    def collection_type(self) -> CollectionType:
        return self._collection_type

    @property
    def url(self) -> str:
        """``http://server:port/_db/mydb/_api/collection/{name}``"""
        return f"{self._db_url}_api/collection/{quote(self._name, safe='')}"

    @property
    def doc_url(self) -> str:
        """``http://server:port/_db/mydb/_api/document/{name}``"""
        return f"{self._db_url}_api/document/{quote(self._name, safe='')}"

    @property
    def session(self) -> ClientExt:
        return self._session

    def db(self) -> Database:
        """Database owning this collection, reached through the same session."""
        from arangokit.database import Database

        root, _, rest = self._db_url.partition("/_db/")
        return Database(unquote(rest.strip("/")), f"{root}/", self._session)

    def clone_with_transaction(self, transaction_id: str) -> Collection:
        """Same collection, with every request tagged with ``transaction_id``."""
        clone = copy.copy(self)
        clone._session = bind(self._session, transaction_id)
        return clone

    # ------------------------------------------------------------------
    # Collection management
    # ------------------------------------------------------------------
    def drop(self) -> Any:
        """Drop the collection; resolves to the dropped collection id."""
        return self._session.execute(Request("DELETE", self.url), expect_field("id", str))

    def truncate(self) -> Any:
        return self._session.execute(Request("PUT", f"{self.url}/truncate"), expect(Info))

    def properties(self) -> Any:
        return self._session.execute(Request("GET", f"{self.url}/properties"), expect(Properties))

    def document_count(self) -> Any:
        return self._session.execute(Request("GET", f"{self.url}/count"), expect(Properties))

    def statistics(self) -> Any:
        return self._session.execute(Request("GET", f"{self.url}/figures"), expect(Statistics))

    def revision_id(self) -> Any:
        return self._session.execute(Request("GET", f"{self.url}/revision"), expect(Revision))

    def checksum(self, options: ChecksumOptions | None = None) -> Any:
        url = with_query(f"{self.url}/checksum", options)
        return self._session.execute(Request("GET", url), expect(Checksum))

    def load(self, count: bool) -> Any:
        body = to_json({"count": count})
        return self._session.execute(Request("PUT", f"{self.url}/load", body), expect(Info))

    def unload(self) -> Any:
        return self._session.execute(Request("PUT", f"{self.url}/unload"), expect(Info))

    def load_indexes(self) -> Any:
        request = Request("PUT", f"{self.url}/loadIndexesIntoMemory")
        return self._session.execute(request, expect_result(bool))

    def change_properties(self, options: PropertiesOptions) -> Any:
        request = Request("PUT", f"{self.url}/properties", to_json(options))
        return self._session.execute(request, expect(Properties))

    def recalculate_count(self) -> Any:
        request = Request("PUT", f"{self.url}/recalculateCount")
        return self._session.execute(request, expect_result(bool))

    def rename(self, name: str) -> Any:
        """Rename the collection.

        The handle's own name (and URLs) change only once the server has
        accepted the new name.
        """
        request = Request("PUT", f"{self.url}/rename", to_json({"name": name}))
        decode = expect(Info)

        def handle(response):
            info = decode(response)
            logger.debug("Renamed collection %s to %s", self._name, name)
            self._name = name
            return info

        return self._session.execute(request, handle)

    # ------------------------------------------------------------------
    # Documents
    # ------------------------------------------------------------------
    def create_document(
        self,
        doc: Any,
        options: InsertOptions | None = None,
        type_: Any = None,
    ) -> Any:
        """Insert ``doc``; resolves to a ``DocumentResponse``."""
        url = with_query(self.doc_url, options)
        request = Request("POST", url, _document_body(doc))
        return self._session.execute(request, expect_document_response(_document_type(doc, type_)))

    def document(self, key: str, options: ReadOptions = NO_HEADER, type_: Any = None) -> Any:
        """Read one document; resolves to a ``Document``.

        With ``IfNoneMatch`` an unchanged document raises ``ArangoError`` with code 304.
        """
        request = Request("GET", self._document_url(key), header=options.header())

        def handle(response):
            _raise_not_modified(response)
            value = check_error(parse_json(response.body), response.status_code)
            return Document.from_payload(value, type_)

        return self._session.execute(request, handle)

    def document_header(self, key: str, options: ReadOptions = NO_HEADER) -> Any:
        """Read only the ``_id``/``_key``/``_rev`` of one document."""
        request = Request("GET", self._document_url(key), header=options.header())
        decode = expect(Header)

        def handle(response):
            _raise_not_modified(response)
            return decode(response)

        return self._session.execute(request, handle)

    def update_document(
        self,
        key: str,
        doc: Any,
        options: UpdateOptions | None = None,
        type_: Any = None,
    ) -> Any:
        """Partially update a document (``PATCH``)."""
        url = with_query(self._document_url(key), options)
        request = Request("PATCH", url, _document_body(doc))
        return self._session.execute(request, expect_document_response(_document_type(doc, type_)))

    def replace_document(
        self,
        key: str,
        doc: Any,
        options: ReplaceOptions | None = None,
        precondition: ReadOptions = NO_HEADER,
        type_: Any = None,
    ) -> Any:
        """Replace a document (``PUT``), optionally guarded by ``If-Match``."""
        url = with_query(self._document_url(key), options)
        request = Request("PUT", url, _document_body(doc), header=precondition.header())
        return self._session.execute(request, expect_document_response(_document_type(doc, type_)))

    def remove_document(
        self,
        key: str,
        options: RemoveOptions | None = None,
        precondition: ReadOptions = NO_HEADER,
        type_: Any = None,
    ) -> Any:
        """Remove a document, optionally guarded by ``If-Match``."""
        url = with_query(self._document_url(key), options)
        request = Request("DELETE", url, header=precondition.header())
        return self._session.execute(request, expect_document_response(type_))

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------
    def _document_url(self, key: str) -> str:
        return f"{self.doc_url}/{quote(key, safe='')}"


__all__ = ["Collection"]
