"""Responses of document mutation endpoints.

The server answers a create/update/replace/remove either with ``{}`` when
the caller asked for a silent operation, or with the document header plus
whatever ``old``/``new`` bodies the caller requested:

200/201/202: the operation succeeded
404: the document or collection was not found
412: ``If-Match`` was given and the stored revision differs
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Generic, TypeVar

import orjson

from arangokit.client.base import RawResponse
from arangokit.document.header import SYSTEM_FIELDS, Header
from arangokit.errors import SerdeError
from arangokit.response import check_error
from arangokit.serialization import decode_value, parse_json

T = TypeVar("T")


@dataclass(frozen=True)
class DocumentResponse(Generic[T]):
    """Outcome of a document mutation.

    A silent response carries nothing; a populated one always carries its
    header, and ``old``/``new`` only when the server was asked to return them.
    """

    header_: Header | None = None
    old: T | None = None
    new: T | None = None
    old_rev: str | None = None

    @classmethod
    def silent(cls) -> DocumentResponse[Any]:
        return cls()

    def is_silent(self) -> bool:
        """True when the server sent back an empty object."""
        return self.header_ is None

    def has_response(self) -> bool:
        """True when the server sent back the document header."""
        return self.header_ is not None

    def header(self) -> Header | None:
        return self.header_

    def old_doc(self) -> T | None:
        """Document body before the change."""
        return self.old

    def new_doc(self) -> T | None:
        """Document body after the change."""
        return self.new

    def old_revision(self) -> str | None:
        return self.old_rev


def _stringify(value: Any) -> str:
    if isinstance(value, str):
        return value
    return orjson.dumps(value).decode("utf-8")


def decode_document_value(value: Any, type_: Any = None) -> DocumentResponse[Any]:
    """Decode an already-parsed (and error-checked) document mutation payload."""
    if not isinstance(value, dict):
        raise SerdeError("should be a json object")
    if not value:
        return DocumentResponse.silent()

    fields = dict(value)
    for name in SYSTEM_FIELDS:
        if name not in fields:
            raise SerdeError(f"missing field `{name}`")
    header = decode_value({name: fields.pop(name) for name in SYSTEM_FIELDS}, Header)

    old = decode_value(fields.pop("old"), type_) if "old" in fields else None
    new = decode_value(fields.pop("new"), type_) if "new" in fields else None
    old_rev = _stringify(fields.pop("_old_rev")) if "_old_rev" in fields else None
    # Remaining fields are ignored.
    return DocumentResponse(header_=header, old=old, new=new, old_rev=old_rev)


def decode_document_response(
    text: str,
    type_: Any = None,
    *,
    status_code: int | None = None,
) -> DocumentResponse[Any]:
    """Parse a document mutation body, raising ``ArangoError`` on the error envelope."""
    value = check_error(parse_json(text), status_code)
    return decode_document_value(value, type_)


def expect_document_response(type_: Any = None):
    """Handler decoding a ``RawResponse`` into a ``DocumentResponse``."""

    def handle(response: RawResponse) -> DocumentResponse[Any]:
        return decode_document_response(response.body, type_, status_code=response.status_code)

    return handle


__all__ = [
    "DocumentResponse",
    "decode_document_response",
    "decode_document_value",
    "expect_document_response",
]
