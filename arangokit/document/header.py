"""Document system attributes and the document wrapper."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from pydantic import ConfigDict, Field

from arangokit.errors import SerdeError
from arangokit.serialization import ApiModel, decode_value, to_payload

T = TypeVar("T")

SYSTEM_FIELDS = ("_id", "_key", "_rev")


class Header(ApiModel):
    """The ``_id``/``_key``/``_rev`` triple identifying a document revision."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore", frozen=True)

    id: str = Field(alias="_id")
    key: str = Field(alias="_key")
    rev: str = Field(alias="_rev")


@dataclass
class Document(Generic[T]):
    """A document body together with its header.

    On the wire the header fields sit next to the body fields; empty header
    fields are left out when writing so the server assigns them.
    """

    document: T
    header: Header | None = None

    @classmethod
    def from_payload(cls, payload: Any, type_: Any = None) -> Document[Any]:
        if not isinstance(payload, dict):
            raise SerdeError("document should be a json object")
        body = dict(payload)
        for name in SYSTEM_FIELDS:
            if name not in body:
                raise SerdeError(f"missing field `{name}`")
        header = decode_value({name: body.pop(name) for name in SYSTEM_FIELDS}, Header)
        return cls(document=decode_value(body, type_), header=header)

    def to_payload(self) -> dict[str, Any]:
        body = to_payload(self.document)
        if not isinstance(body, dict):
            raise SerdeError("document body should serialize to a json object")
        if self.header is not None:
            for name, value in (("_id", self.header.id), ("_key", self.header.key), ("_rev", self.header.rev)):
                if value:
                    body[name] = value
        return body

    @property
    def key(self) -> str | None:
        return self.header.key if self.header else None


__all__ = ["Document", "Header", "SYSTEM_FIELDS"]
