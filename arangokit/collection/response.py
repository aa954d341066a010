"""Collection descriptions returned by the ``_api/collection`` endpoints."""

from __future__ import annotations

from enum import IntEnum
from typing import Any

from pydantic import Field

from arangokit.serialization import ApiModel


class CollectionType(IntEnum):
    DOCUMENT = 2
    EDGE = 3


class CollectionStatus(IntEnum):
    NEW_BORN = 1
    UNLOADED = 2
    LOADED = 3
    UNLOADING = 4
    DELETED = 5
    LOADING = 6


class KeyOptions(ApiModel):
    """Key generation settings of a collection.

    ``allow_user_keys`` left unset means the server default (allowed).
    ``last_value`` is reported by the server and never sent back.
    """

    allow_user_keys: bool | None = None
    key_type: str | None = Field(default=None, alias="type")
    increment: int | None = None
    offset: int | None = None
    last_value: int | None = Field(default=None, exclude=True)


class Info(ApiModel):
    count: int | None = None
    id: str
    name: str
    globally_unique_id: str | None = None
    is_system: bool = False
    status: CollectionStatus | None = None
    collection_type: CollectionType = Field(alias="type")


class Properties(Info):
    status_string: str | None = None
    key_options: KeyOptions | None = None
    wait_for_sync: bool | None = None
    write_concern: int | None = None
    cache_enabled: bool | None = None
    object_id: str | None = None
    schema_: dict[str, Any] | None = Field(default=None, alias="schema")


class ArangoIndex(ApiModel):
    count: int | None = None
    size: int | None = None


class Figures(ApiModel):
    indexes: ArangoIndex | None = None


class Statistics(Properties):
    figures: Figures | None = None


class Revision(Properties):
    revision: str


class Checksum(Info):
    revision: str
    checksum: str


__all__ = [
    "ArangoIndex",
    "Checksum",
    "CollectionStatus",
    "CollectionType",
    "Figures",
    "Info",
    "KeyOptions",
    "Properties",
    "Revision",
    "Statistics",
]
