"""Index definitions.

A ``primary`` index cannot be created; it only shows up when listing the
indexes of a collection, since the server creates one on every collection.
The factories below build the definitions accepted by
``Database.create_index``.
"""

from __future__ import annotations

from enum import Enum

from pydantic import Field

from arangokit.serialization import ApiModel


class IndexType(str, Enum):
    PRIMARY = "primary"
    EDGE = "edge"
    FULLTEXT = "fulltext"
    GEO = "geo"
    HASH = "hash"
    PERSISTENT = "persistent"
    SKIPLIST = "skiplist"
    TTL = "ttl"


class Index(ApiModel):
    """An index on a collection, as sent on creation and reported back."""

    index_type: IndexType = Field(alias="type")
    fields: list[str] = Field(default_factory=list)
    id: str | None = None
    name: str | None = None
    is_newly_created: bool | None = None
    selectivity_estimate: float | None = None
    unique: bool | None = None
    sparse: bool | None = None
    deduplicate: bool | None = None
    min_length: int | None = None
    geo_json: bool | None = None
    expire_after: int | None = None
    in_background: bool | None = None

    @classmethod
    def persistent(
        cls, fields: list[str], unique: bool = False, sparse: bool = False, deduplicate: bool = False
    ) -> Index:
        return cls._ranged(IndexType.PERSISTENT, fields, unique, sparse, deduplicate)

    @classmethod
    def hash(
        cls, fields: list[str], unique: bool = False, sparse: bool = False, deduplicate: bool = False
    ) -> Index:
        return cls._ranged(IndexType.HASH, fields, unique, sparse, deduplicate)

    @classmethod
    def skiplist(
        cls, fields: list[str], unique: bool = False, sparse: bool = False, deduplicate: bool = False
    ) -> Index:
        return cls._ranged(IndexType.SKIPLIST, fields, unique, sparse, deduplicate)

    @classmethod
    def ttl(cls, fields: list[str], expire_after: int) -> Index:
        """Documents expire ``expire_after`` seconds after the indexed timestamp."""
        return cls(index_type=IndexType.TTL, fields=list(fields), expire_after=expire_after, in_background=False)

    @classmethod
    def geo(cls, fields: list[str], geo_json: bool | None = None) -> Index:
        return cls(index_type=IndexType.GEO, fields=list(fields), geo_json=geo_json, in_background=False)

    @classmethod
    def fulltext(cls, fields: list[str], min_length: int) -> Index:
        return cls(index_type=IndexType.FULLTEXT, fields=list(fields), min_length=min_length, in_background=False)

    @classmethod
    def _ranged(
        cls, index_type: IndexType, fields: list[str], unique: bool, sparse: bool, deduplicate: bool
    ) -> Index:
        return cls(
            index_type=index_type,
            fields=list(fields),
            unique=unique,
            sparse=sparse,
            deduplicate=deduplicate,
            in_background=False,
        )

    def with_name(self, name: str) -> Index:
        return self.model_copy(update={"name": name})

    def create_in_background(self) -> Index:
        """Build without fully locking the collection."""
        return self.model_copy(update={"in_background": True})


class IndexCollection(ApiModel):
    """Indexes of one collection (``GET _api/index``)."""

    indexes: list[Index] = Field(default_factory=list)
    code: int | None = None
    error: bool = False


class DeleteIndexResponse(ApiModel):
    id: str
    code: int | None = None
    error: bool = False


__all__ = ["DeleteIndexResponse", "Index", "IndexCollection", "IndexType"]
