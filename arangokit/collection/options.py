"""Options for creating and reconfiguring collections."""

from __future__ import annotations

from typing import Any

from pydantic import Field, field_serializer

from arangokit.collection.response import CollectionType, KeyOptions
from arangokit.serialization import OptionsModel


class CreateParameters(OptionsModel):
    """Query parameters of ``POST _api/collection``; booleans travel as 1/0."""

    wait_for_sync_replication: bool | None = None
    enforce_replication_factor: bool | None = None

    @field_serializer("wait_for_sync_replication", "enforce_replication_factor")
    def _bool_to_int(self, value: bool | None) -> int | None:
        if value is None:
            return None
        return 1 if value else 0


class CreateOptions(OptionsModel):
    """Body of ``POST _api/collection``."""

    name: str
    collection_type: CollectionType | None = Field(default=None, alias="type")
    wait_for_sync: bool | None = None
    is_system: bool | None = None
    key_options: KeyOptions | None = None
    schema_: dict[str, Any] | None = Field(default=None, alias="schema")
    sharding_strategy: str | None = None
    number_of_shards: int | None = None
    shard_keys: list[str] | None = None
    replication_factor: int | None = None
    write_concern: int | None = None
    distribute_shards_like: str | None = None
    smart_join_attribute: str | None = None


class ChecksumOptions(OptionsModel):
    with_revisions: bool | None = None
    with_data: bool | None = None


class PropertiesOptions(OptionsModel):
    wait_for_sync: bool | None = None
    cache_enabled: bool | None = None
    schema_: dict[str, Any] | None = Field(default=None, alias="schema")


__all__ = [
    "ChecksumOptions",
    "CreateOptions",
    "CreateParameters",
    "PropertiesOptions",
]
