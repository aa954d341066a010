"""Options accepted by document operations.

Query-string options are pydantic models whose unset fields never reach the
wire. Revision preconditions are a tagged choice (``NoHeader``, ``IfMatch``,
``IfNoneMatch``) so "no header" cannot be confused with "match the empty
revision".
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from arangokit.serialization import OptionsModel


class OverwriteMode(str, Enum):
    IGNORE = "ignore"
    REPLACE = "replace"
    UPDATE = "update"
    CONFLICT = "conflict"


class InsertOptions(OptionsModel):
    """Query options for ``POST /_api/document/{collection}``."""

    wait_for_sync: bool | None = None
    return_new: bool | None = None
    return_old: bool | None = None
    silent: bool | None = None
    overwrite: bool | None = None
    overwrite_mode: OverwriteMode | None = None
    keep_null: bool | None = None
    merge_objects: bool | None = None


class UpdateOptions(OptionsModel):
    """Query options for ``PATCH /_api/document/{collection}/{key}``."""

    keep_null: bool | None = None
    merge_objects: bool | None = None
    wait_for_sync: bool | None = None
    ignore_revs: bool | None = None
    return_new: bool | None = None
    return_old: bool | None = None
    silent: bool | None = None


class ReplaceOptions(OptionsModel):
    """Query options for ``PUT /_api/document/{collection}/{key}``."""

    wait_for_sync: bool | None = None
    ignore_revs: bool | None = None
    return_new: bool | None = None
    return_old: bool | None = None
    silent: bool | None = None


class RemoveOptions(OptionsModel):
    """Query options for ``DELETE /_api/document/{collection}/{key}``."""

    wait_for_sync: bool | None = None
    return_old: bool | None = None
    silent: bool | None = None


class ReadOptions:
    """Revision precondition attached to a document request as one header."""

    __slots__ = ()

    def header(self) -> tuple[str, str] | None:
        return None


@dataclass(frozen=True, slots=True)
class NoHeader(ReadOptions):
    """No precondition: the request carries neither ``If-Match`` nor ``If-None-Match``."""


@dataclass(frozen=True, slots=True)
class IfMatch(ReadOptions):
    """Only act if the stored document has revision ``revision``."""

    revision: str

    def header(self) -> tuple[str, str]:
        return ("If-Match", self.revision)


@dataclass(frozen=True, slots=True)
class IfNoneMatch(ReadOptions):
    """Only act if the stored document no longer has revision ``revision``."""

    revision: str

    def header(self) -> tuple[str, str]:
        return ("If-None-Match", self.revision)


NO_HEADER = NoHeader()


__all__ = [
    "IfMatch",
    "IfNoneMatch",
    "InsertOptions",
    "NO_HEADER",
    "NoHeader",
    "OverwriteMode",
    "ReadOptions",
    "RemoveOptions",
    "ReplaceOptions",
    "UpdateOptions",
]
