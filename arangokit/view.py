"""ArangoSearch view definitions.

Only the fields the client itself needs are modelled strictly; everything
the server reports beyond them is ignored on decode.
"""

from __future__ import annotations

from enum import Enum

from pydantic import Field

from arangokit.serialization import ApiModel, OptionsModel


class ViewType(str, Enum):
    ARANGO_SEARCH = "arangosearch"


class StoreValues(str, Enum):
    NONE = "none"
    ID = "id"


class PrimarySortCompression(str, Enum):
    LZ4 = "lz4"
    NONE = "none"


class SortDirection(str, Enum):
    ASC = "asc"
    DESC = "desc"


class ArangoSearchViewLink(ApiModel):
    analyzers: list[str] | None = None
    fields: dict[str, ArangoSearchViewLink] | None = None
    include_all_fields: bool | None = None
    track_list_positions: bool | None = None
    store_values: StoreValues | None = None


class ConsolidationPolicy(ApiModel):
    """``bytes_accum`` uses ``threshold``; ``tier`` uses the segment limits."""

    policy_type: str = Field(default="tier", alias="type")
    threshold: float | None = None
    segments_min: int | None = None
    segments_max: int | None = None
    segments_bytes_max: int | None = None
    segments_bytes_floor: int | None = None
    min_score: float | None = None


class PrimarySort(ApiModel):
    field: str
    direction: SortDirection | None = None
    asc: bool | None = None


class StoredValues(ApiModel):
    fields: list[str]


class ViewDescription(ApiModel):
    globally_unique_id: str | None = None
    id: str
    name: str
    view_type: ViewType = Field(default=ViewType.ARANGO_SEARCH, alias="type")


class ArangoSearchViewProperties(ApiModel):
    cleanup_interval_step: int | None = None
    consolidation_interval_msec: int | None = None
    commit_interval_msec: int | None = None
    writebuffer_idle: int | None = None
    writebuffer_active: int | None = None
    writebuffer_size_max: int | None = None
    consolidation_policy: ConsolidationPolicy | None = None
    primary_sort: list[PrimarySort] | None = None
    primary_sort_compression: PrimarySortCompression | None = None
    stored_values: list[StoredValues] | None = None
    links: dict[str, ArangoSearchViewLink] | None = None


class View(ViewDescription, ArangoSearchViewProperties):
    """A view description together with its properties."""


class ArangoSearchViewPropertiesOptions(OptionsModel):
    """Body of ``PUT``/``PATCH _api/view/{name}/properties``."""

    cleanup_interval_step: int | None = None
    consolidation_interval_msec: int | None = None
    commit_interval_msec: int | None = None
    writebuffer_idle: int | None = None
    writebuffer_active: int | None = None
    writebuffer_size_max: int | None = None
    consolidation_policy: ConsolidationPolicy | None = None
    primary_sort: list[PrimarySort] | None = None
    primary_sort_compression: PrimarySortCompression | None = None
    stored_values: list[StoredValues] | None = None
    links: dict[str, ArangoSearchViewLink] | None = None


class ViewOptions(ArangoSearchViewPropertiesOptions):
    """Body of ``POST _api/view``: the name, the type and initial properties."""

    name: str
    view_type: ViewType = Field(default=ViewType.ARANGO_SEARCH, alias="type")


__all__ = [
    "ArangoSearchViewLink",
    "ArangoSearchViewProperties",
    "ArangoSearchViewPropertiesOptions",
    "ConsolidationPolicy",
    "PrimarySort",
    "PrimarySortCompression",
    "SortDirection",
    "StoreValues",
    "StoredValues",
    "View",
    "ViewDescription",
    "ViewOptions",
    "ViewType",
]
