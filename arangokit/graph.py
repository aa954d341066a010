"""Named graph definitions (``_api/gharial``)."""

from __future__ import annotations

from pydantic import Field

from arangokit.serialization import ApiModel

GHARIAL_API_PATH = "_api/gharial"


class EdgeDefinition(ApiModel):
    collection: str
    from_: list[str] = Field(alias="from")
    to: list[str]


class GraphOptions(ApiModel):
    smart_graph_attribute: str | None = None
    number_of_shards: int | None = None
    replication_factor: int | None = None
    write_concern: int | None = None


class Graph(ApiModel):
    name: str
    edge_definitions: list[EdgeDefinition] = Field(default_factory=list)
    orphan_collections: list[str] | None = None
    is_smart: bool | None = None
    is_disjoint: bool | None = None
    options: GraphOptions | None = None


class GraphCollection(ApiModel):
    graphs: list[Graph] = Field(default_factory=list)


class GraphResponse(ApiModel):
    graph: Graph


__all__ = [
    "EdgeDefinition",
    "GHARIAL_API_PATH",
    "Graph",
    "GraphCollection",
    "GraphOptions",
    "GraphResponse",
]
