"""
Collections
===========

``Collection`` is the handle for one collection; the response and option
models describe the payloads of the collection endpoints.
"""

from .collection import Collection
from .options import ChecksumOptions, CreateOptions, CreateParameters, PropertiesOptions
from .response import (
    ArangoIndex,
    Checksum,
    CollectionStatus,
    CollectionType,
    Figures,
    Info,
    KeyOptions,
    Properties,
    Revision,
    Statistics,
)

__all__ = [
    "ArangoIndex",
    "Checksum",
    "ChecksumOptions",
    "Collection",
    "CollectionStatus",
    "CollectionType",
    "CreateOptions",
    "CreateParameters",
    "Figures",
    "Info",
    "KeyOptions",
    "Properties",
    "PropertiesOptions",
    "Revision",
    "Statistics",
]
