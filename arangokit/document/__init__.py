"""
Document Types
==============

Document headers, the document wrapper, option models for document
operations and the document mutation response. The operations themselves
live on ``arangokit.collection.Collection``.
"""

from .header import SYSTEM_FIELDS, Document, Header
from .options import (
    NO_HEADER,
    IfMatch,
    IfNoneMatch,
    InsertOptions,
    NoHeader,
    OverwriteMode,
    ReadOptions,
    RemoveOptions,
    ReplaceOptions,
    UpdateOptions,
)
from .response import DocumentResponse, decode_document_response

__all__ = [
    "Document",
    "DocumentResponse",
    "Header",
    "IfMatch",
    "IfNoneMatch",
    "InsertOptions",
    "NO_HEADER",
    "NoHeader",
    "OverwriteMode",
    "ReadOptions",
    "RemoveOptions",
    "ReplaceOptions",
    "SYSTEM_FIELDS",
    "UpdateOptions",
    "decode_document_response",
]
