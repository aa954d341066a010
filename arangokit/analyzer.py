"""ArangoSearch analyzer definitions.

An analyzer is a name, a type tag and a type-specific ``properties``
object. Properties are kept as a plain mapping so that every analyzer type
the server knows round-trips; the property models below are conveniences
for building the common ones.
"""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, Field, field_validator

from arangokit.serialization import ApiModel, OptionsModel, to_payload


class AnalyzerType(str, Enum):
    IDENTITY = "identity"
    DELIMITER = "delimiter"
    STEM = "stem"
    NORM = "norm"
    NGRAM = "ngram"
    TEXT = "text"
    GEOJSON = "geojson"
    STOPWORDS = "stopwords"
    PIPELINE = "pipeline"


class AnalyzerFeature(str, Enum):
    FREQUENCY = "frequency"
    NORM = "norm"
    POSITION = "position"


class AnalyzerCase(str, Enum):
    LOWER = "lower"
    NONE = "none"
    UPPER = "upper"


class NgramStreamType(str, Enum):
    BINARY = "binary"
    UTF8 = "utf8"


class DelimiterAnalyzerProperties(OptionsModel):
    delimiter: str | None = None


class StemAnalyzerProperties(OptionsModel):
    locale: str


class NormAnalyzerProperties(OptionsModel):
    locale: str
    case: AnalyzerCase | None = None
    accent: bool | None = None


class NgramAnalyzerProperties(OptionsModel):
    min: int
    max: int
    preserve_original: bool
    stream_type: NgramStreamType | None = None


class TextAnalyzerProperties(OptionsModel):
    locale: str
    case: AnalyzerCase | None = None
    accent: bool | None = None
    stopwords: list[str] | None = None
    stopwords_path: list[str] | None = None
    stemming: bool | None = None


class StopwordsAnalyzerProperties(OptionsModel):
    stopwords: list[str]
    hex: bool | None = None


class AnalyzerInfo(ApiModel):
    """Analyzer definition, as sent to ``POST _api/analyzer`` and read back."""

    name: str
    analyzer_type: AnalyzerType = Field(alias="type")
    features: list[AnalyzerFeature] | None = None
    properties: dict[str, Any] | None = None

    @field_validator("properties", mode="before")
    @classmethod
    def _properties_payload(cls, value: Any) -> Any:
        if isinstance(value, BaseModel):
            return to_payload(value)
        return value


class AnalyzerDescription(ApiModel):
    name: str


__all__ = [
    "AnalyzerCase",
    "AnalyzerDescription",
    "AnalyzerFeature",
    "AnalyzerInfo",
    "AnalyzerType",
    "DelimiterAnalyzerProperties",
    "NgramAnalyzerProperties",
    "NgramStreamType",
    "NormAnalyzerProperties",
    "StemAnalyzerProperties",
    "StopwordsAnalyzerProperties",
    "TextAnalyzerProperties",
]
