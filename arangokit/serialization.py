"""JSON encoding helpers and base models for wire payloads.

Option models and request bodies share one rule: fields the caller did not
set are omitted entirely, never sent as ``null``.
"""

from __future__ import annotations

from collections.abc import Mapping
from functools import lru_cache
from typing import Any

import httpx
import orjson
from pydantic import BaseModel, ConfigDict, TypeAdapter, ValidationError
from pydantic.alias_generators import to_camel

from arangokit.errors import SerdeError


class ApiModel(BaseModel):
    """Server-shaped model: camelCase on the wire, unknown fields ignored."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )


class OptionsModel(ApiModel):
    """Caller-built option set; every field defaults to absent."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="forbid",
    )


def to_payload(obj: Any) -> Any:
    """Convert models and mappings into plain JSON-ready values."""
    if isinstance(obj, BaseModel):
        return obj.model_dump(mode="json", by_alias=True, exclude_none=True)
    if isinstance(obj, Mapping):
        return {key: to_payload(value) for key, value in obj.items()}
    if isinstance(obj, (list, tuple)):
        return [to_payload(item) for item in obj]
    return obj


def to_json(obj: Any) -> str:
    """Serialize ``obj`` to JSON text."""
    try:
        return orjson.dumps(to_payload(obj)).decode("utf-8")
    except (orjson.JSONEncodeError, ValidationError) as exc:
        raise SerdeError(str(exc)) from exc


def parse_json(text: str) -> Any:
    """Parse JSON text into plain Python values."""
    try:
        return orjson.loads(text)
    except orjson.JSONDecodeError as exc:
        raise SerdeError(str(exc)) from exc


@lru_cache(maxsize=256)
def _adapter(type_: Any) -> TypeAdapter:
    return TypeAdapter(type_)


def decode_value(value: Any, type_: Any = None) -> Any:
    """Validate an already-parsed value against ``type_``.

    ``None`` (or ``Any``) returns the value untouched.
    """
    if type_ is None or type_ is Any:
        return value
    try:
        return _adapter(type_).validate_python(value)
    except ValidationError as exc:
        raise SerdeError(str(exc)) from exc


def query_params(options: Any) -> dict[str, str]:
    """Render an options model as query-string parameters.

    Booleans are sent as ``true``/``false``; unset fields are left out.
    """
    if options is None:
        return {}
    payload = to_payload(options)
    params: dict[str, str] = {}
    for key, value in payload.items():
        if value is None:
            continue
        if isinstance(value, bool):
            params[key] = "true" if value else "false"
        elif isinstance(value, (list, dict)):
            params[key] = orjson.dumps(value).decode("utf-8")
        else:
            params[key] = str(value)
    return params


def with_query(url: str, options: Any = None, **extra: Any) -> str:
    """Append the query parameters of ``options`` (and ``extra``) to ``url``."""
    params = query_params(options)
    params.update(query_params({key: value for key, value in extra.items() if value is not None}))
    if not params:
        return url
    return str(httpx.URL(url).copy_merge_params(params))


__all__ = [
    "ApiModel",
    "OptionsModel",
    "decode_value",
    "parse_json",
    "query_params",
    "to_json",
    "to_payload",
    "with_query",
]
