"""Decoding of ArangoDB response envelopes.

ArangoDB does not tag its responses: a failed request answers with an
object carrying ``errorNum``/``errorMessage`` (plus ``code`` and
``error: true``), a successful one answers with the payload itself. The
decoder therefore works structurally, in a fixed order:

1. parse the body as JSON;
2. if the object has the error shape, decode a ``Failure``;
3. otherwise decode the payload into the requested type as ``Success``.

A success payload that legitimately carries both ``errorNum`` and
``errorMessage`` is indistinguishable from an error on the wire and is
reported as one.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any, Generic, TypeVar

from arangokit.client.base import RawResponse
from arangokit.errors import ArangoError, SerdeError
from arangokit.serialization import decode_value, parse_json

logger = logging.getLogger(__name__)

T = TypeVar("T")

ERROR_NUM_FIELD = "errorNum"
ERROR_MESSAGE_FIELD = "errorMessage"


@dataclass(frozen=True)
class Success(Generic[T]):
    """Successfully decoded payload."""

    result: T


@dataclass(frozen=True, slots=True)
class Failure:
    """Server error envelope."""

    code: int
    error_num: int
    message: str
    details: dict[str, Any] = field(default_factory=dict)

    def to_error(self) -> ArangoError:
        return ArangoError(self.code, self.error_num, self.message, self.details)


Envelope = Success[T] | Failure


def is_error_shape(value: Any) -> bool:
    """True when ``value`` is an object carrying the server's error fields."""
    return isinstance(value, dict) and ERROR_NUM_FIELD in value and ERROR_MESSAGE_FIELD in value


def decode_failure(payload: dict[str, Any], status_code: int | None = None) -> Failure:
    """Build a ``Failure`` from an error-shaped object.

    ``code`` falls back to the HTTP status when the body omits it, and to 0
    when no status is known either.
    """
    code = payload.get("code", 0 if status_code is None else status_code)
    error_num = payload.get(ERROR_NUM_FIELD)
    message = payload.get(ERROR_MESSAGE_FIELD)
    if isinstance(code, bool) or not isinstance(code, int):
        raise SerdeError(f"invalid or missing field `code` in error response: {code!r}")
    if isinstance(error_num, bool) or not isinstance(error_num, int):
        raise SerdeError(f"invalid field `{ERROR_NUM_FIELD}` in error response: {error_num!r}")
    if not isinstance(message, str):
        raise SerdeError(f"invalid field `{ERROR_MESSAGE_FIELD}` in error response: {message!r}")
    return Failure(code=code, error_num=error_num, message=message, details=payload)


def decode_envelope_value(value: Any, type_: Any = None, *, status_code: int | None = None) -> Envelope:
    """Choose the envelope variant for an already-parsed value."""
    if is_error_shape(value):
        return decode_failure(value, status_code)
    return Success(decode_value(value, type_))


def decode_envelope(text: str, type_: Any = None, *, status_code: int | None = None) -> Envelope:
    """Parse ``text`` and choose the envelope variant."""
    return decode_envelope_value(parse_json(text), type_, status_code=status_code)


def check_error(value: Any, status_code: int | None = None) -> Any:
    """Raise ``ArangoError`` if ``value`` is error-shaped, else return it."""
    if is_error_shape(value):
        failure = decode_failure(value, status_code)
        logger.debug("ArangoDB error %s (%s): %s", failure.code, failure.error_num, failure.message)
        raise failure.to_error()
    return value


def deserialize_response(text: str, type_: Any = None, *, status_code: int | None = None) -> Any:
    """Decode a response body into ``type_``, raising on the error envelope."""
    envelope = decode_envelope(text, type_, status_code=status_code)
    if isinstance(envelope, Failure):
        logger.debug("ArangoDB error %s (%s): %s", envelope.code, envelope.error_num, envelope.message)
        raise envelope.to_error()
    return envelope.result


def unwrap_result(value: Any, type_: Any = None) -> Any:
    """Decode the ``result`` field of a ``{"result": ...}`` payload."""
    if not isinstance(value, dict) or "result" not in value:
        raise SerdeError("missing field `result`")
    return decode_value(value["result"], type_)


def deserialize_result(text: str, type_: Any = None, *, status_code: int | None = None) -> Any:
    """Decode a response body whose payload lives under ``result``."""
    value = check_error(parse_json(text), status_code)
    return unwrap_result(value, type_)


# ----------------------------------------------------------------------
# Handler factories used by resource flows
# ----------------------------------------------------------------------
def expect(type_: Any = None) -> Callable[[RawResponse], Any]:
    """Handler decoding the whole body into ``type_``."""

    def handle(response: RawResponse) -> Any:
        return deserialize_response(response.body, type_, status_code=response.status_code)

    return handle


def expect_result(type_: Any = None) -> Callable[[RawResponse], Any]:
    """Handler decoding the ``result`` field of the body into ``type_``."""

    def handle(response: RawResponse) -> Any:
        return deserialize_result(response.body, type_, status_code=response.status_code)

    return handle


def expect_field(name: str, type_: Any = None) -> Callable[[RawResponse], Any]:
    """Handler decoding one top-level field of the body into ``type_``."""

    def handle(response: RawResponse) -> Any:
        value = check_error(parse_json(response.body), response.status_code)
        if not isinstance(value, dict) or name not in value:
            raise SerdeError(f"missing field `{name}`")
        return decode_value(value[name], type_)

    return handle


__all__ = [
    "Envelope",
    "Failure",
    "Success",
    "check_error",
    "decode_envelope",
    "decode_envelope_value",
    "decode_failure",
    "deserialize_response",
    "deserialize_result",
    "expect",
    "expect_field",
    "expect_result",
    "is_error_shape",
    "unwrap_result",
]
