"""Unit tests for arangokit.response (envelope decoding)."""

import orjson
import pytest
from pydantic import BaseModel

from arangokit.errors import ArangoError, ClientError, SerdeError
from arangokit.response import (
    Failure,
    Success,
    check_error,
    decode_envelope,
    deserialize_response,
    deserialize_result,
    expect_field,
    expect_result,
    is_error_shape,
)

from conftest import reply


class Version(BaseModel):
    server: str
    version: str


ERROR_BODY = {
    "error": True,
    "code": 404,
    "errorNum": 1203,
    "errorMessage": "collection or view not found",
}


# =============================================================================
# Envelope selection
# =============================================================================


class TestDecodeEnvelope:
    """Tests for decode_envelope."""

    @pytest.mark.parametrize(
        "payload",
        [
            {"server": "arango", "version": "3.11.0"},
            {"nested": {"list": [1, 2, {"deep": None}]}, "flag": False},
            {"errorNum": 3},
            {"errorMessage": "only the message"},
            [1, "two", 3.5],
            {},
        ],
    )
    def test_round_trip(self, payload) -> None:
        """Any payload without both error fields should decode back unchanged."""
        envelope = decode_envelope(orjson.dumps(payload).decode())
        assert isinstance(envelope, Success)
        assert envelope.result == payload

    def test_typed_success(self) -> None:
        """A type should be applied to the success payload."""
        envelope = decode_envelope('{"server":"arango","version":"3.11.0","license":"community"}', Version)
        assert envelope.result == Version(server="arango", version="3.11.0")

    @pytest.mark.parametrize(
        "body",
        [
            '{"errorNum":1,"errorMessage":"m","code":400,"error":true,"extra":[1,2]}',
            '{"extra":{"a":1},"errorMessage":"m","code":400,"errorNum":1}',
            '{"code":400,"server":"arango","version":"1","errorNum":1,"errorMessage":"m"}',
        ],
    )
    def test_error_shape_takes_precedence(self, body: str) -> None:
        """An object with errorNum and errorMessage should always be a failure."""
        envelope = decode_envelope(body, Version)
        assert isinstance(envelope, Failure)
        assert envelope.error_num == 1
        assert envelope.message == "m"
        assert envelope.code == 400

    def test_code_falls_back_to_status(self) -> None:
        """A missing code should be taken from the HTTP status."""
        envelope = decode_envelope('{"errorNum":1200,"errorMessage":"conflict"}', status_code=409)
        assert isinstance(envelope, Failure)
        assert envelope.code == 409

    def test_missing_code_without_status(self) -> None:
        """Without code or status the error shape should still win, with code 0."""
        with pytest.raises(ArangoError) as exc_info:
            deserialize_response('{"errorNum":1202,"errorMessage":"not found","x":1}')
        assert exc_info.value.code == 0
        assert exc_info.value.error_num == 1202

    def test_malformed_error_fields_are_serde_errors(self) -> None:
        """A non-integer errorNum should be a decode error."""
        with pytest.raises(SerdeError):
            decode_envelope('{"errorNum":"x","errorMessage":"m","code":400}')

    def test_invalid_json(self) -> None:
        """Unparseable bodies should raise SerdeError."""
        with pytest.raises(SerdeError):
            decode_envelope("not json")

    def test_type_mismatch(self) -> None:
        """A success payload not matching the type should raise SerdeError."""
        with pytest.raises(SerdeError):
            decode_envelope('{"server":"arango"}', Version)


class TestIsErrorShape:
    """Tests for is_error_shape."""

    def test_requires_both_fields(self) -> None:
        """Only objects with both errorNum and errorMessage qualify."""
        assert is_error_shape({"errorNum": 1, "errorMessage": "m"})
        assert not is_error_shape({"errorNum": 1})
        assert not is_error_shape([{"errorNum": 1, "errorMessage": "m"}])


# =============================================================================
# Raising helpers
# =============================================================================


class TestDeserializeResponse:
    """Tests for deserialize_response / deserialize_result."""

    def test_failure_raises_arango_error(self) -> None:
        """An error envelope should raise ArangoError with server details."""
        with pytest.raises(ArangoError) as exc_info:
            deserialize_response(orjson.dumps(ERROR_BODY).decode())
        error = exc_info.value
        assert error.code == 404
        assert error.status_code == 404
        assert error.error_num == 1203
        assert error.message == "collection or view not found"
        assert error.details["error"] is True
        assert str(error) == "collection or view not found(1203)"
        assert isinstance(error, ClientError)

    def test_result_unwrap(self) -> None:
        """deserialize_result should decode the result field."""
        assert deserialize_result('{"error":false,"code":200,"result":[1,2]}', list[int]) == [1, 2]

    def test_missing_result_is_serde_error(self) -> None:
        """A payload without result should be a decode error."""
        with pytest.raises(SerdeError, match="result"):
            deserialize_result('{"error":false,"code":200}')

    def test_result_unwrap_still_checks_errors(self) -> None:
        """An error envelope should win over the result unwrap."""
        with pytest.raises(ArangoError):
            deserialize_result(orjson.dumps(ERROR_BODY).decode())

    def test_check_error_passes_through(self) -> None:
        """check_error should return non-error values unchanged."""
        assert check_error({"a": 1}) == {"a": 1}


class TestHandlers:
    """Tests for handler factories."""

    def test_expect_result(self) -> None:
        """expect_result should decode the result of a raw response."""
        assert expect_result(bool)(reply({"result": True})) is True

    def test_expect_field(self) -> None:
        """expect_field should decode a single top-level field."""
        assert expect_field("id", str)(reply({"id": "123", "error": False})) == "123"

    def test_expect_field_missing(self) -> None:
        """A missing field should be a decode error."""
        with pytest.raises(SerdeError, match="id"):
            expect_field("id", str)(reply({"error": False}))

    def test_expect_field_uses_status_for_errors(self) -> None:
        """Error envelopes without code should use the response status."""
        with pytest.raises(ArangoError) as exc_info:
            expect_field("id")(reply({"errorNum": 1, "errorMessage": "m"}, status=412))
        assert exc_info.value.code == 412
