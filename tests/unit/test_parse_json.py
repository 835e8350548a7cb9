"""Unit tests for JSON response parsing."""

from dataclasses import dataclass
from typing import Any

import httpx
import pytest
from pydantic import BaseModel, ValidationError

from httpparse.constants import ERROR_CONTEXT_LIMIT_BYTES
from httpparse.errors import (
    DecodeError,
    ParseErrorClass,
    RequestFailedError,
    UnexpectedStatusError,
)
from httpparse.parse import parse_json
from tests.helpers.streams import FailingStream, TrackingStream, streamed_response


class StructuredJSON(BaseModel):
    """Two-field decode target."""

    value_one: str
    value_two: int


@dataclass
class Fields:
    """Dataclass decode target."""

    field1: str
    field2: int


class TestParseJSONSuccess:
    """Tests for successful decoding."""

    def test_decodes_model(self) -> None:
        """Well-formed JSON populates every field."""
        response = streamed_response(
            400,
            TrackingStream(b'{"value_one":"hello there", "value_two":42}'),
        )

        data = parse_json(response, 400, StructuredJSON)

        assert data == StructuredJSON(value_one="hello there", value_two=42)

    def test_decodes_dataclass(self) -> None:
        """Dataclasses are valid decode targets."""
        response = streamed_response(
            200,
            TrackingStream(b'{"field1":"hello there", "field2":42}'),
        )

        data = parse_json(response, [200], Fields)

        assert data.field1 == "hello there"
        assert data.field2 == 42

    def test_decodes_plain_dict(self) -> None:
        """Untyped targets receive the raw JSON structure."""
        response = httpx.Response(201, content=b'{"items": [1, 2, 3]}')

        data = parse_json(response, [200, 201], dict[str, Any])

        assert data == {"items": [1, 2, 3]}

    def test_closes_body_once(self) -> None:
        """The body is released exactly once on success."""
        stream = TrackingStream(b'{"value_one":"a","value_two":1}')
        response = streamed_response(200, stream)

        parse_json(response, 200, StructuredJSON)

        assert response.is_closed is True
        assert stream.close_count == 1


class TestParseJSONUnexpectedStatus:
    """Tests for the unexpected status path."""

    def test_includes_body(self) -> None:
        """The captured body is appended to the mismatch message."""
        stream = TrackingStream(b"woa there")
        response = streamed_response(999, stream)

        with pytest.raises(UnexpectedStatusError) as excinfo:
            parse_json(response, 200, StructuredJSON)

        message = str(excinfo.value)
        assert "got status code 999 but wanted 200, body: woa there" in message
        assert excinfo.value.error_class == ParseErrorClass.UNEXPECTED_STATUS
        assert stream.close_count == 1

    def test_read_error_is_appended(self) -> None:
        """A failed context read is appended, not substituted."""
        stream = FailingStream("some read err")
        response = streamed_response(999, stream)

        with pytest.raises(UnexpectedStatusError) as excinfo:
            parse_json(response, 200, StructuredJSON)

        assert str(excinfo.value) == (
            "got status code 999 but wanted 200, also an error occurred "
            "when reading the response body: some read err"
        )
        assert excinfo.value.body is None
        assert stream.close_count == 1

    def test_large_body_is_truncated(self) -> None:
        """Only the first 1 MiB of an oversized body is reported."""
        data = b"z" * (ERROR_CONTEXT_LIMIT_BYTES + 1)
        response = streamed_response(999, TrackingStream(data, chunk_size=65536))

        with pytest.raises(UnexpectedStatusError) as excinfo:
            parse_json(response, 200, StructuredJSON)

        message = str(excinfo.value)
        prefix = (
            "got status code 999 but wanted 200, the first 1048576 bytes "
            "of the response body are: "
        )
        assert message.startswith(prefix + "zzz")
        assert len(message) == len(prefix) + 1048576
        assert excinfo.value.body is not None
        assert len(excinfo.value.body) == 1048576

    def test_multiple_wanted(self) -> None:
        """Several expected codes use the bracketed list form."""
        response = streamed_response(999, TrackingStream(b"woa there"))

        with pytest.raises(UnexpectedStatusError) as excinfo:
            parse_json(response, [200, 888], StructuredJSON)

        assert (
            "got status code 999 but wanted one of [200 888], body: woa there"
            in str(excinfo.value)
        )

    def test_empty_expected_set(self) -> None:
        """An empty expected set matches nothing and the body is released."""
        stream = TrackingStream(b"woa there")
        response = streamed_response(200, stream)

        with pytest.raises(UnexpectedStatusError) as excinfo:
            parse_json(response, [], StructuredJSON)

        assert str(excinfo.value) == (
            "got status code 200 but wanted one of [], body: woa there"
        )
        assert stream.close_count == 1


class TestParseJSONDecodeErrors:
    """Tests for decode failures."""

    def test_malformed_json(self) -> None:
        """Malformed input keeps the decoder's own message."""
        response = streamed_response(400, TrackingStream(b"lats"))

        with pytest.raises(DecodeError) as excinfo:
            parse_json(response, 400, StructuredJSON)

        message = str(excinfo.value)
        assert message.startswith("unmarshalling response body: ")
        assert "Invalid JSON: expected value at line 1 column 1" in message
        assert "\n" not in message
        assert "errors.pydantic.dev" not in message
        assert "lats" not in message
        assert excinfo.value.error_class == ParseErrorClass.DECODE_FAILED
        assert isinstance(excinfo.value.__cause__, ValidationError)

    def test_type_mismatch(self) -> None:
        """Well-formed JSON of the wrong shape fails to decode."""
        response = streamed_response(
            200,
            TrackingStream(b'{"value_one":"hello", "value_two":"not a number"}'),
        )

        with pytest.raises(DecodeError) as excinfo:
            parse_json(response, 200, StructuredJSON)

        message = str(excinfo.value)
        assert message.startswith("unmarshalling response body: value_two: ")
        assert "\n" not in message
        assert "not a number" not in message

    def test_truncated_stream(self) -> None:
        """A body cut short is reported as a decode failure."""
        response = streamed_response(200, TrackingStream(b'{"value_one":"hel'))

        with pytest.raises(DecodeError):
            parse_json(response, 200, StructuredJSON)

    def test_read_error_while_decoding(self) -> None:
        """A read failure on the success path is a decode failure."""
        stream = FailingStream("connection reset", data=b'{"value_one"')
        response = streamed_response(200, stream)

        with pytest.raises(DecodeError) as excinfo:
            parse_json(response, 200, StructuredJSON)

        assert str(excinfo.value) == "unmarshalling response body: connection reset"
        assert stream.close_count == 1


class TestParseJSONRequestError:
    """Tests for the request error short-circuit."""

    def test_request_error(self) -> None:
        """A send failure is reported without touching the response."""
        stream = TrackingStream(b"{}")
        response = streamed_response(200, stream)

        with pytest.raises(RequestFailedError) as excinfo:
            parse_json(
                response,
                200,
                StructuredJSON,
                request_error=httpx.ConnectError("no route to host"),
            )

        assert str(excinfo.value) == "sending request: no route to host"
        assert stream.iterated is False
        assert stream.close_count == 0

    def test_request_error_with_empty_expected_set(self) -> None:
        """The send failure wins over an empty expected set."""
        stream = TrackingStream(b"{}")
        response = streamed_response(200, stream)

        with pytest.raises(RequestFailedError) as excinfo:
            parse_json(
                response,
                [],
                StructuredJSON,
                request_error=httpx.ConnectError("boom"),
            )

        assert str(excinfo.value) == "sending request: boom"
        assert stream.iterated is False
        assert stream.close_count == 0
