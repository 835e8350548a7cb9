"""Parse HTTP responses into raw bytes or decoded JSON.

Consuming a response follows a repetitive pattern:

1. release the response body when done,
2. check that the status code is one we expected,
3. read (and possibly decode) the body,
4. produce a clear error message when any of these steps fail.

``raw_body`` and ``parse_json`` implement that pattern once. Most of the
logic revolves around building useful error messages when edge cases are
hit, such as an unexpected status whose body then also fails to read.
"""

from collections.abc import Sequence
from contextlib import closing
from typing import TypeVar

import httpx
import structlog
from pydantic import TypeAdapter, ValidationError

from httpparse.constants import ERROR_CONTEXT_LIMIT_BYTES
from httpparse.errors import (
    BodyReadError,
    BodyTooLargeError,
    DecodeError,
    HttpParseError,
    RequestFailedError,
    UnexpectedStatusError,
)
from httpparse.metrics import ParseMetrics
from httpparse.reader import READ_ERRORS, read_bounded
from httpparse.settings import get_settings
from httpparse.status import (
    expected_statuses,
    is_expected_status,
    status_mismatch_message,
)


logger = structlog.get_logger()

T = TypeVar("T")


def raw_body(
    response: httpx.Response | None,
    want_statuses: int | Sequence[int],
    *,
    request_error: BaseException | None = None,
    read_limit: int | None = None,
) -> bytes:
    """Return the raw response body, closing the response.

    The body is read into memory under a byte limit. APIs returning JSON
    rarely send much data, but nothing is infinite, so an over-limit body
    is an error rather than an unbounded read.

    Args:
        response: Response to consume. May be None when ``request_error``
            is set.
        want_statuses: Status code or codes considered successful.
        request_error: Error raised while sending the request, if any.
        read_limit: Maximum body size in bytes. Defaults to the configured
            ``read_limit_bytes`` (30 MiB).

    Returns:
        The complete response body.

    Raises:
        RequestFailedError: If ``request_error`` is set.
        BodyReadError: If the body stream fails.
        BodyTooLargeError: If the body exceeds ``read_limit``.
        UnexpectedStatusError: If the status code is not expected.
    """
    metrics = ParseMetrics.get_instance()
    metrics.record_call("raw_body")
    log = logger.bind(component="httpparse", operation="raw_body")

    response = _require_response(response, request_error, metrics, log)

    with closing(response):
        wants = expected_statuses(want_statuses)
        limit = (
            read_limit if read_limit is not None else get_settings().read_limit_bytes
        )
        status_code = response.status_code
        metrics.record_status(status_code)

        try:
            bounded = read_bounded(response, limit)
        except READ_ERRORS as e:
            raise _failed(BodyReadError(e, status_code), metrics, log) from e

        metrics.record_bytes(len(bounded.body))
        log.debug(
            "body_read",
            status_code=status_code,
            bytes=len(bounded.body),
            exceeded=bounded.exceeded,
        )

        if bounded.exceeded:
            raise _failed(BodyTooLargeError(limit, status_code), metrics, log)

        if not is_expected_status(status_code, wants):
            error = UnexpectedStatusError(
                status_code=status_code,
                want_statuses=wants,
                mismatch=status_mismatch_message(status_code, wants),
                detail=f", body: {_body_text(bounded.body)}",
                body=bounded.body,
            )
            raise _failed(error, metrics, log)

    metrics.record_success()
    log.debug("parse_complete", status_code=status_code, bytes=len(bounded.body))
    return bounded.body


def parse_json(
    response: httpx.Response | None,
    want_statuses: int | Sequence[int],
    model: type[T],
    *,
    request_error: BaseException | None = None,
) -> T:
    """Decode a JSON response body into ``model``, closing the response.

    On an unexpected status the body is not decoded. Up to 1 MiB of it is
    read only to make the error message more helpful.

    Args:
        response: Response to consume. May be None when ``request_error``
            is set.
        want_statuses: Status code or codes considered successful.
        model: Shape to decode into (pydantic model, dataclass,
            ``dict[str, Any]``, ...).
        request_error: Error raised while sending the request, if any.

    Returns:
        The decoded value.

    Raises:
        RequestFailedError: If ``request_error`` is set.
        UnexpectedStatusError: If the status code is not expected.
        DecodeError: If the body cannot be read or decoded.
    """
    metrics = ParseMetrics.get_instance()
    metrics.record_call("json")
    log = logger.bind(component="httpparse", operation="json")

    response = _require_response(response, request_error, metrics, log)

    with closing(response):
        wants = expected_statuses(want_statuses)
        status_code = response.status_code
        metrics.record_status(status_code)

        if not is_expected_status(status_code, wants):
            raise _failed(_unexpected_status(response, wants, metrics), metrics, log)

        try:
            content = response.read()
        except READ_ERRORS as e:
            raise _failed(DecodeError(e, status_code), metrics, log) from e

        metrics.record_bytes(len(content))

        try:
            value = TypeAdapter(model).validate_json(content)
        except ValidationError as e:
            error = DecodeError(e, status_code, detail=_validation_detail(e))
            raise _failed(error, metrics, log) from e

    metrics.record_success()
    log.debug("parse_complete", status_code=status_code, bytes=len(content))
    return value


def _require_response(
    response: httpx.Response | None,
    request_error: BaseException | None,
    metrics: ParseMetrics,
    log: structlog.stdlib.BoundLogger,
) -> httpx.Response:
    """Short-circuit on a send failure, otherwise return the response.

    The response is left untouched when ``request_error`` is set.
    """
    if request_error is not None:
        error = RequestFailedError(request_error)
        raise _failed(error, metrics, log) from request_error
    if response is None:
        msg = "response is required when request_error is not set"
        raise ValueError(msg)
    return response


def _unexpected_status(
    response: httpx.Response,
    wants: tuple[int, ...],
    metrics: ParseMetrics,
) -> UnexpectedStatusError:
    """Build a status mismatch error with as much body context as possible.

    Failing to read the body, or finding it over 1 MiB, is appended to the
    mismatch message and never replaces it.
    """
    status_code = response.status_code
    mismatch = status_mismatch_message(status_code, wants)

    try:
        bounded = read_bounded(response, ERROR_CONTEXT_LIMIT_BYTES)
    except READ_ERRORS as e:
        return UnexpectedStatusError(
            status_code=status_code,
            want_statuses=wants,
            mismatch=mismatch,
            detail=f", also an error occurred when reading the response body: {e}",
        )

    metrics.record_bytes(len(bounded.body))
    if bounded.exceeded:
        detail = (
            f", the first {bounded.limit} bytes of the response body are: "
            f"{_body_text(bounded.body)}"
        )
    else:
        detail = f", body: {_body_text(bounded.body)}"

    return UnexpectedStatusError(
        status_code=status_code,
        want_statuses=wants,
        mismatch=mismatch,
        detail=detail,
        body=bounded.body,
    )


def _failed(
    error: HttpParseError,
    metrics: ParseMetrics,
    log: structlog.stdlib.BoundLogger,
) -> HttpParseError:
    """Record and log a failure, returning the error for raising."""
    metrics.record_failure(error.error_class)
    log.warning(
        "parse_failed",
        error_class=error.error_class.value,
        status_code=error.status_code,
    )
    return error


def _body_text(body: bytes) -> str:
    return body.decode("utf-8", errors="replace")


def _validation_detail(error: ValidationError) -> str:
    """Flatten a validation error into one line without input echoes."""
    parts = []
    for item in error.errors(include_url=False, include_input=False):
        loc = ".".join(str(part) for part in item["loc"])
        parts.append(f"{loc}: {item['msg']}" if loc else item["msg"])
    return "; ".join(parts)
