"""Send helpers that pair an httpx request with response parsing.

The parse functions accept a response together with the error raised
while sending it. These helpers own the send step so that pair is
produced consistently: the request is sent streaming, so the body is
only read under the parser's limits.
"""

from collections.abc import Sequence
from typing import TypeVar

import httpx
import structlog

from httpparse.parse import parse_json, raw_body


logger = structlog.get_logger()

T = TypeVar("T")


def send_request(
    client: httpx.Client,
    request: httpx.Request,
) -> tuple[httpx.Response | None, httpx.RequestError | None]:
    """Send a request, capturing transport failures instead of raising.

    Args:
        client: Caller-owned HTTP client.
        request: Request to send.

    Returns:
        ``(response, None)`` on success, ``(None, error)`` on failure. The
        response body is unread and must be consumed by a parse function.
    """
    try:
        response = client.send(request, stream=True)
    except httpx.RequestError as e:
        logger.bind(component="httpparse").info(
            "request_failed",
            method=request.method,
            host=request.url.host,
            path=request.url.path,
            error_type=type(e).__name__,
        )
        return None, e
    return response, None


def fetch_raw(
    client: httpx.Client,
    request: httpx.Request,
    want_statuses: int | Sequence[int],
    *,
    read_limit: int | None = None,
) -> bytes:
    """Send a request and return its raw body.

    See ``raw_body`` for the errors raised.
    """
    response, error = send_request(client, request)
    return raw_body(
        response,
        want_statuses,
        request_error=error,
        read_limit=read_limit,
    )


def fetch_json(
    client: httpx.Client,
    request: httpx.Request,
    want_statuses: int | Sequence[int],
    model: type[T],
) -> T:
    """Send a request and decode its JSON body into ``model``.

    See ``parse_json`` for the errors raised.
    """
    response, error = send_request(client, request)
    return parse_json(response, want_statuses, model, request_error=error)
