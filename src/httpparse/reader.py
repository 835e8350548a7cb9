"""Bounded reads of HTTP response bodies."""

from io import BytesIO

import httpx
from pydantic import BaseModel, ConfigDict, Field

from httpparse.constants import DEFAULT_CHUNK_SIZE


# Failures a body stream may raise mid-read
READ_ERRORS: tuple[type[Exception], ...] = (
    httpx.HTTPError,
    httpx.StreamError,
    OSError,
)


class BoundedBody(BaseModel):
    """Result of reading a body under a byte limit."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    body: bytes = Field(description="Captured bytes, at most `limit` long")
    exceeded: bool = Field(description="Whether more than `limit` bytes existed")
    limit: int = Field(gt=0, description="Byte limit applied to the read")


def read_bounded(response: httpx.Response, limit: int) -> BoundedBody:
    """Read a response body, capturing at most ``limit`` bytes.

    Consumes up to ``limit + 1`` bytes so an over-limit body is detected
    without buffering it whole.

    Args:
        response: Response whose body has not been consumed yet.
        limit: Maximum number of bytes to keep.

    Returns:
        BoundedBody with the captured bytes and the overflow flag.

    Raises:
        ValueError: If ``limit`` is not positive.
        httpx.HTTPError, httpx.StreamError, OSError: If the stream fails.
    """
    if limit <= 0:
        msg = f"read limit must be positive, got: {limit}"
        raise ValueError(msg)

    buffer = BytesIO()
    total_read = 0
    read_cap = limit + 1

    for chunk in response.iter_bytes(chunk_size=DEFAULT_CHUNK_SIZE):
        remaining = read_cap - total_read
        buffer.write(chunk[:remaining])
        total_read += min(len(chunk), remaining)
        if total_read >= read_cap:
            break

    body = buffer.getvalue()
    return BoundedBody(
        body=body[:limit],
        exceeded=total_read > limit,
        limit=limit,
    )
