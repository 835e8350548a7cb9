"""Helpers for consuming HTTP responses.

This package turns an httpx response into raw bytes or decoded JSON with:
- Expected status code validation
- Bounded body reads
- Context-rich error messages
- Guaranteed release of the response body
- Metrics collection for observability
"""

from httpparse.client import fetch_json, fetch_raw, send_request
from httpparse.constants import (
    DEFAULT_CHUNK_SIZE,
    DEFAULT_READ_LIMIT_BYTES,
    ERROR_CONTEXT_LIMIT_BYTES,
)
from httpparse.errors import (
    BodyReadError,
    BodyTooLargeError,
    DecodeError,
    HttpParseError,
    ParseErrorClass,
    RequestFailedError,
    UnexpectedStatusError,
)
from httpparse.metrics import ParseMetrics
from httpparse.parse import parse_json, raw_body
from httpparse.reader import READ_ERRORS, BoundedBody, read_bounded
from httpparse.settings import HttpParseSettings, get_settings
from httpparse.status import (
    expected_statuses,
    is_expected_status,
    status_mismatch_message,
)


__all__ = [
    # Parsing
    "raw_body",
    "parse_json",
    # Client
    "send_request",
    "fetch_raw",
    "fetch_json",
    # Reader
    "BoundedBody",
    "read_bounded",
    "READ_ERRORS",
    # Status
    "expected_statuses",
    "is_expected_status",
    "status_mismatch_message",
    # Errors
    "HttpParseError",
    "ParseErrorClass",
    "RequestFailedError",
    "BodyReadError",
    "BodyTooLargeError",
    "UnexpectedStatusError",
    "DecodeError",
    # Settings
    "HttpParseSettings",
    "get_settings",
    # Constants
    "DEFAULT_READ_LIMIT_BYTES",
    "ERROR_CONTEXT_LIMIT_BYTES",
    "DEFAULT_CHUNK_SIZE",
    # Metrics
    "ParseMetrics",
]
