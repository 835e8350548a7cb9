"""Error types raised while parsing HTTP responses."""

from enum import Enum


class ParseErrorClass(str, Enum):
    """Classification of response parsing errors.

    - REQUEST_FAILED: Sending the request failed before a response existed
    - BODY_READ_FAILED: The body stream failed mid-read
    - BODY_TOO_LARGE: The body exceeded the configured read limit
    - UNEXPECTED_STATUS: Status code not in the expected set
    - DECODE_FAILED: The body could not be decoded as JSON
    """

    REQUEST_FAILED = "REQUEST_FAILED"
    BODY_READ_FAILED = "BODY_READ_FAILED"
    BODY_TOO_LARGE = "BODY_TOO_LARGE"
    UNEXPECTED_STATUS = "UNEXPECTED_STATUS"
    DECODE_FAILED = "DECODE_FAILED"


class HttpParseError(Exception):
    """Base exception for response parsing errors.

    Provides structured error information for logging and branching.
    """

    def __init__(
        self,
        error_class: ParseErrorClass,
        message: str,
        status_code: int | None = None,
    ) -> None:
        """Initialize the parse error.

        Args:
            error_class: Classification of the error.
            message: Human-readable error message.
            status_code: Observed HTTP status code, if a response existed.
        """
        super().__init__(message)
        self.error_class = error_class
        self.message = message
        self.status_code = status_code

    def to_dict(self) -> dict[str, str | int | None]:
        """Convert error to dictionary for logging/serialization.

        Returns:
            Dictionary representation of the error.
        """
        return {
            "error_class": self.error_class.value,
            "message": self.message,
            "status_code": self.status_code,
        }


class RequestFailedError(HttpParseError):
    """Sending the request failed, so there is no body to parse."""

    def __init__(self, cause: BaseException) -> None:
        """Initialize the error.

        Args:
            cause: The error returned by the transport.
        """
        super().__init__(
            error_class=ParseErrorClass.REQUEST_FAILED,
            message=f"sending request: {cause}",
        )
        self.cause = cause


class BodyReadError(HttpParseError):
    """The response body stream failed while being read."""

    def __init__(self, cause: BaseException, status_code: int | None = None) -> None:
        """Initialize the error.

        Args:
            cause: The underlying read failure.
            status_code: Observed HTTP status code.
        """
        super().__init__(
            error_class=ParseErrorClass.BODY_READ_FAILED,
            message=f"reading response body: {cause}",
            status_code=status_code,
        )
        self.cause = cause


class BodyTooLargeError(HttpParseError):
    """The response body contained more bytes than the read limit."""

    def __init__(self, limit: int, status_code: int | None = None) -> None:
        """Initialize the error.

        Args:
            limit: The read limit in bytes that was exceeded.
            status_code: Observed HTTP status code.
        """
        super().__init__(
            error_class=ParseErrorClass.BODY_TOO_LARGE,
            message=(
                "the response body is read into memory and we limit how much "
                "can be read because nothing is infinite. The response body "
                f"contained more than the limit of {limit} bytes. Either "
                "increase the limit or parse the response body another way"
            ),
            status_code=status_code,
        )
        self.limit = limit


class UnexpectedStatusError(HttpParseError):
    """The response status code was not one of the expected codes.

    The message always starts with the status mismatch description.
    ``detail`` appends whatever body context could be gathered.
    """

    def __init__(
        self,
        status_code: int,
        want_statuses: tuple[int, ...],
        mismatch: str,
        detail: str = "",
        body: bytes | None = None,
    ) -> None:
        """Initialize the error.

        Args:
            status_code: Observed HTTP status code.
            want_statuses: Status codes the caller accepts.
            mismatch: The status mismatch description.
            detail: Body context appended to the mismatch description.
            body: Captured (possibly truncated) body, None if unreadable.
        """
        super().__init__(
            error_class=ParseErrorClass.UNEXPECTED_STATUS,
            message=f"{mismatch}{detail}",
            status_code=status_code,
        )
        self.want_statuses = want_statuses
        self.body = body


class DecodeError(HttpParseError):
    """The response body could not be decoded into the requested shape."""

    def __init__(
        self,
        cause: BaseException,
        status_code: int | None = None,
        detail: str | None = None,
    ) -> None:
        """Initialize the error.

        Args:
            cause: The decoder's native error.
            status_code: Observed HTTP status code.
            detail: One-line decoder complaint, defaults to ``str(cause)``.
        """
        super().__init__(
            error_class=ParseErrorClass.DECODE_FAILED,
            message=f"unmarshalling response body: {detail or cause}",
            status_code=status_code,
        )
        self.cause = cause
