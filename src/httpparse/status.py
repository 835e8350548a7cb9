"""Status code validation and mismatch messages."""

from collections.abc import Sequence


def expected_statuses(want: int | Sequence[int]) -> tuple[int, ...]:
    """Normalize the caller's expected status codes.

    Args:
        want: A single status code or an ordered sequence of codes.

    Returns:
        Tuple of expected codes in caller order. An empty tuple matches
        no status code.
    """
    return (want,) if isinstance(want, int) else tuple(want)


def is_expected_status(got: int, wants: Sequence[int]) -> bool:
    """Check whether an observed status code is acceptable."""
    return got in wants


def status_mismatch_message(got: int, wants: Sequence[int]) -> str:
    """Describe an unexpected status code.

    Args:
        got: Observed status code.
        wants: Expected status codes.

    Returns:
        ``got status code X but wanted Y`` for a single code, or
        ``got status code X but wanted one of [Y Z]`` otherwise.
    """
    if len(wants) == 1:
        return f"got status code {got} but wanted {wants[0]}"
    listed = " ".join(str(code) for code in wants)
    return f"got status code {got} but wanted one of [{listed}]"
