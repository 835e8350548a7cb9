"""Metrics collection for response parsing."""

from dataclasses import dataclass, field
from typing import ClassVar

from httpparse.errors import ParseErrorClass


@dataclass
class ParseMetrics:
    """Metrics for response parsing operations.

    Singleton class that tracks calls per operation, observed status
    codes, bytes read, and outcomes.
    """

    parse_calls_total: dict[str, int] = field(default_factory=dict)
    parse_status_codes_total: dict[int, int] = field(default_factory=dict)
    parse_failures_total: dict[str, int] = field(default_factory=dict)
    parse_success_total: int = 0
    parse_bytes_total: int = 0

    _instance: ClassVar["ParseMetrics | None"] = None

    @classmethod
    def get_instance(cls) -> "ParseMetrics":
        """Get singleton metrics instance."""
        if cls._instance is None:
            cls._instance = cls()
        return cls._instance

    @classmethod
    def reset(cls) -> None:
        """Reset metrics (primarily for testing)."""
        cls._instance = None

    def record_call(self, operation: str) -> None:
        """Record an invocation of a parse operation.

        Args:
            operation: Operation name (``raw_body`` or ``json``).
        """
        self.parse_calls_total[operation] = (
            self.parse_calls_total.get(operation, 0) + 1
        )

    def record_status(self, status_code: int) -> None:
        """Record an observed response status code."""
        self.parse_status_codes_total[status_code] = (
            self.parse_status_codes_total.get(status_code, 0) + 1
        )

    def record_bytes(self, bytes_read: int) -> None:
        """Record body bytes consumed."""
        self.parse_bytes_total += bytes_read

    def record_success(self) -> None:
        """Record a successful parse."""
        self.parse_success_total += 1

    def record_failure(self, error_class: ParseErrorClass) -> None:
        """Record a parse failure.

        Args:
            error_class: Classification of the failure.
        """
        key = error_class.value
        self.parse_failures_total[key] = self.parse_failures_total.get(key, 0) + 1

    def to_dict(self) -> dict[str, int | dict[str, int] | dict[int, int]]:
        """Convert metrics to dictionary.

        Returns:
            Dictionary of metric name to value.
        """
        return {
            "parse_calls_total": dict(self.parse_calls_total),
            "parse_status_codes_total": dict(self.parse_status_codes_total),
            "parse_failures_total": dict(self.parse_failures_total),
            "parse_success_total": self.parse_success_total,
            "parse_bytes_total": self.parse_bytes_total,
        }

    @property
    def failure_count(self) -> int:
        """Total failures across all error classes."""
        return sum(self.parse_failures_total.values())
