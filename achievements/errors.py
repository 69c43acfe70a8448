"""Exception types raised by the achievement engine."""

from __future__ import annotations


class DashboardError(Exception):
    """Base class for achievement dashboard errors."""


class NoDataAvailable(DashboardError):
    """Raised when no platform produced any game records."""

    def __init__(self, message: str | None = None, *, sources: list[str] | None = None) -> None:
        super().__init__(message or "No games data found")
        self.sources = list(sources or [])


class InvalidCriteria(DashboardError, ValueError):
    """Raised when filter or sort input cannot be interpreted."""

    def __init__(self, field: str, value: object) -> None:
        super().__init__(f"invalid {field}: {value!r}")
        self.field = field
        self.value = value


__all__ = ["DashboardError", "InvalidCriteria", "NoDataAvailable"]
