"""Errors raised by the event sales engine and its callers."""

from __future__ import annotations

__all__ = [
    "EventSalesError",
    "ParseError",
    "SchemaError",
    "MissingColumnError",
    "UnknownCityError",
    "CityValidationError",
    "UploadTooLargeError",
]


class EventSalesError(Exception):
    """Base error for this package."""


class ParseError(EventSalesError):
    """Raised when an export cannot be parsed at all."""


class SchemaError(ParseError):
    """Raised when the header row cannot be mapped to the required columns."""


class MissingColumnError(SchemaError):
    """Raised for the first required column label absent from the header."""

    def __init__(self, label: str) -> None:
        super().__init__(f'Column "{label}" not found in CSV')
        self.label = label


class UnknownCityError(ParseError):
    """Raised when a city key has no configured source label."""

    def __init__(self, city: str) -> None:
        super().__init__(f"unknown city: {city!r}")
        self.city = city


class CityValidationError(EventSalesError):
    """Raised by callers when an export holds no records for the requested city."""

    def __init__(self, city: str, expected_source: str) -> None:
        super().__init__(
            f"No data found for {city.upper()} in this CSV file. "
            "Please check that you've uploaded the correct file."
        )
        self.city = city
        self.expected_source = expected_source


class UploadTooLargeError(EventSalesError):
    """Raised when an uploaded export exceeds the configured size ceiling."""

    def __init__(self, size: int, limit: int) -> None:
        super().__init__(f"upload is {size} bytes, limit is {limit} bytes")
        self.size = size
        self.limit = limit
