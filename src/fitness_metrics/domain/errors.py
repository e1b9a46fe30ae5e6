"""Errors raised by the metrics engine."""

from enum import StrEnum


class MetricsError(Exception):
    """Base class for errors that fail a whole engine call."""


class InvalidPeriod(MetricsError):  # noqa: N818
    """Raised for an unrecognized period token."""

    def __init__(self, token: str) -> None:
        super().__init__(f"Unknown period: {token!r}")
        self.token = token


class InvalidQuantity(MetricsError):  # noqa: N818
    """Raised when an aggregated quantity is negative."""

    def __init__(self, field: str, value: float) -> None:
        super().__init__(f"Negative {field}: {value}")
        self.field = field
        self.value = value


class TooManyRows(MetricsError):  # noqa: N818
    """Raised when an upload exceeds the configured row cap."""

    def __init__(self, row_count: int, max_rows: int) -> None:
        super().__init__(f"Upload has {row_count} rows, limit is {max_rows}")
        self.row_count = row_count
        self.max_rows = max_rows


class MalformedHeader(MetricsError):  # noqa: N818
    """Raised when an upload does not start with the expected header."""

    def __init__(self, header: str) -> None:
        super().__init__(f"Expected header Week,Date,Weight,Notes, got {header!r}")
        self.header = header


class ImportErrorReason(StrEnum):
    """Reasons recorded for rejected or failed import rows."""

    MALFORMED_ROW = "MalformedRow"
    INVALID_DATE = "InvalidDate"
    INVALID_WEIGHT = "InvalidWeight"
    INVALID_WEEK = "InvalidWeek"
    STORAGE_ERROR = "StorageError"
