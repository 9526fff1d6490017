"""Error taxonomy for sheet_records."""

from __future__ import annotations

from collections.abc import Sequence


class SheetRecordsError(Exception):
    """Base class for every error raised by sheet_records."""


class ConfigError(SheetRecordsError):
    pass


class RemoteRequestError(SheetRecordsError):
    """The grid store rejected or failed a request."""

    def __init__(self, message: str, *, status: int | None = None, reason: str | None = None) -> None:
        super().__init__(message)
        self.status = status
        self.reason = reason


class NotFoundError(RemoteRequestError):
    """The spreadsheet or sheet does not exist (HTTP 404)."""


class UnknownColumnError(SheetRecordsError, KeyError):
    def __init__(self, column: str, sheet_name: str, known_columns: Sequence[str]) -> None:
        self.column = column
        self.sheet_name = sheet_name
        self.known_columns = list(known_columns)
        super().__init__(f"No column named {column} in {sheet_name}. Columns were: {self.known_columns}")

    def __str__(self) -> str:
        # KeyError.__str__ would repr() the message
        return str(self.args[0])


class EmptyGridError(SheetRecordsError, ValueError):
    """A header row was required but the fetched grid had no rows."""


class UnsupportedColumnError(SheetRecordsError, ValueError):
    """Column index outside the single-letter range A-Z."""
