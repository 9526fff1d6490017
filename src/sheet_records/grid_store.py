"""Grid store capability and its Google Sheets API implementation."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any, Protocol

from googleapiclient.errors import HttpError

from sheet_records.errors import NotFoundError, RemoteRequestError

logger = logging.getLogger(__name__)


class GridStore(Protocol):
    def get_values(self, spreadsheet_id: str, cell_range: str) -> list[list[Any]]: ...

    def write_values(
        self,
        spreadsheet_id: str,
        cell_range: str,
        values: Sequence[Sequence[Any]],
        *,
        value_input_option: str = "RAW",
    ) -> int: ...

    def clear_values(self, spreadsheet_id: str, cell_range: str) -> None: ...


def _http_status(exc: HttpError) -> int | None:
    status = getattr(exc, "status_code", None)
    if status is None and getattr(exc, "resp", None) is not None:
        status = getattr(exc.resp, "status", None)
    try:
        return int(status) if status is not None else None
    except (TypeError, ValueError):
        return None


def translate_http_error(exc: HttpError, cell_range: str) -> RemoteRequestError:
    status = _http_status(exc)
    reason = getattr(exc, "reason", None) or str(exc)
    message = f"Sheets request for {cell_range} failed with status {status}: {reason}"
    if status == 404:
        return NotFoundError(message, status=status, reason=reason)
    return RemoteRequestError(message, status=status, reason=reason)


class SheetClient:
    """GridStore backed by an already-built googleapiclient Sheets v4 service."""

    def __init__(self, service: Any) -> None:
        self.service = service

    def _values(self) -> Any:
        return self.service.spreadsheets().values()

    def get_values(self, spreadsheet_id: str, cell_range: str) -> list[list[Any]]:
        logger.debug("fetching range=%s spreadsheet=%s", cell_range, spreadsheet_id)
        try:
            result = self._values().get(spreadsheetId=spreadsheet_id, range=cell_range).execute()
        except HttpError as exc:
            raise translate_http_error(exc, cell_range) from exc
        return result.get("values", [])

    def write_values(
        self,
        spreadsheet_id: str,
        cell_range: str,
        values: Sequence[Sequence[Any]],
        *,
        value_input_option: str = "RAW",
    ) -> int:
        body = {"values": [list(row) for row in values]}
        try:
            result = (
                self._values()
                .update(
                    spreadsheetId=spreadsheet_id,
                    range=cell_range,
                    valueInputOption=value_input_option,
                    body=body,
                )
                .execute()
            )
        except HttpError as exc:
            raise translate_http_error(exc, cell_range) from exc
        return int(result.get("updatedCells") or 0)

    def clear_values(self, spreadsheet_id: str, cell_range: str) -> None:
        try:
            self._values().clear(spreadsheetId=spreadsheet_id, range=cell_range, body={}).execute()
        except HttpError as exc:
            raise translate_http_error(exc, cell_range) from exc
