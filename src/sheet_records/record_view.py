"""Record-oriented view over a single sheet of a spreadsheet."""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any, TypeVar

from sheet_records.errors import EmptyGridError, NotFoundError, UnknownColumnError
from sheet_records.fields import (
    Field,
    column_letter,
    find_column,
    header_fields,
    lookup,
    qualify_range,
    unknown_fields,
)
from sheet_records.grid_store import GridStore
from sheet_records.options import (
    DATA_RANGE,
    DATA_START,
    HEADER_RANGE,
    SheetOptions,
    value_input_option,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass
class WriteResult:
    header: list[str]
    rows_written: int
    cells_updated: int
    appended_fields: list[str] = field(default_factory=list)


class GoogleSheet:
    """Grid and record operations for one named sheet.

    Nothing is cached: every call fetches from the grid store. write_records
    issues several remote calls in sequence (read header, clear, write rows,
    write header) without isolation or rollback, so a failure part way
    through leaves the sheet partially rewritten, and concurrent writers to
    the same sheet must be serialized by the caller.
    """

    def __init__(
        self,
        client: GridStore,
        spreadsheet_id: str,
        sheet_name: str = "Sheet1",
        options: SheetOptions | None = None,
    ) -> None:
        self._client = client
        self._spreadsheet_id = spreadsheet_id
        self._sheet_name = sheet_name
        self._options = options or SheetOptions()

    @property
    def spreadsheet_id(self) -> str:
        return self._spreadsheet_id

    @property
    def sheet_name(self) -> str:
        return self._sheet_name

    @property
    def options(self) -> SheetOptions:
        return self._options

    def _qualify(self, cell_range: str | None) -> str:
        return qualify_range(self._sheet_name, cell_range or self._options.cell_range)

    def _input_option(self, parse_input: bool | None) -> str:
        if parse_input is None:
            parse_input = self._options.parse_input
        return value_input_option(parse_input)

    def _read_with_header(self, cell_range: str | None) -> tuple[list[Field], list[list[str]]]:
        grid = self.read_range(cell_range)
        if not grid:
            raise EmptyGridError(f"No header row in {self._qualify(cell_range)}")
        return header_fields(grid[0]), grid[1:]

    def read_range(self, cell_range: str | None = None) -> list[list[str]]:
        """Fetch the range as rows of strings; an empty range gives []."""
        values = self._client.get_values(self._spreadsheet_id, self._qualify(cell_range))
        return [[str(cell) for cell in row] for row in values or []]

    def read_records(
        self,
        cell_range: str | None = None,
        shape: Callable[[dict[str, str]], T] | None = None,
    ) -> list[Any]:
        """Read data rows keyed by the header row.

        Short rows are padded with "" so every record carries every header
        field. Cells to the right of the header are ignored.
        """
        header, rows = self._read_with_header(cell_range)
        width = len(header)
        results: list[Any] = []
        for row in rows:
            padded = list(row[:width]) + [""] * (width - len(row))
            record = {fld.name: padded[idx] for idx, fld in enumerate(header)}
            results.append(shape(record) if shape else record)
        return results

    def read_columns(
        self,
        *columns: str,
        cell_range: str | None = None,
        transform: Callable[[tuple[str | None, ...]], T] | None = None,
    ) -> list[Any]:
        """Project the named columns of each data row into a tuple.

        Cells missing from a short row come back as None, unlike read_records,
        so a blank cell can be told apart from a row that stops early.
        """
        header, rows = self._read_with_header(cell_range)
        indices: list[int] = []
        for column in columns:
            idx = find_column(header, column)
            if idx is None:
                raise UnknownColumnError(column, self._sheet_name, [fld.name for fld in header])
            indices.append(idx)

        results: list[Any] = []
        for row in rows:
            selected = tuple(row[idx] if idx < len(row) else None for idx in indices)
            results.append(transform(selected) if transform else selected)
        return results

    def write_range(
        self,
        values: Sequence[Sequence[Any]],
        cell_range: str | None = None,
        parse_input: bool | None = None,
    ) -> int:
        """Overwrite only the cells covered by values, starting top-left."""
        qualified = self._qualify(cell_range)
        try:
            updated = self._client.write_values(
                self._spreadsheet_id,
                qualified,
                values,
                value_input_option=self._input_option(parse_input),
            )
        except NotFoundError:
            logger.error("Spreadsheet not found with id '%s'.", self._spreadsheet_id)
            raise
        logger.info("%d cells updated in %s.", updated, qualified)
        return updated

    def clear_range(self, cell_range: str | None = None) -> None:
        qualified = self._qualify(cell_range)
        try:
            self._client.clear_values(self._spreadsheet_id, qualified)
        except NotFoundError:
            logger.error("Spreadsheet not found with id '%s'.", self._spreadsheet_id)
            raise
        logger.info("Cleared %s.", qualified)

    def read_header(self) -> list[Field]:
        grid = self.read_range(HEADER_RANGE)
        return header_fields(grid[0] if grid else None)

    def write_records(
        self,
        records: Sequence[Mapping[str, Any]],
        append_unknown_fields: bool | None = None,
        parse_input: bool | None = None,
    ) -> WriteResult:
        """Rewrite the data rows from records, reconciling against the header.

        Known header fields keep their order. Fields seen only in records are
        appended after them when append_unknown_fields is set, and are dropped
        from the write otherwise. Missing values are sent as "" because the
        API skips nulls and would leave stale cells behind.
        """
        if append_unknown_fields is None:
            append_unknown_fields = self._options.append_unknown_fields

        header = self.read_header()
        unknown = unknown_fields(header, records)
        appended: list[Field] = []
        if unknown and append_unknown_fields:
            appended = unknown
        elif unknown:
            logger.warning(
                "Dropping fields missing from %s header: %s",
                self._sheet_name,
                ", ".join(fld.name for fld in unknown),
            )

        write_order = header + appended
        # resolved before any remote mutation so a too-wide header fails early
        header_start = column_letter(len(header) + 1) if appended else None

        rows: list[list[Any]] = []
        for record in records:
            row: list[Any] = []
            for fld in write_order:
                found, value = lookup(record, fld)
                row.append("" if not found or value is None else value)
            rows.append(row)

        self.clear_range(DATA_RANGE)
        cells_updated = 0
        if rows:
            cells_updated += self.write_range(rows, DATA_START, parse_input=parse_input)
        if header_start is not None:
            cells_updated += self.write_range(
                [[fld.name for fld in appended]],
                f"{header_start}1",
                parse_input=False,
            )

        return WriteResult(
            header=[fld.name for fld in write_order],
            rows_written=len(rows),
            cells_updated=cells_updated,
            appended_fields=[fld.name for fld in appended],
        )
