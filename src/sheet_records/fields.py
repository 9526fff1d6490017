"""Pure helpers for field identity, headers and column letters."""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from typing import Any

from sheet_records.errors import UnsupportedColumnError

MAX_COLUMN_INDEX = 26


class Field:
    """A field name whose identity ignores case.

    ``Field("Email") == Field("email")`` and both hash the same.
    """

    __slots__ = ("name", "_key")

    def __init__(self, name: str) -> None:
        self.name = str(name)
        self._key = self.name.casefold()

    @property
    def key(self) -> str:
        return self._key

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Field):
            return self._key == other._key
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self._key)

    def __repr__(self) -> str:
        return f"Field({self.name!r})"

    def __str__(self) -> str:
        return self.name


def header_fields(header_row: Sequence[Any] | None) -> list[Field]:
    """Build the positional header, one Field per cell, duplicates kept."""
    if not header_row:
        return []
    return [Field(str(cell)) for cell in header_row]


def find_column(header: Sequence[Field], name: str) -> int | None:
    target = Field(name).key
    for idx, field in enumerate(header):
        if field.key == target:
            return idx
    return None


def lookup(record: Mapping[str, Any], field: Field) -> tuple[bool, Any]:
    """Case-insensitive record lookup; returns (found, value)."""
    if field.name in record:
        return True, record[field.name]
    for key, value in record.items():
        if Field(key) == field:
            return True, value
    return False, None


def unknown_fields(header: Sequence[Field], records: Iterable[Mapping[str, Any]]) -> list[Field]:
    """Fields referenced by records but missing from header, in encounter order."""
    known = {field.key for field in header}
    seen: set[str] = set()
    unknown: list[Field] = []
    for record in records:
        for key in record:
            field = Field(key)
            if field.key in known or field.key in seen:
                continue
            seen.add(field.key)
            unknown.append(field)
    return unknown


def column_letter(index: int) -> str:
    """1-indexed column letter. Only A-Z are supported; wider sheets raise."""
    if not 1 <= index <= MAX_COLUMN_INDEX:
        raise UnsupportedColumnError(
            f"Column index {index} is outside the supported range 1-{MAX_COLUMN_INDEX} (A-Z)"
        )
    return chr(ord("A") + index - 1)


def qualify_range(sheet_name: str, cell_range: str) -> str:
    return f"{sheet_name}!{cell_range}"
