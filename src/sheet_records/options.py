"""Per-sheet defaults for GoogleSheet operations."""

from __future__ import annotations

from dataclasses import dataclass

WHOLE_SHEET_RANGE = "A1:ZZ"
HEADER_RANGE = "1:1"
DATA_RANGE = "A2:ZZ"
DATA_START = "A2"


@dataclass(frozen=True)
class SheetOptions:
    """Defaults applied when an operation is called without an explicit value.

    cell_range: range used by reads, writes and clears when none is passed.
    parse_input: when True, strings are parsed as if typed into the sheet
        (formulas, numbers, dates); when False they are stored literally.
    append_unknown_fields: when True, write_records adds fields missing from
        the header; when False those fields are dropped from the write.
    """

    cell_range: str = WHOLE_SHEET_RANGE
    parse_input: bool = False
    append_unknown_fields: bool = True


def value_input_option(parse_input: bool) -> str:
    return "USER_ENTERED" if parse_input else "RAW"
