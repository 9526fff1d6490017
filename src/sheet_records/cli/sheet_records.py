import argparse
import json
import logging
import sys
from typing import Any, Sequence

from sheet_records.config import configure_runtime
from sheet_records.errors import SheetRecordsError
from sheet_records.logging import configure_logging
from sheet_records.record_view import GoogleSheet
from sheet_records.sheets_service import make_sheet_client, open_sheet

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="sheet-records")
    parser.add_argument("--spreadsheet-id", help="Spreadsheet id; defaults to SPREADSHEET_ID/config.json")
    parser.add_argument("--sheet", help="Sheet (tab) name; defaults to SHEET_NAME/config.json")
    parser.add_argument("--log-level", help="Logging level, e.g. DEBUG; defaults to LOG_LEVEL or INFO")
    sub = parser.add_subparsers(dest="command", required=True)

    read = sub.add_parser("read", help="Print the raw grid as JSON")
    read.add_argument("--range", dest="cell_range", help="A1 range, e.g. A2:E")

    records = sub.add_parser("records", help="Print rows keyed by the header row as JSON")
    records.add_argument("--range", dest="cell_range")

    columns = sub.add_parser("columns", help="Print selected columns as JSON lists")
    columns.add_argument("names", nargs="+", help="Column names (case-insensitive)")
    columns.add_argument("--range", dest="cell_range")

    write = sub.add_parser("write", help="Write a JSON grid to a range")
    write.add_argument("--input", required=True, help="JSON file with a list of rows, or - for stdin")
    write.add_argument("--range", dest="cell_range")
    write.add_argument("--parse-input", action="store_true", help="Interpret formulas and numbers")

    clear = sub.add_parser("clear", help="Blank every cell in a range")
    clear.add_argument("--range", dest="cell_range")

    write_records = sub.add_parser("write-records", help="Rewrite data rows from a JSON list of objects")
    write_records.add_argument("--input", required=True, help="JSON file with a list of objects, or - for stdin")
    write_records.add_argument(
        "--no-append",
        action="store_true",
        help="Drop fields that are not already in the header instead of appending them",
    )
    write_records.add_argument("--parse-input", action="store_true")
    return parser


def _load_json(source: str) -> Any:
    if source == "-":
        return json.load(sys.stdin)
    with open(source, "r", encoding="utf-8") as f:
        return json.load(f)


def _print_json(data: Any) -> None:
    print(json.dumps(data, indent=2, ensure_ascii=False))


def run_command(sheet: GoogleSheet, args: argparse.Namespace) -> int:
    parse_input = True if getattr(args, "parse_input", False) else None
    if args.command == "read":
        _print_json(sheet.read_range(args.cell_range))
    elif args.command == "records":
        _print_json(sheet.read_records(args.cell_range))
    elif args.command == "columns":
        _print_json(sheet.read_columns(*args.names, cell_range=args.cell_range, transform=list))
    elif args.command == "write":
        values = _load_json(args.input)
        if not isinstance(values, list) or not all(isinstance(row, list) for row in values):
            raise ValueError("write expects a JSON list of rows")
        sheet.write_range(values, args.cell_range, parse_input=parse_input)
    elif args.command == "clear":
        sheet.clear_range(args.cell_range)
    elif args.command == "write-records":
        records = _load_json(args.input)
        if not isinstance(records, list) or not all(isinstance(row, dict) for row in records):
            raise ValueError("write-records expects a JSON list of objects")
        result = sheet.write_records(
            records,
            append_unknown_fields=False if args.no_append else None,
            parse_input=parse_input,
        )
        logger.info(
            "wrote %d rows, header=%s, appended=%s",
            result.rows_written,
            ",".join(result.header),
            ",".join(result.appended_fields),
        )
    return 0


def main(argv: Sequence[str] | None = None, *, service: Any | None = None) -> int:
    args = build_parser().parse_args(list(argv) if argv is not None else sys.argv[1:])
    configure_logging(args.log_level)
    try:
        settings = configure_runtime()
        client = make_sheet_client(settings, service=service)
        sheet = open_sheet(client, settings, spreadsheet_id=args.spreadsheet_id, sheet_name=args.sheet)
        return run_command(sheet, args)
    except (SheetRecordsError, ValueError, OSError) as exc:
        logger.error("%s", exc)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
