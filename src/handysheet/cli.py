"""Command-line interface for handysheet."""

import argparse
import json
import logging
import sys
from typing import Optional

from .config import settings
from .errors import HandySheetError
from .sheets import Dimension, GoogleSheetsClient, MergeType, SortOrder, ValueInputOption
from .sheets.backend import SheetsBackend
from .spreadsheet import SpreadSheet

logger = logging.getLogger(__name__)

MERGE_TYPES = {
    "all": MergeType.MERGE_ALL,
    "rows": MergeType.MERGE_ROWS,
    "columns": MergeType.MERGE_COLUMNS,
}

DEMO_VALUES = [
    ["A1", "B1", "C1"],
    ["A2", "B2", "C2"],
    ["A3", "B3", "C3"],
]


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="handysheet - common Google Sheets operations from the command line"
    )
    parser.add_argument(
        "--spreadsheet",
        "-s",
        default=settings.spreadsheet_id,
        help="Spreadsheet ID (default: $HANDYSHEET_SPREADSHEET_ID)",
    )
    parser.add_argument(
        "--log-level", default=settings.log_level, help="Logging level (default: INFO)"
    )
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    subparsers.add_parser("auth", help="Authenticate with Google Sheets API")
    subparsers.add_parser("tabs", help="List the tabs of the spreadsheet")

    read_parser = subparsers.add_parser("read", help="Read values from a range")
    _add_range_arguments(read_parser)

    for name, help_text in (
        ("write", "Overwrite a range with values"),
        ("append", "Append rows to the table in a range"),
    ):
        value_parser = subparsers.add_parser(name, help=help_text)
        _add_range_arguments(value_parser)
        value_parser.add_argument(
            "values", help='Rows as a JSON array, e.g. \'[["a", "b"], ["c", "d"]]\''
        )
        value_parser.add_argument(
            "--raw", action="store_true", help="Store values as-is instead of parsing them"
        )

    for name, help_text in (
        ("insert", "Insert empty rows or columns"),
        ("delete", "Delete rows or columns"),
    ):
        dim_parser = subparsers.add_parser(name, help=help_text)
        dim_parser.add_argument("dimension", choices=["rows", "columns"])
        dim_parser.add_argument("start", type=int, help="First index, 0-based")
        dim_parser.add_argument("end", type=int, help="End index, 0-based and exclusive")
        dim_parser.add_argument("--sheet", help="Tab name (default: first tab)")
        if name == "insert":
            dim_parser.add_argument(
                "--inherit-from-before",
                action="store_true",
                help="Copy formatting from the row/column before the new span",
            )

    merge_parser = subparsers.add_parser("merge", help="Merge a block of cells")
    _add_range_arguments(merge_parser)
    merge_parser.add_argument("--type", choices=sorted(MERGE_TYPES), default="all")

    sort_parser = subparsers.add_parser("sort", help="Sort the rows of a block by its first column")
    _add_range_arguments(sort_parser)
    sort_parser.add_argument("--descending", action="store_true")

    demo_parser = subparsers.add_parser("demo", help="Run the demo walkthrough on a tab")
    demo_parser.add_argument("--sheet", default="Sheet1")

    return parser


def _add_range_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("range", help='A1 range, e.g. "A1:C3" or "Sheet1!A1:C3"')
    parser.add_argument("--sheet", help="Tab name, if not part of the range")


def _parse_values(raw: str) -> list[list]:
    try:
        values = json.loads(raw)
    except json.JSONDecodeError as e:
        raise ValueError(f"Values must be valid JSON: {e}") from e
    if not isinstance(values, list) or not all(isinstance(row, list) for row in values):
        raise ValueError("Values must be a JSON array of arrays")
    return values


def _targeted(sheet: SpreadSheet, args: argparse.Namespace) -> SpreadSheet:
    if getattr(args, "sheet", None):
        sheet = sheet.on_sheet(args.sheet)
    if getattr(args, "range", None):
        sheet = sheet.to_range(args.range)
    return sheet


def _print_json(data) -> None:
    print(json.dumps(data, indent=2, default=str))


def run_command(args: argparse.Namespace, sheet: SpreadSheet) -> None:
    """Run one subcommand against an already configured SpreadSheet."""
    target = _targeted(sheet, args)

    if args.command == "tabs":
        for name in target.list_tabs():
            print(name)
    elif args.command == "read":
        _print_json(target.read_values())
    elif args.command in ("write", "append"):
        values = _parse_values(args.values)
        if args.raw:
            target = target.with_value_input_option(ValueInputOption.RAW)
        if args.command == "write":
            result = target.write_values(values)
        else:
            result = target.append_values(values)
        _print_json(result.model_dump())
    elif args.command in ("insert", "delete"):
        target = (
            target.select(Dimension(args.dimension.upper()))
            .from_index(args.start)
            .to_index(args.end)
        )
        if args.command == "insert":
            result = target.inherit_from_before(args.inherit_from_before).insert_empty()
        else:
            result = target.delete()
        _print_json(result.model_dump())
    elif args.command == "merge":
        _print_json(target.with_merge_type(MERGE_TYPES[args.type]).merge_cells().model_dump())
    elif args.command == "sort":
        order = SortOrder.DESCENDING if args.descending else SortOrder.ASCENDING
        result = target.select(Dimension.ROWS).with_sort_order(order).sort()
        _print_json(result.model_dump())
    elif args.command == "demo":
        run_demo(sheet, args.sheet)


def run_demo(sheet: SpreadSheet, sheet_name: str) -> None:
    """Write, append, insert, delete and merge on one tab."""
    tab = sheet.on_sheet(sheet_name)

    print(f"Writing values to {sheet_name}!A1:C3")
    tab.to_range("A1:C3").write_values(DEMO_VALUES)

    print("Appending one row")
    tab.to_range("A4:E4").with_value_input_option(ValueInputOption.RAW).append_values(
        [["one", "two", "three"]]
    )

    print("Inserting an empty row at the top")
    tab.select(Dimension.ROWS).from_index(0).to_index(1).insert_empty()

    print("Deleting column C")
    tab.select(Dimension.COLUMNS).from_index(2).to_index(3).delete()

    print("Merging B2:D4")
    tab.from_cell(2, 2).to_cell(4, 4).with_merge_type(MergeType.MERGE_ALL).merge_cells()

    print("Done.")


def run_auth() -> None:
    """Run the Google authentication flow."""
    print("Authenticating with Google Sheets API...")
    try:
        client = GoogleSheetsClient()
        # Accessing the service property triggers auth
        _ = client.service
        print("Authentication successful!")
        print("Token saved. You can now use handysheet with Google Sheets.")
    except Exception as e:
        print(f"Authentication failed: {e}")
        sys.exit(1)


def main(argv: Optional[list[str]] = None, backend: Optional[SheetsBackend] = None):
    """Main entry point for the CLI."""
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=args.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.command is None:
        parser.print_help()
        sys.exit(1)

    if args.command == "auth":
        run_auth()
        return

    if not args.spreadsheet:
        parser.error("a spreadsheet ID is required (--spreadsheet or $HANDYSHEET_SPREADSHEET_ID)")

    try:
        sheet = (
            SpreadSheet(backend or GoogleSheetsClient())
            .with_id(args.spreadsheet)
            .with_value_input_option(settings.value_input_option)
        )
        run_command(args, sheet)
    except (HandySheetError, ValueError) as e:
        logger.debug("Command failed", exc_info=True)
        print(f"Error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
