"""Conversion between A1 notation and numeric cell ranges.

Column letters are a bijective base-26 numbering: there is no zero digit,
so column 26 is ``Z`` and column 27 is ``AA`` (not ``BA``).
"""

import re
from typing import Optional

from ..errors import InvalidFormatError
from .models import NumericRange

_LETTER_RUN_RE = re.compile(r"[A-Z]+")
_DIGIT_RUN_RE = re.compile(r"[0-9]+")
_PLAIN_SHEET_NAME_RE = re.compile(r"[A-Za-z0-9_]+")
# Tab names that read as A1 or R1C1 cell references
_CELL_LIKE_NAME_RE = re.compile(r"[A-Za-z]{1,3}[0-9]+|[Rr][0-9]*[Cc][0-9]*")


def column_index_to_letter(index: int) -> str:
    """Convert a 1-based column number to letters. 1=A, 26=Z, 27=AA, etc."""
    if index < 1:
        raise InvalidFormatError(f"Column index must be >= 1, got {index}")

    letters = []
    while index > 0:
        rem = (index - 1) % 26
        letters.append(chr(ord("A") + rem))
        index = (index - rem - 1) // 26
    return "".join(reversed(letters))


def letter_to_column_index(letters: str) -> int:
    """Convert column letter(s) to a 1-based column number. Case-insensitive."""
    if not isinstance(letters, str) or not letters.isascii():
        raise InvalidFormatError(f"Invalid column letters: {letters!r}")
    normalized = letters.upper()
    if not _LETTER_RUN_RE.fullmatch(normalized):
        raise InvalidFormatError(f"Invalid column letters: {letters!r}")

    number = 0
    for char in normalized:
        number = number * 26 + (ord(char) - ord("A") + 1)
    return number


def numeric_range_to_literal(
    start_column: int, start_row: int, end_column: int, end_row: int
) -> str:
    """Format a numeric range as A1 notation. Rows are passed through as-is."""
    return (
        f"{column_index_to_letter(start_column)}{start_row}:"
        f"{column_index_to_letter(end_column)}{end_row}"
    )


def _parse_cell_token(token: str, literal: str) -> tuple[int, int]:
    # Letters and digits are located independently, so "1A" parses like "A1".
    letters = _LETTER_RUN_RE.findall(token)
    digits = _DIGIT_RUN_RE.findall(token)
    leftover = _DIGIT_RUN_RE.sub("", _LETTER_RUN_RE.sub("", token))
    if len(letters) != 1 or len(digits) != 1 or leftover.strip():
        raise InvalidFormatError(f"Invalid cell reference {token!r} in range {literal!r}")
    return letter_to_column_index(letters[0]), int(digits[0])


def literal_range_to_numeric(literal: str) -> NumericRange:
    """Parse ``"A1:C3"`` (optionally ``"Sheet1!A1:C3"``) into a NumericRange."""
    _, range_part = split_sheet_name(literal)
    if not range_part.isascii():
        raise InvalidFormatError(f"Range must be plain A1 notation: {literal!r}")
    tokens = range_part.upper().split(":")
    if len(tokens) != 2:
        raise InvalidFormatError(f"Range must have exactly two cells separated by ':': {literal!r}")

    start_column, start_row = _parse_cell_token(tokens[0].strip(), literal)
    end_column, end_row = _parse_cell_token(tokens[1].strip(), literal)
    return NumericRange(start_column, start_row, end_column, end_row)


def split_sheet_name(address: str) -> tuple[Optional[str], str]:
    """Split ``"Sheet1!A1:C3"`` into ``("Sheet1", "A1:C3")``.

    Quoted tab names (``"'My Tab'!A1:B2"``) are unquoted. Addresses without
    a tab return ``None`` for the name.
    """
    if "!" not in address:
        return None, address
    sheet_name, range_part = address.rsplit("!", 1)
    if len(sheet_name) >= 2 and sheet_name.startswith("'") and sheet_name.endswith("'"):
        sheet_name = sheet_name[1:-1].replace("''", "'")
    return sheet_name, range_part


def format_range_address(sheet_name: str, literal: str) -> str:
    """Build the wire-level range address ``"<tab>!<range>"``.

    Tab names with anything besides ASCII letters, digits and underscores,
    or that look like a cell reference (``A1``, ``R1C1``), are single-quoted,
    e.g. ``"'My Tab'!A1:B2"``.
    """
    if not _PLAIN_SHEET_NAME_RE.fullmatch(sheet_name) or _CELL_LIKE_NAME_RE.fullmatch(sheet_name):
        sheet_name = "'" + sheet_name.replace("'", "''") + "'"
    return f"{sheet_name}!{literal}"


def to_grid_range(numeric: NumericRange, sheet_id: int) -> dict:
    """Convert an inclusive 1-based range into a zero-based, end-exclusive GridRange."""
    return {
        "sheetId": sheet_id,
        "startRowIndex": numeric.start_row - 1,
        "endRowIndex": numeric.end_row,
        "startColumnIndex": numeric.start_column - 1,
        "endColumnIndex": numeric.end_column,
    }
