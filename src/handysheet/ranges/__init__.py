"""A1 range addressing."""

from .codec import (
    column_index_to_letter,
    letter_to_column_index,
    numeric_range_to_literal,
    literal_range_to_numeric,
    split_sheet_name,
    format_range_address,
    to_grid_range,
)
from .models import NumericRange

__all__ = [
    "NumericRange",
    "column_index_to_letter",
    "letter_to_column_index",
    "numeric_range_to_literal",
    "literal_range_to_numeric",
    "split_sheet_name",
    "format_range_address",
    "to_grid_range",
]
