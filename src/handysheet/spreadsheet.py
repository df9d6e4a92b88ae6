"""Chainable access to the most common spreadsheet operations."""

import logging
from typing import Any, Optional, Sequence, Union

from pydantic import BaseModel, ConfigDict

from .errors import (
    InvalidBoundsError,
    MissingConfigurationError,
    SheetNotFoundError,
    UnsupportedOperationError,
)
from .ranges import (
    NumericRange,
    format_range_address,
    literal_range_to_numeric,
    split_sheet_name,
    to_grid_range,
)
from .sheets.backend import SheetsBackend
from .sheets.models import (
    AppendSummary,
    BatchSummary,
    Dimension,
    MergeType,
    SortOrder,
    UpdateSummary,
    ValueInputOption,
)

logger = logging.getLogger(__name__)

# Sheet used for structural requests when no tab name is configured
DEFAULT_SHEET_ID = 0


class OperationContext(BaseModel):
    """Everything a terminal operation needs to know about its target."""

    model_config = ConfigDict(frozen=True)

    spreadsheet_id: Optional[str] = None
    sheet_name: Optional[str] = None
    # (column, row) corners, 1-based and inclusive like A1 notation
    start_cell: Optional[tuple[int, int]] = None
    end_cell: Optional[tuple[int, int]] = None
    dimension: Optional[Dimension] = None
    # 0-based, end-exclusive
    start_index: Optional[int] = None
    end_index: Optional[int] = None
    value_input_option: ValueInputOption = ValueInputOption.USER_ENTERED
    merge_type: Optional[MergeType] = None
    sort_order: Optional[SortOrder] = None
    inherit_from_before: bool = False

    @property
    def numeric_range(self) -> Optional[NumericRange]:
        if self.start_cell is None or self.end_cell is None:
            return None
        return NumericRange(*self.start_cell, *self.end_cell)


class SpreadSheet:
    """
    Fluent builder over a spreadsheet backend.

    Every configuration call returns a new ``SpreadSheet`` and leaves the
    original untouched, so a partially configured instance can be kept as a
    template::

        sheet = SpreadSheet(client).with_id(SPREADSHEET_ID).on_sheet("Sheet1")
        sheet.to_range("A1:C3").write_values(values)
        sheet.select(Dimension.ROWS).from_index(0).to_index(1).insert_empty()

    Terminal operations (``read_values``, ``write_values``, ``append_values``,
    ``insert_empty``, ``delete``, ``merge_cells``, ``sort``, ``list_tabs``)
    validate the configuration, then make one blocking backend call. Nothing
    is retried. The backend client itself is not thread-safe; share a
    ``SpreadSheet`` across threads only if the backend allows it.
    """

    def __init__(
        self,
        backend: SheetsBackend,
        context: Optional[OperationContext] = None,
    ):
        self.backend = backend
        self.context = context or OperationContext()

    def _with(self, **changes) -> "SpreadSheet":
        # Revalidate so bad values fail when set, not at dispatch
        context = OperationContext.model_validate({**self.context.model_dump(), **changes})
        return SpreadSheet(self.backend, context)

    def __repr__(self) -> str:
        return f"SpreadSheet({self.context!r})"

    # Configuration

    def with_id(self, spreadsheet_id: str) -> "SpreadSheet":
        return self._with(spreadsheet_id=spreadsheet_id)

    def on_sheet(self, sheet_name: str) -> "SpreadSheet":
        return self._with(sheet_name=sheet_name)

    def to_range(self, literal: str) -> "SpreadSheet":
        """
        Target a block of cells in A1 notation, e.g. ``"A1:C3"``.

        A ``"Sheet1!A1:C3"`` address also selects the tab.

        Raises:
            InvalidFormatError: If the range cannot be parsed
        """
        sheet_name, _ = split_sheet_name(literal)
        numeric = literal_range_to_numeric(literal)
        changes = {
            "start_cell": (numeric.start_column, numeric.start_row),
            "end_cell": (numeric.end_column, numeric.end_row),
        }
        if sheet_name is not None:
            changes["sheet_name"] = sheet_name
        return self._with(**changes)

    def from_cell(self, column: int, row: int) -> "SpreadSheet":
        """Set the top-left corner. ``from_cell(2, 2)`` is B2."""
        return self._with(start_cell=(column, row))

    def to_cell(self, column: int, row: int) -> "SpreadSheet":
        """Set the bottom-right corner (inclusive). ``to_cell(4, 4)`` is D4."""
        return self._with(end_cell=(column, row))

    def select(self, dimension: Union[Dimension, str]) -> "SpreadSheet":
        return self._with(dimension=Dimension(dimension))

    def from_index(self, start_index: int) -> "SpreadSheet":
        """First row/column of a dimension span, 0-based."""
        return self._with(start_index=start_index)

    def to_index(self, end_index: int) -> "SpreadSheet":
        """End of a dimension span, 0-based and exclusive."""
        return self._with(end_index=end_index)

    def with_value_input_option(self, option: Union[ValueInputOption, str]) -> "SpreadSheet":
        return self._with(value_input_option=ValueInputOption(option))

    def with_merge_type(self, merge_type: Union[MergeType, str]) -> "SpreadSheet":
        return self._with(merge_type=MergeType(merge_type))

    def with_sort_order(self, sort_order: Union[SortOrder, str]) -> "SpreadSheet":
        return self._with(sort_order=SortOrder(sort_order))

    def inherit_from_before(self, inherit: bool = True) -> "SpreadSheet":
        """Inherit formatting from the row/column before the inserted span instead of after."""
        return self._with(inherit_from_before=inherit)

    # Validation helpers

    def _require(self, operation: str, *fields: str) -> None:
        missing = []
        for field in fields:
            if field == "range":
                if self.context.start_cell is None or self.context.end_cell is None:
                    missing.append("range")
            elif getattr(self.context, field) is None:
                missing.append(field)
        if missing:
            raise MissingConfigurationError(operation, missing)

    def _checked_range(self) -> NumericRange:
        numeric = self.context.numeric_range
        if min(numeric.start_column, numeric.start_row, numeric.end_column, numeric.end_row) < 1:
            raise InvalidBoundsError(f"Range corners must be >= 1, got ({numeric})")
        if not numeric.is_ordered():
            raise InvalidBoundsError(
                f"Range start must not be after its end, got ({numeric})"
            )
        return numeric

    def _checked_span(self) -> tuple[int, int]:
        start, end = self.context.start_index, self.context.end_index
        if start < 0:
            raise InvalidBoundsError(f"Start index must be >= 0, got {start}")
        if start >= end:
            raise InvalidBoundsError(
                f"Start index must be less than end index (end is exclusive), got [{start}, {end})"
            )
        return start, end

    def _range_address(self) -> str:
        return format_range_address(self.context.sheet_name, self._checked_range().to_literal())

    def _sheet_id(self) -> int:
        """Resolve the configured tab name to its numeric sheet id."""
        if self.context.sheet_name is None:
            return DEFAULT_SHEET_ID
        for tab in self.backend.list_tabs(self.context.spreadsheet_id):
            if tab.title == self.context.sheet_name:
                return tab.sheet_id
        raise SheetNotFoundError(self.context.spreadsheet_id, self.context.sheet_name)

    def _dispatch(self, request: dict[str, Any]) -> BatchSummary:
        logger.debug(f"Dispatching {request} to {self.context.spreadsheet_id}")
        return self.backend.batch_update(self.context.spreadsheet_id, [request])

    # Value operations

    def read_values(self) -> list[list[Any]]:
        """
        Read the configured range.

        Returns:
            Rows of cell values. Trailing empty cells are left out of each row.
        """
        self._require("read_values", "spreadsheet_id", "sheet_name", "range")
        address = self._range_address()
        logger.debug(f"Reading {address}")
        return self.backend.get(self.context.spreadsheet_id, address)

    def write_values(self, values: Sequence[Sequence[Any]]) -> UpdateSummary:
        """
        Overwrite the configured range with row-major values.

        Args:
            values: Rows of cell values

        Returns:
            The backend's update summary
        """
        self._require("write_values", "spreadsheet_id", "sheet_name", "range")
        address = self._range_address()
        logger.debug(f"Writing {len(values)} rows to {address}")
        return self.backend.update(
            self.context.spreadsheet_id,
            address,
            [list(row) for row in values],
            self.context.value_input_option,
        )

    def append_values(self, values: Sequence[Sequence[Any]]) -> AppendSummary:
        """Append rows after the last non-empty row of the table in the configured range."""
        self._require("append_values", "spreadsheet_id", "sheet_name", "range")
        address = self._range_address()
        logger.debug(f"Appending {len(values)} rows to {address}")
        return self.backend.append(
            self.context.spreadsheet_id,
            address,
            [list(row) for row in values],
            self.context.value_input_option,
        )

    # Structural operations

    def _dimension_range(self, start: int, end: int) -> dict[str, Any]:
        return {
            "sheetId": self._sheet_id(),
            "dimension": self.context.dimension.value,
            "startIndex": start,
            "endIndex": end,
        }

    def insert_empty(self) -> BatchSummary:
        """
        Insert empty rows or columns over ``[start_index, end_index)``.

        Existing rows/columns from ``start_index`` on move down/right by
        ``end_index - start_index``.

        Raises:
            MissingConfigurationError: If the dimension or indices are not set
            InvalidBoundsError: If start >= end, or inherit_from_before is set with start 0
        """
        self._require("insert_empty", "spreadsheet_id", "dimension", "start_index", "end_index")
        start, end = self._checked_span()
        if self.context.inherit_from_before and start == 0:
            raise InvalidBoundsError(
                "Cannot inherit from the dimension before index 0"
            )
        return self._dispatch(
            {
                "insertDimension": {
                    "range": self._dimension_range(start, end),
                    "inheritFromBefore": self.context.inherit_from_before,
                }
            }
        )

    def delete(self) -> BatchSummary:
        """Delete rows or columns in ``[start_index, end_index)``."""
        self._require("delete", "spreadsheet_id", "dimension", "start_index", "end_index")
        start, end = self._checked_span()
        return self._dispatch(
            {"deleteDimension": {"range": self._dimension_range(start, end)}}
        )

    def merge_cells(self) -> BatchSummary:
        """Merge the configured block according to the merge type."""
        self._require("merge_cells", "spreadsheet_id", "range", "merge_type")
        numeric = self._checked_range()
        if numeric.cell_count < 2:
            raise InvalidBoundsError(f"Nothing to merge in single cell {numeric.to_literal()}")
        return self._dispatch(
            {
                "mergeCells": {
                    "range": to_grid_range(numeric, self._sheet_id()),
                    "mergeType": self.context.merge_type.value,
                }
            }
        )

    def sort(self) -> BatchSummary:
        """Sort the rows of the configured block by its first column."""
        self._require("sort", "spreadsheet_id", "range", "dimension", "sort_order")
        if self.context.dimension is not Dimension.ROWS:
            raise UnsupportedOperationError(
                "Sheets can only sort rows of a range; select Dimension.ROWS"
            )
        numeric = self._checked_range()
        return self._dispatch(
            {
                "sortRange": {
                    "range": to_grid_range(numeric, self._sheet_id()),
                    "sortSpecs": [
                        {
                            "dimensionIndex": numeric.start_column - 1,
                            "sortOrder": self.context.sort_order.value,
                        }
                    ],
                }
            }
        )

    def list_tabs(self) -> list[str]:
        """Names of all tabs in the spreadsheet, in display order."""
        self._require("list_tabs", "spreadsheet_id")
        return [tab.title for tab in self.backend.list_tabs(self.context.spreadsheet_id)]

    # Shortcuts

    def insert_rows(self, start_index: int, end_index: int, inherit_from_before: bool = False) -> BatchSummary:
        return (
            self.select(Dimension.ROWS)
            .from_index(start_index)
            .to_index(end_index)
            .inherit_from_before(inherit_from_before)
            .insert_empty()
        )

    def insert_columns(self, start_index: int, end_index: int, inherit_from_before: bool = False) -> BatchSummary:
        return (
            self.select(Dimension.COLUMNS)
            .from_index(start_index)
            .to_index(end_index)
            .inherit_from_before(inherit_from_before)
            .insert_empty()
        )

    def delete_rows(self, start_index: int, end_index: int) -> BatchSummary:
        return self.select(Dimension.ROWS).from_index(start_index).to_index(end_index).delete()

    def delete_columns(self, start_index: int, end_index: int) -> BatchSummary:
        return self.select(Dimension.COLUMNS).from_index(start_index).to_index(end_index).delete()
