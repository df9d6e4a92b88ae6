"""Data models for Google Sheets operations."""

from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, Field


class Dimension(str, Enum):
    """Whether an operation addresses whole rows or whole columns."""

    ROWS = "ROWS"
    COLUMNS = "COLUMNS"


class ValueInputOption(str, Enum):
    """How written values are interpreted."""

    RAW = "RAW"  # stored as-is
    USER_ENTERED = "USER_ENTERED"  # parsed as if typed into the UI


class MergeType(str, Enum):
    """The type of merge to create."""

    MERGE_ALL = "MERGE_ALL"
    MERGE_COLUMNS = "MERGE_COLUMNS"
    MERGE_ROWS = "MERGE_ROWS"


class SortOrder(str, Enum):
    """Sort direction."""

    ASCENDING = "ASCENDING"
    DESCENDING = "DESCENDING"


class TabInfo(BaseModel):
    """Metadata for one tab (sheet) of a spreadsheet."""

    sheet_id: int
    title: str
    index: int = 0
    row_count: Optional[int] = None
    column_count: Optional[int] = None


class UpdateSummary(BaseModel):
    """Result of overwriting a range of values."""

    spreadsheet_id: str
    updated_range: str
    updated_rows: int = 0
    updated_columns: int = 0
    updated_cells: int = 0


class AppendSummary(BaseModel):
    """Result of appending rows to a table."""

    spreadsheet_id: str
    table_range: Optional[str] = None  # the table the values were appended to
    updated_range: str
    updated_rows: int = 0
    updated_cells: int = 0


class BatchSummary(BaseModel):
    """Result of a structural batch update."""

    spreadsheet_id: str
    replies: list[dict[str, Any]] = Field(default_factory=list)
