"""handysheet - a fluent client for common Google Sheets operations."""

from .errors import (
    HandySheetError,
    InvalidFormatError,
    MissingConfigurationError,
    InvalidBoundsError,
    SheetNotFoundError,
    UnsupportedOperationError,
    BackendError,
)
from .ranges import NumericRange
from .sheets import (
    GoogleSheetsClient,
    SheetsBackend,
    Dimension,
    ValueInputOption,
    MergeType,
    SortOrder,
)
from .spreadsheet import OperationContext, SpreadSheet

__version__ = "0.1.0"

__all__ = [
    "SpreadSheet",
    "OperationContext",
    "NumericRange",
    "GoogleSheetsClient",
    "SheetsBackend",
    "Dimension",
    "ValueInputOption",
    "MergeType",
    "SortOrder",
    "HandySheetError",
    "InvalidFormatError",
    "MissingConfigurationError",
    "InvalidBoundsError",
    "SheetNotFoundError",
    "UnsupportedOperationError",
    "BackendError",
]
