"""Google Sheets API integration."""

from .backend import SheetsBackend
from .client import GoogleSheetsClient
from .models import (
    Dimension,
    ValueInputOption,
    MergeType,
    SortOrder,
    TabInfo,
    UpdateSummary,
    AppendSummary,
    BatchSummary,
)

__all__ = [
    "SheetsBackend",
    "GoogleSheetsClient",
    "Dimension",
    "ValueInputOption",
    "MergeType",
    "SortOrder",
    "TabInfo",
    "UpdateSummary",
    "AppendSummary",
    "BatchSummary",
]
