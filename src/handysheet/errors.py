"""Exceptions raised by handysheet."""

from typing import Iterable, Optional


class HandySheetError(Exception):
    """Base class for all handysheet errors."""

    pass


class InvalidFormatError(HandySheetError, ValueError):
    """Raised when column letters or an A1 range cannot be parsed."""

    pass


class MissingConfigurationError(HandySheetError):
    """Raised when a terminal operation is called before its fields are set."""

    def __init__(self, operation: str, missing: Iterable[str]):
        self.operation = operation
        self.missing = list(missing)
        super().__init__(
            f"Cannot run '{operation}': missing {', '.join(self.missing)}"
        )


class InvalidBoundsError(HandySheetError, ValueError):
    """Raised when start/end bounds of a range or dimension are not usable."""

    pass


class SheetNotFoundError(HandySheetError):
    """Raised when a tab name does not exist in the spreadsheet."""

    def __init__(self, spreadsheet_id: str, sheet_name: str):
        self.spreadsheet_id = spreadsheet_id
        self.sheet_name = sheet_name
        super().__init__(
            f"Sheet '{sheet_name}' not found in spreadsheet {spreadsheet_id}"
        )


class UnsupportedOperationError(HandySheetError):
    """Raised when the backend has no request for the configured operation."""

    pass


class BackendError(HandySheetError):
    """Raised when the spreadsheet backend fails (network, auth, quota, not found)."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        self.status_code = status_code
        super().__init__(message)
