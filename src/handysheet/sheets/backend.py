"""The spreadsheet backend capability used by SpreadSheet."""

from typing import Any, Protocol, runtime_checkable

from .models import AppendSummary, BatchSummary, TabInfo, UpdateSummary, ValueInputOption


@runtime_checkable
class SheetsBackend(Protocol):
    """Anything that can execute Sheets value and batch requests.

    Range addresses are always ``"<tab>!<A1 range>"``. Implementations raise
    :class:`handysheet.errors.BackendError` on any remote failure.
    """

    def get(self, spreadsheet_id: str, range_address: str) -> list[list[Any]]:
        ...

    def update(
        self,
        spreadsheet_id: str,
        range_address: str,
        values: list[list[Any]],
        value_input_option: ValueInputOption,
    ) -> UpdateSummary:
        ...

    def append(
        self,
        spreadsheet_id: str,
        range_address: str,
        values: list[list[Any]],
        value_input_option: ValueInputOption,
    ) -> AppendSummary:
        ...

    def batch_update(self, spreadsheet_id: str, requests: list[dict[str, Any]]) -> BatchSummary:
        ...

    def list_tabs(self, spreadsheet_id: str) -> list[TabInfo]:
        ...
