"""Pytest configuration and shared fixtures."""

from pathlib import Path
from unittest.mock import Mock

import pytest

from handysheet.config import Settings
from handysheet.sheets import GoogleSheetsClient
from handysheet.sheets.models import AppendSummary, BatchSummary, TabInfo, UpdateSummary
from handysheet.spreadsheet import SpreadSheet


@pytest.fixture
def mock_settings(tmp_path: Path) -> Settings:
    """Create settings with test values."""
    creds_file = tmp_path / "credentials.json"
    token_file = tmp_path / "token.json"
    creds_file.write_text('{"installed": {"client_id": "test"}}')

    return Settings(
        google_credentials_path=creds_file,
        google_token_path=token_file,
        google_scopes=["https://www.googleapis.com/auth/spreadsheets"],
        spreadsheet_id="test-sheet-123",
        value_input_option="USER_ENTERED",
        log_level="INFO",
    )


@pytest.fixture
def mock_backend() -> Mock:
    """Create a mocked spreadsheet backend."""
    backend = Mock(spec=GoogleSheetsClient)

    backend.get = Mock(return_value=[["A1", "B1"], ["A2"]])
    backend.update = Mock(
        return_value=UpdateSummary(
            spreadsheet_id="test-sheet-123",
            updated_range="Sheet1!A1:B2",
            updated_rows=2,
            updated_columns=2,
            updated_cells=4,
        )
    )
    backend.append = Mock(
        return_value=AppendSummary(
            spreadsheet_id="test-sheet-123",
            table_range="Sheet1!A1:C3",
            updated_range="Sheet1!A4:C4",
            updated_rows=1,
            updated_cells=3,
        )
    )
    backend.batch_update = Mock(
        return_value=BatchSummary(spreadsheet_id="test-sheet-123", replies=[{}])
    )
    backend.list_tabs = Mock(
        return_value=[
            TabInfo(sheet_id=0, title="Sheet1", index=0, row_count=1000, column_count=26),
            TabInfo(sheet_id=1234, title="Data", index=1, row_count=100, column_count=10),
        ]
    )

    return backend


@pytest.fixture
def spreadsheet(mock_backend: Mock) -> SpreadSheet:
    """A SpreadSheet bound to the mocked backend and a spreadsheet id."""
    return SpreadSheet(mock_backend).with_id("test-sheet-123")
