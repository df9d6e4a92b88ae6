"""Google Sheets API client."""

import logging
from typing import Any, Optional

from google.auth.transport.requests import Request
from google.oauth2.credentials import Credentials
from google_auth_oauthlib.flow import InstalledAppFlow
from googleapiclient.discovery import build
from googleapiclient.errors import HttpError

from ..config import Settings, settings as default_settings
from ..errors import BackendError
from .models import (
    AppendSummary,
    BatchSummary,
    TabInfo,
    UpdateSummary,
    ValueInputOption,
)

logger = logging.getLogger(__name__)


def _backend_error(action: str, error: HttpError) -> BackendError:
    status = getattr(error, "status_code", None)
    if status is None and getattr(error, "resp", None) is not None:
        status = getattr(error.resp, "status", None)
    logger.error(f"Sheets API call failed while trying to {action}: {error}")
    return BackendError(f"Failed to {action}: {error}", status_code=status)


class GoogleSheetsClient:
    """Client for the Google Sheets API v4.

    The Sheets service is built lazily on first use, which also triggers
    the OAuth flow when no valid token is cached.
    """

    def __init__(self, config: Optional[Settings] = None, service=None):
        self.config = config or default_settings
        self._service = service
        self._credentials = None

    def _get_credentials(self) -> Credentials:
        """Get or refresh OAuth2 credentials."""
        creds = None
        scopes = self.config.google_scopes

        if self.config.google_token_path.exists():
            creds = Credentials.from_authorized_user_file(
                str(self.config.google_token_path), scopes
            )

        if not creds or not creds.valid:
            if creds and creds.expired and creds.refresh_token:
                logger.info("Refreshing expired Google credentials")
                creds.refresh(Request())
            else:
                if not self.config.google_credentials_path.exists():
                    raise FileNotFoundError(
                        f"Google credentials file not found at {self.config.google_credentials_path}. "
                        "Please download it from Google Cloud Console."
                    )
                flow = InstalledAppFlow.from_client_secrets_file(
                    str(self.config.google_credentials_path), scopes
                )
                creds = flow.run_local_server(port=0)

            # Save credentials for next run
            self.config.google_token_path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.config.google_token_path, "w") as token:
                token.write(creds.to_json())

        return creds

    @property
    def service(self):
        """Get or create the Sheets API service."""
        if self._service is None:
            self._credentials = self._get_credentials()
            self._service = build("sheets", "v4", credentials=self._credentials)
        return self._service

    def get(self, spreadsheet_id: str, range_address: str) -> list[list[Any]]:
        """Read the values of a range. Trailing empty cells are omitted per row."""
        logger.info(f"Reading {range_address} from {spreadsheet_id}")
        try:
            result = (
                self.service.spreadsheets()
                .values()
                .get(spreadsheetId=spreadsheet_id, range=range_address)
                .execute()
            )
        except HttpError as e:
            raise _backend_error(f"read range {range_address}", e) from e
        return result.get("values", [])

    def update(
        self,
        spreadsheet_id: str,
        range_address: str,
        values: list[list[Any]],
        value_input_option: ValueInputOption,
    ) -> UpdateSummary:
        """Overwrite a range with row-major values."""
        logger.info(
            f"Writing {len(values)} rows to {range_address} in {spreadsheet_id} "
            f"({value_input_option.value})"
        )
        try:
            result = (
                self.service.spreadsheets()
                .values()
                .update(
                    spreadsheetId=spreadsheet_id,
                    range=range_address,
                    valueInputOption=value_input_option.value,
                    body={"range": range_address, "values": values},
                )
                .execute()
            )
        except HttpError as e:
            raise _backend_error(f"update range {range_address}", e) from e

        return UpdateSummary(
            spreadsheet_id=result.get("spreadsheetId", spreadsheet_id),
            updated_range=result.get("updatedRange", range_address),
            updated_rows=result.get("updatedRows", 0),
            updated_columns=result.get("updatedColumns", 0),
            updated_cells=result.get("updatedCells", 0),
        )

    def append(
        self,
        spreadsheet_id: str,
        range_address: str,
        values: list[list[Any]],
        value_input_option: ValueInputOption,
    ) -> AppendSummary:
        """Append rows after the last row of the table found in the range."""
        logger.info(
            f"Appending {len(values)} rows to {range_address} in {spreadsheet_id} "
            f"({value_input_option.value})"
        )
        try:
            result = (
                self.service.spreadsheets()
                .values()
                .append(
                    spreadsheetId=spreadsheet_id,
                    range=range_address,
                    valueInputOption=value_input_option.value,
                    insertDataOption="INSERT_ROWS",
                    body={"values": values},
                )
                .execute()
            )
        except HttpError as e:
            raise _backend_error(f"append to range {range_address}", e) from e

        updates = result.get("updates", {})
        return AppendSummary(
            spreadsheet_id=result.get("spreadsheetId", spreadsheet_id),
            table_range=result.get("tableRange"),
            updated_range=updates.get("updatedRange", range_address),
            updated_rows=updates.get("updatedRows", 0),
            updated_cells=updates.get("updatedCells", 0),
        )

    def batch_update(self, spreadsheet_id: str, requests: list[dict[str, Any]]) -> BatchSummary:
        """Apply structural requests (insert, delete, merge, sort) in one batch."""
        kinds = [next(iter(request)) for request in requests]
        logger.info(f"Applying batch {kinds} to {spreadsheet_id}")
        try:
            result = (
                self.service.spreadsheets()
                .batchUpdate(spreadsheetId=spreadsheet_id, body={"requests": requests})
                .execute()
            )
        except HttpError as e:
            raise _backend_error(f"apply batch update {kinds}", e) from e

        return BatchSummary(
            spreadsheet_id=result.get("spreadsheetId", spreadsheet_id),
            replies=result.get("replies", []),
        )

    def list_tabs(self, spreadsheet_id: str) -> list[TabInfo]:
        """List the tabs of a spreadsheet in display order."""
        try:
            result = (
                self.service.spreadsheets()
                .get(spreadsheetId=spreadsheet_id, fields="sheets.properties")
                .execute()
            )
        except HttpError as e:
            raise _backend_error(f"get spreadsheet info for {spreadsheet_id}", e) from e

        tabs = []
        for sheet in result.get("sheets", []):
            props = sheet["properties"]
            grid = props.get("gridProperties", {})
            tabs.append(
                TabInfo(
                    sheet_id=props["sheetId"],
                    title=props["title"],
                    index=props.get("index", 0),
                    row_count=grid.get("rowCount"),
                    column_count=grid.get("columnCount"),
                )
            )
        return sorted(tabs, key=lambda tab: tab.index)
