"""Tests for the Google Sheets API client."""

from unittest.mock import Mock, patch

import pytest
from googleapiclient.errors import HttpError

from handysheet.errors import BackendError
from handysheet.sheets import GoogleSheetsClient, SheetsBackend
from handysheet.sheets.models import ValueInputOption


def _http_error(status: int = 403) -> HttpError:
    return HttpError(
        resp=Mock(status=status, reason="Forbidden"),
        content=b'{"error": {"message": "The caller does not have permission"}}',
    )


@pytest.fixture
def service() -> Mock:
    """A mocked Sheets v4 service resource."""
    return Mock()


@pytest.fixture
def client(service, mock_settings) -> GoogleSheetsClient:
    return GoogleSheetsClient(config=mock_settings, service=service)


class TestValues:
    """Test value reads and writes."""

    def test_client_satisfies_backend_protocol(self, client):
        assert isinstance(client, SheetsBackend)

    def test_get(self, client, service):
        values_api = service.spreadsheets.return_value.values.return_value
        values_api.get.return_value.execute.return_value = {
            "range": "Sheet1!A1:C3",
            "values": [["a", "b"], ["c"]],
        }

        result = client.get("sheet-1", "Sheet1!A1:C3")

        values_api.get.assert_called_once_with(spreadsheetId="sheet-1", range="Sheet1!A1:C3")
        assert result == [["a", "b"], ["c"]]

    def test_get_empty_range(self, client, service):
        values_api = service.spreadsheets.return_value.values.return_value
        values_api.get.return_value.execute.return_value = {"range": "Sheet1!A1:C3"}

        assert client.get("sheet-1", "Sheet1!A1:C3") == []

    def test_update(self, client, service):
        values_api = service.spreadsheets.return_value.values.return_value
        values_api.update.return_value.execute.return_value = {
            "spreadsheetId": "sheet-1",
            "updatedRange": "Sheet1!A1:B2",
            "updatedRows": 2,
            "updatedColumns": 2,
            "updatedCells": 4,
        }
        values = [["A1", "B1"], ["A2", "B2"]]

        summary = client.update("sheet-1", "Sheet1!A1:B2", values, ValueInputOption.USER_ENTERED)

        values_api.update.assert_called_once_with(
            spreadsheetId="sheet-1",
            range="Sheet1!A1:B2",
            valueInputOption="USER_ENTERED",
            body={"range": "Sheet1!A1:B2", "values": values},
        )
        assert summary.updated_range == "Sheet1!A1:B2"
        assert summary.updated_rows == 2
        assert summary.updated_cells == 4

    def test_append(self, client, service):
        values_api = service.spreadsheets.return_value.values.return_value
        values_api.append.return_value.execute.return_value = {
            "spreadsheetId": "sheet-1",
            "tableRange": "Sheet1!A1:C3",
            "updates": {
                "updatedRange": "Sheet1!A4:C4",
                "updatedRows": 1,
                "updatedCells": 3,
            },
        }

        summary = client.append("sheet-1", "Sheet1!A4:E4", [["one", "two", "three"]], ValueInputOption.RAW)

        kwargs = values_api.append.call_args.kwargs
        assert kwargs["valueInputOption"] == "RAW"
        assert kwargs["body"] == {"values": [["one", "two", "three"]]}
        assert summary.table_range == "Sheet1!A1:C3"
        assert summary.updated_range == "Sheet1!A4:C4"
        assert summary.updated_cells == 3

    def test_http_error_becomes_backend_error(self, client, service):
        values_api = service.spreadsheets.return_value.values.return_value
        error = _http_error(403)
        values_api.get.return_value.execute.side_effect = error

        with pytest.raises(BackendError) as exc_info:
            client.get("sheet-1", "Sheet1!A1:B2")

        assert exc_info.value.status_code == 403
        assert exc_info.value.__cause__ is error
        assert "Sheet1!A1:B2" in str(exc_info.value)


class TestSpreadsheetRequests:
    """Test batch updates and tab listing."""

    def test_batch_update(self, client, service):
        spreadsheets = service.spreadsheets.return_value
        spreadsheets.batchUpdate.return_value.execute.return_value = {
            "spreadsheetId": "sheet-1",
            "replies": [{}],
        }
        requests = [{"deleteDimension": {"range": {"sheetId": 0, "dimension": "ROWS", "startIndex": 0, "endIndex": 1}}}]

        summary = client.batch_update("sheet-1", requests)

        spreadsheets.batchUpdate.assert_called_once_with(
            spreadsheetId="sheet-1", body={"requests": requests}
        )
        assert summary.spreadsheet_id == "sheet-1"
        assert summary.replies == [{}]

    def test_batch_update_error(self, client, service):
        spreadsheets = service.spreadsheets.return_value
        spreadsheets.batchUpdate.return_value.execute.side_effect = _http_error(400)

        with pytest.raises(BackendError) as exc_info:
            client.batch_update("sheet-1", [{"mergeCells": {}}])

        assert exc_info.value.status_code == 400

    def test_list_tabs_in_display_order(self, client, service):
        spreadsheets = service.spreadsheets.return_value
        spreadsheets.get.return_value.execute.return_value = {
            "sheets": [
                {
                    "properties": {
                        "sheetId": 99,
                        "title": "Data",
                        "index": 1,
                        "gridProperties": {"rowCount": 100, "columnCount": 10},
                    }
                },
                {
                    "properties": {
                        "sheetId": 0,
                        "title": "Sheet1",
                        "index": 0,
                        "gridProperties": {"rowCount": 1000, "columnCount": 26},
                    }
                },
            ]
        }

        tabs = client.list_tabs("sheet-1")

        assert [tab.title for tab in tabs] == ["Sheet1", "Data"]
        assert tabs[1].sheet_id == 99
        assert tabs[1].row_count == 100
        assert tabs[1].column_count == 10


class TestCredentials:
    """Test lazy service construction and the OAuth flow."""

    def test_service_built_once(self, mock_settings):
        client = GoogleSheetsClient(config=mock_settings)

        with patch.object(client, "_get_credentials", return_value="creds") as get_creds, patch(
            "handysheet.sheets.client.build"
        ) as build:
            first = client.service
            second = client.service

        assert first is second
        get_creds.assert_called_once()
        build.assert_called_once_with("sheets", "v4", credentials="creds")

    def test_cached_valid_token(self, mock_settings):
        mock_settings.google_token_path.write_text("{}")
        creds = Mock(valid=True)

        with patch(
            "handysheet.sheets.client.Credentials.from_authorized_user_file", return_value=creds
        ) as from_file:
            result = GoogleSheetsClient(config=mock_settings)._get_credentials()

        assert result is creds
        from_file.assert_called_once_with(str(mock_settings.google_token_path), mock_settings.google_scopes)

    def test_expired_token_refreshed(self, mock_settings):
        mock_settings.google_token_path.write_text("{}")
        creds = Mock(valid=False, expired=True, refresh_token="refresh")
        creds.to_json.return_value = '{"token": "new"}'

        with patch(
            "handysheet.sheets.client.Credentials.from_authorized_user_file", return_value=creds
        ):
            GoogleSheetsClient(config=mock_settings)._get_credentials()

        creds.refresh.assert_called_once()
        assert mock_settings.google_token_path.read_text() == '{"token": "new"}'

    def test_runs_installed_app_flow_without_token(self, mock_settings):
        creds = Mock()
        creds.to_json.return_value = '{"token": "fresh"}'
        flow = Mock()
        flow.run_local_server.return_value = creds

        with patch(
            "handysheet.sheets.client.InstalledAppFlow.from_client_secrets_file", return_value=flow
        ) as from_secrets:
            result = GoogleSheetsClient(config=mock_settings)._get_credentials()

        assert result is creds
        from_secrets.assert_called_once_with(
            str(mock_settings.google_credentials_path), mock_settings.google_scopes
        )
        assert mock_settings.google_token_path.read_text() == '{"token": "fresh"}'

    def test_missing_credentials_file(self, mock_settings, tmp_path):
        mock_settings.google_credentials_path = tmp_path / "missing.json"

        with pytest.raises(FileNotFoundError):
            GoogleSheetsClient(config=mock_settings)._get_credentials()
