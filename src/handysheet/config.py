"""Configuration management for handysheet."""

import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel

load_dotenv()

DEFAULT_SCOPES = ["https://www.googleapis.com/auth/spreadsheets"]


def _parse_scopes() -> list[str]:
    """Parse OAuth scopes from environment variable."""
    scopes_env = os.getenv("GOOGLE_SCOPES")
    if scopes_env:
        scopes = [scope.strip() for scope in scopes_env.split(",") if scope.strip()]
        if scopes:
            return scopes
    return list(DEFAULT_SCOPES)


class Settings(BaseModel):
    """Application settings."""

    # Google Sheets API credentials
    google_credentials_path: Path = Path(os.getenv("GOOGLE_CREDENTIALS_PATH", "credentials.json"))
    google_token_path: Path = Path(os.getenv("GOOGLE_TOKEN_PATH", "token.json"))
    google_scopes: list[str] = _parse_scopes()

    # Default spreadsheet for the CLI
    spreadsheet_id: Optional[str] = os.getenv("HANDYSHEET_SPREADSHEET_ID")

    # How written values are interpreted unless overridden per operation
    value_input_option: str = os.getenv("HANDYSHEET_VALUE_INPUT_OPTION", "USER_ENTERED").upper()

    log_level: str = os.getenv("LOG_LEVEL", "INFO").upper()


settings = Settings()
