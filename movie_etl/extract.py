"""
Google Sheets Data Extraction

Fetches the movie sheet from Google Sheets and converts it to a pandas DataFrame.
Handles authentication via API key or service account.
"""

import logging
from typing import Optional
import pandas as pd
import gspread
import requests
from google.auth.exceptions import GoogleAuthError
from google.oauth2.service_account import Credentials

logger = logging.getLogger(__name__)

# Anything the remote side can throw at us while reading
REMOTE_ERRORS = (
    gspread.exceptions.GSpreadException,
    GoogleAuthError,
    requests.exceptions.RequestException,
)


class GoogleSheetsExtractor:
    """
    Extracts data from Google Sheets.

    Supports both API key and service account authentication.
    """

    SCOPES = [
        "https://www.googleapis.com/auth/spreadsheets.readonly",
        "https://www.googleapis.com/auth/drive.readonly",
    ]

    def __init__(self, api_key: Optional[str] = None, credentials_path: Optional[str] = None):
        """
        Initialize Google Sheets extractor.

        Args:
            api_key: Google API key (sheet must be readable by link)
            credentials_path: Path to service account JSON file, used when no API key is given

        Raises:
            ValueError: If neither credential is given
            FileNotFoundError: If credentials file not found
            ConnectionError: If authentication fails
        """
        if not api_key and not credentials_path:
            raise ValueError("Either an API key or a service account file is required")

        self.api_key = api_key
        self.credentials_path = credentials_path
        self.client: Optional[gspread.Client] = None
        self._authenticate()

    def _authenticate(self) -> None:
        """
        Build an authorized gspread client.

        Raises:
            FileNotFoundError: If credentials file not found
            ConnectionError: If authentication fails
        """
        try:
            if self.api_key:
                self.client = gspread.api_key(self.api_key)
                logger.info("Using API key for Google Sheets API")
            else:
                credentials = Credentials.from_service_account_file(
                    self.credentials_path, scopes=self.SCOPES
                )
                self.client = gspread.authorize(credentials)
                logger.info("Successfully authenticated with Google Sheets API")
        except FileNotFoundError:
            logger.error(f"Credentials file not found: {self.credentials_path}")
            raise
        except REMOTE_ERRORS as e:
            logger.error(f"Google Sheets authentication failed: {e}")
            raise ConnectionError(f"Google Sheets authentication failed: {e}") from e

    def extract(self, sheet_id: str) -> pd.DataFrame:
        """
        Extract the first worksheet of a spreadsheet into a DataFrame.

        The first row becomes the column index; every following row is kept,
        in sheet order, as a row of string cells.

        Args:
            sheet_id: Google Sheet ID

        Returns:
            pandas DataFrame with extracted data

        Raises:
            ConnectionError: If sheet access fails
        """
        try:
            spreadsheet = self.client.open_by_key(sheet_id)
            logger.info(f"Spreadsheet title: {spreadsheet.title}")

            worksheets = spreadsheet.worksheets()
            logger.info(f"Sheets available: {[ws.title for ws in worksheets]}")

            if not worksheets:
                logger.warning(f"Spreadsheet {sheet_id} has no worksheets")
                return pd.DataFrame()

            worksheet = worksheets[0]
            logger.info(f"Extracting data from sheet: {worksheet.title}")

            # Header row plus all data rows, padded to a rectangle
            data = worksheet.get_all_values()

        except gspread.exceptions.SpreadsheetNotFound as e:
            logger.error(f"Spreadsheet not found: {sheet_id}")
            raise ConnectionError(f"Spreadsheet not found: {sheet_id}") from e
        except REMOTE_ERRORS as e:
            logger.error(f"Failed to extract data from Google Sheets: {e}")
            raise ConnectionError(f"Failed to extract data from Google Sheets: {e}") from e

        if not data:
            logger.warning(f"No data found in sheet {worksheet.title}")
            return pd.DataFrame()

        header, rows = data[0], data[1:]
        logger.info(f"Detected headers: {header}")

        df = pd.DataFrame(rows, columns=header, dtype=object)

        logger.info(f"Successfully extracted {len(df)} rows from {worksheet.title}")

        return df


def fetch_google_sheet(settings) -> pd.DataFrame:
    """
    Convenience function to extract data using settings.

    Args:
        settings: Settings object with GOOGLE_API_KEY, GOOGLE_CREDENTIALS_PATH and GOOGLE_SHEET_ID

    Returns:
        pandas DataFrame with extracted data
    """
    extractor = GoogleSheetsExtractor(
        api_key=settings.GOOGLE_API_KEY,
        credentials_path=settings.GOOGLE_CREDENTIALS_PATH,
    )
    return extractor.extract(sheet_id=settings.GOOGLE_SHEET_ID)
