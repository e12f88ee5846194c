"""
Google Sheets reader for the OOC Football Scheduling System.
Reads the team grid from a worksheet and converts it to data models.
"""

import gspread
from google.oauth2.service_account import Credentials
from typing import List, Optional

from ooc_scheduler.models import Team
from ooc_scheduler.core.config import SPREADSHEET_ID, SHEET_TEAMS, get_google_credentials
from ooc_scheduler.core.logging_config import get_logger
from ooc_scheduler.services.csv_codec import parse_rows

logger = get_logger(__name__)


class SheetsReader:
    """Reads the team grid from Google Sheets."""

    def __init__(self, spreadsheet=None, sheet_name: str = SHEET_TEAMS):
        """
        Args:
            spreadsheet: An opened gspread Spreadsheet; opened from
                SPREADSHEET_ID with service account credentials when omitted
            sheet_name: Worksheet holding the team grid
        """
        if spreadsheet is None:
            self.credentials = self._get_credentials()
            self.client = gspread.authorize(self.credentials)
            spreadsheet = self.client.open_by_key(SPREADSHEET_ID)
        self.spreadsheet = spreadsheet
        self.sheet_name = sheet_name

        self._teams_cache: Optional[List[Team]] = None

    def _get_credentials(self) -> Credentials:
        return get_google_credentials()

    def load_teams(self) -> List[Team]:
        """
        Load every team row from the worksheet.

        Raises:
            ValueError: If the worksheet is missing or a row cannot be parsed
        """
        if self._teams_cache is not None:
            return self._teams_cache

        logger.info("Loading teams from worksheet '%s'", self.sheet_name)
        try:
            sheet = self.spreadsheet.worksheet(self.sheet_name)
        except gspread.exceptions.WorksheetNotFound:
            raise ValueError(f"Worksheet '{self.sheet_name}' not found")

        rows = sheet.get_all_values()
        teams = parse_rows(rows)
        logger.info("Loaded %d teams", len(teams))

        self._teams_cache = teams
        return teams
