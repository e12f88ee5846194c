"""
Google Sheets writer for the OOC Football Scheduling System.
Writes scheduled team grids back to Google Sheets.
"""

import gspread
from typing import List

from ooc_scheduler.models import Team
from ooc_scheduler.core.config import (
    SPREADSHEET_ID, SHEET_SCHEDULED, CSV_COLUMNS, get_google_credentials
)
from ooc_scheduler.core.logging_config import get_logger
from ooc_scheduler.services.csv_codec import teams_to_rows

logger = get_logger(__name__)


class SheetsWriter:
    """Writes the scheduled grid to its own worksheet."""

    def __init__(self, spreadsheet=None):
        if spreadsheet is None:
            self.client = gspread.authorize(get_google_credentials())
            spreadsheet = self.client.open_by_key(SPREADSHEET_ID)
        self.spreadsheet = spreadsheet

    def _get_or_create_sheet(self, sheet_name: str, rows: int):
        try:
            sheet = self.spreadsheet.worksheet(sheet_name)
            sheet.clear()
        except gspread.exceptions.WorksheetNotFound:
            sheet = self.spreadsheet.add_worksheet(
                title=sheet_name,
                rows=max(rows, 1),
                cols=CSV_COLUMNS
            )
        return sheet

    def write_schedule(self, teams: List[Team], sheet_name: str = SHEET_SCHEDULED):
        """
        Replace the contents of sheet_name with the scheduled grid.

        Args:
            teams: Scheduled team records
            sheet_name: Destination worksheet, created if missing
        """
        logger.info("Writing %d teams to worksheet '%s'", len(teams), sheet_name)
        data = teams_to_rows(teams)
        sheet = self._get_or_create_sheet(sheet_name, len(data))
        if data:
            sheet.update(values=data, range_name="A1")
        return sheet
