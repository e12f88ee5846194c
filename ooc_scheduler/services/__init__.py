"""
Services for scheduling, validation, CSV and Google Sheets integration.
"""

from .scheduler import OOCScheduler, generate
from .byes import assign_byes
from .validator import ScheduleValidator, validate_teams
from .sheets_reader import SheetsReader
from .sheets_writer import SheetsWriter

__all__ = [
    "OOCScheduler",
    "generate",
    "assign_byes",
    "ScheduleValidator",
    "validate_teams",
    "SheetsReader",
    "SheetsWriter"
]
