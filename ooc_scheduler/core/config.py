"""
Configuration constants for the OOC Football Scheduling System.
All configurable settings are defined here.
"""

import os
import json
from dotenv import load_dotenv
from google.oauth2.service_account import Credentials

# Load environment variables from .env file
load_dotenv()

# Google Sheets Configuration
SPREADSHEET_ID = os.getenv("GOOGLE_SHEETS_SPREADSHEET_ID", "")

# Credentials configuration
# Priority: GOOGLE_SHEETS_CREDENTIALS_JSON (env var) > GOOGLE_SHEETS_CREDENTIALS_FILE (env var) > default file path
CREDENTIALS_FILE = os.getenv(
    "GOOGLE_SHEETS_CREDENTIALS_FILE",
    os.path.join(os.path.dirname(os.path.dirname(os.path.dirname(__file__))), "credentials", "service_account.json")
)
CREDENTIALS_JSON = os.getenv("GOOGLE_SHEETS_CREDENTIALS_JSON")  # JSON string from environment

GOOGLE_SCOPES = [
    'https://www.googleapis.com/auth/spreadsheets',
    'https://www.googleapis.com/auth/drive'
]


def get_google_credentials() -> Credentials:
    """
    Get Google Sheets API credentials from environment variables or file.

    Priority:
    1. GOOGLE_SHEETS_CREDENTIALS_JSON (environment variable with JSON string)
    2. GOOGLE_SHEETS_CREDENTIALS_FILE (environment variable with file path)
    3. Default file path

    Returns:
        Credentials object for Google Sheets API access

    Raises:
        ValueError: If no valid credentials are found
    """
    if CREDENTIALS_JSON:
        try:
            creds_dict = json.loads(CREDENTIALS_JSON)
            return Credentials.from_service_account_info(creds_dict, scopes=GOOGLE_SCOPES)
        except (json.JSONDecodeError, ValueError) as e:
            raise ValueError(f"Invalid JSON in GOOGLE_SHEETS_CREDENTIALS_JSON: {e}")

    if CREDENTIALS_FILE and os.path.exists(CREDENTIALS_FILE):
        return Credentials.from_service_account_file(CREDENTIALS_FILE, scopes=GOOGLE_SCOPES)

    raise ValueError(
        "Google Sheets credentials not found. Please set either:\n"
        "  - GOOGLE_SHEETS_CREDENTIALS_JSON (recommended): JSON string in environment variable\n"
        "  - GOOGLE_SHEETS_CREDENTIALS_FILE: Path to credentials JSON file\n"
        "  - Or place credentials file at default location"
    )

# Sheet Names
SHEET_TEAMS = os.getenv("OOC_SHEET_TEAMS", "TEAMS")
SHEET_SCHEDULED = os.getenv("OOC_SHEET_SCHEDULED", "SCHEDULED")

# Season Shape
NUM_WEEKS = 14                  # Week slots 0..13
MAX_GAMES_PER_TEAM = 12         # Hard cap on games in a season
HOME_GAMES_TARGET = 6           # Half of a 12-game slate
MAX_BYES_PER_TEAM = 3

# CSV Layout: name, conference, OOC games needed, then one column per week
CSV_COLUMNS = 3 + NUM_WEEKS
CSV_DELIMITERS = ",;\t|"

# Cell tokens used in CSV and sheet grids
CELL_CONF_HOME = "h"
CELL_CONF_AWAY = "a"
CELL_BYE = "BYE"
AWAY_PREFIX = "@"

# Scheduling Options
AVOID_WEEK_0_DEFAULT = True
NO_PAIRINGS_REASON = "No valid OOC pairings available under constraints"

# Background Tasks
REDIS_URL = os.getenv("REDIS_URL", "redis://localhost:6379/0")
TASK_TIME_LIMIT_SECONDS = 120

# API
CORS_ORIGINS = [
    origin.strip()
    for origin in os.getenv("CORS_ORIGINS", "http://localhost:3000").split(",")
    if origin.strip()
]
