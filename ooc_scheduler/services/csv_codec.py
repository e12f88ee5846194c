"""
CSV import/export for team schedule grids.

A grid has one row per team and no header:
name, conference, OOC games needed, then one cell per week (0-13).
"""

import csv
import io
import re
from pathlib import Path
from typing import List, Optional, Sequence

from ooc_scheduler.models import (
    Team, WeekSlot, ConfHome, ConfAway, LockedOOC, OOCGame, Bye, Empty
)
from ooc_scheduler.core.config import (
    NUM_WEEKS, CSV_COLUMNS, CSV_DELIMITERS,
    CELL_CONF_HOME, CELL_CONF_AWAY, CELL_BYE, AWAY_PREFIX
)

_BYE_PATTERN = re.compile(r"^bye$", re.IGNORECASE)


def normalize_row(row: Sequence, target_length: int = CSV_COLUMNS) -> List[str]:
    """Pad with empty cells or truncate to exactly target_length cells."""
    cells = ["" if cell is None else str(cell) for cell in row]
    cells.extend([""] * (target_length - len(cells)))
    return cells[:target_length]


def parse_week_cell(raw: str) -> WeekSlot:
    """Parse one week cell into a slot; unknown text is a locked OOC opponent."""
    raw = (raw or "").strip()
    if raw == CELL_CONF_HOME:
        return ConfHome()
    if raw == CELL_CONF_AWAY:
        return ConfAway()
    if _BYE_PATTERN.match(raw):
        return Bye()
    if not raw:
        return Empty()
    if raw.startswith(AWAY_PREFIX):
        return LockedOOC(opponent=raw[len(AWAY_PREFIX):], is_away=True)
    return LockedOOC(opponent=raw, is_away=False)


def format_week_cell(slot: WeekSlot) -> str:
    if isinstance(slot, ConfHome):
        return CELL_CONF_HOME
    if isinstance(slot, ConfAway):
        return CELL_CONF_AWAY
    if isinstance(slot, Bye):
        return CELL_BYE
    if isinstance(slot, (LockedOOC, OOCGame)):
        return f"{AWAY_PREFIX if slot.is_away else ''}{slot.opponent}"
    return ""


def parse_ooc_needed(raw, line_no: int) -> int:
    text = ("" if raw is None else str(raw)).strip() or "0"
    try:
        value = float(text)
    except ValueError:
        raise ValueError(f"Row {line_no}: invalid OOC games needed")
    if value != value or value in (float("inf"), float("-inf")):
        raise ValueError(f"Row {line_no}: invalid OOC games needed")
    return int(value)


def parse_row(row: Sequence, line_no: int) -> Team:
    """
    Parse one grid row into a Team.

    Raises:
        ValueError: If the name or conference is missing or the OOC count is not a number
    """
    cells = normalize_row(row)
    name = cells[0].strip()
    conference = cells[1].strip()
    if not name or not conference:
        raise ValueError(f"Row {line_no}: missing team or conference")

    ooc_needed = parse_ooc_needed(cells[2], line_no)
    weeks = [parse_week_cell(cell) for cell in cells[3:3 + NUM_WEEKS]]
    return Team(name=name, conference=conference, ooc_needed=ooc_needed, weeks=weeks)


def parse_rows(rows: Sequence[Sequence]) -> List[Team]:
    """Parse grid rows, skipping rows whose cells are all blank."""
    rows = [row for row in rows if any(str(cell or "").strip() for cell in row)]
    if not rows:
        raise ValueError("CSV appears empty")
    return [parse_row(row, line_no) for line_no, row in enumerate(rows, start=1)]


def _detect_dialect(text: str):
    sample = "\n".join(text.splitlines()[:20])
    try:
        return csv.Sniffer().sniff(sample, delimiters=CSV_DELIMITERS)
    except csv.Error:
        return csv.excel


def parse_csv_to_teams(csv_text: str) -> List[Team]:
    """
    Parse CSV text into team records.

    Raises:
        ValueError: If the text is empty, malformed, or a row is invalid
    """
    text = (csv_text or "").strip()
    if not text:
        raise ValueError("CSV appears empty")

    try:
        rows = list(csv.reader(io.StringIO(text), _detect_dialect(text)))
    except csv.Error as e:
        raise ValueError(f"CSV parse error: {e}")
    return parse_rows(rows)


def team_to_row(team: Team) -> List:
    return [team.name, team.conference, team.ooc_needed] + [format_week_cell(slot) for slot in team.weeks]


def teams_to_rows(teams: List[Team]) -> List[List]:
    return [team_to_row(team) for team in teams]


def teams_to_csv(teams: List[Team]) -> str:
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\r\n")
    writer.writerows(teams_to_rows(teams))
    return buffer.getvalue()


def load_teams_csv(path) -> List[Team]:
    """
    Read teams from a .csv file.

    Raises:
        ValueError: If the file is not a .csv file or cannot be parsed
    """
    path = Path(path)
    if path.suffix.lower() != ".csv":
        raise ValueError("Please upload a .csv file")
    return parse_csv_to_teams(path.read_text(encoding="utf-8-sig"))


def scheduled_filename(source_name: Optional[str]) -> str:
    """Output name for a scheduled grid: '<stem>-scheduled.csv' or 'schedule.csv'."""
    if not source_name:
        return "schedule.csv"
    return re.sub(r"\.csv$", "", source_name, flags=re.IGNORECASE) + "-scheduled.csv"


def write_teams_csv(teams: List[Team], path) -> Path:
    path = Path(path)
    path.write_text(teams_to_csv(teams), encoding="utf-8")
    return path
