"""
End-to-end schedule job shared by the API, the background task and the CLI:
validate input, schedule, validate output and package the results.
"""

from datetime import datetime
from typing import List, Dict, Any

from ooc_scheduler.models import Team
from ooc_scheduler.core.config import AVOID_WEEK_0_DEFAULT
from ooc_scheduler.core.logging_config import get_logger
from ooc_scheduler.services.scheduler import OOCScheduler
from ooc_scheduler.services.validator import (
    ScheduleValidator, validate_teams, compute_schedule_stats, unscheduled_for_team
)
from ooc_scheduler.services.csv_codec import teams_to_rows, teams_to_csv

logger = get_logger(__name__)


def require_valid_teams(teams: List[Team]) -> List[str]:
    """
    Reject input with validation errors.

    Returns:
        Validation warnings

    Raises:
        ValueError: With the first validation error
    """
    report = validate_teams(teams)
    if not report.is_valid:
        raise ValueError(report.errors[0])
    return report.warnings


def stats_to_dict(teams: List[Team]) -> Dict[str, Any]:
    stats = compute_schedule_stats(teams)
    return {
        "total_games": stats.total_games,
        "week_most": {"index": stats.week_most.index, "count": stats.week_most.count},
        "week_least": {"index": stats.week_least.index, "count": stats.week_least.count},
        "week_counts": stats.week_counts
    }


def run_schedule_job(teams: List[Team], avoid_week0: bool = AVOID_WEEK_0_DEFAULT) -> Dict[str, Any]:
    """
    Schedule validated teams and build the response payload.

    Raises:
        ValueError: If the input fails validation
    """
    start_time = datetime.now()
    warnings = require_valid_teams(teams)

    result = OOCScheduler(teams, avoid_week0).optimize_schedule()
    response = {
        "success": result.ok,
        "status": "success",
        "message": result.get_summary(),
        "warnings": warnings,
        **result.to_dict()
    }

    if not result.ok:
        response["status"] = "error"
        response["rows"] = []
        response["csv"] = ""
        response["stats"] = stats_to_dict(teams)
        response["validation"] = None
    else:
        if result.is_partial:
            response["status"] = "warning"
        validation = ScheduleValidator().validate_schedule(teams, result.teams)
        response["rows"] = [
            {
                "name": row[0],
                "conference": row[1],
                "ooc_needed": row[2],
                "weeks": row[3:],
                "unscheduled": unscheduled_for_team(team)
            }
            for team, row in zip(result.teams, teams_to_rows(result.teams))
        ]
        response["csv"] = teams_to_csv(result.teams)
        response["stats"] = stats_to_dict(result.teams)
        response["validation"] = {
            "is_valid": validation.is_valid,
            "hard_violations": len(validation.hard_constraint_violations),
            "soft_violations": len(validation.soft_constraint_violations)
        }

    response["generation_time"] = (datetime.now() - start_time).total_seconds()
    return response
