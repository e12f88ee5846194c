"""
Celery tasks for schedule generation.
"""

import traceback

from ooc_scheduler.core.celery_app import celery_app
from ooc_scheduler.core.config import AVOID_WEEK_0_DEFAULT
from ooc_scheduler.core.logging_config import get_logger
from ooc_scheduler.services.csv_codec import parse_csv_to_teams
from ooc_scheduler.services.schedule_service import run_schedule_job

logger = get_logger(__name__)


@celery_app.task(bind=True, name="generate_ooc_schedule")
def generate_schedule_task(self, csv_text: str, avoid_week0: bool = AVOID_WEEK_0_DEFAULT):
    """
    Async task to generate an OOC schedule from a CSV grid.

    Returns:
        dict: Schedule payload, or an error payload if anything failed
    """
    try:
        self.update_state(
            state="PROGRESS",
            meta={"status": "Parsing teams..."}
        )
        teams = parse_csv_to_teams(csv_text)

        self.update_state(
            state="PROGRESS",
            meta={"status": f"Generating schedule for {len(teams)} teams..."}
        )
        return run_schedule_job(teams, avoid_week0)

    except Exception as e:
        error_trace = traceback.format_exc()
        logger.error("Error in generate_schedule_task: %s", error_trace)

        return {
            "success": False,
            "message": f"Schedule generation failed: {str(e)}",
            "error": str(e),
            "traceback": error_trace
        }
