"""
API routes for OOC schedule generation.
"""

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel
from typing import List, Dict, Any, Optional
from datetime import datetime
from celery.result import AsyncResult

from ooc_scheduler.models import Team
from ooc_scheduler.core.config import AVOID_WEEK_0_DEFAULT
from ooc_scheduler.core.celery_app import celery_app
from ooc_scheduler.core.logging_config import get_logger
from ooc_scheduler.services.csv_codec import parse_csv_to_teams, parse_rows
from ooc_scheduler.services.validator import validate_teams
from ooc_scheduler.services.schedule_service import run_schedule_job, stats_to_dict
from ooc_scheduler.tasks.scheduler_tasks import generate_schedule_task

logger = get_logger(__name__)

router = APIRouter(prefix="/api", tags=["schedule"])


class TeamRow(BaseModel):
    """One team row; week cells use the CSV tokens (h, a, BYE, Opp, @Opp)."""
    name: str
    conference: str
    ooc_needed: int = 0
    weeks: List[str] = []


class ScheduleRequest(BaseModel):
    teams: List[TeamRow]
    avoid_week0: bool = AVOID_WEEK_0_DEFAULT


class CSVScheduleRequest(BaseModel):
    csv: str
    avoid_week0: bool = AVOID_WEEK_0_DEFAULT


class TeamsRequest(BaseModel):
    teams: Optional[List[TeamRow]] = None
    csv: Optional[str] = None


class ScheduledRow(BaseModel):
    name: str
    conference: str
    ooc_needed: int
    weeks: List[str]
    unscheduled: int


class ScheduleResponse(BaseModel):
    success: bool
    status: str
    message: str
    warnings: List[str]
    reason: Optional[str] = None
    unscheduled: int
    scheduled_ooc: int
    needed_ooc: int
    rows: List[ScheduledRow]
    csv: str
    stats: Dict[str, Any]
    validation: Optional[Dict[str, Any]] = None
    generation_time: float


class ValidationResponse(BaseModel):
    valid: bool
    errors: List[str]
    warnings: List[str]


def _rows_to_teams(rows: List[TeamRow]) -> List[Team]:
    return parse_rows([[row.name, row.conference, row.ooc_needed, *row.weeks] for row in rows])


def _request_teams(request: TeamsRequest) -> List[Team]:
    if request.csv is not None:
        return parse_csv_to_teams(request.csv)
    if request.teams:
        return _rows_to_teams(request.teams)
    raise ValueError("No teams provided")


def _schedule(teams_loader, avoid_week0: bool) -> ScheduleResponse:
    try:
        teams = teams_loader()
        return ScheduleResponse(**run_schedule_job(teams, avoid_week0))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.exception("Schedule generation failed")
        raise HTTPException(status_code=500, detail=f"Schedule generation failed: {str(e)}")


@router.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "timestamp": datetime.now().isoformat()}


@router.post("/schedule", response_model=ScheduleResponse)
async def generate_schedule(request: ScheduleRequest):
    """
    Schedule OOC games for the given team rows.

    Invalid input is a 400; a run that could place no games at all is a 200
    with success set to false.
    """
    return _schedule(lambda: _rows_to_teams(request.teams), request.avoid_week0)


@router.post("/schedule/csv", response_model=ScheduleResponse)
async def generate_schedule_from_csv(request: CSVScheduleRequest):
    """Schedule OOC games for a CSV grid."""
    return _schedule(lambda: parse_csv_to_teams(request.csv), request.avoid_week0)


@router.post("/validate", response_model=ValidationResponse)
async def validate_input(request: TeamsRequest):
    """Check a grid for errors and warnings without scheduling it."""
    try:
        teams = _request_teams(request)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    report = validate_teams(teams)
    return ValidationResponse(valid=report.is_valid, errors=report.errors, warnings=report.warnings)


@router.post("/stats")
async def get_schedule_stats(request: TeamsRequest):
    """Total games and busiest/quietest weeks for a grid."""
    try:
        teams = _request_teams(request)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    return {"total_teams": len(teams), **stats_to_dict(teams)}


@router.post("/schedule/async")
async def generate_schedule_async(request: CSVScheduleRequest):
    """
    Start async schedule generation task.

    Returns:
        dict: Task ID for polling status
    """
    try:
        task = generate_schedule_task.delay(request.csv, request.avoid_week0)
        return {
            "task_id": task.id,
            "status": "PENDING",
            "message": "Schedule generation started"
        }
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Failed to start task: {str(e)}")


@router.get("/schedule/status/{task_id}")
async def get_schedule_status(task_id: str):
    """
    Get status of async schedule generation task.

    Args:
        task_id: Celery task ID
    """
    try:
        task_result = AsyncResult(task_id, app=celery_app)

        if task_result.state == "PENDING":
            return {
                "task_id": task_id,
                "status": "PENDING",
                "message": "Task is waiting to start..."
            }
        if task_result.state == "PROGRESS":
            return {
                "task_id": task_id,
                "status": "PROGRESS",
                "message": task_result.info.get("status", "Processing...")
            }
        if task_result.state == "SUCCESS":
            return {
                "task_id": task_id,
                "status": "SUCCESS",
                "result": task_result.result
            }
        if task_result.state == "FAILURE":
            return {
                "task_id": task_id,
                "status": "FAILURE",
                "message": str(task_result.info)
            }
        return {
            "task_id": task_id,
            "status": task_result.state,
            "message": f"Task state: {task_result.state}"
        }
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Failed to get task status: {str(e)}")
