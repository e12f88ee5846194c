"""
Celery configuration for async schedule generation.
"""

from celery import Celery

from ooc_scheduler.core.config import REDIS_URL, TASK_TIME_LIMIT_SECONDS

celery_app = Celery(
    "ooc_scheduler",
    broker=REDIS_URL,
    backend=REDIS_URL,
    include=["ooc_scheduler.tasks.scheduler_tasks"]
)

celery_app.conf.update(
    task_serializer="json",
    accept_content=["json"],
    result_serializer="json",
    timezone="America/Chicago",
    enable_utc=True,
    task_track_started=True,
    task_time_limit=TASK_TIME_LIMIT_SECONDS,
    task_soft_time_limit=TASK_TIME_LIMIT_SECONDS - 30,
    worker_prefetch_multiplier=1,
    worker_max_tasks_per_child=50,
)
