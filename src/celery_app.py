"""Celery application configuration."""

from celery import Celery

from src.config import get_settings

settings = get_settings()

app = Celery(
    "expense_tracker",
    broker=settings.redis_url,
    backend=settings.redis_url,
    include=["src.tasks.sessions"],
)

# Celery configuration
app.conf.update(
    task_serializer="json",
    accept_content=["json"],
    result_serializer="json",
    timezone="UTC",
    enable_utc=True,
    task_track_started=True,
    task_time_limit=60,
    task_soft_time_limit=45,
    beat_schedule={
        "clean-expired-sessions": {
            "task": "src.tasks.sessions.clean_expired_sessions",
            "schedule": settings.session_cleanup_interval_minutes * 60.0,
        },
    },
)
