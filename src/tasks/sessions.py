"""Celery tasks for session housekeeping."""

from sqlalchemy.orm import Session

from src.celery_app import app as celery_app
from src.database import SessionLocal
from src.services.sessions import SessionStore


@celery_app.task
def clean_expired_sessions() -> dict:
    """Delete sessions whose expiry has passed.

    Runs on the celery-beat schedule. Expiry only ever moves a session from
    valid to invalid, so running alongside live validation is safe.

    Returns:
        dict with the number of removed sessions
    """
    db: Session = SessionLocal()
    try:
        removed = SessionStore(db).clean_expired_sessions()
        return {"removed": removed}
    finally:
        db.close()
