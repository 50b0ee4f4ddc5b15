"""Celery tasks for periodic housekeeping."""

import logging
from datetime import UTC, datetime, timedelta

from sqlalchemy.orm import Session

from taskboard.celery_app import app as celery_app
from taskboard.config import get_settings
from taskboard.database import SessionLocal
from taskboard.repositories.otps import SqlOTPRepository

logger = logging.getLogger(__name__)


@celery_app.task
def purge_stale_otps() -> int:
    """Delete used passcodes and passcodes expired beyond the retention window.

    Runs hourly via celery-beat.

    Returns:
        number of deleted rows
    """
    settings = get_settings()
    db: Session = SessionLocal()
    try:
        cutoff = datetime.now(UTC) - timedelta(hours=settings.otp_retention_hours)
        deleted = SqlOTPRepository(db).purge_stale(expired_before=cutoff)
        logger.info(f"Purged {deleted} stale OTP rows (expired before {cutoff.isoformat()})")
        return deleted
    finally:
        db.close()
