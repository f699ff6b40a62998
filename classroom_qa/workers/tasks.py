"""
Maintenance tasks for the worker.
These run inside RQ workers, outside any HTTP request.
"""

import logging
from datetime import timedelta

from classroom_qa.core.config import settings
from classroom_qa.db.session import SessionLocal
from classroom_qa.services.image_service import delete_detached_uploads, sweep_orphaned_uploads
from classroom_qa.services.storage import get_storage

logger = logging.getLogger(__name__)


def sweep_uploads_task(max_age_minutes: int | None = None) -> dict:
    """
    Worker task that removes uploaded files no question or answer refers to.

    Args:
        max_age_minutes: only files older than this are considered; defaults
            to ORPHAN_UPLOAD_MAX_AGE_MINUTES

    Returns:
        Dictionary with the removed filenames
    """
    if max_age_minutes is None:
        max_age_minutes = settings.ORPHAN_UPLOAD_MAX_AGE_MINUTES

    db = SessionLocal()
    try:
        logger.info(f"Starting upload sweep (max age {max_age_minutes} min)")
        removed = sweep_orphaned_uploads(
            db,
            get_storage(),
            max_age=timedelta(minutes=max_age_minutes),
        )
        return {
            "status": "success",
            "removed": removed,
            "message": f"Removed {len(removed)} orphaned upload(s)",
        }
    finally:
        db.close()


def delete_uploads_task(filenames: list[str]) -> dict:
    """
    Worker task that removes the files of a deleted lecture, question or answer.
    """
    db = SessionLocal()
    try:
        removed = delete_detached_uploads(db, get_storage(), filenames)
        return {
            "status": "success",
            "removed": removed,
            "message": f"Removed {len(removed)} of {len(filenames)} upload(s)",
        }
    finally:
        db.close()
