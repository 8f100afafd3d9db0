"""Maintenance tasks — expired session pruning and orphaned upload cleanup."""

import logging
import time
from datetime import datetime, timezone
from pathlib import Path

from sqlalchemy import delete, select
from sqlalchemy.orm import Session

from app.config import get_settings
from app.tasks.celery_app import celery_app
from app.models.base import SyncSessionLocal
from app.models.user import User
from app.models.link import Link  # noqa: F401
from app.models.user_session import UserSession

logger = logging.getLogger(__name__)

# Files younger than this may belong to a profile update still in flight
ORPHAN_GRACE_SECONDS = 60 * 60


def delete_expired_sessions(db: Session, now: datetime | None = None) -> int:
    now = now or datetime.now(timezone.utc)
    result = db.execute(delete(UserSession).where(UserSession.expires_at <= now))
    db.commit()
    return result.rowcount or 0


def find_orphaned_uploads(db: Session, upload_dir: str, url_prefix: str, now: float | None = None) -> list[Path]:
    """Files in ``upload_dir`` that no user's profile picture points at."""
    directory = Path(upload_dir)
    if not directory.is_dir():
        return []

    prefix = url_prefix.rstrip("/") + "/"
    referenced = {
        picture[len(prefix):]
        for picture in db.execute(
            select(User.profile_picture).where(User.profile_picture.like(f"{prefix}%"))
        ).scalars()
    }

    cutoff = (now or time.time()) - ORPHAN_GRACE_SECONDS
    return [
        path
        for path in directory.iterdir()
        if path.is_file() and path.name not in referenced and path.stat().st_mtime < cutoff
    ]


@celery_app.task(name="app.tasks.maintenance_tasks.prune_expired_sessions")
def prune_expired_sessions():
    """Delete sessions whose sliding window has lapsed."""
    db = SyncSessionLocal()
    try:
        deleted = delete_expired_sessions(db)
        logger.info("Pruned %s expired sessions", deleted)
        return {"deleted": deleted}
    finally:
        db.close()


@celery_app.task(name="app.tasks.maintenance_tasks.cleanup_orphaned_uploads")
def cleanup_orphaned_uploads():
    """Remove profile images left behind by replaced or cleared pictures."""
    settings = get_settings()
    db = SyncSessionLocal()
    try:
        orphans = find_orphaned_uploads(db, settings.upload_dir, settings.upload_url_prefix)
    finally:
        db.close()

    removed = 0
    for path in orphans:
        try:
            path.unlink()
            removed += 1
        except FileNotFoundError:
            pass
    logger.info("Removed %s orphaned uploads", removed)
    return {"removed": removed}
