"""Server-side sessions keyed by an opaque cookie value."""

import secrets
from datetime import datetime, timedelta, timezone

from app.services.storage import SessionStore

DEFAULT_MAX_AGE = timedelta(days=30)


def _as_utc(value: datetime) -> datetime:
    # SQLite hands back naive datetimes even for timezone-aware columns
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


class SessionManager:
    """Issues, validates and destroys sessions on a sliding expiry window."""

    def __init__(self, store: SessionStore, max_age: timedelta = DEFAULT_MAX_AGE):
        self.store = store
        self.max_age = max_age

    def _expiry(self) -> datetime:
        return datetime.now(timezone.utc) + self.max_age

    async def create(self, user_id: int) -> str:
        session_id = secrets.token_urlsafe(32)
        await self.store.save(session_id, user_id, self._expiry())
        return session_id

    async def load(self, session_id: str | None) -> int | None:
        """Return the user id bound to ``session_id``, or None when missing or expired.

        A valid session has its expiry pushed forward by ``max_age``. Expired rows
        are left for the ``prune_expired_sessions`` task.
        """
        if not session_id:
            return None
        record = await self.store.get(session_id)
        if record is None:
            return None
        if _as_utc(record.expires_at) <= datetime.now(timezone.utc):
            return None
        await self.store.touch(record, self._expiry())
        return record.user_id

    async def destroy(self, session_id: str | None) -> None:
        if session_id:
            await self.store.delete(session_id)
