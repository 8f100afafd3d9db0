"""Row-level stores for users, links and sessions.

Each store wraps the request's AsyncSession. Stores flush but never commit;
the ``get_db`` dependency owns the transaction.
"""

from datetime import datetime

from sqlalchemy import select, delete, func
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.user import User
from app.models.link import Link
from app.models.user_session import UserSession

# Integer primary keys are int4 on PostgreSQL
MAX_ID = 2 ** 31 - 1


def _valid_id(value: int) -> bool:
    return 1 <= value <= MAX_ID


class UserStore:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_by_id(self, user_id: int) -> User | None:
        if not _valid_id(user_id):
            return None
        result = await self.db.execute(select(User).where(User.id == user_id))
        return result.scalar_one_or_none()

    async def get_by_username(self, username: str) -> User | None:
        result = await self.db.execute(select(User).where(User.username == username))
        return result.scalar_one_or_none()

    async def insert(self, username: str, hashed_password: str) -> User:
        user = User(username=username, hashed_password=hashed_password)
        self.db.add(user)
        await self.db.flush()
        await self.db.refresh(user)
        return user

    async def update(self, user: User, **changes) -> User:
        for field, value in changes.items():
            setattr(user, field, value)
        await self.db.flush()
        await self.db.refresh(user)
        return user


class LinkStore:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_by_id(self, link_id: int) -> Link | None:
        if not _valid_id(link_id):
            return None
        result = await self.db.execute(select(Link).where(Link.id == link_id))
        return result.scalar_one_or_none()

    async def list_for_user(self, user_id: int, active_only: bool = False) -> list[Link]:
        query = select(Link).where(Link.user_id == user_id)
        if active_only:
            query = query.where(Link.active == True)  # noqa: E712
        result = await self.db.execute(query.order_by(Link.order.asc()))
        return list(result.scalars().all())

    async def max_order(self, user_id: int) -> int | None:
        result = await self.db.execute(
            select(func.max(Link.order)).where(Link.user_id == user_id)
        )
        return result.scalar()

    async def insert(self, **fields) -> Link:
        link = Link(**fields)
        self.db.add(link)
        await self.db.flush()
        await self.db.refresh(link)
        return link

    async def update(self, link: Link, **changes) -> Link:
        for field, value in changes.items():
            setattr(link, field, value)
        await self.db.flush()
        await self.db.refresh(link)
        return link

    async def delete(self, link: Link) -> None:
        await self.db.delete(link)
        await self.db.flush()


class SessionStore:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def get(self, sid: str) -> UserSession | None:
        result = await self.db.execute(select(UserSession).where(UserSession.sid == sid))
        return result.scalar_one_or_none()

    async def save(self, sid: str, user_id: int, expires_at: datetime) -> UserSession:
        record = UserSession(sid=sid, user_id=user_id, expires_at=expires_at)
        self.db.add(record)
        await self.db.flush()
        return record

    async def touch(self, record: UserSession, expires_at: datetime) -> None:
        record.expires_at = expires_at
        await self.db.flush()

    async def delete(self, sid: str) -> None:
        await self.db.execute(delete(UserSession).where(UserSession.sid == sid))
