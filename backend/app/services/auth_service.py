"""Registration, login and session-backed identity."""

import logging
import secrets
from dataclasses import dataclass

from sqlalchemy.exc import IntegrityError

from app.errors import CorruptCredential, InvalidCredentials, Unauthenticated, UsernameTaken
from app.models.user import User
from app.services.credentials import hash_password, verify_password
from app.services.session_manager import SessionManager
from app.services.storage import UserStore

logger = logging.getLogger(__name__)

_dummy_hash: str | None = None


def _timing_dummy_hash() -> str:
    """A throwaway hash so unknown usernames cost one scrypt run like known ones."""
    global _dummy_hash
    if _dummy_hash is None:
        _dummy_hash = hash_password(secrets.token_hex(16))
    return _dummy_hash


@dataclass
class AuthResult:
    user: User
    session_id: str


class AuthService:
    def __init__(self, users: UserStore, sessions: SessionManager):
        self.users = users
        self.sessions = sessions

    async def register(self, username: str, password: str) -> AuthResult:
        """Create an account and log it in. Username match is case-sensitive."""
        if await self.users.get_by_username(username) is not None:
            raise UsernameTaken()

        try:
            user = await self.users.insert(username, hash_password(password))
        except IntegrityError:
            # Lost a race with a concurrent registration of the same name
            await self.users.db.rollback()
            raise UsernameTaken() from None

        session_id = await self.sessions.create(user.id)
        logger.info("Registered user %s (id=%s)", user.username, user.id)
        return AuthResult(user=user, session_id=session_id)

    async def login(self, username: str, password: str) -> AuthResult:
        user = await self.users.get_by_username(username)
        stored = user.hashed_password if user is not None else _timing_dummy_hash()

        try:
            password_ok = verify_password(password, stored)
        except CorruptCredential:
            logger.error("Corrupt stored credential for user id=%s", user.id if user else None)
            password_ok = False

        if user is None or not password_ok:
            raise InvalidCredentials()

        session_id = await self.sessions.create(user.id)
        logger.info("User %s logged in", user.id)
        return AuthResult(user=user, session_id=session_id)

    async def logout(self, session_id: str | None) -> None:
        await self.sessions.destroy(session_id)

    async def current_user(self, session_id: str | None) -> User:
        user_id = await self.sessions.load(session_id)
        if user_id is None:
            raise Unauthenticated()
        user = await self.users.get_by_id(user_id)
        if user is None:
            raise Unauthenticated()
        return user
