"""Authentication dependencies for FastAPI routes."""

from datetime import timedelta

from fastapi import Depends, Request, Response
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import Settings, get_settings
from app.models.base import get_db
from app.models.user import User
from app.services.auth_service import AuthService
from app.services.session_manager import SessionManager
from app.services.storage import SessionStore, UserStore


def get_session_manager(
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
) -> SessionManager:
    return SessionManager(SessionStore(db), max_age=timedelta(days=settings.session_max_age_days))


def get_auth_service(
    db: AsyncSession = Depends(get_db),
    sessions: SessionManager = Depends(get_session_manager),
) -> AuthService:
    return AuthService(UserStore(db), sessions)


def session_id_from(request: Request, settings: Settings) -> str | None:
    return request.cookies.get(settings.session_cookie_name)


def set_session_cookie(response: Response, session_id: str, settings: Settings) -> None:
    response.set_cookie(
        key=settings.session_cookie_name,
        value=session_id,
        max_age=settings.session_max_age_days * 24 * 60 * 60,
        httponly=True,
        samesite="lax",
        secure=settings.is_production,
        path="/",
    )


def clear_session_cookie(response: Response, settings: Settings) -> None:
    response.delete_cookie(
        key=settings.session_cookie_name,
        httponly=True,
        samesite="lax",
        secure=settings.is_production,
        path="/",
    )


async def require_user_api(
    request: Request,
    response: Response,
    auth: AuthService = Depends(get_auth_service),
    settings: Settings = Depends(get_settings),
) -> User:
    """Return the logged-in user or raise 401. Re-issues the cookie to match the sliding expiry."""
    session_id = session_id_from(request, settings)
    user = await auth.current_user(session_id)
    set_session_cookie(response, session_id, settings)
    return user
