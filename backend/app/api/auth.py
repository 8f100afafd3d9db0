"""Account endpoints — register, login, logout, current user."""

from fastapi import APIRouter, Depends, Request, Response

from app.config import Settings, get_settings
from app.dependencies.auth import (
    clear_session_cookie,
    get_auth_service,
    require_user_api,
    session_id_from,
    set_session_cookie,
)
from app.models.user import User
from app.schemas.user import LoginRequest, MessageResponse, RegisterRequest, UserPublic
from app.services.auth_service import AuthService

router = APIRouter(tags=["auth"])


@router.post("/register", response_model=UserPublic, status_code=201)
async def register(
    body: RegisterRequest,
    response: Response,
    auth: AuthService = Depends(get_auth_service),
    settings: Settings = Depends(get_settings),
):
    """Create an account and start a session for it."""
    result = await auth.register(body.username, body.password)
    set_session_cookie(response, result.session_id, settings)
    return result.user


@router.post("/login", response_model=UserPublic)
async def login(
    body: LoginRequest,
    response: Response,
    auth: AuthService = Depends(get_auth_service),
    settings: Settings = Depends(get_settings),
):
    result = await auth.login(body.username, body.password)
    set_session_cookie(response, result.session_id, settings)
    return result.user


@router.post("/logout", response_model=MessageResponse)
async def logout(
    request: Request,
    response: Response,
    auth: AuthService = Depends(get_auth_service),
    settings: Settings = Depends(get_settings),
):
    """End the session. Succeeds even without one."""
    await auth.logout(session_id_from(request, settings))
    clear_session_cookie(response, settings)
    return MessageResponse(message="Logged out successfully")


@router.get("/user", response_model=UserPublic)
async def current_user(user: User = Depends(require_user_api)):
    return user
