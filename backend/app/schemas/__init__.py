"""Pydantic schemas package."""

from app.schemas.link import (
    LinkCreate,
    LinkUpdate,
    LinkRead,
)
from app.schemas.user import (
    RegisterRequest,
    LoginRequest,
    ProfileUpdate,
    UserPublic,
    ProfileWithLinks,
    MessageResponse,
)

__all__ = [
    # Link
    "LinkCreate",
    "LinkUpdate",
    "LinkRead",
    # User
    "RegisterRequest",
    "LoginRequest",
    "ProfileUpdate",
    "UserPublic",
    "ProfileWithLinks",
    "MessageResponse",
]
