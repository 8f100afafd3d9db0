"""Pydantic schemas for User model and profile responses."""

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from app.schemas.link import LinkRead

USERNAME_PATTERN = r"^[A-Za-z0-9_.-]+$"
BIO_MAX_LENGTH = 160

# Single-segment paths owned by fixed routes, which shadow the public page /{username}
RESERVED_USERNAMES = {"api", "uploads", "health", "docs", "redoc", "openapi.json"}


def check_not_reserved(username: str | None) -> str | None:
    if username is not None and username.lower() in RESERVED_USERNAMES:
        raise ValueError("This username is reserved")
    return username


class RegisterRequest(BaseModel):
    """Credentials for a new account."""

    username: str = Field(min_length=3, max_length=50, pattern=USERNAME_PATTERN)
    password: str = Field(min_length=6, max_length=128)

    @field_validator("username")
    @classmethod
    def username_not_reserved(cls, value):
        return check_not_reserved(value)


class LoginRequest(BaseModel):
    """Credentials for login. No length rules, so every failure is a 401."""

    username: str
    password: str


class ProfileUpdate(BaseModel):
    """Profile fields that may change. None means unchanged."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    display_name: str | None = Field(None, max_length=100)
    username: str | None = Field(None, min_length=3, max_length=50, pattern=USERNAME_PATTERN)
    bio: str | None = Field(None, max_length=BIO_MAX_LENGTH)

    @field_validator("username")
    @classmethod
    def username_not_reserved(cls, value):
        return check_not_reserved(value)


class UserPublic(BaseModel):
    """User without the password hash."""

    model_config = ConfigDict(from_attributes=True, alias_generator=to_camel, populate_by_name=True)

    id: int
    username: str
    display_name: str | None = None
    bio: str | None = None
    profile_picture: str | None = None


class ProfileWithLinks(UserPublic):
    """User with their ordered links."""

    links: list[LinkRead] = []


class MessageResponse(BaseModel):
    message: str
