"""Profile API endpoints — own profile, public profile, edits, image removal."""

from fastapi import APIRouter, Depends, File, Form, UploadFile
from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import Settings, get_settings
from app.dependencies.auth import require_user_api
from app.errors import NotFound, ValidationError, field_errors
from app.models.base import get_db
from app.models.user import User
from app.schemas.link import LinkRead
from app.schemas.user import ProfileUpdate, ProfileWithLinks, UserPublic
from app.services.link_service import LinkOrderingEngine
from app.services.profile_service import ProfileService
from app.services.storage import LinkStore, UserStore
from app.services.uploads import read_image_upload

router = APIRouter(prefix="/profile", tags=["profile"])


async def _with_links(user: User, db: AsyncSession, active_only: bool) -> ProfileWithLinks:
    links = await LinkOrderingEngine(LinkStore(db)).list_for_owner(user.id, active_only=active_only)
    return ProfileWithLinks(
        **UserPublic.model_validate(user).model_dump(),
        links=[LinkRead.model_validate(link) for link in links],
    )


@router.get("", response_model=ProfileWithLinks)
async def get_own_profile(
    user: User = Depends(require_user_api),
    db: AsyncSession = Depends(get_db),
):
    """Profile for the admin editor, including inactive links."""
    return await _with_links(user, db, active_only=False)


@router.patch("", response_model=UserPublic)
async def update_profile(
    display_name: str | None = Form(None, alias="displayName"),
    username: str | None = Form(None),
    bio: str | None = Form(None),
    profile_image: UploadFile | None = File(None, alias="profileImage"),
    user: User = Depends(require_user_api),
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    """Update profile fields and/or upload a new profile image (multipart)."""
    submitted = {"display_name": display_name, "username": username, "bio": bio}
    # Blank form fields leave the stored value alone
    submitted = {field: value for field, value in submitted.items() if value}
    try:
        changes = ProfileUpdate(**submitted).model_dump(exclude_none=True)
    except PydanticValidationError as e:
        raise ValidationError(errors=field_errors(e.errors())) from None

    image = None
    if profile_image is not None and profile_image.filename:
        image = await read_image_upload(profile_image, settings.max_upload_bytes)

    service = ProfileService(UserStore(db), settings)
    return await service.update_profile(user, changes, image)


@router.delete("/image", response_model=UserPublic)
async def delete_profile_image(
    user: User = Depends(require_user_api),
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    return await ProfileService(UserStore(db), settings).remove_image(user)


@router.get("/{username}", response_model=ProfileWithLinks)
async def get_public_profile(
    username: str,
    db: AsyncSession = Depends(get_db),
):
    """Public profile by username. Only active links are included."""
    user = await UserStore(db).get_by_username(username)
    if not user:
        raise NotFound("User not found")
    return await _with_links(user, db, active_only=True)
