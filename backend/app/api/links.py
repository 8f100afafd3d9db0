"""Link API endpoints — add, edit and delete a user's links."""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.dependencies.auth import require_user_api
from app.models.base import get_db
from app.models.user import User
from app.schemas.link import LinkCreate, LinkRead, LinkUpdate
from app.schemas.user import MessageResponse
from app.services.link_service import LinkOrderingEngine
from app.services.platforms import normalize_url
from app.services.storage import LinkStore

router = APIRouter(prefix="/links", tags=["links"])


def get_link_engine(db: AsyncSession = Depends(get_db)) -> LinkOrderingEngine:
    return LinkOrderingEngine(LinkStore(db))


@router.post("", response_model=LinkRead, status_code=201)
async def create_link(
    body: LinkCreate,
    user: User = Depends(require_user_api),
    engine: LinkOrderingEngine = Depends(get_link_engine),
):
    """Append a link to the end of the user's list."""
    return await engine.append(
        user.id,
        platform=body.platform,
        url=normalize_url(body.url),
        title=body.title,
        active=body.active,
    )


@router.patch("/{link_id}", response_model=LinkRead)
async def update_link(
    link_id: int,
    body: LinkUpdate,
    user: User = Depends(require_user_api),
    engine: LinkOrderingEngine = Depends(get_link_engine),
):
    patch = body.model_dump(exclude_unset=True)
    if patch.get("url"):
        patch["url"] = normalize_url(patch["url"])
    return await engine.update(user.id, link_id, patch)


@router.delete("/{link_id}", response_model=MessageResponse)
async def delete_link(
    link_id: int,
    user: User = Depends(require_user_api),
    engine: LinkOrderingEngine = Depends(get_link_engine),
):
    await engine.remove(user.id, link_id)
    return MessageResponse(message="Link deleted successfully")
