"""Platform catalog endpoint for the admin UI."""

from fastapi import APIRouter

from app.services.platforms import PLATFORMS

router = APIRouter(prefix="/platforms", tags=["platforms"])


@router.get("")
async def list_platforms():
    return [
        {"id": p.id, "name": p.name, "icon": p.icon, "urlPrefix": p.url_prefix}
        for p in PLATFORMS
    ]
