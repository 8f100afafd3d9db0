"""Web routes for HTML pages."""

from pathlib import Path

from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import Settings, get_settings
from app.models.base import get_db
from app.services.link_service import LinkOrderingEngine
from app.services.platforms import get_platform
from app.services.storage import LinkStore, UserStore

router = APIRouter()
templates = Jinja2Templates(directory=str(Path(__file__).resolve().parent.parent / "templates"))


@router.get("/{username}", response_class=HTMLResponse)
async def public_profile_page(
    request: Request,
    username: str,
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    """Public link page. Renders active links only, in order."""
    user = await UserStore(db).get_by_username(username)
    if not user:
        return templates.TemplateResponse(
            request,
            "not_found.html",
            {"app_name": settings.app_name, "username": username},
            status_code=404,
        )

    links = await LinkOrderingEngine(LinkStore(db)).list_for_owner(user.id, active_only=True)
    entries = []
    for link in links:
        platform = get_platform(link.platform)
        entries.append({"url": link.url, "label": link.title or platform.name, "platform": platform})
    return templates.TemplateResponse(
        request,
        "profile.html",
        {"app_name": settings.app_name, "user": user, "links": entries},
    )
