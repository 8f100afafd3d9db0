"""Link ordering engine — owner-scoped ordering and ownership checks.

Order values only sequence a user's links relative to each other. New links
go after the current maximum; deletes leave gaps that are never compacted.
Two concurrent appends for the same user can read the same maximum and
store duplicate order values. Ties sort in an unspecified relative order.
"""

import logging

from app.errors import Forbidden, NotFound, ValidationError
from app.models.link import Link
from app.services.platforms import is_absolute_url, is_known_platform
from app.services.storage import LinkStore

logger = logging.getLogger(__name__)

PATCHABLE_FIELDS = ("url", "title", "active")


def _check_url(url: str) -> None:
    if not is_absolute_url(url):
        raise ValidationError(
            "Please enter a valid URL",
            errors=[{"field": "url", "message": "Please enter a valid URL"}],
        )


class LinkOrderingEngine:
    def __init__(self, links: LinkStore):
        self.links = links

    async def append(
        self,
        user_id: int,
        platform: str,
        url: str,
        title: str | None = None,
        active: bool = True,
    ) -> Link:
        """Add a link after the user's current last link."""
        if not platform or not is_known_platform(platform):
            raise ValidationError(
                "Unknown platform",
                errors=[{"field": "platform", "message": f"Unknown platform '{platform}'"}],
            )
        _check_url(url)

        highest = await self.links.max_order(user_id)
        new_order = (highest if highest is not None else -1) + 1

        link = await self.links.insert(
            user_id=user_id,
            platform=platform,
            url=url,
            title=title or None,
            active=active,
            order=new_order,
        )
        logger.info("User %s added %s link %s at order %s", user_id, platform, link.id, new_order)
        return link

    async def _owned(self, requester_id: int, link_id: int) -> Link:
        link = await self.links.get_by_id(link_id)
        if link is None:
            raise NotFound("Link not found")
        if link.user_id != requester_id:
            raise Forbidden("You don't have permission to modify this link")
        return link

    async def update(self, requester_id: int, link_id: int, patch: dict) -> Link:
        """Apply a partial update. Only url, title and active are writable."""
        link = await self._owned(requester_id, link_id)

        changes = {field: patch[field] for field in PATCHABLE_FIELDS if field in patch}
        if "url" in changes:
            if changes["url"] is None:
                raise ValidationError(
                    "Please enter a valid URL",
                    errors=[{"field": "url", "message": "URL cannot be empty"}],
                )
            _check_url(changes["url"])
        if "active" in changes and changes["active"] is None:
            del changes["active"]
        if "title" in changes:
            changes["title"] = changes["title"] or None

        if not changes:
            return link
        return await self.links.update(link, **changes)

    async def remove(self, requester_id: int, link_id: int) -> None:
        link = await self._owned(requester_id, link_id)
        await self.links.delete(link)
        logger.info("User %s deleted link %s", requester_id, link_id)

    async def list_for_owner(self, user_id: int, active_only: bool = False) -> list[Link]:
        """All of a user's links, ascending by order."""
        return await self.links.list_for_user(user_id, active_only=active_only)
