"""Profile edits and profile image lifecycle."""

import logging

from sqlalchemy.exc import IntegrityError

from app.config import Settings
from app.errors import NotFound, UsernameTaken
from app.models.user import User
from app.services.storage import UserStore
from app.services.uploads import ImageUpload, delete_stored_image, store_image

logger = logging.getLogger(__name__)


class ProfileService:
    def __init__(self, users: UserStore, settings: Settings):
        self.users = users
        self.settings = settings

    async def update_profile(
        self,
        user: User,
        changes: dict,
        image: ImageUpload | None = None,
    ) -> User:
        """Apply already-validated field changes and an optional new image.

        The username check runs before the image is written, so a rejected
        update leaves no file behind.
        """
        new_username = changes.get("username")
        if new_username and new_username != user.username:
            if await self.users.get_by_username(new_username) is not None:
                raise UsernameTaken()

        old_picture = user.profile_picture
        if image is not None:
            changes["profile_picture"] = store_image(
                image, self.settings.upload_dir, self.settings.upload_url_prefix
            )

        if not changes:
            return user

        try:
            updated = await self.users.update(user, **changes)
        except IntegrityError:
            self._discard_new_image(changes, image)
            await self.users.db.rollback()
            raise UsernameTaken() from None
        except Exception:
            self._discard_new_image(changes, image)
            raise

        if image is not None and old_picture:
            delete_stored_image(old_picture, self.settings.upload_dir, self.settings.upload_url_prefix)
        logger.info("User %s updated profile fields %s", user.id, sorted(changes))
        return updated

    def _discard_new_image(self, changes: dict, image: ImageUpload | None) -> None:
        if image is not None:
            delete_stored_image(
                changes["profile_picture"], self.settings.upload_dir, self.settings.upload_url_prefix
            )

    async def remove_image(self, user: User) -> User:
        if not user.profile_picture:
            raise NotFound("No profile image found")
        delete_stored_image(user.profile_picture, self.settings.upload_dir, self.settings.upload_url_prefix)
        return await self.users.update(user, profile_picture=None)
