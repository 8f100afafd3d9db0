"""Profile image upload handling — size/type checks, naming and file cleanup."""

import logging
import secrets
import time
from dataclasses import dataclass
from pathlib import Path, PurePosixPath

from fastapi import UploadFile

from app.errors import ValidationError

logger = logging.getLogger(__name__)

UPLOAD_FIELD = "profileImage"

# Raster types only; stored files are served from this origin
IMAGE_TYPES = {
    "image/png": ".png",
    "image/jpeg": ".jpg",
    "image/gif": ".gif",
    "image/webp": ".webp",
}
IMAGE_EXTENSIONS = {".png", ".jpg", ".jpeg", ".gif", ".webp"}


@dataclass
class ImageUpload:
    filename: str
    content_type: str
    data: bytes


async def read_image_upload(upload: UploadFile, max_bytes: int) -> ImageUpload:
    """Read an uploaded image, rejecting non-images and anything over ``max_bytes``."""
    content_type = (upload.content_type or "").split(";")[0].strip().lower()
    if content_type not in IMAGE_TYPES:
        raise ValidationError(
            "Only image files are allowed",
            errors=[{"field": UPLOAD_FIELD, "message": "Only image files are allowed"}],
        )

    data = await upload.read(max_bytes + 1)
    if len(data) > max_bytes:
        raise ValidationError(
            "File too large",
            errors=[{"field": UPLOAD_FIELD, "message": f"Image must be at most {max_bytes} bytes"}],
        )
    return ImageUpload(filename=upload.filename or "", content_type=content_type, data=data)


def generate_filename(original_name: str, content_type: str, field: str = UPLOAD_FIELD) -> str:
    """Server-side name: ``<field>-<epoch ms>-<random><ext>``.

    Only the extension of the client's name survives, and only when it is an
    image extension; otherwise it comes from the content type. Path components
    in the client's name never reach the upload directory.
    """
    ext = PurePosixPath(original_name.replace("\\", "/")).suffix.lower()
    if ext not in IMAGE_EXTENSIONS:
        if content_type not in IMAGE_TYPES:
            raise ValidationError(
                "Only image files are allowed",
                errors=[{"field": field, "message": "Only image files are allowed"}],
            )
        ext = IMAGE_TYPES[content_type]
    return f"{field}-{int(time.time() * 1000)}-{secrets.randbelow(10 ** 9)}{ext}"


def store_image(image: ImageUpload, upload_dir: str, url_prefix: str) -> str:
    """Write the image to disk and return its public reference."""
    directory = Path(upload_dir)
    directory.mkdir(parents=True, exist_ok=True)
    name = generate_filename(image.filename, image.content_type)
    (directory / name).write_bytes(image.data)
    return f"{url_prefix.rstrip('/')}/{name}"


def delete_stored_image(reference: str | None, upload_dir: str, url_prefix: str) -> None:
    """Remove a previously stored image file. External URLs are left alone."""
    prefix = url_prefix.rstrip("/") + "/"
    if not reference or not reference.startswith(prefix):
        return
    name = PurePosixPath(reference[len(prefix):]).name
    try:
        (Path(upload_dir) / name).unlink()
    except FileNotFoundError:
        pass
    except OSError as e:
        logger.warning("Could not delete profile image %s: %s", name, e)
