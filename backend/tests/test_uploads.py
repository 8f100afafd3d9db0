"""Tests for profile image upload helpers."""

import io
import re

import pytest
from fastapi import UploadFile
from starlette.datastructures import Headers

from app.errors import ValidationError
from app.services.uploads import (
    ImageUpload,
    delete_stored_image,
    generate_filename,
    read_image_upload,
    store_image,
)


def _upload(data: bytes, filename: str = "me.png", content_type: str = "image/png") -> UploadFile:
    return UploadFile(
        file=io.BytesIO(data),
        filename=filename,
        headers=Headers({"content-type": content_type}),
    )


async def test_read_accepts_image_at_limit():
    image = await read_image_upload(_upload(b"x" * 1024), max_bytes=1024)

    assert image.data == b"x" * 1024
    assert image.content_type == "image/png"


async def test_read_rejects_oversized_image():
    with pytest.raises(ValidationError) as exc:
        await read_image_upload(_upload(b"x" * 1025), max_bytes=1024)

    assert exc.value.detail == "File too large"


async def test_read_rejects_non_image():
    with pytest.raises(ValidationError):
        await read_image_upload(_upload(b"%PDF", "doc.pdf", "application/pdf"), max_bytes=1024)


async def test_read_rejects_svg():
    with pytest.raises(ValidationError):
        await read_image_upload(_upload(b"<svg/>", "logo.svg", "image/svg+xml"), max_bytes=1024)


def test_generated_name_keeps_only_extension():
    name = generate_filename("../../etc/passwd.PNG", "image/png")

    assert re.fullmatch(r"profileImage-\d+-\d+\.png", name)


def test_generated_name_without_extension_uses_content_type():
    assert re.fullmatch(r"profileImage-\d+-\d+\.jpg", generate_filename("avatar", "image/jpeg"))


def test_non_image_extension_is_replaced():
    name = generate_filename("evil.html", "image/png")

    assert re.fullmatch(r"profileImage-\d+-\d+\.png", name)


def test_non_image_extension_with_unknown_type_is_rejected():
    with pytest.raises(ValidationError):
        generate_filename("evil.html", "text/html")


def test_stored_html_disguised_as_png_gets_png_name(tmp_path):
    reference = store_image(
        ImageUpload("evil.html", "image/png", b"<script>alert(1)</script>"),
        str(tmp_path),
        "/uploads",
    )

    assert reference.endswith(".png")
    assert [path.suffix for path in tmp_path.iterdir()] == [".png"]


def test_store_and_delete_round_trip(tmp_path):
    upload_dir = tmp_path / "uploads"
    reference = store_image(ImageUpload("me.jpg", "image/jpeg", b"jpeg"), str(upload_dir), "/uploads")

    assert reference.startswith("/uploads/profileImage-")
    stored = upload_dir / reference.rsplit("/", 1)[1]
    assert stored.read_bytes() == b"jpeg"

    delete_stored_image(reference, str(upload_dir), "/uploads")
    assert not stored.exists()

    # Already gone and external references are both no-ops
    delete_stored_image(reference, str(upload_dir), "/uploads")
    delete_stored_image("https://images.example.com/me.jpg", str(upload_dir), "/uploads")
