"""Tests for error-to-response mapping."""

from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from app.errors import CorruptCredential, Forbidden, field_errors, register_exception_handlers


def _app() -> FastAPI:
    app = FastAPI()
    register_exception_handlers(app)

    @app.get("/forbidden")
    async def forbidden():
        raise Forbidden("You don't have permission to modify this link")

    @app.get("/corrupt")
    async def corrupt():
        raise CorruptCredential("Stored credential digest is not hex")

    @app.get("/items/{item_id}")
    async def item(item_id: int):
        return {"id": item_id}

    return app


async def test_status_and_detail_come_from_the_exception():
    async with AsyncClient(transport=ASGITransport(app=_app()), base_url="http://testserver") as client:
        response = await client.get("/forbidden")

    assert response.status_code == 403
    assert response.json() == {"detail": "You don't have permission to modify this link"}


async def test_server_errors_hide_internal_detail():
    async with AsyncClient(transport=ASGITransport(app=_app()), base_url="http://testserver") as client:
        response = await client.get("/corrupt")

    assert response.status_code == 500
    assert response.json() == {"detail": "Internal server error"}


async def test_request_validation_is_400_with_fields():
    async with AsyncClient(transport=ASGITransport(app=_app()), base_url="http://testserver") as client:
        response = await client.get("/items/abc")

    assert response.status_code == 400
    assert response.json()["errors"][0]["field"] == "item_id"


def test_field_errors_drops_location_prefix():
    errors = field_errors([{"loc": ("body", "url"), "msg": "Field required"}])

    assert errors == [{"field": "url", "message": "Field required"}]
