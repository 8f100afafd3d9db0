"""Error taxonomy and the FastAPI handlers that turn it into JSON responses."""

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class LinkHubError(Exception):
    """Base for errors that map onto an HTTP status with a client-safe message."""

    status_code = 500
    detail = "Internal server error"

    def __init__(self, detail: str | None = None, errors: list[dict] | None = None):
        if detail is not None:
            self.detail = detail
        self.errors = errors
        super().__init__(self.detail)


class ValidationError(LinkHubError):
    status_code = 400
    detail = "Validation error"


class Unauthenticated(LinkHubError):
    status_code = 401
    detail = "Not authenticated"


class Forbidden(LinkHubError):
    status_code = 403
    detail = "Forbidden"


class NotFound(LinkHubError):
    status_code = 404
    detail = "Not found"


class InvalidCredentials(LinkHubError):
    """Unknown username and wrong password both raise this, with the same message."""

    status_code = 401
    detail = "Invalid username or password"

    def __init__(self):
        super().__init__()


class UsernameTaken(LinkHubError):
    status_code = 400
    detail = "Username already exists"


class CorruptCredential(LinkHubError):
    """A stored password hash could not be parsed."""

    status_code = 500
    detail = "Internal server error"


def field_errors(raw_errors) -> list[dict]:
    """Flatten pydantic error dicts into ``{field, message}`` pairs."""
    errors = []
    for error in raw_errors:
        loc = [str(part) for part in error.get("loc", ()) if part not in ("body", "query", "path", "form")]
        errors.append({"field": ".".join(loc), "message": error.get("msg", "Invalid value")})
    return errors


async def linkhub_error_handler(request: Request, exc: LinkHubError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error("%s %s failed: %r", request.method, request.url.path, exc, exc_info=exc)
        return JSONResponse(status_code=exc.status_code, content={"detail": LinkHubError.detail})
    content = {"detail": exc.detail}
    if exc.errors:
        content["errors"] = exc.errors
    return JSONResponse(status_code=exc.status_code, content=content)


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return JSONResponse(
        status_code=400,
        content={"detail": "Validation error", "errors": field_errors(exc.errors())},
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(LinkHubError, linkhub_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
