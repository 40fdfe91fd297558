"""Exception handlers for the FastAPI app."""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from access_core.services.authorization import AuthenticationRequiredError, PermissionDeniedError
from access_core.services.resources import (
    ResourceConflictError,
    ResourceNotFoundError,
    ResourceServiceError,
)
from access_core.services.roles import (
    GrantNotFoundError,
    RoleConflictError,
    RoleNotFoundError,
    RoleServiceError,
)

logger = logging.getLogger("access_core.api.errors")


def error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"errors": {"message": message}})


def describe_validation_error(exc: RequestValidationError) -> str:
    messages = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ()) if part != "body")
        messages.append(f"{location}: {error['msg']}" if location else error["msg"])
    return "; ".join(messages) or "Invalid request"


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(RequestValidationError)
    async def validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:  # noqa: WPS430
        return error_response(400, describe_validation_error(exc))

    @app.exception_handler(RoleNotFoundError)
    @app.exception_handler(GrantNotFoundError)
    @app.exception_handler(ResourceNotFoundError)
    async def not_found_handler(request: Request, exc: Exception) -> JSONResponse:  # noqa: WPS430
        return error_response(404, str(exc))

    @app.exception_handler(RoleConflictError)
    @app.exception_handler(ResourceConflictError)
    async def conflict_handler(request: Request, exc: Exception) -> JSONResponse:  # noqa: WPS430
        return error_response(409, str(exc))

    @app.exception_handler(RoleServiceError)
    @app.exception_handler(ResourceServiceError)
    async def service_error_handler(request: Request, exc: Exception) -> JSONResponse:  # noqa: WPS430
        return error_response(400, str(exc))

    @app.exception_handler(AuthenticationRequiredError)
    async def authentication_handler(request: Request, exc: AuthenticationRequiredError) -> JSONResponse:  # noqa: WPS430
        return error_response(401, str(exc))

    @app.exception_handler(PermissionDeniedError)
    async def permission_denied_handler(request: Request, exc: PermissionDeniedError) -> JSONResponse:  # noqa: WPS430
        return error_response(403, str(exc))

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:  # noqa: WPS430
        return error_response(exc.status_code, str(exc.detail))

    @app.exception_handler(SQLAlchemyError)
    async def database_error_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:  # noqa: WPS430
        logger.exception("database_error", extra={"path": request.url.path})
        return error_response(500, "Database unavailable")
