"""Dependency injection helpers for FastAPI routes."""

from __future__ import annotations

from typing import Callable, Iterator, Optional
from uuid import UUID

from fastapi import Depends, Header, Request
from sqlalchemy.orm import Session

from access_core.core.config import get_settings
from access_core.core.database import get_session
from access_core.services.authorization import AuthorizationService
from access_core.services.resources import ResourceService
from access_core.services.roles import RoleService


def get_db_session() -> Iterator[Session]:
    yield from get_session()


def get_role_service(session: Session = Depends(get_db_session)) -> RoleService:
    return RoleService(session)


def get_resource_service(session: Session = Depends(get_db_session)) -> ResourceService:
    return ResourceService(session)


def get_authorization_service(session: Session = Depends(get_db_session)) -> AuthorizationService:
    return AuthorizationService(session)


def require_permission(resource_slug: str, verb: str) -> Callable[..., None]:
    """Build a route guard checking the caller's role for ``verb`` on a resource.

    The caller's role id arrives in ``X-Role-Id`` from the authentication
    layer. When enforcement is switched off every request passes.
    """

    def guard(
        request: Request,
        x_role_id: Optional[UUID] = Header(default=None, alias="X-Role-Id"),
        service: AuthorizationService = Depends(get_authorization_service),
    ) -> None:
        if not get_settings().enforce_authorization:
            return
        request.state.permission_scope = service.authorize(x_role_id, resource_slug, verb)

    return guard
