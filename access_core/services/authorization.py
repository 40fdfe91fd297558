"""Authorization checks against role grants."""

from __future__ import annotations

import logging
from typing import Iterable, Optional
from uuid import UUID

from sqlalchemy.orm import Session

from access_core.models.grant_actions import ACTION_VERBS, GrantAction, PermissionScope
from access_core.models.role import Role, RoleStatus
from access_core.models.role_grant import RoleGrant


class AuthorizationError(Exception):
    """Base class for authorization errors."""


class AuthenticationRequiredError(AuthorizationError):
    """Raised when the request carries no usable principal role."""


class PermissionDeniedError(AuthorizationError):
    """Raised when the principal's role does not permit the action."""


def granted_scope(grants: Iterable[RoleGrant], resource_slug: str, verb: str) -> Optional[PermissionScope]:
    """Return the broadest scope granted for ``verb`` on the resource, if any."""

    if verb not in ACTION_VERBS:
        raise ValueError(f"Unknown action verb '{verb}'")

    actions: set[str] = set()
    for grant in grants:
        if grant.resource is not None and grant.resource.slug == resource_slug:
            actions.update(grant.actions)

    if GrantAction.of(verb, PermissionScope.ANY).value in actions:
        return PermissionScope.ANY
    if GrantAction.of(verb, PermissionScope.OWN).value in actions:
        return PermissionScope.OWN
    return None


def permits(scope: Optional[PermissionScope], action: GrantAction) -> bool:
    """``X.own`` is satisfied by ``X.own`` or ``X.any``; ``X.any`` only by ``X.any``."""

    if scope is None:
        return False
    if action.scope is PermissionScope.ANY:
        return scope is PermissionScope.ANY
    return True


class AuthorizationService:
    """Decides whether a role may perform an action on a resource."""

    def __init__(self, session: Session) -> None:
        self._session = session
        self._logger = logging.getLogger("access_core.services.authorization")

    def resolve_scope(self, role: Role, resource_slug: str, verb: str) -> Optional[PermissionScope]:
        if role.status is not RoleStatus.ACTIVE:
            return None
        return granted_scope(role.grants, resource_slug, verb)

    def is_permitted(self, role: Role, resource_slug: str, action: GrantAction) -> bool:
        return permits(self.resolve_scope(role, resource_slug, action.verb), action)

    def authorize(self, role_id: Optional[UUID], resource_slug: str, verb: str) -> PermissionScope:
        """Check a request and return the scope it was granted under."""

        if role_id is None:
            raise AuthenticationRequiredError("Authentication required")
        role = self._session.get(Role, role_id)
        if role is None:
            self._logger.warning("authorization_unknown_role", extra={"role_id": str(role_id)})
            raise AuthenticationRequiredError("Authentication required")

        scope = self.resolve_scope(role, resource_slug, verb)
        log_context = {"role_id": str(role_id), "resource": resource_slug, "verb": verb}
        if scope is None:
            self._logger.info("authorization_denied", extra=log_context)
            raise PermissionDeniedError(f"Role '{role.slug}' may not {verb} {resource_slug}")

        self._logger.info("authorization_granted", extra={**log_context, "scope": scope.value})
        return scope
