"""Role and grant service logic."""

from __future__ import annotations

import logging
from typing import Dict, List, Optional, Sequence, Tuple
from uuid import UUID

from sqlalchemy import or_, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from access_core.models.base import utcnow
from access_core.models.role import Role, RoleStatus
from access_core.models.role_grant import RoleGrant
from access_core.schemas.role import GrantInput, RoleCreate, RoleUpdate
from access_core.services.search import contains_pattern


class RoleServiceError(Exception):
    """Base class for role service errors."""


class RoleNotFoundError(RoleServiceError):
    """Raised when a role cannot be found."""


class GrantNotFoundError(RoleServiceError):
    """Raised when a role has no grant for the requested resource."""


class RoleConflictError(RoleServiceError):
    """Raised when a role name or slug is already taken."""


class RoleService:
    """Reads and mutates roles together with the grants they own."""

    def __init__(self, session: Session) -> None:
        self._session = session
        self._logger = logging.getLogger("access_core.services.roles")

    def list_roles(
        self,
        *,
        status: Optional[RoleStatus] = None,
        search: Optional[str] = None,
    ) -> List[Role]:
        stmt = select(Role)
        if status:
            stmt = stmt.where(Role.status == status)
        if search:
            pattern = contains_pattern(search)
            stmt = stmt.where(
                or_(
                    Role.name.ilike(pattern, escape="\\"),
                    Role.slug.ilike(pattern, escape="\\"),
                    Role.description.ilike(pattern, escape="\\"),
                )
            )
        stmt = stmt.order_by(Role.created_at.desc())
        return list(self._session.scalars(stmt))

    def create_role(self, payload: RoleCreate) -> Role:
        role = Role(
            name=payload.name,
            slug=payload.slug,
            status=payload.status,
            description=payload.description,
        )
        role.grants = [self._build_grant(grant) for grant in payload.grants]
        self._session.add(role)
        try:
            self._session.flush()
        except IntegrityError as exc:
            self._session.rollback()
            raise RoleConflictError(
                f"Role with name '{payload.name}' or slug '{payload.slug}' already exists"
            ) from exc

        self._logger.info(
            "role_created",
            extra={"role_id": str(role.id), "slug": role.slug, "grant_count": len(role.grants)},
        )
        return self._reload(role)

    def get_role(self, role_id: UUID) -> Role:
        role = self._session.get(Role, role_id)
        if not role:
            raise RoleNotFoundError(f"Role {role_id} not found")
        return role

    def update_role(self, role_id: UUID, payload: RoleUpdate) -> Role:
        role = self.get_role(role_id)
        updates = payload.model_dump(exclude_unset=True)

        for field in ("name", "slug", "status", "description"):
            if field in updates:
                setattr(role, field, getattr(payload, field))

        try:
            if "grants" in updates:
                # Old rows must be gone before new ones reuse (role_id, resource_id).
                role.grants.clear()
                self._session.flush()
                role.grants.extend(self._build_grant(grant) for grant in payload.grants or [])
                role.updated_at = utcnow()
            self._session.flush()
        except IntegrityError as exc:
            self._session.rollback()
            raise RoleConflictError("Role name or slug already exists") from exc

        self._logger.info(
            "role_updated",
            extra={"role_id": str(role.id), "fields": sorted(updates)},
        )
        return self._reload(role)

    def delete_role(self, role_id: UUID) -> Role:
        """Hard-delete a role and its grants; the detached record is returned."""

        role = self.get_role(role_id)
        self._session.delete(role)
        self._session.flush()

        self._logger.info("role_deleted", extra={"role_id": str(role_id), "slug": role.slug})
        return role

    def replace_grants(self, role_id: UUID, grants: Sequence[GrantInput]) -> Role:
        """Replace the actions of grants the role already has.

        Input grants for resources the role does not hold yet are ignored;
        use :meth:`add_grants` to attach new resources.
        """

        role = self.get_role(role_id)
        incoming: Dict[UUID, GrantInput] = {}
        for grant in grants:
            incoming.setdefault(grant.resource_id, grant)

        updated: List[str] = []
        for current in role.grants:
            replacement = incoming.pop(current.resource_id, None)
            if replacement is None:
                continue
            current.actions = _action_values(replacement)
            updated.append(str(current.resource_id))

        if updated:
            role.updated_at = utcnow()
        self._session.flush()

        self._logger.info(
            "role_grants_replaced",
            extra={
                "role_id": str(role.id),
                "updated_resources": updated,
                "ignored_resources": [str(resource_id) for resource_id in incoming],
            },
        )
        return self._reload(role)

    def add_grants(self, role_id: UUID, grants: Sequence[GrantInput]) -> Role:
        """Append grants for resources the role does not hold yet.

        Grants for resources already on the role are skipped, not merged.
        """

        try:
            role, added = self._append_grants(role_id, grants)
        except IntegrityError:
            # Another transaction attached one of these resources after we read the role.
            self._session.rollback()
            self._logger.info("role_grants_add_retried", extra={"role_id": str(role_id)})
            role, added = self._append_grants(role_id, grants)

        self._logger.info(
            "role_grants_added",
            extra={"role_id": str(role.id), "added_resources": added, "skipped": len(grants) - len(added)},
        )
        return self._reload(role)

    def _append_grants(self, role_id: UUID, grants: Sequence[GrantInput]) -> Tuple[Role, List[str]]:
        role = self.get_role(role_id)
        held = {grant.resource_id for grant in role.grants}

        added: List[str] = []
        for grant in grants:
            if grant.resource_id in held:
                continue
            held.add(grant.resource_id)
            role.grants.append(self._build_grant(grant))
            added.append(str(grant.resource_id))

        if added:
            role.updated_at = utcnow()
        self._session.flush()
        return role, added

    def delete_grant(self, role_id: UUID, resource_id: UUID) -> Role:
        role = self.get_role(role_id)
        grant = role.grant_for(resource_id)
        if grant is None:
            raise GrantNotFoundError(f"Grant for resource {resource_id} not found in role {role_id}")

        role.grants.remove(grant)
        role.updated_at = utcnow()
        self._session.flush()

        self._logger.info(
            "role_grant_deleted",
            extra={"role_id": str(role.id), "resource_id": str(resource_id)},
        )
        return self._reload(role)

    def _reload(self, role: Role) -> Role:
        """Re-read the role so grants come back ordered with resources resolved."""

        self._session.refresh(role)
        return role

    @staticmethod
    def _build_grant(grant: GrantInput) -> RoleGrant:
        return RoleGrant(resource_id=grant.resource_id, actions=_action_values(grant))


def _action_values(grant: GrantInput) -> List[str]:
    return [action.value for action in grant.actions]
