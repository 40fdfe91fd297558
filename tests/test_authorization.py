from __future__ import annotations

from uuid import uuid4

import pytest
from fastapi.testclient import TestClient

from access_core.core.database import session_scope
from access_core.models.grant_actions import GrantAction, PermissionScope
from access_core.models.role import RoleStatus
from access_core.schemas.role import GrantInput, RoleCreate, RoleUpdate
from access_core.services.authorization import (
    AuthenticationRequiredError,
    AuthorizationService,
    PermissionDeniedError,
    permits,
)
from access_core.services.resources import ResourceService
from access_core.services.roles import RoleService


@pytest.fixture()
def registry(db_session):
    ResourceService(db_session).ensure_baseline_resources(["role", "image"])
    return {resource.slug: resource for resource in ResourceService(db_session).list_resources()}


def make_role(db_session, grants: list[GrantInput], status: RoleStatus = RoleStatus.ACTIVE, slug: str = "editor"):
    return RoleService(db_session).create_role(
        RoleCreate(name=slug.title(), slug=slug, status=status, description="test role", grants=grants)
    )


def test_own_action_is_satisfied_by_any(db_session, registry) -> None:
    role = make_role(db_session, [GrantInput(resource_id=registry["image"].id, actions=["update.any", "read.own"])])
    service = AuthorizationService(db_session)

    assert service.is_permitted(role, "image", GrantAction.UPDATE_OWN) is True
    assert service.is_permitted(role, "image", GrantAction.UPDATE_ANY) is True
    assert service.is_permitted(role, "image", GrantAction.READ_OWN) is True
    assert service.is_permitted(role, "image", GrantAction.READ_ANY) is False
    assert service.is_permitted(role, "image", GrantAction.DELETE_OWN) is False
    assert service.is_permitted(role, "role", GrantAction.READ_OWN) is False


def test_resolve_scope_prefers_any(db_session, registry) -> None:
    role = make_role(
        db_session,
        [GrantInput(resource_id=registry["role"].id, actions=["read.own", "read.any", "create.own"])],
    )
    service = AuthorizationService(db_session)

    assert service.resolve_scope(role, "role", "read") is PermissionScope.ANY
    assert service.resolve_scope(role, "role", "create") is PermissionScope.OWN
    assert service.resolve_scope(role, "role", "delete") is None


def test_inactive_role_is_denied(db_session, registry) -> None:
    role = make_role(
        db_session,
        [GrantInput(resource_id=registry["role"].id, actions=["read.any"])],
        status=RoleStatus.INACTIVE,
    )
    assert AuthorizationService(db_session).resolve_scope(role, "role", "read") is None


def test_unknown_verb_is_rejected(db_session, registry) -> None:
    role = make_role(db_session, [])
    with pytest.raises(ValueError):
        AuthorizationService(db_session).resolve_scope(role, "role", "publish")


def test_permits_table() -> None:
    assert permits(PermissionScope.ANY, GrantAction.READ_ANY) is True
    assert permits(PermissionScope.ANY, GrantAction.READ_OWN) is True
    assert permits(PermissionScope.OWN, GrantAction.READ_OWN) is True
    assert permits(PermissionScope.OWN, GrantAction.READ_ANY) is False
    assert permits(None, GrantAction.READ_OWN) is False


def test_authorize_requires_known_role(db_session) -> None:
    service = AuthorizationService(db_session)
    with pytest.raises(AuthenticationRequiredError):
        service.authorize(None, "role", "read")
    with pytest.raises(AuthenticationRequiredError):
        service.authorize(uuid4(), "role", "read")


def test_grant_changes_apply_to_next_check(db_session, registry) -> None:
    role = make_role(db_session, [GrantInput(resource_id=registry["role"].id, actions=["read.own"])])
    authorization = AuthorizationService(db_session)
    roles = RoleService(db_session)

    assert authorization.authorize(role.id, "role", "read") is PermissionScope.OWN

    roles.replace_grants(role.id, [GrantInput(resource_id=registry["role"].id, actions=["read.any"])])
    assert authorization.authorize(role.id, "role", "read") is PermissionScope.ANY

    roles.update_role(role.id, RoleUpdate(status="inactive"))
    with pytest.raises(PermissionDeniedError):
        authorization.authorize(role.id, "role", "read")


def test_revoked_grant_denies_after_commit(file_session_factory) -> None:
    with file_session_factory() as session:
        ResourceService(session).ensure_baseline_resources(["role"])
        role_resource = ResourceService(session).list_resources()[0]
        role = make_role(session, [GrantInput(resource_id=role_resource.id, actions=["read.any"])])
        session.commit()
        role_id, resource_id = role.id, role_resource.id

    writer = file_session_factory()
    try:
        RoleService(writer).delete_grant(role_id, resource_id)

        # Concurrent reader still sees the committed grant.
        with file_session_factory() as reader:
            assert AuthorizationService(reader).authorize(role_id, "role", "read") is PermissionScope.ANY

        writer.commit()
    finally:
        writer.close()

    with file_session_factory() as reader:
        with pytest.raises(PermissionDeniedError):
            AuthorizationService(reader).authorize(role_id, "role", "read")


def _role_admin(client: TestClient, actions: list[str]) -> str:
    """Create a role directly in the database and return its id."""

    with session_scope() as session:
        role_resource = next(r for r in ResourceService(session).list_resources() if r.slug == "role")
        role = make_role(
            session,
            [GrantInput(resource_id=role_resource.id, actions=actions)],
            slug=f"admin-{uuid4().hex[:8]}",
        )
        return str(role.id)


def test_routes_open_when_enforcement_disabled(client: TestClient) -> None:
    assert client.get("/roles").status_code == 200


def test_routes_require_role_header(client: TestClient, enforce_authorization) -> None:
    response = client.get("/roles")
    assert response.status_code == 401
    assert response.json() == {"errors": {"message": "Authentication required"}}

    assert client.get("/roles", headers={"X-Role-Id": str(uuid4())}).status_code == 401


def test_routes_check_role_grants(client: TestClient, enforce_authorization) -> None:
    reader = _role_admin(client, ["read.own"])
    headers = {"X-Role-Id": reader}

    assert client.get("/roles", headers=headers).status_code == 200
    denied = client.post(
        "/roles",
        headers=headers,
        json={"name": "Viewer", "slug": "viewer", "status": "active", "description": "x"},
    )
    assert denied.status_code == 403
    assert "may not create role" in denied.json()["errors"]["message"]


def test_healthz_is_unguarded(client: TestClient, enforce_authorization) -> None:
    assert client.get("/healthz").json() == {"status": "ok"}
