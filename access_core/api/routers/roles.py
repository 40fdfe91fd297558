"""Role management endpoints."""

from __future__ import annotations

from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status

from access_core.api.dependencies import get_role_service, require_permission
from access_core.models.role import Role, RoleStatus
from access_core.schemas.common import Envelope
from access_core.schemas.resource import ResourceResponse
from access_core.schemas.role import (
    GrantResponse,
    GrantsPayload,
    RoleCreate,
    RoleResponse,
    RoleUpdate,
)
from access_core.services.roles import RoleService

router = APIRouter()


@router.get(
    "",
    response_model=Envelope[List[RoleResponse]],
    dependencies=[Depends(require_permission("role", "read"))],
)
def list_roles(
    role_status: Optional[RoleStatus] = Query(default=None, alias="status"),
    search: Optional[str] = Query(default=None),
    service: RoleService = Depends(get_role_service),
) -> Envelope[List[RoleResponse]]:
    roles = service.list_roles(status=role_status, search=search)
    return Envelope[List[RoleResponse]](
        message="Roles retrieved successfully",
        metadata=[_to_role_response(role) for role in roles],
    )


@router.post(
    "",
    response_model=Envelope[RoleResponse],
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_permission("role", "create"))],
)
def create_role(
    payload: RoleCreate,
    service: RoleService = Depends(get_role_service),
) -> Envelope[RoleResponse]:
    role = service.create_role(payload)
    return _envelope("Role created successfully", role)


@router.get(
    "/{role_id}",
    response_model=Envelope[RoleResponse],
    dependencies=[Depends(require_permission("role", "read"))],
)
def get_role(
    role_id: UUID,
    service: RoleService = Depends(get_role_service),
) -> Envelope[RoleResponse]:
    return _envelope("Role retrieved successfully", service.get_role(role_id))


@router.put(
    "/{role_id}",
    response_model=Envelope[RoleResponse],
    dependencies=[Depends(require_permission("role", "update"))],
)
def update_role(
    role_id: UUID,
    payload: RoleUpdate,
    service: RoleService = Depends(get_role_service),
) -> Envelope[RoleResponse]:
    return _envelope("Role updated successfully", service.update_role(role_id, payload))


@router.delete(
    "/{role_id}",
    response_model=Envelope[RoleResponse],
    dependencies=[Depends(require_permission("role", "delete"))],
)
def delete_role(
    role_id: UUID,
    service: RoleService = Depends(get_role_service),
) -> Envelope[RoleResponse]:
    return _envelope("Role deleted successfully", service.delete_role(role_id))


@router.put(
    "/{role_id}/grants",
    response_model=Envelope[RoleResponse],
    dependencies=[Depends(require_permission("role", "update"))],
)
def replace_role_grants(
    role_id: UUID,
    payload: GrantsPayload,
    service: RoleService = Depends(get_role_service),
) -> Envelope[RoleResponse]:
    role = service.replace_grants(role_id, payload.grants)
    return _envelope("Role grants updated successfully", role)


@router.post(
    "/{role_id}/grants",
    response_model=Envelope[RoleResponse],
    dependencies=[Depends(require_permission("role", "create"))],
)
def add_role_grants(
    role_id: UUID,
    payload: GrantsPayload,
    service: RoleService = Depends(get_role_service),
) -> Envelope[RoleResponse]:
    role = service.add_grants(role_id, payload.grants)
    return _envelope("New grants added to role successfully", role)


@router.delete(
    "/{role_id}/grants/{resource_id}",
    response_model=Envelope[RoleResponse],
    dependencies=[Depends(require_permission("role", "delete"))],
)
def delete_role_grant(
    role_id: UUID,
    resource_id: UUID,
    service: RoleService = Depends(get_role_service),
) -> Envelope[RoleResponse]:
    role = service.delete_grant(role_id, resource_id)
    return _envelope("Grant removed from role successfully", role)


def _envelope(message: str, role: Role) -> Envelope[RoleResponse]:
    return Envelope[RoleResponse](message=message, metadata=_to_role_response(role))


def _to_role_response(role: Role) -> RoleResponse:
    return RoleResponse(
        id=role.id,
        name=role.name,
        slug=role.slug,
        status=role.status,
        description=role.description,
        grants=[
            GrantResponse(
                resource_id=(
                    ResourceResponse.model_validate(grant.resource) if grant.resource is not None else grant.resource_id
                ),
                actions=grant.granted_actions,
            )
            for grant in role.grants
        ],
        created_at=role.created_at,
        updated_at=role.updated_at,
    )
