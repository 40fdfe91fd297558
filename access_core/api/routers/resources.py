"""Resource registry endpoints."""

from __future__ import annotations

from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status

from access_core.api.dependencies import get_resource_service, require_permission
from access_core.schemas.common import Envelope
from access_core.schemas.resource import ResourceCreate, ResourceResponse, ResourceUpdate
from access_core.services.resources import ResourceService

router = APIRouter()


@router.get(
    "",
    response_model=Envelope[List[ResourceResponse]],
    dependencies=[Depends(require_permission("resource", "read"))],
)
def list_resources(
    search: Optional[str] = Query(default=None),
    service: ResourceService = Depends(get_resource_service),
) -> Envelope[List[ResourceResponse]]:
    resources = service.list_resources(search=search)
    return Envelope[List[ResourceResponse]](
        message="Resources retrieved successfully",
        metadata=[ResourceResponse.model_validate(resource) for resource in resources],
    )


@router.post(
    "",
    response_model=Envelope[ResourceResponse],
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_permission("resource", "create"))],
)
def create_resource(
    payload: ResourceCreate,
    service: ResourceService = Depends(get_resource_service),
) -> Envelope[ResourceResponse]:
    resource = service.create_resource(payload)
    return Envelope[ResourceResponse](
        message="Resource created successfully",
        metadata=ResourceResponse.model_validate(resource),
    )


@router.get(
    "/{resource_id}",
    response_model=Envelope[ResourceResponse],
    dependencies=[Depends(require_permission("resource", "read"))],
)
def get_resource(
    resource_id: UUID,
    service: ResourceService = Depends(get_resource_service),
) -> Envelope[ResourceResponse]:
    resource = service.get_resource(resource_id)
    return Envelope[ResourceResponse](
        message="Resource retrieved successfully",
        metadata=ResourceResponse.model_validate(resource),
    )


@router.put(
    "/{resource_id}",
    response_model=Envelope[ResourceResponse],
    dependencies=[Depends(require_permission("resource", "update"))],
)
def update_resource(
    resource_id: UUID,
    payload: ResourceUpdate,
    service: ResourceService = Depends(get_resource_service),
) -> Envelope[ResourceResponse]:
    resource = service.update_resource(resource_id, payload)
    return Envelope[ResourceResponse](
        message="Resource updated successfully",
        metadata=ResourceResponse.model_validate(resource),
    )


@router.delete(
    "/{resource_id}",
    response_model=Envelope[ResourceResponse],
    dependencies=[Depends(require_permission("resource", "delete"))],
)
def delete_resource(
    resource_id: UUID,
    service: ResourceService = Depends(get_resource_service),
) -> Envelope[ResourceResponse]:
    resource = service.delete_resource(resource_id)
    return Envelope[ResourceResponse](
        message="Resource deleted successfully",
        metadata=ResourceResponse.model_validate(resource),
    )
