"""Role and grant schemas."""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional, Union
from uuid import UUID

from pydantic import ConfigDict, Field, field_validator, model_validator

from access_core.models.grant_actions import GrantAction
from access_core.models.role import RoleStatus
from access_core.schemas.common import CamelModel
from access_core.schemas.resource import ResourceResponse, SLUG_PATTERN


class GrantInput(CamelModel):
    resource_id: UUID
    actions: List[GrantAction]

    @field_validator("actions")
    @classmethod
    def drop_repeated_actions(cls, value: List[GrantAction]) -> List[GrantAction]:
        # actions form a set; keep first-seen order for stable output
        return list(dict.fromkeys(value))


def _reject_duplicate_resources(grants: Optional[List[GrantInput]]) -> None:
    if not grants:
        return
    seen: set[UUID] = set()
    for grant in grants:
        if grant.resource_id in seen:
            raise ValueError(f"Duplicate grant for resource {grant.resource_id}")
        seen.add(grant.resource_id)


class RoleCreate(CamelModel):
    name: str = Field(..., min_length=1, max_length=120)
    slug: str = Field(..., min_length=1, max_length=120, pattern=SLUG_PATTERN)
    status: RoleStatus
    description: str = Field(..., min_length=1, max_length=1024)
    grants: List[GrantInput] = Field(default_factory=list)

    @model_validator(mode="after")
    def one_grant_per_resource(self) -> "RoleCreate":
        _reject_duplicate_resources(self.grants)
        return self


class RoleUpdate(CamelModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=120)
    slug: Optional[str] = Field(default=None, min_length=1, max_length=120, pattern=SLUG_PATTERN)
    status: Optional[RoleStatus] = None
    description: Optional[str] = Field(default=None, min_length=1, max_length=1024)
    grants: Optional[List[GrantInput]] = None

    @model_validator(mode="after")
    def validate_fields(self) -> "RoleUpdate":
        nulled = sorted(field for field in self.model_fields_set if getattr(self, field) is None)
        if nulled:
            raise ValueError(f"Fields cannot be null: {', '.join(nulled)}")
        _reject_duplicate_resources(self.grants)
        return self


class GrantsPayload(CamelModel):
    """Body of the grant replace/add endpoints."""

    grants: List[GrantInput]


class GrantResponse(CamelModel):
    # The resolved resource record, or the bare id when it no longer exists.
    resource_id: Union[ResourceResponse, UUID]
    actions: List[GrantAction]


class RoleResponse(CamelModel):
    id: UUID
    name: str
    slug: str
    status: RoleStatus
    description: str
    grants: List[GrantResponse]
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)
