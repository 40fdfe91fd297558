"""Pydantic schemas for API payloads."""

from access_core.schemas.common import Envelope, ErrorEnvelope
from access_core.schemas.resource import ResourceCreate, ResourceResponse, ResourceUpdate
from access_core.schemas.role import (
    GrantInput,
    GrantResponse,
    GrantsPayload,
    RoleCreate,
    RoleResponse,
    RoleUpdate,
)

__all__ = [
    "Envelope",
    "ErrorEnvelope",
    "GrantInput",
    "GrantResponse",
    "GrantsPayload",
    "ResourceCreate",
    "ResourceResponse",
    "ResourceUpdate",
    "RoleCreate",
    "RoleResponse",
    "RoleUpdate",
]
