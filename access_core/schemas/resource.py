"""Resource registry schemas."""

from __future__ import annotations

from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import ConfigDict, Field, model_validator

from access_core.schemas.common import CamelModel

SLUG_PATTERN = r"^[a-z0-9]+(?:[-_][a-z0-9]+)*$"


class ResourceCreate(CamelModel):
    name: str = Field(..., min_length=1, max_length=120)
    slug: str = Field(..., min_length=1, max_length=120, pattern=SLUG_PATTERN)
    description: str = Field(..., min_length=1, max_length=1024)


class ResourceUpdate(CamelModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=120)
    slug: Optional[str] = Field(default=None, min_length=1, max_length=120, pattern=SLUG_PATTERN)
    description: Optional[str] = Field(default=None, min_length=1, max_length=1024)

    @model_validator(mode="after")
    def reject_explicit_nulls(self) -> "ResourceUpdate":
        nulled = sorted(field for field in self.model_fields_set if getattr(self, field) is None)
        if nulled:
            raise ValueError(f"Fields cannot be null: {', '.join(nulled)}")
        return self


class ResourceResponse(CamelModel):
    id: UUID
    name: str
    slug: str
    description: str
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)
