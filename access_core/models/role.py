"""Role model: a named bundle of grants assigned to users."""

from __future__ import annotations

import uuid
from enum import Enum
from typing import List

from sqlalchemy import Enum as SqlEnum
from sqlalchemy import String, UniqueConstraint
from sqlalchemy.ext.orderinglist import ordering_list
from sqlalchemy.orm import Mapped, mapped_column, relationship

from access_core.models.base import Base, TimestampMixin
from access_core.models.types import GUID


class RoleStatus(str, Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"


class Role(TimestampMixin, Base):
    """Role owning an ordered list of grants."""

    __tablename__ = "roles"
    __table_args__ = (
        UniqueConstraint("name", name="uq_roles_name"),
        UniqueConstraint("slug", name="uq_roles_slug"),
    )

    id: Mapped[uuid.UUID] = mapped_column(GUID(), primary_key=True, default=uuid.uuid4)
    name: Mapped[str] = mapped_column(String(length=120), nullable=False)
    slug: Mapped[str] = mapped_column(String(length=120), nullable=False)
    status: Mapped[RoleStatus] = mapped_column(
        SqlEnum(RoleStatus, name="role_status", native_enum=False, values_callable=lambda x: [e.value for e in x]),
        default=RoleStatus.ACTIVE,
        nullable=False,
    )
    description: Mapped[str] = mapped_column(String(length=1024), nullable=False)

    grants: Mapped[List["RoleGrant"]] = relationship(
        "RoleGrant",
        back_populates="role",
        cascade="all, delete-orphan",
        order_by="RoleGrant.position",
        collection_class=ordering_list("position"),
        lazy="selectin",
    )

    def grant_for(self, resource_id: uuid.UUID) -> "RoleGrant | None":
        for grant in self.grants:
            if grant.resource_id == resource_id:
                return grant
        return None
