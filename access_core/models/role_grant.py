"""Grants embedded in a role."""

from __future__ import annotations

import uuid
from typing import List, Optional

from sqlalchemy import ForeignKey, Index, Integer, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from access_core.models.base import Base
from access_core.models.grant_actions import GrantAction
from access_core.models.types import GUID, JSONType


class RoleGrant(Base):
    """Binds one resource to the actions a role may perform on it.

    Rows live and die with their role. ``resource_id`` is a plain reference:
    there is no foreign key, so deleting a resource leaves the grant in place
    and ``resource`` resolves to ``None``.
    """

    __tablename__ = "role_grants"
    __table_args__ = (
        UniqueConstraint("role_id", "resource_id", name="uq_role_grants_role_resource"),
        Index("ix_role_grants_resource", "resource_id"),
    )

    id: Mapped[uuid.UUID] = mapped_column(GUID(), primary_key=True, default=uuid.uuid4)
    role_id: Mapped[uuid.UUID] = mapped_column(
        GUID(),
        ForeignKey("roles.id", ondelete="CASCADE"),
        nullable=False,
    )
    resource_id: Mapped[uuid.UUID] = mapped_column(GUID(), nullable=False)
    actions: Mapped[List[str]] = mapped_column(JSONType, default=list, nullable=False)
    position: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    role: Mapped["Role"] = relationship("Role", back_populates="grants")
    resource: Mapped[Optional["Resource"]] = relationship(
        "Resource",
        primaryjoin="foreign(RoleGrant.resource_id) == Resource.id",
        viewonly=True,
        lazy="selectin",
    )

    @property
    def granted_actions(self) -> List[GrantAction]:
        return [GrantAction(action) for action in self.actions]
