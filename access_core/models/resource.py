"""Resource model: a protected entity type that grants point at."""

from __future__ import annotations

import uuid

from sqlalchemy import String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from access_core.models.base import Base, TimestampMixin
from access_core.models.types import GUID


class Resource(TimestampMixin, Base):
    """Registry entry such as ``role``, ``image`` or ``page``."""

    __tablename__ = "resources"
    __table_args__ = (
        UniqueConstraint("name", name="uq_resources_name"),
        UniqueConstraint("slug", name="uq_resources_slug"),
    )

    id: Mapped[uuid.UUID] = mapped_column(GUID(), primary_key=True, default=uuid.uuid4)
    name: Mapped[str] = mapped_column(String(length=120), nullable=False)
    slug: Mapped[str] = mapped_column(String(length=120), nullable=False)
    description: Mapped[str] = mapped_column(String(length=1024), nullable=False)
