"""Initial schema for resources, roles and role grants."""

from __future__ import annotations
from typing import Union, Sequence

from alembic import op
import sqlalchemy as sa
from access_core.models.types import GUID, JSONType

# revision identifiers, used by Alembic.
revision: str = "0001_initial_schema"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    role_status_ref = sa.Enum("active", "inactive", name="role_status", native_enum=False)

    op.create_table(
        "resources",
        sa.Column("id", GUID(), nullable=False),
        sa.Column("name", sa.String(length=120), nullable=False),
        sa.Column("slug", sa.String(length=120), nullable=False),
        sa.Column("description", sa.String(length=1024), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_resources")),
        sa.UniqueConstraint("name", name=op.f("uq_resources_name")),
        sa.UniqueConstraint("slug", name=op.f("uq_resources_slug")),
    )
    op.create_table(
        "roles",
        sa.Column("id", GUID(), nullable=False),
        sa.Column("name", sa.String(length=120), nullable=False),
        sa.Column("slug", sa.String(length=120), nullable=False),
        sa.Column("status", role_status_ref, nullable=False),
        sa.Column("description", sa.String(length=1024), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_roles")),
        sa.UniqueConstraint("name", name=op.f("uq_roles_name")),
        sa.UniqueConstraint("slug", name=op.f("uq_roles_slug")),
    )
    op.create_table(
        "role_grants",
        sa.Column("id", GUID(), nullable=False),
        sa.Column("role_id", GUID(), nullable=False),
        sa.Column("resource_id", GUID(), nullable=False),
        sa.Column("actions", JSONType(), nullable=False),
        sa.Column("position", sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(["role_id"], ["roles.id"], name=op.f("fk_role_grants_role_id_roles"), ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_role_grants")),
        sa.UniqueConstraint("role_id", "resource_id", name=op.f("uq_role_grants_role_resource")),
    )
    op.create_index(op.f("ix_role_grants_resource"), "role_grants", ["resource_id"], unique=False)


def downgrade() -> None:
    op.drop_index(op.f("ix_role_grants_resource"), table_name="role_grants")
    op.drop_table("role_grants")
    op.drop_table("roles")
    op.drop_table("resources")
