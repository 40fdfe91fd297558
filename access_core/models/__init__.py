"""SQLAlchemy ORM models for the access core service."""

from access_core.models.base import Base  # noqa: F401
from access_core.models.grant_actions import GrantAction, PermissionScope  # noqa: F401
from access_core.models.resource import Resource  # noqa: F401
from access_core.models.role import Role, RoleStatus  # noqa: F401
from access_core.models.role_grant import RoleGrant  # noqa: F401
