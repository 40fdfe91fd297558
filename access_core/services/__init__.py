"""Business logic service layer."""

from access_core.services.authorization import AuthorizationService  # noqa: F401
from access_core.services.resources import ResourceService  # noqa: F401
from access_core.services.roles import RoleService  # noqa: F401
