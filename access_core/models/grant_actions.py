"""Closed set of actions a grant may permit."""

from __future__ import annotations

from enum import Enum
from typing import Tuple

ACTION_VERBS: Tuple[str, ...] = ("create", "read", "update", "delete")


class PermissionScope(str, Enum):
    """Whose records an action applies to."""

    ANY = "any"
    OWN = "own"


class GrantAction(str, Enum):
    CREATE_ANY = "create.any"
    READ_ANY = "read.any"
    UPDATE_ANY = "update.any"
    DELETE_ANY = "delete.any"
    CREATE_OWN = "create.own"
    READ_OWN = "read.own"
    UPDATE_OWN = "update.own"
    DELETE_OWN = "delete.own"

    @property
    def verb(self) -> str:
        return self.value.split(".", 1)[0]

    @property
    def scope(self) -> PermissionScope:
        return PermissionScope(self.value.split(".", 1)[1])

    @classmethod
    def of(cls, verb: str, scope: PermissionScope | str) -> "GrantAction":
        """Build an action from its verb and scope, e.g. ``("read", "own")``."""

        return cls(f"{verb}.{PermissionScope(scope).value}")
