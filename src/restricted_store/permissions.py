"""Permission levels and the grants they confer."""

from __future__ import annotations

from typing import Literal, cast

from restricted_store.exceptions import PermissionConfigError

Permission = Literal["r", "w", "rw", "none"]

PERMISSIONS: frozenset[str] = frozenset({"r", "w", "rw", "none"})
READ_GRANTS: frozenset[str] = frozenset({"r", "rw"})
WRITE_GRANTS: frozenset[str] = frozenset({"w", "rw"})


def can_read(permission: Permission) -> bool:
    return permission in READ_GRANTS


def can_write(permission: Permission) -> bool:
    return permission in WRITE_GRANTS


def validate_permission(value: str) -> Permission:
    """Return *value* as a :data:`Permission`, or raise ``PermissionConfigError``."""
    if value not in PERMISSIONS:
        allowed = ", ".join(sorted(PERMISSIONS))
        raise PermissionConfigError(f"unknown permission {value!r}. Allowed values: {allowed}")
    return cast(Permission, value)
