"""restricted_store — hierarchical key/value stores with per-field permissions.

Values live under colon-delimited paths (``"user:profile:name"``).  Every
read and write checks the permission declared for the field on the store's
class chain, falling back to the store's ``default_policy``.
"""

from restricted_store.config import PermissionConfigSchema, PermissionRuleSchema, load_permissions
from restricted_store.exceptions import (
    InvalidPathError,
    PermissionConfigError,
    PermissionDeniedError,
    StoreError,
)
from restricted_store.fields import restrict, restricted
from restricted_store.lazy import lazy
from restricted_store.permissions import Permission
from restricted_store.registry import PermissionRegistry, build_key, registry
from restricted_store.store import Store, find_permission

__all__ = [
    "InvalidPathError",
    "Permission",
    "PermissionConfigError",
    "PermissionConfigSchema",
    "PermissionDeniedError",
    "PermissionRegistry",
    "PermissionRuleSchema",
    "Store",
    "StoreError",
    "build_key",
    "find_permission",
    "lazy",
    "load_permissions",
    "registry",
    "restrict",
    "restricted",
]
