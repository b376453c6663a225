"""PermissionRegistry — process-wide table of declared field permissions.

Entries are keyed by ``"<ClassName>:<field>"`` (see :func:`build_key`) or by
an explicit caller-supplied key.  A declaration attaches to a *class*, so a
single entry covers every instance of that class and of its subclasses that
do not redeclare the field.

The registry does no locking.  It is meant to be populated while classes are
defined and read afterwards; concurrent mutation needs external
synchronization.
"""

from __future__ import annotations

import logging

from restricted_store.permissions import Permission, validate_permission

logger = logging.getLogger(__name__)


def build_key(class_name: str, field_name: str) -> str:
    """Return the registry key for *field_name* declared on *class_name*."""
    return f"{class_name}:{field_name}"


class PermissionRegistry:
    """Mapping from registry key to :data:`Permission`."""

    def __init__(self) -> None:
        self._rules: dict[str, Permission] = {}

    # ── registration ─────────────────────────────────────────

    def register(self, permission: str, class_name: str, field_name: str) -> None:
        """Insert or replace the rule for *field_name* on *class_name*."""
        self.register_key(permission, build_key(class_name, field_name))

    def register_key(self, permission: str, key: str) -> None:
        """Insert or replace the rule stored under an explicit *key*."""
        level = validate_permission(permission)
        previous = self._rules.get(key)
        self._rules[key] = level
        if previous is not None and previous != level:
            logger.debug("Replaced permission %r: %s -> %s", key, previous, level)
        else:
            logger.debug("Registered permission %r: %s", key, level)

    # ── lookup ───────────────────────────────────────────────

    def get(self, key: str) -> Permission | None:
        return self._rules.get(key)

    def resolve(self, instance: object, field_name: str, root: type) -> Permission | None:
        """Return the most-derived rule for *field_name* on *instance*'s class chain.

        The walk starts at ``type(instance)`` and follows the MRO, checking
        *root* once and stopping there.  Returns ``None`` when no class in the
        walk declares the field.
        """
        for cls in type(instance).__mro__:
            if cls is object:
                break
            permission = self._rules.get(build_key(cls.__name__, field_name))
            if permission is not None:
                return permission
            if cls is root:
                break
        return None

    # ── introspection ────────────────────────────────────────

    def __contains__(self, key: object) -> bool:
        return key in self._rules

    def __len__(self) -> int:
        return len(self._rules)

    def clear(self) -> None:
        """Drop every rule."""
        self._rules.clear()

    def snapshot(self) -> dict[str, Permission]:
        """Return a copy of the current rule table."""
        return dict(self._rules)

    def restore(self, snapshot: dict[str, Permission]) -> None:
        """Replace the rule table with a previously taken *snapshot*."""
        self._rules = dict(snapshot)


registry = PermissionRegistry()
