"""Field declarations — attach permissions to ``Store`` attributes.

Two forms write into the same registry:

* ``restricted(...)`` in a class body, processed when the class is created::

      class UserStore(Store):
          name: str = restricted("rw", default="John Doe")

* ``restrict(...)`` at run time, for re-declaring a field or seeding an
  explicit key::

      restrict("r")(UserStore, "name")
      restrict("rw", key="custom:path:key")
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from restricted_store.permissions import Permission, validate_permission
from restricted_store.registry import PermissionRegistry, registry

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RestrictedField:
    """Class-body marker produced by :func:`restricted`.

    Attributes:
        permission:      Level registered for the field.
        default:         Initial instance value.
        default_factory: Zero-argument callable producing the initial value;
                         takes precedence over ``default``.
    """

    permission: Permission
    default: Any = None
    default_factory: Callable[[], Any] | None = None

    def initial_value(self) -> Any:
        if self.default_factory is not None:
            return self.default_factory()
        return self.default


def _is_shared_state(value: Any) -> bool:
    return (
        type(value).__hash__ is None
        or callable(value)
        or hasattr(type(value), "_restricted_fields")
    )


def restricted(
    permission: str = "none",
    *,
    default: Any = None,
    default_factory: Callable[[], Any] | None = None,
) -> Any:
    """Declare a permission-restricted field inside a ``Store`` subclass body.

    ``default`` is shared by every instance, so mutable values, callables
    (lazy values included) and stores are rejected; pass a
    ``default_factory`` to build one per instance.
    """
    if default is not None and default_factory is not None:
        raise ValueError("cannot specify both default and default_factory")
    if _is_shared_state(default):
        raise ValueError(
            f"{type(default).__name__} default would be shared between instances: "
            "use default_factory"
        )
    return RestrictedField(validate_permission(permission), default, default_factory)


def collect_fields(
    cls: type,
    target_registry: PermissionRegistry | None = None,
) -> dict[str, RestrictedField]:
    """Register and strip every :class:`RestrictedField` declared directly on *cls*.

    Returns the declared fields by attribute name.  The markers are removed
    from the class so attribute lookups fall through to instance values.
    """
    reg = registry if target_registry is None else target_registry
    declared: dict[str, RestrictedField] = {}
    for name, value in list(vars(cls).items()):
        if isinstance(value, RestrictedField):
            reg.register(value.permission, cls.__name__, name)
            delattr(cls, name)
            declared[name] = value
    return declared


def _class_name(target: object) -> str | None:
    if isinstance(target, type):
        return target.__name__
    if hasattr(type(target), "_restricted_fields"):
        return type(target).__name__
    return None


def restrict(
    permission: str = "none",
    key: str | None = None,
    *,
    target_registry: PermissionRegistry | None = None,
) -> Callable[[object, str], None]:
    """Runtime declaration.

    With *key*, the rule is registered under that key immediately and the
    returned callable does nothing.  Otherwise the returned callable registers
    ``(class name of target, field_name)``; *target* is a class or a store
    instance.  Targets without a discoverable class name are ignored.
    """
    level = validate_permission(permission)
    reg = registry if target_registry is None else target_registry

    if key is not None:
        reg.register_key(level, key)

        def noop(target: object, field_name: str) -> None:
            return None

        return noop

    def apply(target: object, field_name: str) -> None:
        class_name = _class_name(target)
        if not class_name:
            logger.debug("Ignoring %r declaration for %r: no class name", level, field_name)
            return
        reg.register(level, class_name, field_name)

    return apply
