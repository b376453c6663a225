"""Store — hierarchical key/value container with per-field permissions."""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any, ClassVar, Union

from restricted_store._internal.values import ValueKind, classify
from restricted_store.exceptions import InvalidPathError, PermissionDeniedError, StoreError
from restricted_store.fields import RestrictedField, collect_fields
from restricted_store.permissions import Permission, can_read, can_write, validate_permission
from restricted_store.registry import registry

logger = logging.getLogger(__name__)

JSONPrimitive = Union[str, int, float, bool, None]
StoreResult = Union["Store", JSONPrimitive]
StoreValue = Union[StoreResult, list[Any], dict[str, Any], Callable[[], StoreResult]]

# Instance attributes owned by the engine rather than by the entity.
_BOOKKEEPING = frozenset({"data", "default_policy"})


def _split_path(operation: str, path: str) -> tuple[str, str | None]:
    """Return ``(first segment, rest)``; *rest* is ``None`` for a single segment."""
    if any(not segment for segment in path.split(":")):
        raise InvalidPathError(operation, path)
    head, sep, rest = path.partition(":")
    return head, rest if sep else None


def find_permission(instance: Store, key: str) -> Permission | None:
    """Return the declared permission for *key* on *instance*'s class chain, if any."""
    return registry.resolve(instance, key, Store)


class Store:
    """A permission-checked tree of values addressed by ``"a:b:c"`` paths.

    Subclasses declare fields with :func:`~restricted_store.fields.restricted`
    and may override ``default_policy``, which applies to every key without a
    declared rule.

    Values are kept in ``data``.  A read that misses ``data`` falls back to a
    public attribute of the same name (instance field or method) and caches
    it.  Callables are lazy values: they are invoked on read and their result
    replaces them in ``data``.  Plain dicts are promoted to child stores on
    write.
    """

    default_policy: Permission = "rw"

    _restricted_fields: ClassVar[dict[str, RestrictedField]] = {}

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        cls._restricted_fields = collect_fields(cls)

    def __init__(self) -> None:
        self.default_policy = validate_permission(type(self).default_policy)
        self.data: dict[str, Any] = {}
        for name, declared in self._declared_fields().items():
            setattr(self, name, declared.initial_value())

    @classmethod
    def _declared_fields(cls) -> dict[str, RestrictedField]:
        fields: dict[str, RestrictedField] = {}
        for klass in reversed(cls.__mro__):
            fields.update(vars(klass).get("_restricted_fields", {}))
        return fields

    # ── permissions ──────────────────────────────────────────

    def _permission_for(self, key: str) -> Permission:
        return find_permission(self, key) or self.default_policy

    def allowed_to_read(self, key: str) -> bool:
        return can_read(self._permission_for(key))

    def allowed_to_write(self, key: str) -> bool:
        return can_write(self._permission_for(key))

    def _deny(self, operation: str, key: str) -> PermissionDeniedError:
        return PermissionDeniedError(operation, key, type(self).__name__)

    # ── value resolution ─────────────────────────────────────

    def _exposes(self, key: str) -> bool:
        return (
            not key.startswith("_")
            and key not in _BOOKKEEPING
            and not hasattr(Store, key)
            and hasattr(self, key)
        )

    def _resolve(self, key: str) -> Any:
        if key in self.data:
            value = self.data[key]
        elif self._exposes(key):
            value = getattr(self, key)
            self.data[key] = value
        else:
            return None

        if classify(value, Store) is ValueKind.LAZY:
            logger.debug("Materializing lazy value at %r on %s", key, type(self).__name__)
            value = value()
            self.data[key] = value
        return value

    # ── read / write ─────────────────────────────────────────

    def read(self, path: str) -> StoreResult:
        """Return the value at *path*.

        Raises:
            InvalidPathError: If *path* has an empty segment.
            PermissionDeniedError: If a segment on the way is not readable.
        """
        key, rest = _split_path("read", path)
        if not self.allowed_to_read(key):
            raise self._deny("read", key)

        value = self._resolve(key)
        if rest is not None and isinstance(value, Store):
            return value.read(rest)
        return value

    def write(self, path: str, value: StoreValue) -> StoreValue:
        """Store *value* at *path* and return what was actually stored.

        Intermediate segments need *read* permission; a missing or non-store
        intermediate is replaced by a new empty ``Store``.  The final segment
        needs write permission.  A plain dict is stored as a child ``Store``.
        """
        key, rest = _split_path("write", path)

        if rest is not None:
            if not self.allowed_to_read(key):
                raise self._deny("read", key)
            child = self._resolve(key)
            if not isinstance(child, Store):
                logger.debug("Creating intermediate store at %r on %s", key, type(self).__name__)
                child = Store()
                self.data[key] = child
            return child.write(rest, value)

        if not self.allowed_to_write(key):
            raise self._deny("write", key)

        if classify(value, Store) is ValueKind.OBJECT:
            logger.debug("Promoting dict at %r to a child store", key)
            child = Store()
            child.write_entries(value)  # type: ignore[arg-type]
            value = child
        self.data[key] = value
        return value

    def write_entries(self, entries: dict[str, Any]) -> None:
        """Write every pair of *entries* in order.

        Dict values become child stores filled recursively.  Pairs are
        committed one by one; a failure leaves earlier pairs in place.
        """
        for key, value in entries.items():
            if classify(value, Store) is ValueKind.OBJECT:
                child = Store()
                self.write(key, child)
                child.write_entries(value)
            else:
                self.write(key, value)

    # ── enumeration ──────────────────────────────────────────

    def entries(self) -> dict[str, Any]:
        """Return the readable public fields of this object and their values."""
        return {
            name: value
            for name, value in vars(self).items()
            if not name.startswith("_")
            and name not in _BOOKKEEPING
            and self.allowed_to_read(name)
        }

    def export(self) -> dict[str, Any]:
        """Return a JSON-serializable snapshot of the readable keys in ``data``.

        Lazy values are materialized, child stores are exported recursively.

        Raises:
            StoreError: If the store graph contains a cycle.
        """
        return self._export(set())

    def _export(self, visiting: set[int]) -> dict[str, Any]:
        if id(self) in visiting:
            raise StoreError("export", f"cycle detected at {type(self).__name__}")
        visiting.add(id(self))
        snapshot = {
            key: _export_value(self.read(key), visiting)
            for key in list(self.data)
            if self.allowed_to_read(key)
        }
        visiting.discard(id(self))
        return snapshot

    def __repr__(self) -> str:
        return f"{type(self).__name__}(keys={sorted(self.data)!r})"


def _export_value(value: Any, visiting: set[int]) -> Any:
    if isinstance(value, Store):
        return value._export(visiting)
    if isinstance(value, (list, tuple)):
        return [_export_value(item, visiting) for item in value]
    return value
