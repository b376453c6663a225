"""Classification of store values into a closed set of kinds."""

from __future__ import annotations

from enum import Enum
from typing import Any


class ValueKind(Enum):
    PRIMITIVE = "primitive"
    ARRAY = "array"
    OBJECT = "object"
    STORE = "store"
    LAZY = "lazy"


def classify(value: Any, store_type: type) -> ValueKind:
    """Return the kind of *value*.

    Only plain ``dict`` instances count as objects; instances of other classes
    fall into ``PRIMITIVE`` and are stored untouched.  Any non-store callable
    is a lazy computation.
    """
    if isinstance(value, store_type):
        return ValueKind.STORE
    if isinstance(value, dict):
        return ValueKind.OBJECT
    if isinstance(value, (list, tuple)):
        return ValueKind.ARRAY
    if callable(value):
        return ValueKind.LAZY
    return ValueKind.PRIMITIVE
