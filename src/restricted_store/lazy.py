"""lazy — memoize a zero-argument computation."""

from __future__ import annotations

from collections.abc import Callable
from typing import TypeVar

T = TypeVar("T")


def lazy(fn: Callable[[], T]) -> Callable[[], T]:
    """Wrap *fn* so it runs on the first call only.

    Every later call returns the cached result, ``None`` included.  There is
    no expiry.
    """
    executed = False
    value: T | None = None

    def wrapper() -> T:
        nonlocal executed, value
        if not executed:
            value = fn()
            executed = True
        return value  # type: ignore[return-value]

    return wrapper
