"""Custom exceptions for the restricted_store package."""

from __future__ import annotations


class StoreError(Exception):
    """Base exception for all store-related errors."""

    def __init__(self, operation: str, detail: str = "") -> None:
        self.operation = operation
        msg = f"Store error during '{operation}'"
        if detail:
            msg += f": {detail}"
        super().__init__(msg)


class PermissionDeniedError(StoreError):
    """Raised when the resolved permission for a key does not grant the access."""

    def __init__(self, operation: str, key: str, store_name: str) -> None:
        self.key = key
        self.store_name = store_name
        super().__init__(operation, f"{operation} access to '{key}' denied on {store_name}")


class InvalidPathError(StoreError):
    """Raised when a path contains an empty segment."""

    def __init__(self, operation: str, path: str) -> None:
        self.path = path
        super().__init__(operation, f"invalid path {path!r}: empty segment")


class PermissionConfigError(StoreError):
    """Raised when a permission value or rule configuration is invalid."""

    def __init__(self, message: str) -> None:
        super().__init__("configure", message)
