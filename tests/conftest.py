"""Shared test fixtures."""

import pytest

from restricted_store import Store, registry, restrict, restricted


class UserStore(Store):
    name: str = restricted("rw", default="John Doe")


class AdminStore(Store):
    default_policy = "none"

    user: UserStore = restricted("r")
    name: str = restricted(default="John Doe")

    def __init__(self, user: UserStore) -> None:
        super().__init__()
        self.user = user

    def get_credentials(self) -> Store:
        credentials = Store()
        credentials.write_entries({"username": "user1", "password": "hunter2"})
        return credentials


restrict("r")(AdminStore, "get_credentials")


@pytest.fixture(autouse=True)
def isolated_registry():
    """Undo any permission declared during a test."""
    saved = registry.snapshot()
    yield registry
    registry.restore(saved)


@pytest.fixture
def store():
    return Store()


@pytest.fixture
def user_store():
    return UserStore()


@pytest.fixture
def admin_store(user_store):
    return AdminStore(user_store)
