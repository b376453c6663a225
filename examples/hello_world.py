"""
restricted_store — Hello World

A user store anyone may edit, and an admin store that only exposes what it
declares readable.  Paths reach through one store into another.
"""

import logging

from restricted_store import PermissionDeniedError, Store, restrict, restricted

# ─── Your entities (plain classes that extend Store) ───


class UserStore(Store):
    name: str = restricted("rw", default="John Doe")


class AdminStore(Store):
    default_policy = "none"

    user: UserStore = restricted("r")
    name: str = restricted(default="Root")

    def __init__(self, user: UserStore) -> None:
        super().__init__()
        self.user = user

    def get_credentials(self) -> Store:
        credentials = Store()
        credentials.write_entries({"username": "user1", "password": "hunter2"})
        return credentials


restrict("r")(AdminStore, "get_credentials")


def main():
    logging.basicConfig(level=logging.DEBUG, format="  %(name)s: %(message)s")

    # ──────────────────────────────────────
    #  1. Plain writes and nested paths
    # ──────────────────────────────────────
    user = UserStore()
    user.write("profile", {"city": "Paris", "languages": ["en", "fr"]})
    print(f"user:name           -> {user.read('name')}")
    print(f"user:profile:city   -> {user.read('profile:city')}")

    # ──────────────────────────────────────
    #  2. The admin only sees what it declares
    # ──────────────────────────────────────
    admin = AdminStore(user)
    print(f"admin:user:name     -> {admin.read('user:name')}")
    print(f"admin:credentials   -> {admin.read('get_credentials:username')}")
    print(f"admin.entries()     -> {sorted(admin.entries())}")

    try:
        admin.read("name")
    except PermissionDeniedError as e:
        print(f"  [DENIED] {e}")

    # ──────────────────────────────────────
    #  3. Writes reach through readable branches
    # ──────────────────────────────────────
    admin.write("user:profile:city", "Lyon")
    print(f"user:profile:city   -> {user.read('profile:city')}")

    print(f"user.export()       -> {user.export()}")


if __name__ == "__main__":
    main()
