"""
auth/store.py -- In-memory registry of User records.

Pattern: Repository. Route and dependency code never touches the underlying
list directly.

Records live only as long as the store object. There is no persistence and
no lock: concurrent appends from the threadpool are not isolated from each
other. One store is created per application (see api.main.create_app) so
tests get isolated registries.

Layer rule: no imports from api/ or core/.
"""

from __future__ import annotations

from auth.models import User


class UserStore:
    """Insertion-ordered collection of User records.

    Usage:
        store = UserStore()
        store.append(User(name="alice", password_hash=..., email_digest=...))
        user = store.find_by_name("alice")
    """

    def __init__(self) -> None:
        self._users: list[User] = []

    def __len__(self) -> int:
        return len(self._users)

    def append(self, user: User) -> User:
        """Add a record at the end of the registry and return it.

        Names are not checked for uniqueness.
        """
        self._users.append(user)
        return user

    def find_by_name(self, name: str) -> User | None:
        """Return the first record registered under name, or None."""
        for user in self._users:
            if user.name == name:
                return user
        return None

    def all(self) -> list[User]:
        """Return a snapshot of every record in insertion order."""
        return list(self._users)
