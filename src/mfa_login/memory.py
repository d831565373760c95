"""In-memory user repository for development and testing.

WARNING: This implementation is NOT suitable for production use.
Users live in a local dictionary and are not shared between workers.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from .ports import IUserRepository

if TYPE_CHECKING:
    from .models import User


class InMemoryUserRepository(IUserRepository):
    """In-memory user repository for development and testing only.

    Example:
        ```python
        users = InMemoryUserRepository([user])
        assert await users.get_by_id(user.id) == user
        ```
    """

    def __init__(self, users: list[User] | None = None) -> None:
        self._users: dict[str, User] = {u.id: u for u in users or []}

    async def get_by_id(self, user_id: str) -> User | None:
        return self._users.get(user_id)

    def add(self, user: User) -> None:
        """Add or replace a user."""
        self._users[user.id] = user

    def remove(self, user_id: str) -> None:
        self._users.pop(user_id, None)


__all__: list[str] = ["InMemoryUserRepository"]
