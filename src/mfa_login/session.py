"""Session-scoped state of a login that is waiting on MFA.

The store is a plain in-memory object built from the request's session
mapping at the start of a request and written back with ``save``. Any
``MutableMapping`` works as the session: Starlette's ``request.session``,
a server-side session backed by Redis, or a dict in tests.

Session keys (with the default namespace):
- ``MFALogin.member``: id of the user who passed primary login
- ``MFALogin.method``: method currently being attempted
- ``MFALogin.successful_methods``: methods verified so far, in order
- ``MFALogin.additional_data``: login form data deferred until final login
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import Mapping, MutableMapping

    from .models import User
    from .ports import IUserRepository

logger = logging.getLogger("mfa_login.session")

DEFAULT_NAMESPACE = "MFALogin"

MEMBER = "member"
METHOD = "method"
SUCCESSFUL_METHODS = "successful_methods"
ADDITIONAL_DATA = "additional_data"

_FIELDS = (MEMBER, METHOD, SUCCESSFUL_METHODS, ADDITIONAL_DATA)


class MfaSessionStore:
    """Holds the MFA progress of one browser session.

    Example:
        ```python
        store = MfaSessionStore.load(request.session, users)
        user = await store.get_member()
        if user is None:
            return Redirect("/login")

        store.set_method("acme.mfa.Totp")
        store.save(request.session)
        ```
    """

    def __init__(
        self,
        users: IUserRepository,
        *,
        namespace: str = DEFAULT_NAMESPACE,
        member_id: str | None = None,
        method: str | None = None,
        successful_methods: list[str] | None = None,
        additional_data: dict[str, Any] | None = None,
    ) -> None:
        self.users = users
        self.namespace = namespace
        self._member_id = member_id
        self._method = method
        self._successful_methods: list[str] = list(successful_methods or [])
        self._additional_data = additional_data

    @classmethod
    def load(
        cls,
        session: Mapping[str, Any],
        users: IUserRepository,
        *,
        namespace: str = DEFAULT_NAMESPACE,
    ) -> MfaSessionStore:
        """Build a store from whatever the session currently holds.

        Values of the wrong shape (tampered or left over from an older
        version) are dropped and treated as absent.

        Args:
            session: The request's session mapping.
            users: Repository used to re-resolve the bound user.
            namespace: Session key prefix.

        Returns:
            A store, empty if no login is in progress.
        """
        member_id = session.get(_key(namespace, MEMBER))
        if member_id is not None and not isinstance(member_id, str):
            logger.warning("Ignoring malformed MFA member id in session")
            member_id = None

        method = session.get(_key(namespace, METHOD))
        if method is not None and not isinstance(method, str):
            logger.warning("Ignoring malformed MFA method in session")
            method = None

        successful = session.get(_key(namespace, SUCCESSFUL_METHODS))
        if successful is not None and not (
            isinstance(successful, list) and all(isinstance(m, str) for m in successful)
        ):
            logger.warning("Ignoring malformed MFA successful methods in session")
            successful = None

        additional = session.get(_key(namespace, ADDITIONAL_DATA))
        if additional is not None and not isinstance(additional, dict):
            logger.warning("Ignoring malformed MFA additional data in session")
            additional = None

        return cls(
            users,
            namespace=namespace,
            member_id=member_id or None,
            method=method or None,
            successful_methods=successful,
            additional_data=additional,
        )

    # ── member ───────────────────────────────────────────────────

    @property
    def member_id(self) -> str | None:
        return self._member_id

    def set_member(self, user: User) -> None:
        """Bind the user who passed primary login. Only the id is kept."""
        self._member_id = user.id

    async def get_member(self) -> User | None:
        """Resolve the bound user.

        Returns:
            The user, or None if nobody is bound or the user no longer exists.
        """
        if not self._member_id:
            return None
        user = await self.users.get_by_id(self._member_id)
        if user is None:
            logger.info("MFA session refers to unknown user %s", self._member_id)
        return user

    # ── method ───────────────────────────────────────────────────

    def set_method(self, method: str) -> None:
        self._method = method

    def get_method(self) -> str | None:
        return self._method

    # ── successful methods ───────────────────────────────────────

    def add_successful_method(self, method: str) -> None:
        """Record a passed verification. Repeats are kept."""
        self._successful_methods.append(method)

    @property
    def successful_methods(self) -> tuple[str, ...]:
        return tuple(self._successful_methods)

    # ── additional data ──────────────────────────────────────────

    def set_additional_data(self, data: Mapping[str, Any] | None) -> None:
        self._additional_data = dict(data) if data else None

    def get_additional_data(self) -> dict[str, Any] | None:
        return dict(self._additional_data) if self._additional_data else None

    # ── persistence ──────────────────────────────────────────────

    def to_dict(self) -> dict[str, Any]:
        """Session values keyed by field name. Absent fields map to None."""
        return {
            MEMBER: self._member_id,
            METHOD: self._method,
            SUCCESSFUL_METHODS: list(self._successful_methods) or None,
            ADDITIONAL_DATA: dict(self._additional_data)
            if self._additional_data
            else None,
        }

    def save(self, session: MutableMapping[str, Any]) -> None:
        """Write every field to the session in one pass.

        Args:
            session: The request's session mapping.
        """
        for field, value in self.to_dict().items():
            key = _key(self.namespace, field)
            if value is None:
                session.pop(key, None)
            else:
                session[key] = value

    @staticmethod
    def clear(
        session: MutableMapping[str, Any], namespace: str = DEFAULT_NAMESPACE
    ) -> None:
        """Remove all MFA keys from the session.

        Args:
            session: The request's session mapping.
            namespace: Session key prefix.
        """
        for field in _FIELDS:
            session.pop(_key(namespace, field), None)


def _key(namespace: str, field: str) -> str:
    return f"{namespace}.{field}"


__all__: list[str] = ["MfaSessionStore", "DEFAULT_NAMESPACE"]
