"""MFA login ports (protocols).

These protocols define the collaborators the orchestrator relies on but does
not implement: verification mechanisms, the user store, the primary
(single-factor) login flow, and audit storage. All ports use
@runtime_checkable for isinstance checks.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Mapping, MutableMapping

    from .audit.events import AuthAuditEvent, AuthEventType
    from .models import User
    from .session import MfaSessionStore


# ═══════════════════════════════════════════════════════════════
# AUTHENTICATOR PORT
# ═══════════════════════════════════════════════════════════════


@runtime_checkable
class IAuthenticator(Protocol):
    """Protocol for a single verification mechanism.

    One implementation exists per method type (TOTP, hardware key, push
    approval, ...). Implementations are looked up by type identifier in an
    AuthenticatorRegistry. How the proof is produced and checked is entirely
    up to the implementation.
    """

    async def start(self, store: MfaSessionStore) -> dict[str, Any]:
        """Begin verification for the user bound to ``store``.

        Args:
            store: Session store of the login in progress.

        Returns:
            JSON-serializable challenge data for the client.
        """
        ...

    async def verify(
        self, request_data: Mapping[str, Any], store: MfaSessionStore
    ) -> bool:
        """Check the proof submitted by the client.

        Args:
            request_data: Fields submitted with the verification request.
            store: Session store of the login in progress.

        Returns:
            True if the proof is valid.
        """
        ...

    def lead_in_label(self) -> str:
        """Human-readable prompt shown when the user picks a method."""
        ...


# ═══════════════════════════════════════════════════════════════
# USER REPOSITORY PORT
# ═══════════════════════════════════════════════════════════════


@runtime_checkable
class IUserRepository(Protocol):
    """Protocol for resolving users by identifier.

    This is a PORT that must be implemented by the application's
    infrastructure layer. Only the user id is kept in session; the full
    record is looked up again on every request.
    """

    async def get_by_id(self, user_id: str) -> User | None:
        """Get a user with their method registrations.

        Args:
            user_id: The user identifier.

        Returns:
            User or None if not found.
        """
        ...


# ═══════════════════════════════════════════════════════════════
# PRIMARY LOGIN FLOW PORT
# ═══════════════════════════════════════════════════════════════


@runtime_checkable
class IPrimaryLoginFlow(Protocol):
    """Protocol for the single-factor login flow being extended.

    The orchestrator asks it to check the primary credentials and, once
    enough methods have been verified, to finish the login.
    """

    async def check_login(self, data: Mapping[str, Any]) -> User | None:
        """Validate primary credentials.

        Args:
            data: Submitted login form data.

        Returns:
            The authenticated user, or None if the credentials are invalid.
        """
        ...

    async def perform_login(
        self,
        user: User,
        data: Mapping[str, Any] | None,
        session: MutableMapping[str, Any],
    ) -> None:
        """Finalize the login (mark the session as authenticated).

        Args:
            user: The fully verified user.
            data: Login form data captured at primary login, if any.
            session: The request's session mapping.
        """
        ...


# ═══════════════════════════════════════════════════════════════
# AUDIT PORT
# ═══════════════════════════════════════════════════════════════


@runtime_checkable
class IAuthAuditStore(Protocol):
    """Protocol for authentication audit event storage.

    Audit stores keep the history of logins through MFA, so that repeated
    rejections of a method can be spotted and acted upon.
    """

    async def record(self, event: AuthAuditEvent) -> None:
        """Record an audit event.

        Args:
            event: The audit event to record.
        """
        ...

    async def get_events(
        self,
        principal_id: str,
        *,
        event_types: list[AuthEventType] | None = None,
        method: str | None = None,
        limit: int = 100,
    ) -> list[AuthAuditEvent]:
        """Get audit events for a principal.

        Args:
            principal_id: User ID to query.
            event_types: Optional filter by event types.
            method: Optional filter by MFA method identifier.
            limit: Maximum number of events to return.

        Returns:
            List of audit events, most recent first.
        """
        ...

    async def get_recent_failures(
        self,
        *,
        principal_id: str | None = None,
        method: str | None = None,
        minutes: int = 15,
        limit: int = 100,
    ) -> list[AuthAuditEvent]:
        """Get recently rejected MFA proofs.

        Args:
            principal_id: Optional filter by principal.
            method: Optional filter by MFA method identifier.
            minutes: Time window in minutes.
            limit: Maximum number of events to return.

        Returns:
            Rejected proofs, most recent first.
        """
        ...


__all__: list[str] = [
    "IAuthenticator",
    "IUserRepository",
    "IPrimaryLoginFlow",
    "IAuthAuditStore",
]
