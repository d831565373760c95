"""Audit events for the MFA login flow.

Every transition of a login through MFA can be recorded as an
MfaAuditEvent: primary login handed over to MFA, a method started, a method
verified or rejected, and the final login.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum


class AuthEventType(Enum):
    """Steps of a login through MFA.

    Event naming follows the pattern: `auth.<resource>.<action>`
    """

    # Login events
    LOGIN_SUCCESS = "auth.login.success"

    # MFA events
    MFA_PENDING = "auth.mfa.pending"
    MFA_CHALLENGE_STARTED = "auth.mfa.challenge_started"
    MFA_VERIFIED = "auth.mfa.verified"
    MFA_FAILED = "auth.mfa.failed"


@dataclass(frozen=True)
class AuthAuditEvent:
    """One step of one user's login.

    Attributes:
        event_type: What happened.
        principal_id: The user going through the login.
        method: Method the step concerns (started, verified or rejected).
        methods: Methods verified before the login completed, in order.
        timestamp: When the step happened (UTC).
        success: False only for a rejected proof.
        error_code: Why the step failed, set for failures only.
    """

    event_type: AuthEventType
    principal_id: str
    method: str | None = None
    methods: tuple[str, ...] = ()
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    success: bool = True
    error_code: str | None = None

    def __post_init__(self) -> None:
        if not self.success and not self.error_code:
            object.__setattr__(self, "error_code", "UNKNOWN_ERROR")


# ═══════════════════════════════════════════════════════════════
# EVENT FACTORY FUNCTIONS
# ═══════════════════════════════════════════════════════════════


def mfa_pending_event(principal_id: str) -> AuthAuditEvent:
    """Primary credentials accepted, MFA now required."""
    return AuthAuditEvent(AuthEventType.MFA_PENDING, principal_id)


def mfa_challenge_started_event(principal_id: str, method: str) -> AuthAuditEvent:
    return AuthAuditEvent(
        AuthEventType.MFA_CHALLENGE_STARTED, principal_id, method=method
    )


def mfa_verified_event(principal_id: str, method: str) -> AuthAuditEvent:
    return AuthAuditEvent(AuthEventType.MFA_VERIFIED, principal_id, method=method)


def mfa_failed_event(
    principal_id: str, method: str, *, error_code: str = "MFA_REJECTED"
) -> AuthAuditEvent:
    """A submitted proof was rejected by the method's authenticator."""
    return AuthAuditEvent(
        AuthEventType.MFA_FAILED,
        principal_id,
        method=method,
        success=False,
        error_code=error_code,
    )


def login_success_event(
    principal_id: str, methods: tuple[str, ...] | list[str]
) -> AuthAuditEvent:
    """Enough methods passed and the base login flow finished the login."""
    return AuthAuditEvent(
        AuthEventType.LOGIN_SUCCESS, principal_id, methods=tuple(methods)
    )


__all__: list[str] = [
    "AuthEventType",
    "AuthAuditEvent",
    "mfa_pending_event",
    "mfa_challenge_started_event",
    "mfa_verified_event",
    "mfa_failed_event",
    "login_success_event",
]
