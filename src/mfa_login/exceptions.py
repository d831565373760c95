"""MFA login exceptions.

Only data-integrity problems are raised. A user who wanders off the expected
path (no pending login, no started method, rejected code) gets a redirect
outcome from the orchestrator instead of an exception.
"""

from __future__ import annotations

# ═══════════════════════════════════════════════════════════════
# BASE ERROR
# ═══════════════════════════════════════════════════════════════


class MfaLoginError(Exception):
    """Root exception for the mfa-login package."""


# ═══════════════════════════════════════════════════════════════
# CONFIGURATION ERRORS
# ═══════════════════════════════════════════════════════════════


class MfaConfigurationError(MfaLoginError):
    """Raised when user records and authenticator wiring disagree.

    These errors are fatal for the request. They point at an inconsistent
    user record or application setup, not at bad user input, and must be
    surfaced as a server error.
    """


class MethodNotRegisteredError(MfaConfigurationError):
    """Raised when a requested or default method has no registration.

    Attributes:
        user_id: The user whose registrations were searched.
        method: The method identifier that could not be matched.
    """

    def __init__(self, user_id: str, method: str | None) -> None:
        self.user_id = user_id
        self.method = method
        super().__init__(
            "There is no authenticator registered for this member that matches "
            f"the requested method ({method!r})"
        )


class UnknownAuthenticatorError(MfaConfigurationError):
    """Raised when no authenticator is wired up for a method identifier.

    Attributes:
        method: The method identifier that has no authenticator.
    """

    def __init__(self, method: str) -> None:
        self.method = method
        super().__init__(f"No authenticator is registered for method {method!r}")


__all__: list[str] = [
    "MfaLoginError",
    "MfaConfigurationError",
    "MethodNotRegisteredError",
    "UnknownAuthenticatorError",
]
