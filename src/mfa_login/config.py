"""Configuration for the MFA login flow."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class MfaLoginConfig:
    """MFA login configuration.

    Attributes:
        required_mfa_methods: How many successful verifications a user needs
            before they are considered logged in.
        session_namespace: Prefix for every session key owned by the flow.
        login_path: Where to send clients that have no login in progress.
        mfa_path: The method-selection endpoint.
        default_redirect: Destination after login when no usable BackURL
            was submitted with the primary credentials.
        back_url_field: Login form field holding the post-login destination.
        sensitive_fields: Login form fields never written to the session,
            matched without regard to case.
    """

    required_mfa_methods: int = 1
    session_namespace: str = "MFALogin"
    login_path: str = "/login"
    mfa_path: str = "/login/mfa"
    default_redirect: str = "/"
    back_url_field: str = "BackURL"
    sensitive_fields: tuple[str, ...] = ("password",)

    def __post_init__(self) -> None:
        """Validate configuration values."""
        if (
            isinstance(self.required_mfa_methods, bool)
            or not isinstance(self.required_mfa_methods, int)
            or self.required_mfa_methods < 1
        ):
            raise ValueError(
                "required_mfa_methods must be a positive integer, "
                f"got {self.required_mfa_methods!r}"
            )
        if not self.session_namespace:
            raise ValueError("session_namespace must not be empty")


__all__: list[str] = ["MfaLoginConfig"]
