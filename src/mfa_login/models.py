"""User and method registration value objects.

Both are owned by the application's user store. The MFA flow only reads them.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class ValueObject(BaseModel):
    """Immutable base for the read-only records consumed by the flow.

    Equality is structural (all fields compared).
    """

    model_config = ConfigDict(frozen=True)


class MethodRegistration(ValueObject):
    """A single verification method a user has enrolled.

    Attributes:
        user_id: Owner of the registration.
        method_class_name: Type identifier of the authenticator, e.g.
            ``"acme.mfa.TotpAuthenticator"``.
    """

    user_id: str
    method_class_name: str


class User(ValueObject):
    """The user attempting to log in.

    Attributes:
        id: Stable identifier, the only thing kept in session.
        username: Human-readable name for logs and audit events.
        default_method: Method used when a client starts without naming one.
        methods: Registrations in the order they were enrolled.

    Example:
        ```python
        user = User(
            id="u1",
            username="jane@example.com",
            default_method="acme.mfa.Totp",
            methods=(
                MethodRegistration(user_id="u1", method_class_name="acme.mfa.Totp"),
                MethodRegistration(user_id="u1", method_class_name="acme.mfa.Backup"),
            ),
        )
        ```
    """

    id: str
    username: str = ""
    default_method: str | None = None
    methods: tuple[MethodRegistration, ...] = ()

    def registered_method_ids(self) -> list[str]:
        """Method identifiers in registration order."""
        return [m.method_class_name for m in self.methods]


__all__: list[str] = ["ValueObject", "MethodRegistration", "User"]
