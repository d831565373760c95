"""Test configuration and fixtures."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

import pytest

from mfa_login import (
    AuthenticatorRegistry,
    InMemoryAuthAuditStore,
    InMemoryUserRepository,
    MethodRegistration,
    MfaLoginConfig,
    MfaLoginOrchestrator,
    User,
)

TOTP = "acme.mfa.Totp"
BACKUP = "acme.mfa.Backup"


class FakeAuthenticator:
    """Authenticator that accepts or rejects every proof as configured."""

    def __init__(
        self,
        label: str,
        *,
        accept: bool = True,
        challenge: dict[str, Any] | None = None,
    ) -> None:
        self.label = label
        self.accept = accept
        self.challenge = challenge if challenge is not None else {"sent": True}
        self.started: list[str | None] = []
        self.verified: list[dict[str, Any]] = []

    async def start(self, store: Any) -> dict[str, Any]:
        self.started.append(store.member_id)
        return dict(self.challenge)

    async def verify(self, request_data: Any, store: Any) -> bool:
        self.verified.append(dict(request_data))
        return self.accept

    def lead_in_label(self) -> str:
        return self.label


class FakeLoginFlow:
    """Password check against a fixed table; records completed logins."""

    def __init__(
        self,
        users: dict[str, tuple[str, User]],
        *,
        username_field: str = "username",
        password_field: str = "password",
    ) -> None:
        self.users = users
        self.username_field = username_field
        self.password_field = password_field
        self.logged_in: list[tuple[str, dict[str, Any] | None]] = []

    async def check_login(self, data: Any) -> User | None:
        entry = self.users.get(data.get(self.username_field, ""))
        if entry is None or entry[0] != data.get(self.password_field):
            return None
        return entry[1]

    async def perform_login(
        self, user: User, data: dict[str, Any] | None, session: Any
    ) -> None:
        self.logged_in.append((user.id, data))
        session["logged_in_user"] = user.id


@pytest.fixture
def user() -> User:
    """User U1 with registrations [TOTP, BACKUP], default TOTP."""
    return User(
        id="u1",
        username="jane@example.com",
        default_method=TOTP,
        methods=(
            MethodRegistration(user_id="u1", method_class_name=TOTP),
            MethodRegistration(user_id="u1", method_class_name=BACKUP),
        ),
    )


@pytest.fixture
def users(user: User) -> InMemoryUserRepository:
    return InMemoryUserRepository([user])


@pytest.fixture
def totp() -> FakeAuthenticator:
    return FakeAuthenticator("Verify with your authenticator app")


@pytest.fixture
def backup() -> FakeAuthenticator:
    return FakeAuthenticator("Use a backup code")


@pytest.fixture
def authenticators(
    totp: FakeAuthenticator, backup: FakeAuthenticator
) -> AuthenticatorRegistry:
    return AuthenticatorRegistry({TOTP: totp, BACKUP: backup})


@pytest.fixture
def make_login_flow(user: User) -> Callable[..., FakeLoginFlow]:
    """Build a login flow for "jane" / "s3cret" with custom field names."""

    def make(**field_names: str) -> FakeLoginFlow:
        return FakeLoginFlow({"jane": ("s3cret", user)}, **field_names)

    return make


@pytest.fixture
def login_flow(make_login_flow: Callable[..., FakeLoginFlow]) -> FakeLoginFlow:
    return make_login_flow()


@pytest.fixture
def audit_store() -> InMemoryAuthAuditStore:
    return InMemoryAuthAuditStore()


@pytest.fixture
def config() -> MfaLoginConfig:
    return MfaLoginConfig()


@pytest.fixture
def orchestrator(
    users: InMemoryUserRepository,
    authenticators: AuthenticatorRegistry,
    login_flow: FakeLoginFlow,
    config: MfaLoginConfig,
    audit_store: InMemoryAuthAuditStore,
) -> MfaLoginOrchestrator:
    return MfaLoginOrchestrator(
        users=users,
        authenticators=authenticators,
        login_flow=login_flow,
        config=config,
        audit_store=audit_store,
    )


@pytest.fixture
def session() -> dict[str, Any]:
    """A fresh, empty request session."""
    return {}
