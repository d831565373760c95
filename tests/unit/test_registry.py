"""Tests for method lookup and the authenticator registry."""

from __future__ import annotations

import pytest

from mfa_login import (
    AuthenticatorRegistry,
    IAuthenticator,
    MethodNotRegisteredError,
    MethodRegistration,
    MfaConfigurationError,
    UnknownAuthenticatorError,
    User,
    from_url_segment,
    resolve_method,
    to_url_segment,
)

TOTP = "acme.mfa.Totp"
BACKUP = "acme.mfa.Backup"


class TestUrlSegments:
    def test_dots_become_dashes(self) -> None:
        assert to_url_segment("acme.mfa.Totp") == "acme-mfa-Totp"

    def test_dashes_become_dots(self) -> None:
        assert from_url_segment("acme-mfa-Totp") == "acme.mfa.Totp"

    def test_plain_identifier_unchanged(self) -> None:
        assert to_url_segment("totp") == "totp"
        assert from_url_segment("totp") == "totp"


class TestResolveMethod:
    def test_returns_matching_registration(self, user: User) -> None:
        registration = resolve_method(user, BACKUP)

        assert registration == MethodRegistration(user_id="u1", method_class_name=BACKUP)

    def test_first_match_wins(self) -> None:
        user = User(
            id="u1",
            methods=(
                MethodRegistration(user_id="u1", method_class_name=TOTP),
                MethodRegistration(user_id="other", method_class_name=TOTP),
            ),
        )

        assert resolve_method(user, TOTP).user_id == "u1"

    def test_missing_method_raises_configuration_error(self, user: User) -> None:
        with pytest.raises(MfaConfigurationError, match="acme.mfa.Sms"):
            resolve_method(user, "acme.mfa.Sms")

    def test_none_raises(self, user: User) -> None:
        with pytest.raises(MethodNotRegisteredError) as exc_info:
            resolve_method(user, None)
        assert exc_info.value.method is None

    def test_user_without_registrations_raises(self) -> None:
        with pytest.raises(MethodNotRegisteredError):
            resolve_method(User(id="u2", default_method=TOTP), TOTP)

    def test_match_is_exact(self, user: User) -> None:
        with pytest.raises(MethodNotRegisteredError):
            resolve_method(user, "acme.mfa.totp")


class TestAuthenticatorRegistry:
    def test_register_and_get(self, totp) -> None:
        registry = AuthenticatorRegistry()
        registry.register(TOTP, totp)

        assert registry.get(TOTP) is totp
        assert TOTP in registry
        assert len(registry) == 1
        assert registry.method_ids == [TOTP]

    def test_constructor_mapping(self, totp, backup) -> None:
        registry = AuthenticatorRegistry({TOTP: totp, BACKUP: backup})
        assert registry.method_ids == [TOTP, BACKUP]

    def test_unknown_method_raises(self) -> None:
        with pytest.raises(UnknownAuthenticatorError) as exc_info:
            AuthenticatorRegistry().get(TOTP)
        assert exc_info.value.method == TOTP

    def test_rejects_identifier_with_dash(self, totp) -> None:
        with pytest.raises(ValueError, match="must not contain"):
            AuthenticatorRegistry().register("acme-mfa", totp)

    def test_rejects_empty_identifier(self, totp) -> None:
        with pytest.raises(ValueError, match="must not be empty"):
            AuthenticatorRegistry().register("", totp)

    def test_register_replaces(self, totp, backup) -> None:
        registry = AuthenticatorRegistry({TOTP: totp})
        registry.register(TOTP, backup)
        assert registry.get(TOTP) is backup

    def test_fake_satisfies_protocol(self, totp) -> None:
        assert isinstance(totp, IAuthenticator)
