"""Method lookup: user registrations and the authenticator registry.

Method identifiers are dotted type names (``acme.mfa.Totp``). When they travel
in a URL path segment the dots are replaced by dashes, so identifiers must not
contain dashes themselves.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from .exceptions import MethodNotRegisteredError, UnknownAuthenticatorError

if TYPE_CHECKING:
    from .models import MethodRegistration, User
    from .ports import IAuthenticator

logger = logging.getLogger("mfa_login.registry")

_SEPARATOR = "."
_URL_SEPARATOR = "-"


def to_url_segment(method_id: str) -> str:
    """Make a method identifier safe for use as a URL path segment."""
    return method_id.replace(_SEPARATOR, _URL_SEPARATOR)


def from_url_segment(segment: str) -> str:
    """Reverse :func:`to_url_segment`."""
    return segment.replace(_URL_SEPARATOR, _SEPARATOR)


def resolve_method(user: User, method_id: str | None) -> MethodRegistration:
    """Find the user's registration for a method.

    Registrations are scanned in the order they were stored and the first
    exact match wins.

    Args:
        user: The user whose registrations are searched.
        method_id: Requested method identifier (already converted back from
            its URL form), or None when neither the request nor the user's
            default names one.

    Returns:
        The matching MethodRegistration.

    Raises:
        MethodNotRegisteredError: No registration matches. The user's default
            method pointer is stale or the method was never enrolled.
    """
    if method_id:
        for candidate in user.methods:
            if candidate.method_class_name == method_id:
                return candidate

    logger.error(
        "User %s has no registration for method %r (registered: %s)",
        user.id,
        method_id,
        user.registered_method_ids(),
    )
    raise MethodNotRegisteredError(user.id, method_id)


class AuthenticatorRegistry:
    """Maps method type identifiers to authenticator instances.

    Example:
        ```python
        registry = AuthenticatorRegistry()
        registry.register("acme.mfa.Totp", TotpAuthenticator(...))

        authenticator = registry.get("acme.mfa.Totp")
        challenge = await authenticator.start(store)
        ```
    """

    def __init__(
        self, authenticators: dict[str, IAuthenticator] | None = None
    ) -> None:
        self._authenticators: dict[str, IAuthenticator] = {}
        for method_id, authenticator in (authenticators or {}).items():
            self.register(method_id, authenticator)

    def register(self, method_id: str, authenticator: IAuthenticator) -> None:
        """Register the authenticator for a method type.

        Args:
            method_id: Method type identifier.
            authenticator: Implementation of IAuthenticator.

        Raises:
            ValueError: If the identifier is empty or contains a dash.
        """
        if not method_id:
            raise ValueError("Method identifier must not be empty")
        if _URL_SEPARATOR in method_id:
            raise ValueError(
                f"Method identifier {method_id!r} must not contain "
                f"{_URL_SEPARATOR!r}"
            )
        if method_id in self._authenticators:
            logger.warning("Replacing authenticator for method %s", method_id)
        self._authenticators[method_id] = authenticator

    def get(self, method_id: str) -> IAuthenticator:
        """Get the authenticator for a method type.

        Raises:
            UnknownAuthenticatorError: Nothing is registered for the method.
        """
        try:
            return self._authenticators[method_id]
        except KeyError:
            raise UnknownAuthenticatorError(method_id) from None

    @property
    def method_ids(self) -> list[str]:
        return list(self._authenticators)

    def __contains__(self, method_id: object) -> bool:
        return method_id in self._authenticators

    def __len__(self) -> int:
        return len(self._authenticators)


__all__: list[str] = [
    "AuthenticatorRegistry",
    "resolve_method",
    "to_url_segment",
    "from_url_segment",
]
