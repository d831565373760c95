"""MFA login orchestration.

Extends a single-factor login with one or more verification steps. The
orchestrator is stateless: everything it knows about a login in progress is
read from the session at the start of a request and written back before the
request ends.

Flow:
    1. ``handle_primary_login``: primary credentials accepted, user bound
       to the session, client sent to method selection.
    2. ``list_methods``: which methods the user can pick from.
    3. ``start_method``: a method is chosen and its challenge issued.
    4. ``verify_method``: the proof is checked. Until enough methods have
       passed, the client goes back to step 2; after that the base login
       flow finishes the login and the MFA state is cleared.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any
from urllib.parse import urlparse

from .audit.events import (
    login_success_event,
    mfa_challenge_started_event,
    mfa_failed_event,
    mfa_pending_event,
    mfa_verified_event,
)
from .config import MfaLoginConfig
from .outcomes import Deferred, Proceed, Redirect
from .registry import from_url_segment, resolve_method, to_url_segment
from .session import MfaSessionStore

if TYPE_CHECKING:
    from collections.abc import Mapping, MutableMapping

    from .audit.events import AuthAuditEvent
    from .models import User
    from .ports import IAuthAuditStore, IPrimaryLoginFlow, IUserRepository
    from .registry import AuthenticatorRegistry

logger = logging.getLogger("mfa_login.orchestrator")


class MfaLoginOrchestrator:
    """Drives a login through its MFA steps.

    Example:
        ```python
        orchestrator = MfaLoginOrchestrator(
            users=SqlUserRepository(db),
            authenticators=AuthenticatorRegistry({"acme.mfa.Totp": totp}),
            login_flow=PasswordLoginFlow(db),
            config=MfaLoginConfig(required_mfa_methods=2),
        )

        outcome = await orchestrator.handle_primary_login(session, form_data)
        ```
    """

    def __init__(
        self,
        *,
        users: IUserRepository,
        authenticators: AuthenticatorRegistry,
        login_flow: IPrimaryLoginFlow,
        config: MfaLoginConfig | None = None,
        audit_store: IAuthAuditStore | None = None,
    ) -> None:
        """Initialize the orchestrator.

        Args:
            users: Resolves the user id kept in session.
            authenticators: Authenticator per method type identifier.
            login_flow: The single-factor login flow being extended.
            config: Flow configuration (defaults to MfaLoginConfig()).
            audit_store: Where to record audit events (optional).
        """
        self.users = users
        self.authenticators = authenticators
        self.login_flow = login_flow
        self.config = config or MfaLoginConfig()
        self.audit_store = audit_store

    def get_session_store(self, session: Mapping[str, Any]) -> MfaSessionStore:
        """Load the MFA state held in a request's session."""
        return MfaSessionStore.load(
            session, self.users, namespace=self.config.session_namespace
        )

    async def handle_primary_login(
        self, session: MutableMapping[str, Any], data: Mapping[str, Any]
    ) -> Redirect | Deferred:
        """Take over after the primary credential check.

        Args:
            session: The request's session mapping.
            data: Submitted login form data.

        Returns:
            Redirect to method selection, or Deferred when the credentials
            were rejected and the base flow should report the failure.
        """
        user = await self.login_flow.check_login(data)
        if user is None:
            return Deferred()

        # A new primary login always starts from a clean slate
        MfaSessionStore.clear(session, self.config.session_namespace)

        store = MfaSessionStore(self.users, namespace=self.config.session_namespace)
        store.set_member(user)
        store.set_additional_data(self._deferrable_data(data))
        store.save(session)

        logger.info("Primary login accepted for user %s, MFA required", user.id)
        await self._audit(mfa_pending_event(user.id))
        return Redirect(self.config.mfa_path)

    async def list_methods(self, session: MutableMapping[str, Any]) -> Redirect | Proceed:
        """List the methods the bound user can verify with.

        Returns:
            Proceed with ``{"methods": {<url-safe id>: <lead-in label>}}``,
            or Redirect to the login page when no login is in progress.
        """
        user = await self.get_session_store(session).get_member()
        if user is None:
            logger.debug("Method list requested without a pending login")
            return Redirect(self.config.login_path)

        # Every registered method is offered, the default is not flagged
        labels: dict[str, str] = {}
        for registration in user.methods:
            authenticator = self.authenticators.get(registration.method_class_name)
            labels[to_url_segment(registration.method_class_name)] = (
                authenticator.lead_in_label()
            )
        return Proceed({"methods": labels})

    async def start_method(
        self, session: MutableMapping[str, Any], method: str | None = None
    ) -> Redirect | Proceed:
        """Begin verification with a method.

        Args:
            session: The request's session mapping.
            method: URL-safe method identifier, or None for the user's default.

        Returns:
            Proceed with the authenticator's challenge data, or Redirect to
            the login page when no login is in progress.

        Raises:
            MethodNotRegisteredError: The method is not registered to the user.
            UnknownAuthenticatorError: No authenticator handles the method.
        """
        store = self.get_session_store(session)
        user = await store.get_member()
        if user is None:
            logger.debug("Method start requested without a pending login")
            return Redirect(self.config.login_path)

        requested = from_url_segment(method) if method else user.default_method
        registration = resolve_method(user, requested)
        authenticator = self.authenticators.get(registration.method_class_name)

        store.set_method(registration.method_class_name)
        challenge = await authenticator.start(store)
        store.save(session)

        logger.info(
            "Started MFA method %s for user %s", registration.method_class_name, user.id
        )
        await self._audit(
            mfa_challenge_started_event(user.id, registration.method_class_name)
        )
        return Proceed(dict(challenge or {}))

    async def verify_method(
        self, session: MutableMapping[str, Any], request_data: Mapping[str, Any]
    ) -> Redirect:
        """Check the proof for the method in progress.

        Args:
            session: The request's session mapping.
            request_data: Fields submitted by the client.

        Returns:
            Redirect to method selection (no method started, proof rejected,
            or more methods required), to the login page (no login in
            progress), or to the post-login destination once complete.

        Raises:
            MethodNotRegisteredError: The method in session is no longer
                registered to the user.
            UnknownAuthenticatorError: No authenticator handles the method.
        """
        store = self.get_session_store(session)
        method = store.get_method()
        if not method:
            logger.debug("Verification submitted before any method was started")
            return Redirect(self.config.mfa_path)

        user = await store.get_member()
        if user is None:
            logger.debug("Verification submitted without a pending login")
            return Redirect(self.config.login_path)

        registration = resolve_method(user, method)
        authenticator = self.authenticators.get(registration.method_class_name)

        if not await authenticator.verify(request_data, store):
            logger.info("MFA method %s rejected for user %s", method, user.id)
            await self._audit(mfa_failed_event(user.id, method))
            return Redirect(self.config.mfa_path)

        store.add_successful_method(method)
        store.save(session)
        await self._audit(mfa_verified_event(user.id, method))

        if not self.is_login_complete(store):
            logger.info(
                "MFA method %s verified for user %s (%d of %d)",
                method,
                user.id,
                len(store.successful_methods),
                self.config.required_mfa_methods,
            )
            return Redirect(self.config.mfa_path)

        return await self._complete_login(session, store, user)

    def is_login_complete(self, store: MfaSessionStore) -> bool:
        """Whether enough methods have been verified."""
        successful = store.successful_methods
        if not successful:
            return False
        return len(successful) >= self.config.required_mfa_methods

    async def _complete_login(
        self,
        session: MutableMapping[str, Any],
        store: MfaSessionStore,
        user: User,
    ) -> Redirect:
        data = store.get_additional_data()
        await self.login_flow.perform_login(user, data, session)
        MfaSessionStore.clear(session, self.config.session_namespace)

        logger.info(
            "Login completed for user %s after %d MFA verification(s)",
            user.id,
            len(store.successful_methods),
        )
        await self._audit(login_success_event(user.id, store.successful_methods))
        return Redirect(self._redirect_target(data))

    def _deferrable_data(self, data: Mapping[str, Any]) -> dict[str, Any]:
        # Form field names vary in case between login forms ("Password")
        sensitive = {name.casefold() for name in self.config.sensitive_fields}
        return {
            key: value
            for key, value in data.items()
            if str(key).casefold() not in sensitive
        }

    def _redirect_target(self, data: Mapping[str, Any] | None) -> str:
        back_url = (data or {}).get(self.config.back_url_field)
        if not back_url:
            return self.config.default_redirect
        if not is_local_url(back_url):
            logger.warning("Ignoring non-local BackURL %r", back_url)
            return self.config.default_redirect
        return str(back_url)

    async def _audit(self, event: AuthAuditEvent) -> None:
        if self.audit_store is not None:
            await self.audit_store.record(event)


def is_local_url(url: object) -> bool:
    """Whether ``url`` is a path on this site (no scheme, no host)."""
    if not isinstance(url, str) or not url.startswith("/"):
        return False
    if url.startswith("//") or "\\" in url:
        return False
    parsed = urlparse(url)
    return not parsed.scheme and not parsed.netloc


__all__: list[str] = ["MfaLoginOrchestrator", "is_local_url"]
