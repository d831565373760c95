"""mfa-login

Multi-factor authentication as an extension of an existing login flow.

After the primary credentials are accepted, the user is held in a pending
state until a configurable number of verification methods have passed. Only
then is the base login flow asked to finish the login.

Usage:
    ```python
    from mfa_login import (
        AuthenticatorRegistry,
        MfaLoginConfig,
        MfaLoginOrchestrator,
        Redirect,
    )

    orchestrator = MfaLoginOrchestrator(
        users=user_repository,
        authenticators=AuthenticatorRegistry({"acme.mfa.Totp": totp}),
        login_flow=password_login_flow,
        config=MfaLoginConfig(required_mfa_methods=1),
    )

    outcome = await orchestrator.verify_method(session, {"code": "123456"})
    if isinstance(outcome, Redirect):
        ...
    ```

Submodules:
    - `audit`: Audit events and in-memory audit store
    - `contrib.fastapi`: FastAPI router, session dependency and error handler
"""

from __future__ import annotations

# Audit
from .audit import (
    AuthAuditEvent,
    AuthEventType,
    InMemoryAuthAuditStore,
    login_success_event,
    mfa_challenge_started_event,
    mfa_failed_event,
    mfa_pending_event,
    mfa_verified_event,
)

# Configuration
from .config import MfaLoginConfig

# Exceptions
from .exceptions import (
    MethodNotRegisteredError,
    MfaConfigurationError,
    MfaLoginError,
    UnknownAuthenticatorError,
)
from .memory import InMemoryUserRepository
from .models import MethodRegistration, User

# Orchestration
from .orchestrator import MfaLoginOrchestrator, is_local_url
from .outcomes import Deferred, FlowOutcome, Proceed, Redirect

# Ports
from .ports import IAuthAuditStore, IAuthenticator, IPrimaryLoginFlow, IUserRepository
from .registry import (
    AuthenticatorRegistry,
    from_url_segment,
    resolve_method,
    to_url_segment,
)
from .session import MfaSessionStore

__all__: list[str] = [
    # Orchestration
    "MfaLoginOrchestrator",
    "MfaSessionStore",
    "MfaLoginConfig",
    "is_local_url",
    # Outcomes
    "Redirect",
    "Proceed",
    "Deferred",
    "FlowOutcome",
    # Models
    "User",
    "MethodRegistration",
    # Registry
    "AuthenticatorRegistry",
    "resolve_method",
    "to_url_segment",
    "from_url_segment",
    # Ports
    "IAuthenticator",
    "IUserRepository",
    "IPrimaryLoginFlow",
    "IAuthAuditStore",
    "InMemoryUserRepository",
    # Exceptions
    "MfaLoginError",
    "MfaConfigurationError",
    "MethodNotRegisteredError",
    "UnknownAuthenticatorError",
    # Audit
    "AuthEventType",
    "AuthAuditEvent",
    "InMemoryAuthAuditStore",
    "mfa_pending_event",
    "mfa_challenge_started_event",
    "mfa_verified_event",
    "mfa_failed_event",
    "login_success_event",
]

__version__ = "0.1.0"
