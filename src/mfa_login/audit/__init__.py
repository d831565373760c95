"""Audit module for MFA login events.

This module provides audit event types, factory functions, and an
in-memory store for tracking the progress of logins through MFA.
"""

from __future__ import annotations

from .events import (
    AuthAuditEvent,
    AuthEventType,
    login_success_event,
    mfa_challenge_started_event,
    mfa_failed_event,
    mfa_pending_event,
    mfa_verified_event,
)
from .memory import InMemoryAuthAuditStore

__all__: list[str] = [
    # Event types and classes
    "AuthEventType",
    "AuthAuditEvent",
    # Event factory functions
    "mfa_pending_event",
    "mfa_challenge_started_event",
    "mfa_verified_event",
    "mfa_failed_event",
    "login_success_event",
    # Store implementations
    "InMemoryAuthAuditStore",
]
