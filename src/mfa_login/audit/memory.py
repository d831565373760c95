"""In-memory audit store for testing and development."""

from __future__ import annotations

from collections import defaultdict
from datetime import datetime, timedelta, timezone
from itertools import islice
from typing import TYPE_CHECKING

from ..ports import IAuthAuditStore
from .events import AuthEventType

if TYPE_CHECKING:
    from .events import AuthAuditEvent


class InMemoryAuthAuditStore(IAuthAuditStore):
    """Keeps each user's MFA history in a list, oldest first.

    Events are lost on restart.

    Example:
        ```python
        store = InMemoryAuthAuditStore()
        orchestrator = MfaLoginOrchestrator(..., audit_store=store)

        rejected = await store.get_recent_failures(
            principal_id="user-123", method="acme.mfa.Totp"
        )
        ```
    """

    def __init__(self) -> None:
        self._history: dict[str, list[AuthAuditEvent]] = defaultdict(list)

    async def record(self, event: AuthAuditEvent) -> None:
        self._history[event.principal_id].append(event)

    async def get_events(
        self,
        principal_id: str,
        *,
        event_types: list[AuthEventType] | None = None,
        method: str | None = None,
        limit: int = 100,
    ) -> list[AuthAuditEvent]:
        """Get a user's events, most recent first."""
        matching = (
            e
            for e in reversed(self._history.get(principal_id, []))
            if (not event_types or e.event_type in event_types)
            and (method is None or e.method == method)
        )
        return list(islice(matching, limit))

    async def get_recent_failures(
        self,
        *,
        principal_id: str | None = None,
        method: str | None = None,
        minutes: int = 15,
        limit: int = 100,
    ) -> list[AuthAuditEvent]:
        """Get rejected proofs inside the time window, most recent first.

        Args:
            principal_id: Only this user's rejections.
            method: Only rejections of this method.
            minutes: Time window in minutes.
            limit: Maximum number of events to return.
        """
        cutoff = datetime.now(timezone.utc) - timedelta(minutes=minutes)
        if principal_id is not None:
            candidates = self._history.get(principal_id, [])
        else:
            candidates = sorted(
                (e for history in self._history.values() for e in history),
                key=lambda e: e.timestamp,
            )

        rejected = (
            e
            for e in reversed(candidates)
            if e.event_type is AuthEventType.MFA_FAILED
            and e.timestamp >= cutoff
            and (method is None or e.method == method)
        )
        return list(islice(rejected, limit))


__all__: list[str] = ["InMemoryAuthAuditStore"]
