"""FastAPI dependencies for the MFA login router."""

from __future__ import annotations

from collections.abc import MutableMapping
from typing import Any

from fastapi import Request


def get_session(request: Request) -> MutableMapping[str, Any]:
    """Get the request's session mapping.

    Raises:
        RuntimeError: If Starlette's SessionMiddleware is not installed.

    Example:
        ```python
        from starlette.middleware.sessions import SessionMiddleware

        app.add_middleware(SessionMiddleware, secret_key=settings.secret_key)
        ```
    """
    if "session" not in request.scope:
        raise RuntimeError(
            "The MFA login router needs a session. "
            "Install starlette.middleware.sessions.SessionMiddleware."
        )
    return request.session


async def read_request_data(request: Request) -> dict[str, Any]:
    """Collect submitted fields from a JSON or form body.

    Returns:
        Flat dictionary of submitted values. Malformed bodies and file
        uploads are ignored.
    """
    content_type = request.headers.get("content-type", "")
    if content_type.startswith("application/json"):
        try:
            body = await request.json()
        except ValueError:
            return {}
        return body if isinstance(body, dict) else {}

    form = await request.form()
    return {key: value for key, value in form.items() if isinstance(value, str)}


__all__: list[str] = ["get_session", "read_request_data"]
