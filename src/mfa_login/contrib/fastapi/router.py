"""FastAPI router exposing the MFA login endpoints.

Paths come from the orchestrator's MfaLoginConfig so that the redirects the
orchestrator issues always point at routes of this router.
"""

from __future__ import annotations

from collections.abc import MutableMapping
from typing import TYPE_CHECKING, Any

from fastapi import APIRouter, Depends, HTTPException, Request
from starlette.responses import Response

from ...outcomes import Deferred
from .dependencies import get_session, read_request_data
from .responses import to_response

if TYPE_CHECKING:
    from ...orchestrator import MfaLoginOrchestrator


def create_mfa_router(orchestrator: MfaLoginOrchestrator) -> APIRouter:
    """Create the router for the MFA login flow.

    Routes (with the default configuration):
        - ``POST /login``: primary login, handed over to MFA on success
        - ``GET|POST /login/mfa``: list methods
        - ``GET|POST /login/mfa/start[/{method}]``: start a method
        - ``GET|POST /login/mfa/verify``: verify the started method (a GET
          carries no proof)

    Example:
        ```python
        from fastapi import FastAPI
        from starlette.middleware.sessions import SessionMiddleware
        from mfa_login.contrib.fastapi import (
            create_mfa_router,
            install_exception_handlers,
        )

        app = FastAPI()
        app.add_middleware(SessionMiddleware, secret_key="...")
        app.include_router(create_mfa_router(orchestrator))
        install_exception_handlers(app)
        ```
    """
    config = orchestrator.config
    router = APIRouter(tags=["mfa"])

    @router.post(config.login_path)
    async def login(
        request: Request,
        session: MutableMapping[str, Any] = Depends(get_session),  # noqa: B008
    ) -> Response:
        data = await read_request_data(request)
        outcome = await orchestrator.handle_primary_login(session, data)
        if isinstance(outcome, Deferred):
            raise HTTPException(status_code=401, detail="Invalid credentials")
        return to_response(outcome)

    @router.api_route(config.mfa_path, methods=["GET", "POST"])
    async def mfa(
        session: MutableMapping[str, Any] = Depends(get_session),  # noqa: B008
    ) -> Response:
        return to_response(await orchestrator.list_methods(session))

    @router.api_route(f"{config.mfa_path}/start", methods=["GET", "POST"])
    @router.api_route(f"{config.mfa_path}/start/{{method}}", methods=["GET", "POST"])
    async def start(
        method: str | None = None,
        session: MutableMapping[str, Any] = Depends(get_session),  # noqa: B008
    ) -> Response:
        return to_response(await orchestrator.start_method(session, method))

    @router.api_route(f"{config.mfa_path}/verify", methods=["GET", "POST"])
    async def verify(
        request: Request,
        session: MutableMapping[str, Any] = Depends(get_session),  # noqa: B008
    ) -> Response:
        # Proofs are only read from a POST body, never from the URL
        data = await read_request_data(request) if request.method == "POST" else {}
        return to_response(await orchestrator.verify_method(session, data))

    return router


__all__: list[str] = ["create_mfa_router"]
