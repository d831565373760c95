"""Turning flow outcomes and faults into HTTP responses."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from starlette.responses import JSONResponse, RedirectResponse, Response

from ...exceptions import MfaConfigurationError
from ...outcomes import Proceed, Redirect

if TYPE_CHECKING:
    from fastapi import FastAPI, Request

    from ...outcomes import FlowOutcome

logger = logging.getLogger("mfa_login.contrib.fastapi")


def to_response(outcome: FlowOutcome) -> Response:
    """Convert a Redirect or Proceed outcome to a response.

    Redirects use 303 so that a POST is followed by a GET.

    Raises:
        TypeError: For outcomes that have no generic response (Deferred).
    """
    if isinstance(outcome, Redirect):
        return RedirectResponse(outcome.location, status_code=303)
    if isinstance(outcome, Proceed):
        return JSONResponse(outcome.data)
    raise TypeError(f"Cannot convert {type(outcome).__name__} to a response")


async def mfa_configuration_error_handler(
    request: Request, exc: Exception
) -> Response:
    """Report a configuration fault as a 500 after logging it."""
    logger.error(
        "MFA configuration error on %s %s",
        request.method,
        request.url.path,
        exc_info=exc,
    )
    return JSONResponse(
        status_code=500,
        content={"detail": "MFA configuration error"},
    )


def install_exception_handlers(app: FastAPI) -> None:
    """Register the configuration fault handler on an application."""
    app.add_exception_handler(MfaConfigurationError, mfa_configuration_error_handler)


__all__: list[str] = [
    "to_response",
    "mfa_configuration_error_handler",
    "install_exception_handlers",
]
