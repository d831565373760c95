"""FastAPI integration for mfa-login."""

from .dependencies import get_session, read_request_data
from .responses import (
    install_exception_handlers,
    mfa_configuration_error_handler,
    to_response,
)
from .router import create_mfa_router

__all__: list[str] = [
    # Router
    "create_mfa_router",
    # Responses
    "to_response",
    "mfa_configuration_error_handler",
    "install_exception_handlers",
    # Dependencies
    "get_session",
    "read_request_data",
]
