"""Tagged results returned by the orchestrator.

Each request handled by the flow ends in exactly one of these. The HTTP
layer turns them into responses; tests can assert on them directly.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Union


@dataclass(frozen=True)
class Redirect:
    """Send the client elsewhere.

    Attributes:
        location: Target path or URL.
    """

    location: str


@dataclass(frozen=True)
class Proceed:
    """Answer the current request with a JSON body.

    Attributes:
        data: JSON-serializable response payload.
    """

    data: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class Deferred:
    """Primary credentials were rejected; the base login flow handles it."""


FlowOutcome = Union[Redirect, Proceed, Deferred]


__all__: list[str] = ["Redirect", "Proceed", "Deferred", "FlowOutcome"]
