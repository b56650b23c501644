"""
Request-scoped state for GraphQL HTTP handling.

Contains the mutable response fields and the default resolver context.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from fastapi import Request


@dataclass
class ResponseState:
    """
    Mutable response fields written while a request is handled.

    Options callables receive this object and may add headers to it;
    the handler turns it into the final Starlette response.
    """
    status_code: int = 200
    headers: dict[str, str] = field(default_factory=dict)
    media_type: Optional[str] = None

    def set_header(self, name: str, value: str) -> None:
        self.headers[name] = value


@dataclass
class RequestContext:
    """
    Default value handed to resolvers as ``info.context``.

    Used when the options do not provide an explicit ``context``.
    """
    request: Request
    response: ResponseState
