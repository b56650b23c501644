"""
Response presentation - GraphiQL page or JSON payload.
"""

from __future__ import annotations

import json
from typing import Any, Callable, Optional

from fastapi.responses import Response

from ..core.params import GraphQLParams
from ..core.result import ExecutionOutcome
from ..graphiql import render_graphiql
from .context import ResponseState


HTML_MEDIA_TYPE = "text/html"
JSON_MEDIA_TYPE = "application/json"


def finalize_outcome(
    outcome: Optional[ExecutionOutcome],
    response: ResponseState,
    format_error_fn: Optional[Callable[[Any], Any]] = None,
) -> None:
    """
    Apply status and formatting rules shared by success and failure paths.

    Explicit ``null`` data indicates a runtime execution error: the status
    becomes 500 while the errors stay in the payload.
    """
    if outcome is None:
        return
    if outcome.has_null_data:
        response.status_code = 500
    outcome.format_errors(format_error_fn)


def serialize_json(payload: dict[str, Any], pretty: bool = False) -> str:
    """Serialize a payload, indenting with 2 spaces when pretty."""
    if pretty:
        return json.dumps(payload, indent=2, ensure_ascii=False, default=str)
    return json.dumps(payload, separators=(",", ":"), ensure_ascii=False, default=str)


def present(
    outcome: Optional[ExecutionOutcome],
    response: ResponseState,
    *,
    params: GraphQLParams,
    show_graphiql: bool,
    pretty: bool = False,
) -> Response:
    """
    Build the HTTP response.

    GraphiQL is served when it can be displayed and no outcome was
    produced; otherwise the outcome is returned as JSON.
    """
    if show_graphiql and outcome is None:
        content = render_graphiql(
            query=params.query,
            variables=params.variables,
            operation_name=params.operation_name,
            result=None,
        )
        response.media_type = HTML_MEDIA_TYPE
    else:
        payload = outcome.to_dict() if outcome is not None else None
        content = serialize_json(payload, pretty)
        response.media_type = JSON_MEDIA_TYPE

    return Response(
        content=content,
        status_code=response.status_code,
        headers=response.headers,
        media_type=response.media_type,
    )
