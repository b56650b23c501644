"""
GraphQL HTTP handler for Starlette / FastAPI.

Endpoints:
- GET  /graphql - Query operations, or GraphiQL for browsers
- POST /graphql - Any operation

Any other method answers 405 with ``Allow: GET, POST``.

Usage:
    from fastapi import FastAPI
    from graphql_http import create_graphql_router

    app = FastAPI()
    app.include_router(create_graphql_router({"schema": schema, "graphiql": True}))

Or as a plain Starlette route:
    from starlette.routing import Route

    Route("/graphql", GraphQLApp(graphql_http({"schema": schema})))
"""

from __future__ import annotations

import logging
from typing import Awaitable, Callable, Optional

from fastapi import APIRouter, Request
from fastapi.responses import Response

from ..core.errors import ConfigurationError, MethodNotAllowed
from ..core.negotiation import can_display_graphiql
from ..core.options import Options, resolve_options
from ..core.params import GraphQLParams, extract_params
from ..core.result import ExecutionOutcome, format_error
from ..runtime.context import RequestContext, ResponseState
from ..runtime.pipeline import ExecutionPipeline, apply_extensions
from ..runtime.presenter import JSON_MEDIA_TYPE, finalize_outcome, present, serialize_json


logger = logging.getLogger(__name__)

ALLOWED_METHODS = ("GET", "POST")

Endpoint = Callable[[Request], Awaitable[Response]]


def graphql_http(options: Options) -> Endpoint:
    """
    Create an endpoint serving GraphQL over HTTP.

    Args:
        options: GraphQLOptions, a mapping of options, or a callable
            ``(request, response, context)`` returning either (or an
            awaitable of either). Callables are evaluated per request.

    Returns:
        Async endpoint taking a Request and returning a Response

    Raises:
        ConfigurationError: If no options are given
    """
    if options is None:
        raise ConfigurationError("GraphQL middleware requires options.")

    async def graphql_endpoint(request: Request) -> Response:
        response = ResponseState()
        request_context = RequestContext(request=request, response=response)

        params = GraphQLParams()
        show_graphiql = False
        pretty = False
        format_error_fn = None
        outcome: Optional[ExecutionOutcome] = None

        try:
            resolved = await resolve_options(options, request, response, request_context)
            pretty = resolved.pretty
            format_error_fn = resolved.format_error
            logger.debug(f"Resolved GraphQL options for {request.method} {request.url.path}")

            if request.method not in ALLOWED_METHODS:
                raise MethodNotAllowed(
                    "GraphQL only supports GET and POST requests.",
                    allow=", ".join(ALLOWED_METHODS),
                )

            params = await extract_params(request)
            show_graphiql = resolved.graphiql and can_display_graphiql(request, params)

            context_value = resolved.context if resolved.context is not None else request_context
            pipeline = ExecutionPipeline(
                resolved,
                params,
                method=request.method,
                show_graphiql=show_graphiql,
                context_value=context_value,
            )
            result = await pipeline.run()
            if result.status_code is not None:
                response.status_code = result.status_code

            await apply_extensions(resolved.extensions, result, params)
            outcome = result.outcome
        except Exception as error:
            status_code = getattr(error, "status_code", None) or 500
            response.status_code = status_code
            for name, value in (getattr(error, "headers", None) or {}).items():
                response.set_header(name, value)

            if status_code >= 500:
                logger.error(f"GraphQL request failed: {error}", exc_info=True)
            else:
                logger.warning(f"GraphQL request rejected with {status_code}: {error}")
            outcome = ExecutionOutcome.from_errors([error])

        try:
            finalize_outcome(outcome, response, format_error_fn)
            return present(
                outcome,
                response,
                params=params,
                show_graphiql=show_graphiql,
                pretty=pretty,
            )
        except Exception as error:
            logger.error(f"GraphQL response could not be built: {error}", exc_info=True)
            return Response(
                content=serialize_json({"errors": [format_error(error)]}, pretty),
                status_code=500,
                headers=response.headers,
                media_type=JSON_MEDIA_TYPE,
            )

    return graphql_endpoint


class GraphQLApp:
    """
    ASGI app handing every HTTP method to a GraphQL endpoint.

    Routes built from a plain function accept only GET and HEAD. A route
    built from this app matches any method, so unsupported methods reach
    the handler and get a GraphQL 405.
    """

    def __init__(self, endpoint: Endpoint):
        self.endpoint = endpoint

    async def __call__(self, scope, receive, send) -> None:
        request = Request(scope, receive, send)
        response = await self.endpoint(request)
        await response(scope, receive, send)


def create_graphql_router(
    options: Options,
    *,
    path: str = "/graphql",
) -> APIRouter:
    """
    Create a FastAPI router serving GraphQL at ``path``.

    The route matches every method and is excluded from the OpenAPI schema.
    """
    router = APIRouter()
    router.add_route(path, GraphQLApp(graphql_http(options)), include_in_schema=False)
    return router
