"""
graphql-http - GraphQL over HTTP for Starlette and FastAPI.

Extracts query, variables and operation name from a request, runs them
through graphql-core and answers with JSON or the GraphiQL IDE.

Usage:
    from graphql_http import create_graphql_router
    from fastapi import FastAPI

    app = FastAPI()
    schema = ...  # Your graphql-core GraphQLSchema
    app.include_router(create_graphql_router({"schema": schema, "graphiql": True}))
"""

from __future__ import annotations

from .api import ALLOWED_METHODS, GraphQLApp, create_graphql_router, graphql_http
from .core import (
    UNSET,
    BadRequest,
    ConfigurationError,
    ExecutionOutcome,
    GraphQLHTTPError,
    GraphQLOptions,
    GraphQLParams,
    MethodNotAllowed,
    Options,
    UnsupportedMediaType,
    can_display_graphiql,
    extract_params,
    format_error,
    parse_params,
    preferred_media_type,
    resolve_options,
)
from .graphiql import render_graphiql
from .runtime import (
    DeferToExplorer,
    ExecutionPipeline,
    ExtensionsInfo,
    PipelineResult,
    Proceed,
    Reject,
    RequestContext,
    ResponseState,
)
from .settings import HTTPSettings, get_settings

__version__ = "0.1.0"

__all__ = [
    # API
    "graphql_http",
    "create_graphql_router",
    "ALLOWED_METHODS",
    "GraphQLApp",
    # Options
    "GraphQLOptions",
    "Options",
    "resolve_options",
    "HTTPSettings",
    "get_settings",
    # Request
    "GraphQLParams",
    "extract_params",
    "parse_params",
    "can_display_graphiql",
    "preferred_media_type",
    # Errors
    "GraphQLHTTPError",
    "ConfigurationError",
    "BadRequest",
    "MethodNotAllowed",
    "UnsupportedMediaType",
    # Runtime
    "RequestContext",
    "ResponseState",
    "ExecutionPipeline",
    "ExtensionsInfo",
    "PipelineResult",
    "Proceed",
    "DeferToExplorer",
    "Reject",
    "ExecutionOutcome",
    "UNSET",
    "format_error",
    # GraphiQL
    "render_graphiql",
]
