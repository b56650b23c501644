"""
API module - Starlette / FastAPI endpoints.
"""

from __future__ import annotations

from .handler import ALLOWED_METHODS, GraphQLApp, create_graphql_router, graphql_http

__all__ = [
    "graphql_http",
    "create_graphql_router",
    "ALLOWED_METHODS",
    "GraphQLApp",
]
