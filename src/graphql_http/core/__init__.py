"""
Core module - options, request parameters, outcomes and errors.
"""

from __future__ import annotations

from .errors import (
    BadRequest,
    ConfigurationError,
    GraphQLHTTPError,
    MethodNotAllowed,
    UnsupportedMediaType,
)
from .negotiation import can_display_graphiql, preferred_media_type
from .options import GraphQLOptions, Options, resolve_options
from .params import GraphQLParams, extract_params, parse_params
from .result import UNSET, ExecutionOutcome, format_error

__all__ = [
    # Errors
    "GraphQLHTTPError",
    "ConfigurationError",
    "BadRequest",
    "MethodNotAllowed",
    "UnsupportedMediaType",
    # Options
    "GraphQLOptions",
    "Options",
    "resolve_options",
    # Params
    "GraphQLParams",
    "extract_params",
    "parse_params",
    "can_display_graphiql",
    "preferred_media_type",
    # Outcome
    "UNSET",
    "ExecutionOutcome",
    "format_error",
]
