"""
Handler options and their per-request resolution.

Options can be provided as a GraphQLOptions, a mapping with the same keys,
or a callable returning either of those (or an awaitable of them):

    graphql_http(GraphQLOptions(schema=schema, graphiql=True))
    graphql_http({"schema": schema, "rootValue": root})
    graphql_http(lambda request, response, context: {"schema": pick(request)})
"""

from __future__ import annotations

import inspect
import logging
from dataclasses import dataclass, field, fields
from typing import TYPE_CHECKING, Any, Awaitable, Callable, Mapping, Optional, Sequence, Type, Union

from graphql import ASTValidationRule, GraphQLSchema, specified_rules

from ..settings import get_settings
from .errors import ConfigurationError

if TYPE_CHECKING:
    from fastapi import Request

    from ..runtime.context import RequestContext, ResponseState


logger = logging.getLogger(__name__)

# camelCase spellings accepted in option mappings
OPTION_ALIASES = {
    "rootValue": "root_value",
    "formatError": "format_error",
    "validationRules": "validation_rules",
}


@dataclass
class GraphQLOptions:
    """
    Configuration resolved once per request.

    Attributes:
        schema: Executable schema (required)
        context: Value passed to resolvers as ``info.context``. When left as
            None the handler passes a RequestContext holding the request and
            the response state.
        root_value: Root value for the executed operation
        pretty: Indent JSON responses with 2 spaces
        graphiql: Serve GraphiQL to browsers that prefer HTML
        format_error: Replaces the default error formatter
        extensions: Hook returning a mapping attached as ``extensions``
        validation_rules: Rules appended to graphql-core's specified rules
    """
    schema: Optional[GraphQLSchema]
    context: Any = None
    root_value: Any = None
    pretty: bool = field(default_factory=lambda: get_settings().pretty)
    graphiql: bool = field(default_factory=lambda: get_settings().graphiql)
    format_error: Optional[Callable[[Exception], Any]] = None
    extensions: Optional[Callable[..., Any]] = None
    validation_rules: Sequence[Type[ASTValidationRule]] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "GraphQLOptions":
        """Create options from a mapping, accepting camelCase keys."""
        known = {f.name for f in fields(cls)}
        kwargs: dict[str, Any] = {}
        for key, value in data.items():
            name = OPTION_ALIASES.get(key, key)
            if name not in known:
                logger.warning(f"Ignoring unknown GraphQL option: {key}")
                continue
            kwargs[name] = value
        kwargs.setdefault("schema", None)
        if kwargs.get("validation_rules") is None:
            kwargs["validation_rules"] = []
        return cls(**kwargs)

    @property
    def rules(self) -> list[Type[ASTValidationRule]]:
        """Specified rules followed by the caller's rules, in caller order."""
        return [*specified_rules, *self.validation_rules]


OptionsData = Union[GraphQLOptions, Mapping[str, Any]]
OptionsFactory = Callable[
    ["Request", "ResponseState", "RequestContext"],
    Union[OptionsData, Awaitable[OptionsData]],
]
Options = Union[OptionsData, OptionsFactory]


async def resolve_options(
    options: Options,
    request: "Request",
    response: "ResponseState",
    context: "RequestContext",
) -> GraphQLOptions:
    """
    Resolve options for a single request.

    Raises:
        ConfigurationError: If the options are not an options object or
            do not contain a schema
    """
    data = options(request, response, context) if callable(options) else options
    if inspect.isawaitable(data):
        data = await data

    if isinstance(data, GraphQLOptions):
        resolved = data
    elif isinstance(data, Mapping):
        resolved = GraphQLOptions.from_dict(data)
    else:
        raise ConfigurationError(
            "GraphQL middleware option function must return an options object "
            "or an awaitable which will be resolved to an options object."
        )

    if not isinstance(resolved.schema, GraphQLSchema):
        raise ConfigurationError("GraphQL middleware options must contain a schema.")

    return resolved
