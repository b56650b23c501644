"""
Process-wide defaults for GraphQL HTTP handlers.

Values are read from the environment:

    GRAPHQL_HTTP_PRETTY=true
    GRAPHQL_HTTP_GRAPHIQL=true
    GRAPHQL_HTTP_GRAPHIQL_VERSION=3.0.6

They only seed defaults; options passed to a handler always win.
"""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class HTTPSettings(BaseSettings):
    """Environment-backed defaults."""

    model_config = SettingsConfigDict(env_prefix="GRAPHQL_HTTP_", extra="ignore")

    pretty: bool = Field(default=False, description="Indent JSON responses")
    graphiql: bool = Field(default=False, description="Serve GraphiQL to browsers")
    graphiql_version: str = Field(
        default="3.0.6",
        min_length=1,
        description="GraphiQL release loaded from the CDN",
    )


@lru_cache
def get_settings() -> HTTPSettings:
    """Get cached settings instance."""
    return HTTPSettings()
