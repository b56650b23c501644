"""Shared fixtures: a small graphql-core schema and a client factory."""

import asyncio

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from graphql import (
    GraphQLArgument,
    GraphQLField,
    GraphQLInt,
    GraphQLNonNull,
    GraphQLObjectType,
    GraphQLSchema,
    GraphQLString,
)

from graphql_http import create_graphql_router
from graphql_http.settings import get_settings


class Recorder:
    """Counts mutation calls so tests can assert nothing was executed."""

    def __init__(self):
        self.writes = 0


def _raise(message):
    raise ValueError(message)


async def _resolve_async_hello(root, info):
    await asyncio.sleep(0)
    return "Hello, async!"


def build_schema(recorder):
    def resolve_write(root, info, value):
        recorder.writes += 1
        return value

    query = GraphQLObjectType(
        "Query",
        {
            "hello": GraphQLField(
                GraphQLString,
                args={"name": GraphQLArgument(GraphQLString, default_value="world")},
                resolve=lambda root, info, name: f"Hello, {name}!",
            ),
            "asyncHello": GraphQLField(GraphQLString, resolve=_resolve_async_hello),
            "count": GraphQLField(
                GraphQLInt,
                args={"n": GraphQLArgument(GraphQLNonNull(GraphQLInt))},
                resolve=lambda root, info, n: n,
            ),
            "thrower": GraphQLField(
                GraphQLString,
                resolve=lambda root, info: _raise("Throws!"),
            ),
            "nonNullThrower": GraphQLField(
                GraphQLNonNull(GraphQLString),
                resolve=lambda root, info: _raise("Throws!"),
            ),
            "contextType": GraphQLField(
                GraphQLString,
                resolve=lambda root, info: type(info.context).__name__,
            ),
            "contextValue": GraphQLField(
                GraphQLString,
                resolve=lambda root, info: str(info.context),
            ),
            "rootValue": GraphQLField(
                GraphQLString,
                resolve=lambda root, info: str(root),
            ),
            "forbidden": GraphQLField(GraphQLString, resolve=lambda root, info: "secret"),
        },
    )
    mutation = GraphQLObjectType(
        "Mutation",
        {
            "write": GraphQLField(
                GraphQLString,
                args={"value": GraphQLArgument(GraphQLString, default_value="ok")},
                resolve=resolve_write,
            ),
        },
    )
    return GraphQLSchema(query=query, mutation=mutation)


@pytest.fixture(autouse=True)
def clear_settings_cache():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def recorder():
    return Recorder()


@pytest.fixture
def schema(recorder):
    return build_schema(recorder)


@pytest.fixture
def make_client():
    def factory(options, path="/graphql"):
        app = FastAPI()
        app.include_router(create_graphql_router(options, path=path))
        return TestClient(app, raise_server_exceptions=False)

    return factory


@pytest.fixture
def client(make_client, schema):
    return make_client({"schema": schema})
