"""
Minimal FastAPI app serving a graphql-core schema.

Usage:
    uvicorn example.app.main:app --reload

    curl -X POST localhost:8000/graphql \
        -H 'Content-Type: application/json' \
        -d '{"query": "{ hello(name: \\"you\\") }"}'

Open http://localhost:8000/graphql in a browser for GraphiQL.
"""

import logging

import uvicorn
from fastapi import FastAPI
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


logging.basicConfig(level=logging.INFO)

counter = {"value": 0}


def resolve_increment(root, info, by=1):
    counter["value"] += by
    return counter["value"]


schema = GraphQLSchema(
    query=GraphQLObjectType(
        "Query",
        {
            "hello": GraphQLField(
                GraphQLString,
                args={"name": GraphQLArgument(GraphQLString, default_value="world")},
                resolve=lambda root, info, name: f"Hello, {name}!",
            ),
            "counter": GraphQLField(
                GraphQLNonNull(GraphQLInt),
                resolve=lambda root, info: counter["value"],
            ),
        },
    ),
    mutation=GraphQLObjectType(
        "Mutation",
        {
            "increment": GraphQLField(
                GraphQLNonNull(GraphQLInt),
                args={"by": GraphQLArgument(GraphQLInt)},
                resolve=resolve_increment,
            ),
        },
    ),
)

app = FastAPI(title="GraphQL HTTP Example")
app.include_router(create_graphql_router({"schema": schema, "graphiql": True, "pretty": True}))


if __name__ == "__main__":
    uvicorn.run(app, host="0.0.0.0", port=8000)
