"""Execution pipeline stages and outcome handling."""

import asyncio

import pytest
from graphql import GraphQLError, GraphQLSyntaxError

from graphql_http import GraphQLOptions, GraphQLParams
from graphql_http.core.errors import BadRequest, MethodNotAllowed
from graphql_http.core.result import UNSET, ExecutionOutcome, format_error
from graphql_http.runtime.context import ResponseState
from graphql_http.runtime.pipeline import (
    DeferToExplorer,
    ExecutionPipeline,
    Proceed,
    Reject,
    apply_extensions,
)
from graphql_http.runtime.presenter import finalize_outcome, serialize_json


def make_pipeline(schema, query=None, *, method="POST", show_graphiql=False, **params):
    return ExecutionPipeline(
        GraphQLOptions(schema=schema),
        GraphQLParams(query=query, **params),
        method=method,
        show_graphiql=show_graphiql,
        context_value=None,
    )


class TestStages:
    def test_missing_query_raises(self, schema):
        with pytest.raises(BadRequest):
            make_pipeline(schema).check_query()

    def test_missing_query_defers_to_graphiql(self, schema):
        assert isinstance(make_pipeline(schema, show_graphiql=True).check_query(), DeferToExplorer)

    def test_parse_rejects_syntax_error(self, schema):
        stage = make_pipeline(schema, "{").parse_document(Proceed())

        assert isinstance(stage, Reject)
        assert stage.status_code == 400
        assert stage.outcome.data is UNSET
        assert isinstance(stage.outcome.errors[0], GraphQLSyntaxError)

    def test_validate_keeps_document(self, schema):
        pipeline = make_pipeline(schema, "{ nope }")
        parsed = pipeline.parse_document(Proceed())

        stage = pipeline.validate_document(parsed)

        assert isinstance(stage, Reject)
        assert stage.document is parsed.document

    def test_post_skips_method_check(self, schema):
        pipeline = make_pipeline(schema, "mutation { write }")
        parsed = pipeline.parse_document(Proceed())

        assert pipeline.check_method(parsed) is parsed

    def test_get_mutation_raises(self, schema):
        pipeline = make_pipeline(schema, "mutation { write }", method="GET")
        parsed = pipeline.parse_document(Proceed())

        with pytest.raises(MethodNotAllowed) as exc_info:
            pipeline.check_method(parsed)

        assert exc_info.value.headers == {"Allow": "POST"}

    def test_get_mutation_defers_with_graphiql(self, schema):
        pipeline = make_pipeline(schema, "mutation { write }", method="GET", show_graphiql=True)
        parsed = pipeline.parse_document(Proceed())

        stage = pipeline.check_method(parsed)

        assert isinstance(stage, DeferToExplorer)
        assert stage.document is parsed.document


class TestRun:
    def test_executes(self, schema):
        result = asyncio.run(make_pipeline(schema, "{ hello }").run())

        assert result.status_code is None
        assert result.outcome.to_dict() == {"data": {"hello": "Hello, world!"}}

    def test_deferred_has_no_outcome(self, schema, recorder):
        pipeline = make_pipeline(schema, "mutation { write }", method="GET", show_graphiql=True)

        result = asyncio.run(pipeline.run())

        assert result.deferred
        assert recorder.writes == 0

    def test_context_error(self, schema):
        pipeline = make_pipeline(schema, "{ hello }", operation_name="Missing")

        result = asyncio.run(pipeline.run())

        assert result.status_code == 400
        assert "data" not in result.outcome.to_dict()
        assert result.outcome.errors[0].message == "Unknown operation named 'Missing'."

    def test_extensions_skipped_when_deferred(self, schema):
        pipeline = make_pipeline(schema, show_graphiql=True)
        result = asyncio.run(pipeline.run())
        calls = []

        asyncio.run(apply_extensions(calls.append, result, pipeline.params))

        assert calls == []


class TestOutcome:
    def test_null_data_forces_server_error(self):
        response = ResponseState()

        finalize_outcome(ExecutionOutcome(data=None), response)

        assert response.status_code == 500

    def test_absent_data_keeps_status(self):
        response = ResponseState(status_code=400)

        finalize_outcome(ExecutionOutcome.from_errors([BadRequest("bad")]), response)

        assert response.status_code == 400

    def test_errors_formatted_in_order(self):
        outcome = ExecutionOutcome.from_errors([GraphQLError("first"), ValueError("second")])

        outcome.format_errors()

        assert outcome.errors == [{"message": "first"}, {"message": "second"}]

    def test_null_data_serialized(self):
        assert ExecutionOutcome(data=None).to_dict() == {"data": None}

    def test_format_error_unnamed_exception(self):
        assert format_error(RuntimeError()) == {"message": "RuntimeError"}

    def test_serialize_json_falls_back_to_str(self):
        assert serialize_json({"data": {"value": object}}) == '{"data":{"value":"<class \'object\'>"}}'
