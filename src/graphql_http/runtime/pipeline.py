"""
Execution pipeline for a single GraphQL request.

Stages run strictly in order and each returns a tagged result:

    Proceed(document)   -> continue with the next stage
    DeferToExplorer()   -> stop, let GraphiQL show the request instead
    Reject(outcome)     -> stop, report the outcome (syntax, validation
                           and execution context errors)

Transport errors (missing query, wrong method) are raised and handled
by the HTTP handler.

    parse -> validate -> check GET operation -> execute
"""

from __future__ import annotations

import inspect
import logging
from dataclasses import dataclass
from typing import Any, Callable, Mapping, Optional, Union

from graphql import (
    DocumentNode,
    GraphQLError,
    OperationType,
    Source,
    execute,
    get_operation_ast,
    parse,
    validate,
)
from graphql.execution import ExecutionContext

from ..core.errors import BadRequest, MethodNotAllowed
from ..core.options import GraphQLOptions
from ..core.params import GraphQLParams
from ..core.result import ExecutionOutcome


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Proceed:
    """Continue with the next stage."""
    document: Optional[DocumentNode] = None


@dataclass(frozen=True)
class DeferToExplorer:
    """Skip execution and present GraphiQL."""
    document: Optional[DocumentNode] = None


@dataclass(frozen=True)
class Reject:
    """Stop with an error-carrying outcome."""
    outcome: ExecutionOutcome
    document: Optional[DocumentNode] = None
    status_code: int = 400


StageResult = Union[Proceed, DeferToExplorer, Reject]


@dataclass
class PipelineResult:
    """
    Final state of the pipeline.

    ``outcome`` is None only when the request was deferred to GraphiQL.
    ``status_code`` is None when the transport default applies.
    """
    outcome: Optional[ExecutionOutcome]
    document: Optional[DocumentNode] = None
    status_code: Optional[int] = None

    @property
    def deferred(self) -> bool:
        return self.outcome is None


@dataclass
class ExtensionsInfo:
    """Argument passed to the ``extensions`` hook."""
    document: Optional[DocumentNode]
    variables: Optional[dict[str, Any]]
    operation_name: Optional[str]
    result: ExecutionOutcome


class ExecutionPipeline:
    """
    Runs parse, validate and execute for one request.

    Usage:
        pipeline = ExecutionPipeline(
            options, params, method="POST", show_graphiql=False, context_value=ctx
        )
        result = await pipeline.run()
    """

    def __init__(
        self,
        options: GraphQLOptions,
        params: GraphQLParams,
        *,
        method: str,
        show_graphiql: bool,
        context_value: Any,
    ):
        self.options = options
        self.params = params
        self.method = method
        self.show_graphiql = show_graphiql
        self.context_value = context_value

    async def run(self) -> PipelineResult:
        """
        Run all stages, stopping at the first one that does not proceed.

        Raises:
            BadRequest: If there is no query and GraphiQL is not shown
            MethodNotAllowed: If a GET request carries a non-query operation
        """
        stage = self.check_query()
        for step in (self.parse_document, self.validate_document, self.check_method):
            if not isinstance(stage, Proceed):
                break
            stage = step(stage)

        if isinstance(stage, Proceed):
            return await self.execute_document(stage.document)

        if isinstance(stage, DeferToExplorer):
            logger.debug("Deferring GraphQL request to GraphiQL")
            return PipelineResult(outcome=None, document=stage.document)

        return PipelineResult(
            outcome=stage.outcome,
            document=stage.document,
            status_code=stage.status_code,
        )

    def check_query(self) -> StageResult:
        if self.params.query:
            return Proceed()
        if self.show_graphiql:
            return DeferToExplorer()
        raise BadRequest("Must provide query string.")

    def parse_document(self, stage: Proceed) -> StageResult:
        source = Source(self.params.query, "GraphQL request")
        try:
            return Proceed(parse(source))
        except GraphQLError as syntax_error:
            logger.warning(f"GraphQL syntax error: {syntax_error.message}")
            return Reject(ExecutionOutcome.from_errors([syntax_error]))

    def validate_document(self, stage: Proceed) -> StageResult:
        errors = validate(self.options.schema, stage.document, self.options.rules)
        if errors:
            logger.warning(f"GraphQL validation failed with {len(errors)} error(s)")
            return Reject(ExecutionOutcome.from_errors(errors), document=stage.document)
        return stage

    def check_method(self, stage: Proceed) -> StageResult:
        """Only query operations are allowed on GET requests."""
        if self.method != "GET":
            return stage

        operation = get_operation_ast(stage.document, self.params.operation_name)
        if operation is None or operation.operation == OperationType.QUERY:
            return stage

        # Let the requester run it from GraphiQL instead
        if self.show_graphiql:
            return DeferToExplorer(stage.document)

        raise MethodNotAllowed(
            f"Can only perform a {operation.operation.value} operation from a POST request.",
            allow="POST",
        )

    async def execute_document(self, document: DocumentNode) -> PipelineResult:
        """
        Execute the document.

        Errors building the execution context (bad variables, unknown
        operation) are reported as a 400 outcome without data.
        """
        schema = self.options.schema
        try:
            context = ExecutionContext.build(
                schema,
                document,
                root_value=self.options.root_value,
                context_value=self.context_value,
                raw_variable_values=self.params.variables,
                operation_name=self.params.operation_name,
            )
            if isinstance(context, list):
                return self._context_error(document, context)

            result = execute(
                schema,
                document,
                root_value=self.options.root_value,
                context_value=self.context_value,
                variable_values=self.params.variables,
                operation_name=self.params.operation_name,
            )
        except GraphQLError as context_error:
            return self._context_error(document, [context_error])

        if inspect.isawaitable(result):
            result = await result

        logger.debug(f"Executed GraphQL operation {self.params.operation_name!r}")
        return PipelineResult(
            outcome=ExecutionOutcome.from_execution_result(result),
            document=document,
        )

    def _context_error(self, document: DocumentNode, errors: list[GraphQLError]) -> PipelineResult:
        logger.warning(f"GraphQL execution context error: {errors[0].message}")
        return PipelineResult(
            outcome=ExecutionOutcome.from_errors(errors),
            document=document,
            status_code=400,
        )


async def apply_extensions(
    extensions_fn: Optional[Callable[[ExtensionsInfo], Any]],
    result: PipelineResult,
    params: GraphQLParams,
) -> None:
    """Attach the hook's return value as ``extensions`` if it is a mapping."""
    if extensions_fn is None or result.outcome is None:
        return

    extensions = extensions_fn(
        ExtensionsInfo(
            document=result.document,
            variables=params.variables,
            operation_name=params.operation_name,
            result=result.outcome,
        )
    )
    if inspect.isawaitable(extensions):
        extensions = await extensions

    if isinstance(extensions, Mapping):
        result.outcome.extensions = dict(extensions)
