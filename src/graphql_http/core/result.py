"""
Execution outcome and error formatting.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Optional

from graphql import ExecutionResult, GraphQLError


class _Unset:
    """Marker for a ``data`` field that was never set."""

    def __repr__(self) -> str:
        return "UNSET"

    def __bool__(self) -> bool:
        return False


UNSET: Any = _Unset()


@dataclass
class ExecutionOutcome:
    """
    Result of a GraphQL request, serialized as ``{data?, errors?, extensions?}``.

    ``data`` is UNSET when the request never reached execution; an explicit
    None means execution ran and produced ``null``.
    """
    data: Any = UNSET
    errors: Optional[list[Any]] = None
    extensions: Optional[dict[str, Any]] = None

    @classmethod
    def from_errors(cls, errors: list[Any]) -> "ExecutionOutcome":
        return cls(errors=list(errors))

    @classmethod
    def from_execution_result(cls, result: ExecutionResult) -> "ExecutionOutcome":
        return cls(
            data=result.data,
            errors=list(result.errors) if result.errors else None,
            extensions=dict(result.extensions) if result.extensions else None,
        )

    @property
    def has_null_data(self) -> bool:
        return self.data is None

    def format_errors(self, formatter: Optional[Callable[[Any], Any]] = None) -> None:
        """Format errors in place, preserving order."""
        if self.errors:
            self.errors = [(formatter or format_error)(error) for error in self.errors]

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {}
        if self.data is not UNSET:
            payload["data"] = self.data
        if self.errors is not None:
            payload["errors"] = self.errors
        if self.extensions is not None:
            payload["extensions"] = self.extensions
        return payload


def format_error(error: Any) -> dict[str, Any]:
    """
    Default error formatter.

    GraphQL errors use their standard formatted shape; any other exception
    is wrapped so the client sees the same ``{message, locations?, path?}``.
    """
    if isinstance(error, dict):
        return error
    if not isinstance(error, GraphQLError):
        message = getattr(error, "message", None) or str(error) or error.__class__.__name__
        error = GraphQLError(message, original_error=error)
    return error.formatted
