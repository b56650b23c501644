"""
Runtime module - request execution and response presentation.
"""

from __future__ import annotations

from .context import RequestContext, ResponseState
from .pipeline import (
    DeferToExplorer,
    ExecutionPipeline,
    ExtensionsInfo,
    PipelineResult,
    Proceed,
    Reject,
    apply_extensions,
)
from .presenter import finalize_outcome, present, serialize_json

__all__ = [
    "RequestContext",
    "ResponseState",
    "ExecutionPipeline",
    "ExtensionsInfo",
    "PipelineResult",
    "Proceed",
    "DeferToExplorer",
    "Reject",
    "apply_extensions",
    "finalize_outcome",
    "present",
    "serialize_json",
]
