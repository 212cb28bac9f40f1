"""Safe executor module.

Exports the execution wrapper and the failure classification types.
"""
from __future__ import annotations

from magicline.executor.executor import Handler, SafeExecutor, SafeHandler, safe_execute
from magicline.executor.failures import (
    AggregateFailure,
    Failure,
    FailureKind,
    GenericFailure,
    InvalidWorkspaceError,
    WorkspaceFailure,
    classify_failure,
    report_failure,
)

__all__ = [
    "safe_execute",
    "SafeExecutor",
    "Handler",
    "SafeHandler",
    "InvalidWorkspaceError",
    "FailureKind",
    "Failure",
    "WorkspaceFailure",
    "AggregateFailure",
    "GenericFailure",
    "classify_failure",
    "report_failure",
]
