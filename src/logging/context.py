# src/logging/context.py — v1
"""Contextual logging support: attach commit, revision run, invocation and stage to log records."""

from __future__ import annotations

import contextvars
from dataclasses import dataclass
from typing import Any

# Set per request, then per invocation while it is rendered.
_commit_id: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "commit_id", default=None
)
_revision_run: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "revision_run", default=None
)
_invocation: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "invocation", default=None
)
_stage: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "stage", default=None
)


@dataclass
class LogContext:
    """Immutable snapshot of current logging context."""

    commit_id: str | None = None
    revision_run: str | None = None
    invocation: str | None = None
    stage: str | None = None

    def as_dict(self) -> dict[str, Any]:
        """Return non-None fields as dict for JSON log injection."""
        return {k: v for k, v in self.__dict__.items() if v is not None}


def get_context() -> LogContext:
    """Snapshot current context variables."""
    return LogContext(
        commit_id=_commit_id.get(),
        revision_run=_revision_run.get(),
        invocation=_invocation.get(),
        stage=_stage.get(),
    )


def set_request_context(commit_id: str, revision_run: str | None = None) -> None:
    """Set request-level context (called once per revision run request)."""
    _commit_id.set(commit_id)
    _revision_run.set(revision_run)


def set_invocation_context(invocation: str, stage: str | None = None) -> None:
    """Set invocation-level context (called per rendered PipelineRun)."""
    _invocation.set(invocation)
    _stage.set(stage)


def clear_invocation_context() -> None:
    _invocation.set(None)
    _stage.set(None)


def clear_context() -> None:
    """Reset all context variables."""
    _commit_id.set(None)
    _revision_run.set(None)
    clear_invocation_context()
