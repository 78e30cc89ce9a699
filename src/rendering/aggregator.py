# src/rendering/aggregator.py — v1
"""Stage bucketing and the per-request rendering loop.

Every invocation is rendered independently. An invocation that fails to
decode, name or render is recorded as an InvocationFailure and the loop moves
on; a template that does not parse (TemplateConfigurationError) is never
caught here.
"""

from __future__ import annotations

import logging
from datetime import datetime

from stagetime.core.models import (
    InvocationFailure,
    PipelineRunInvocation,
    RevisionRunRequest,
    RevisionRunResult,
    StageBucketResult,
)
from stagetime.logging.context import (
    clear_invocation_context,
    set_invocation_context,
    set_request_context,
)
from stagetime.naming.policy import InvalidIdentityError, tracking_name
from stagetime.parsing.encoding import MalformedEncodingError
from stagetime.rendering.manifest_renderer import ManifestRenderer
from stagetime.templating.environment import TemplateExecutionError

logger = logging.getLogger(__name__)

# Failures scoped to a single invocation.
INVOCATION_ERRORS = (MalformedEncodingError, InvalidIdentityError, TemplateExecutionError)


class StageAggregator:
    """Append-only accumulator for one request's rendered manifests."""

    def __init__(self) -> None:
        self._manifests: dict[int, list[str]] = {}
        self._names: list[str] = []
        self._stages: list[str] = []
        self._failures: list[InvocationFailure] = []

    def see_stage(self, stage: int) -> None:
        """Record a stage label; repeats keep their first-seen position."""
        label = str(stage)
        if label not in self._stages:
            self._stages.append(label)

    def add(self, stage: int, name: str, text: str) -> None:
        if name in self._names:
            logger.warning(
                "Duplicate manifest name %s: invocations share stage and name "
                "within one timestamp window",
                name,
            )
        self.see_stage(stage)
        self._manifests.setdefault(stage, []).append(text)
        self._names.append(name)

    def add_failure(self, invocation: PipelineRunInvocation, exc: Exception) -> None:
        self.see_stage(invocation.stage)
        self._failures.append(
            InvocationFailure(
                name=invocation.name,
                stage=invocation.stage,
                error_type=type(exc).__name__,
                message=str(exc),
            )
        )

    @property
    def stages(self) -> list[str]:
        return list(self._stages)

    @property
    def manifest_names(self) -> list[str]:
        return list(self._names)

    def result(self) -> StageBucketResult:
        return StageBucketResult(
            manifests={stage: list(texts) for stage, texts in self._manifests.items()},
            manifest_names=list(self._names),
            stages=list(self._stages),
            failures=list(self._failures),
        )


def render_revision_run(
    request: RevisionRunRequest,
    renderer: ManifestRenderer,
    now: datetime | None = None,
) -> RevisionRunResult:
    """Render every invocation of a request plus its tracking ConfigMap.

    Args:
        request: The revision run request.
        renderer: Renderer holding the compiled templates and settings.
        now: Timestamp for name suffixes, shared by all invocations.
            Defaults to the current local time.

    Returns:
        RevisionRunResult with stage buckets, failures and the tracking
        document. An empty commit id fails every invocation and leaves the
        tracking name and document empty.
    """
    now = now or datetime.now()
    set_request_context(request.commit_id)

    logger.info(
        "Rendering %d pipeline runs for %s@%s",
        len(request.pipeline_runs), request.repo_name, request.commit_id,
    )

    aggregator = StageAggregator()
    try:
        for invocation in request.pipeline_runs:
            set_invocation_context(invocation.name, str(invocation.stage))
            try:
                context = renderer.build_context(request, invocation, now)
                text = renderer.render_manifest(context)
            except INVOCATION_ERRORS as exc:
                logger.warning("Skipping %s: %s", invocation.name, exc)
                aggregator.add_failure(invocation, exc)
                continue
            aggregator.add(invocation.stage, context.manifest_name, text)
    finally:
        clear_invocation_context()

    buckets = aggregator.result()
    try:
        revision_run = tracking_name(request.commit_id)
    except InvalidIdentityError as exc:
        logger.warning("No tracking document: %s", exc)
        revision_run = ""
        tracking_document = ""
    else:
        set_request_context(request.commit_id, revision_run)
        tracking_document = renderer.render_tracking_document(
            request, buckets.stages, buckets.manifest_names
        )

    logger.info(
        "Rendered %d manifests in %d stages (%d failed)",
        buckets.manifest_count, len(buckets.stages), len(buckets.failures),
    )
    return RevisionRunResult(
        commit_id=request.commit_id,
        tracking_name=revision_run,
        tracking_document=tracking_document,
        buckets=buckets,
    )
