# src/rendering/manifest_renderer.py — v1
"""Binds one invocation to the PipelineRun template.

The renderer compiles its templates once; construction fails with
TemplateConfigurationError if either template does not parse. Per-invocation
problems (bad encodings, short commit ids, missing template fields) raise
their own errors and are left to the caller to collect.
"""

from __future__ import annotations

import logging
from datetime import datetime

from stagetime.config.settings import Settings
from stagetime.core.models import (
    ManifestContext,
    PipelineRunInvocation,
    RevisionRunRequest,
)
from stagetime.naming.policy import name_suffix, tracking_name
from stagetime.parsing.encoding import (
    parse_list_params,
    parse_scalar_params,
    parse_workspaces,
)
from stagetime.rendering.templates import PIPELINE_RUN_TEMPLATE, REVISION_RUN_TEMPLATE
from stagetime.templating.environment import (
    compile_template,
    execute_template,
    manifest_environment,
)

logger = logging.getLogger(__name__)


class ManifestRenderer:
    """Renders PipelineRun manifests and the revision-run ConfigMap.

    Holds only read-only state after construction, so one instance can serve
    any number of requests.
    """

    def __init__(
        self,
        settings: Settings,
        pipeline_run_template: str = PIPELINE_RUN_TEMPLATE,
        revision_run_template: str = REVISION_RUN_TEMPLATE,
    ) -> None:
        self._settings = settings
        env = manifest_environment()
        self._pipeline_run = compile_template(env, pipeline_run_template, "pipelinerun")
        self._revision_run = compile_template(env, revision_run_template, "revisionrun")

    @property
    def settings(self) -> Settings:
        return self._settings

    def build_context(
        self,
        request: RevisionRunRequest,
        invocation: PipelineRunInvocation,
        now: datetime,
    ) -> ManifestContext:
        """Decode an invocation and assemble its rendering context.

        Raises:
            MalformedEncodingError: If params, list params or workspaces are malformed.
            InvalidIdentityError: If the commit id is too short for the name suffix.
        """
        params = parse_scalar_params(invocation.params)
        list_params = parse_list_params(invocation.list_params)
        workspaces = parse_workspaces(invocation.workspaces)

        return ManifestContext(
            name=invocation.name,
            author=request.author,
            repo_name=request.repo_name,
            repo_url=request.repo_url,
            commit_id=request.commit_id,
            creation=request.pushed_at,
            namespace=self._settings.namespace,
            pipeline_ref=invocation.name,
            service_account=self._settings.service_account,
            timeout=self._settings.pipeline_timeout,
            params=params,
            list_params=list_params,
            workspaces=workspaces,
            name_prefix=self._settings.name_prefix,
            name_suffix=name_suffix(request.commit_id, now),
            stage=str(invocation.stage),
            argocd_instance=self._settings.argocd_instance,
        )

    def render_manifest(self, context: ManifestContext) -> str:
        """Render one PipelineRun.

        Raises:
            TemplateExecutionError: If the template references a missing field.
        """
        text = execute_template(self._pipeline_run, context.model_dump(), "pipelinerun")
        logger.debug(
            "Rendered %s (%d params, %d list params, %d workspaces)",
            context.manifest_name,
            len(context.params),
            len(context.list_params),
            len(context.workspaces),
        )
        return text

    def render_tracking_document(
        self,
        request: RevisionRunRequest,
        stages: list[str],
        pipeline_runs: list[str] | None = None,
    ) -> str:
        """Render the revision-run ConfigMap for a whole request."""
        values = {
            "tracking_name": tracking_name(request.commit_id),
            "namespace": self._settings.namespace,
            "repository": request.repo_name,
            "commit_id": request.commit_id,
            "stages": stages,
            "pipeline_runs": pipeline_runs or [],
        }
        return execute_template(self._revision_run, values, "revisionrun")
