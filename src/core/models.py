# src/core/models.py — v1
"""Shared Pydantic domain models used across modules.

Request side (what arrives over the wire), rendering side (what a template
sees) and result side (what the caller gets back).
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from stagetime.naming.policy import manifest_name as format_manifest_name

ParsedParams = dict[str, str]
ParsedListParams = dict[str, list[str]]


# === REQUEST MODELS ===


class PipelineRunInvocation(BaseModel):
    """One requested pipeline execution inside a revision run.

    The three encodings are kept raw; they are decoded by
    ``stagetime.parsing.encoding`` when the invocation is rendered.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    stage: int
    params: str = ""
    list_params: str = ""
    workspaces: str = ""


class RevisionRunRequest(BaseModel):
    """Revision run request: one commit, one or more staged pipeline runs."""

    model_config = ConfigDict(frozen=True)

    repo_name: str
    repo_url: str = ""
    author: str
    commit_id: str
    pushed_at: str = ""
    pipeline_runs: list[PipelineRunInvocation] = Field(default_factory=list)


# === RENDERING MODELS ===


class WorkspaceBinding(BaseModel):
    """A PipelineRun workspace, e.g. ``source=persistentVolumeClaim;claimName;pvc-src``."""

    model_config = ConfigDict(frozen=True)

    name: str
    kind: str
    short_name: str
    reference: str


class ManifestContext(BaseModel):
    """Everything the PipelineRun template can reference for one invocation."""

    name: str
    author: str
    repo_name: str
    repo_url: str
    commit_id: str
    creation: str
    namespace: str
    pipeline_ref: str
    service_account: str
    timeout: str
    params: ParsedParams = Field(default_factory=dict)
    list_params: ParsedListParams = Field(default_factory=dict)
    workspaces: list[WorkspaceBinding] = Field(default_factory=list)
    name_prefix: str
    name_suffix: str
    stage: str
    argocd_instance: str = "tekton-runs"

    @property
    def manifest_name(self) -> str:
        return format_manifest_name(self.name_prefix, self.stage, self.name, self.name_suffix)


# === RESULT MODELS ===


class InvocationFailure(BaseModel):
    """An invocation that could not be rendered; its siblings are unaffected."""

    name: str
    stage: int
    error_type: str
    message: str


class StageBucketResult(BaseModel):
    """Rendered manifests grouped by stage, in request order."""

    manifests: dict[int, list[str]] = Field(default_factory=dict)
    manifest_names: list[str] = Field(default_factory=list)
    stages: list[str] = Field(default_factory=list)
    failures: list[InvocationFailure] = Field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failures

    @property
    def manifest_count(self) -> int:
        return sum(len(texts) for texts in self.manifests.values())


class RevisionRunResult(BaseModel):
    """Return value of render_pipeline_runs(): buckets plus the tracking ConfigMap."""

    commit_id: str
    tracking_name: str
    tracking_document: str
    buckets: StageBucketResult

    @property
    def manifests(self) -> dict[int, list[str]]:
        return self.buckets.manifests

    @property
    def stages(self) -> list[str]:
        return self.buckets.stages

    @property
    def failures(self) -> list[InvocationFailure]:
        return self.buckets.failures
