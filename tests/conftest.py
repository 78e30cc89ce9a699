# tests/conftest.py — v1
"""Shared test fixtures for all unit and integration tests.

Provides settings without .env lookup, a fixed clock, a sample revision run
request and a ready renderer. No cluster or network access.
"""

from __future__ import annotations

import logging
from datetime import datetime

import pytest

from stagetime.config.settings import Settings
from stagetime.core.models import PipelineRunInvocation, RevisionRunRequest
from stagetime.logging.context import clear_context
from stagetime.rendering.manifest_renderer import ManifestRenderer

COMMIT_ID = "ab12cd34ef"


@pytest.fixture(autouse=True)
def _reset_log_context():
    clear_context()
    yield
    clear_context()
    root = logging.getLogger("stagetime")
    for handler in root.handlers:
        handler.close()
    root.handlers.clear()
    root.setLevel(logging.NOTSET)


@pytest.fixture
def settings(monkeypatch: pytest.MonkeyPatch) -> Settings:
    """Settings with a fixed namespace, isolated from the process environment."""
    monkeypatch.delenv("PIPELINE_WORKSPACE", raising=False)
    return Settings(_env_file=None, pipeline_workspace="tekton-ci")


@pytest.fixture
def fixed_now() -> datetime:
    """17th of the month, 10:04:05 -> suffix time part '170405'."""
    return datetime(2024, 3, 17, 10, 4, 5)


@pytest.fixture
def build_invocation() -> PipelineRunInvocation:
    return PipelineRunInvocation(
        name="build",
        stage=1,
        params="image=alpine, tag=3.19",
        list_params="targets=lint;test",
        workspaces="source=persistentVolumeClaim;claimName;pvc-src",
    )


@pytest.fixture
def sample_request(build_invocation: PipelineRunInvocation) -> RevisionRunRequest:
    """Three invocations over stages [1, 2, 1]."""
    return RevisionRunRequest(
        repo_name="stagetime-server",
        repo_url="https://github.com/stuttgart-things/stagetime-server.git",
        author="patrick",
        commit_id=COMMIT_ID,
        pushed_at="2024-03-17T10:04:05Z",
        pipeline_runs=[
            build_invocation,
            PipelineRunInvocation(
                name="package",
                stage=2,
                params="registry=ghcr.io",
                workspaces="dockerconfig=secret;secretName;registry-creds",
            ),
            PipelineRunInvocation(
                name="lint",
                stage=1,
                params="path=./src",
            ),
        ],
    )


@pytest.fixture
def renderer(settings: Settings) -> ManifestRenderer:
    return ManifestRenderer(settings)
