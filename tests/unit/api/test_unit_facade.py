# tests/unit/api/test_unit_facade.py — v1
"""Tests for api/facade.py — public rendering entry points."""

from __future__ import annotations

import pytest

from stagetime.api.facade import (
    DOCUMENT_SEPARATOR,
    load_request,
    render_output_data,
    render_pipeline_runs,
    write_result,
)
from stagetime.templating.delimiters import UnknownDelimiterStyleError


class TestRenderPipelineRuns:
    def test_with_settings(self, settings, sample_request, fixed_now):
        result = render_pipeline_runs(sample_request, settings=settings, now=fixed_now)
        assert result.stages == ["1", "2"]
        assert "namespace: tekton-ci" in result.manifests[2][0]

    def test_reuses_renderer(self, renderer, sample_request, fixed_now):
        result = render_pipeline_runs(sample_request, renderer=renderer, now=fixed_now)
        assert result.buckets.manifest_count == 3

    def test_settings_from_environment(self, monkeypatch, tmp_path, sample_request, fixed_now):
        monkeypatch.chdir(tmp_path)
        monkeypatch.setenv("PIPELINE_WORKSPACE", "from-env")
        result = render_pipeline_runs(sample_request, now=fixed_now)
        assert "namespace: from-env" in result.manifests[1][0]


class TestRenderOutputData:
    def test_curly(self):
        assert render_output_data("hello {{name}}", "curly", {"name": "world"}) == "hello world"

    def test_square_missing(self):
        assert render_output_data("hello [[ name ]]", "square", {}) == "hello "

    def test_unknown(self):
        with pytest.raises(UnknownDelimiterStyleError):
            render_output_data("x", "diamond", {})


class TestLoadRequest:
    def test_round_trip_file(self, tmp_path, sample_request):
        path = tmp_path / "request.json"
        path.write_text(sample_request.model_dump_json())
        assert load_request(path) == sample_request


class TestWriteResult:
    def test_layout(self, tmp_path, settings, sample_request, fixed_now):
        result = render_pipeline_runs(sample_request, settings=settings, now=fixed_now)
        written = write_result(result, tmp_path)

        run_dir = tmp_path / "ab12cd34ef"
        assert [p.name for p in written] == [
            "stage-1.yaml",
            "stage-2.yaml",
            "revisionrun-ab12cd34ef.yaml",
        ]
        stage_one = (run_dir / "stage-1.yaml").read_text()
        assert stage_one.count("kind: PipelineRun") == 2
        assert DOCUMENT_SEPARATOR in stage_one
        assert (run_dir / "revisionrun-ab12cd34ef.yaml").read_text() == result.tracking_document

    def test_empty_commit_skips_tracking(self, tmp_path, settings, sample_request, fixed_now):
        request = sample_request.model_copy(update={"commit_id": ""})
        result = render_pipeline_runs(request, settings=settings, now=fixed_now)
        assert write_result(result, tmp_path) == []
