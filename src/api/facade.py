# src/api/facade.py — v1
"""Public API facade.

Usage:
    from stagetime.api.facade import render_pipeline_runs
    result = render_pipeline_runs(request)

    from stagetime.api.facade import render_output_data
    text = render_output_data("hello {{ name }}", "curly", {"name": "world"})
"""

from __future__ import annotations

import logging
from datetime import datetime
from pathlib import Path
from typing import Mapping

from stagetime.config.settings import Settings
from stagetime.core.models import RevisionRunRequest, RevisionRunResult
from stagetime.rendering.aggregator import render_revision_run
from stagetime.rendering.manifest_renderer import ManifestRenderer
from stagetime.templating.inline_renderer import render_inline

logger = logging.getLogger(__name__)

DOCUMENT_SEPARATOR = "---\n"


def render_pipeline_runs(
    request: RevisionRunRequest,
    settings: Settings | None = None,
    renderer: ManifestRenderer | None = None,
    now: datetime | None = None,
) -> RevisionRunResult:
    """Render all PipelineRuns of a request, grouped by stage.

    Args:
        request: Revision run request.
        settings: Settings. Loaded from .env if None and no renderer is given.
        renderer: Prebuilt renderer to reuse across requests.
        now: Timestamp for name suffixes (defaults to now).

    Returns:
        RevisionRunResult; invocations that failed are listed in ``failures``.

    Raises:
        TemplateConfigurationError: If a manifest template does not parse.
    """
    if renderer is None:
        renderer = ManifestRenderer(settings or Settings())
    return render_revision_run(request, renderer, now=now)


def render_output_data(template: str, delimiter: str, values: Mapping[str, str]) -> str:
    """Render an inline template with the ``curly`` or ``square`` delimiter style.

    Raises:
        UnknownDelimiterStyleError: If ``delimiter`` is not a known style.
    """
    return render_inline(template, delimiter, values)


def load_request(path: Path) -> RevisionRunRequest:
    """Read a RevisionRunRequest from a JSON file."""
    return RevisionRunRequest.model_validate_json(path.read_text(encoding="utf-8"))


def write_result(result: RevisionRunResult, output_dir: Path) -> list[Path]:
    """Write one multi-document YAML file per stage plus the tracking document.

    Layout::

        {output_dir}/{commit_id}/stage-{n}.yaml
        {output_dir}/{commit_id}/revisionrun-{commit_id}.yaml

    Returns:
        Paths written, stages first in ascending order. The tracking
        document is skipped when the request had no usable commit id.
    """
    run_dir = output_dir / result.commit_id
    run_dir.mkdir(parents=True, exist_ok=True)

    written: list[Path] = []
    for stage in sorted(result.manifests):
        path = run_dir / f"stage-{stage}.yaml"
        path.write_text(DOCUMENT_SEPARATOR.join(result.manifests[stage]), encoding="utf-8")
        written.append(path)

    if result.tracking_document:
        tracking_path = run_dir / f"{result.tracking_name}.yaml"
        tracking_path.write_text(result.tracking_document, encoding="utf-8")
        written.append(tracking_path)

    logger.info("Wrote %d files to %s", len(written), run_dir)
    return written
