"""stagetime: render Tekton PipelineRuns from compact revision run requests."""

from stagetime.version import __version__

__all__ = ["__version__"]
