# src/main.py — v1
"""CLI entry point: render, template commands.

Usage:
    stagetime render <request.json> [-o DIR] [--namespace NS]
    stagetime template <file> [--delimiter curly|square] [--values k=v,...]
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import TYPE_CHECKING

from stagetime.logging.logger import get_logger, setup_logging
from stagetime.version import __version__

if TYPE_CHECKING:
    from stagetime.config.settings import Settings

logger = get_logger("cli")

EXIT_OK = 0
EXIT_FATAL = 1
EXIT_PARTIAL = 2


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    if not hasattr(args, "func"):
        parser.print_help()
        return EXIT_FATAL

    try:
        from stagetime.config.settings import load_settings

        overrides: dict[str, object] = {}
        if getattr(args, "namespace", None):
            overrides["pipeline_workspace"] = args.namespace
        settings = load_settings(**overrides)
        _setup_logging(settings, args.verbose)
        return args.func(args, settings)
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        return 130
    except Exception as exc:
        logger.error("Fatal error: %s", exc, exc_info=args.verbose)
        print(f"error: {exc}", file=sys.stderr)
        return EXIT_FATAL


def _build_parser() -> argparse.ArgumentParser:
    """Build CLI argument parser."""
    parser = argparse.ArgumentParser(
        prog="stagetime",
        description=f"stagetime v{__version__} - Tekton PipelineRun renderer",
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true",
        help="Enable debug logging",
    )

    subparsers = parser.add_subparsers(dest="command")

    # --- render ---
    p_render = subparsers.add_parser(
        "render", help="Render PipelineRuns for a revision run request",
    )
    p_render.add_argument("request", type=Path, help="Path to request JSON")
    p_render.add_argument(
        "-o", "--output", type=Path, default=None,
        help="Output directory (default: print to stdout)",
    )
    p_render.add_argument(
        "--namespace", default=None,
        help="Target namespace (default: PIPELINE_WORKSPACE)",
    )
    p_render.set_defaults(func=_cmd_render)

    # --- template ---
    p_template = subparsers.add_parser(
        "template", help="Render an inline template with key/value pairs",
    )
    p_template.add_argument("file", help="Template file, or '-' for stdin")
    p_template.add_argument(
        "-d", "--delimiter", default=None,
        help="Delimiter style: curly or square (default: DEFAULT_DELIMITER_STYLE)",
    )
    p_template.add_argument(
        "--values", default="",
        help="Comma-separated key=value pairs",
    )
    p_template.set_defaults(func=_cmd_template)

    return parser


def _cmd_render(args: argparse.Namespace, settings: Settings) -> int:
    """Render a request file to stdout or an output directory."""
    from stagetime.api.facade import (
        DOCUMENT_SEPARATOR,
        load_request,
        render_pipeline_runs,
        write_result,
    )

    request_path: Path = args.request
    if not request_path.exists():
        logger.error("File not found: %s", request_path)
        return EXIT_FATAL

    request = load_request(request_path)
    result = render_pipeline_runs(request, settings=settings)

    if args.output is not None:
        for path in write_result(result, args.output):
            print(path)
    else:
        documents = [
            text for stage in sorted(result.manifests) for text in result.manifests[stage]
        ]
        documents.append(result.tracking_document)
        sys.stdout.write(DOCUMENT_SEPARATOR.join(documents))

    for failure in result.failures:
        print(
            f"failed: stage {failure.stage} {failure.name}: "
            f"{failure.error_type}: {failure.message}",
            file=sys.stderr,
        )
    return EXIT_OK if result.buckets.ok else EXIT_PARTIAL


def _cmd_template(args: argparse.Namespace, settings: Settings) -> int:
    """Render an inline template and print it."""
    from stagetime.api.facade import render_output_data
    from stagetime.parsing.encoding import parse_scalar_params

    if args.file == "-":
        template = sys.stdin.read()
    else:
        path = Path(args.file)
        if not path.exists():
            logger.error("File not found: %s", path)
            return EXIT_FATAL
        template = path.read_text(encoding="utf-8")

    delimiter = args.delimiter or settings.default_delimiter_style
    values = parse_scalar_params(args.values)
    print(render_output_data(template, delimiter, values))
    return EXIT_OK


def _setup_logging(settings: Settings, verbose: bool) -> None:
    """Configure logging for CLI usage."""
    setup_logging(
        level="DEBUG" if verbose else settings.log_level,
        log_format=settings.log_format,
        log_file=settings.log_file,
        rotation=settings.log_rotation,
        retention=settings.log_retention,
    )


if __name__ == "__main__":
    sys.exit(main())
