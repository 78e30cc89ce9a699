# src/templating/environment.py — v1
"""jinja2 environment for the fixed manifest templates, and the two template failure modes.

A template that does not parse is an operator defect: the manifest templates
are fixed constants, so TemplateConfigurationError is never caught by the
rendering loop. A template that parses but fails against a context is
TemplateExecutionError and only affects the invocation being rendered.
"""

from __future__ import annotations

from typing import Any, Mapping

from jinja2 import Environment, StrictUndefined, Template, TemplateError, TemplateSyntaxError


class TemplateConfigurationError(Exception):
    """Raised when a fixed template fails to parse."""


class TemplateExecutionError(Exception):
    """Raised when a template fails while rendering a context."""


def manifest_environment() -> Environment:
    """Environment for the fixed manifest templates; undefined names are errors."""
    return Environment(
        undefined=StrictUndefined,
        autoescape=False,
        keep_trailing_newline=True,
    )


def compile_template(env: Environment, source: str, name: str) -> Template:
    """Parse a fixed template.

    Raises:
        TemplateConfigurationError: If the template does not parse.
    """
    try:
        return env.from_string(source)
    except TemplateSyntaxError as exc:
        raise TemplateConfigurationError(
            f"Template {name!r} failed to parse at line {exc.lineno}: {exc.message}"
        ) from exc


def execute_template(template: Template, values: Mapping[str, Any], name: str) -> str:
    """Render a compiled template.

    Raises:
        TemplateExecutionError: If rendering fails, e.g. on a missing field.
    """
    try:
        return template.render(**values)
    except TemplateError as exc:
        raise TemplateExecutionError(f"Template {name!r} failed: {exc}") from exc
