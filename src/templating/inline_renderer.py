# src/templating/inline_renderer.py — v2
"""Inline key/value substitution with a selectable delimiter style.

    render_inline("hello {{ name }}", "curly", {"name": "world"})  -> "hello world"
    render_inline("hello [[ .name ]]", "square", {"name": "world"}) -> "hello world"

Only ``<open>expr<close>`` is substituted; all other text, including
``{%``, ``{#`` and the other style's markers, is copied through unchanged.
An expression is a key, optionally with a Go-style leading dot, and
optionally wrapped in Go trim markers (``{{- .name -}}``) that remove the
adjacent whitespace. Keys missing from the mapping render as empty strings.

Substituted values are HTML-escaped; afterwards every ``&#34;`` (an escaped
double quote) is replaced with a single space. Other escaped characters are
left as they are.
"""

from __future__ import annotations

import logging
from typing import Mapping

from markupsafe import escape

from stagetime.templating.delimiters import get_delimiter_style

logger = logging.getLogger(__name__)

ESCAPED_QUOTE = "&#34;"
QUOTE_REPLACEMENT = " "
TRIM_MARKER = "-"


def _parse_expr(raw: str) -> tuple[str, bool, bool]:
    """Split ``raw`` into (key, trim_left, trim_right)."""
    expr = raw.strip()
    trim_left = expr.startswith(TRIM_MARKER + " ") or expr == TRIM_MARKER
    if trim_left:
        expr = expr[1:].strip()
    trim_right = expr.endswith(" " + TRIM_MARKER) or expr == TRIM_MARKER
    if trim_right:
        expr = expr[:-1].strip()
    return expr.removeprefix("."), trim_left, trim_right


def render_inline(template: str, style_name: str, values: Mapping[str, str]) -> str:
    """Render ``template`` against ``values`` using the named delimiter style.

    Raises:
        UnknownDelimiterStyleError: If ``style_name`` is not registered.
    """
    style = get_delimiter_style(style_name)

    parts: list[str] = []
    position = 0
    trim_next = False
    for match in style.pattern.finditer(template):
        key, trim_left, trim_right = _parse_expr(match.group(1))
        literal = template[position:match.start()]
        if trim_next:
            literal = literal.lstrip()
        if trim_left:
            literal = literal.rstrip()
        parts.append(literal)
        parts.append(str(escape(values.get(key, ""))))
        position = match.end()
        trim_next = trim_right

    tail = template[position:]
    parts.append(tail.lstrip() if trim_next else tail)

    logger.debug("Rendered inline template with %d values (%s)", len(values), style.name)
    return "".join(parts).replace(ESCAPED_QUOTE, QUOTE_REPLACEMENT)
