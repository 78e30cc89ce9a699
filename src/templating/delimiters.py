# src/templating/delimiters.py — v1
"""Fixed registry of delimiter styles for inline template rendering."""

from __future__ import annotations

import re
from dataclasses import dataclass


@dataclass(frozen=True)
class DelimiterStyle:
    """Open/close markers plus the pattern that finds ``<open>expr<close>``."""

    name: str
    open: str
    close: str
    pattern: re.Pattern[str]


class UnknownDelimiterStyleError(ValueError):
    """Raised when a delimiter style name is not in the registry."""


DELIMITER_STYLES: dict[str, DelimiterStyle] = {
    "curly": DelimiterStyle("curly", "{{", "}}", re.compile(r"\{\{(.*?)\}\}")),
    "square": DelimiterStyle("square", "[[", "]]", re.compile(r"\[\[(.*?)\]\]")),
}


def get_delimiter_style(name: str) -> DelimiterStyle:
    """Look up a delimiter style by name.

    Raises:
        UnknownDelimiterStyleError: If the name is not registered.
    """
    style = DELIMITER_STYLES.get(name)
    if style is None:
        raise UnknownDelimiterStyleError(
            f"Unknown delimiter style {name!r}. "
            f"Supported: {', '.join(delimiter_style_names())}"
        )
    return style


def delimiter_style_names() -> list[str]:
    return sorted(DELIMITER_STYLES)
