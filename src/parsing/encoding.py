# src/parsing/encoding.py — v1
"""Decoder for the compact parameter and workspace encodings.

Three encodings share the same separators: ``,`` between entries, ``=``
between key and value, ``;`` inside a multi-part value.

    params       image=alpine, tag=3.19
    list_params  targets=lint;test;build
    workspaces   source=persistentVolumeClaim;claimName;pvc-src

Malformed entries raise MalformedEncodingError; nothing is silently dropped
or defaulted.
"""

from __future__ import annotations

from stagetime.core.models import ParsedListParams, ParsedParams, WorkspaceBinding

ENTRY_SEPARATOR = ","
KEY_SEPARATOR = "="
VALUE_SEPARATOR = ";"

WORKSPACE_FIELDS = ("kind", "short_name", "reference")


class MalformedEncodingError(ValueError):
    """Raised when an entry does not match ``key=value[;value...]``."""

    def __init__(self, encoding: str, entry: str, reason: str) -> None:
        self.encoding = encoding
        self.entry = entry
        super().__init__(f"Malformed {encoding} entry {entry!r}: {reason}")


def _entries(raw: str) -> list[str]:
    # "" would otherwise split into one empty entry.
    if not raw or not raw.strip():
        return []
    return raw.split(ENTRY_SEPARATOR)


def _split_entry(encoding: str, entry: str) -> tuple[str, str]:
    key, sep, value = entry.partition(KEY_SEPARATOR)
    if not sep:
        raise MalformedEncodingError(encoding, entry, f"missing {KEY_SEPARATOR!r}")
    key = key.strip()
    if not key:
        raise MalformedEncodingError(encoding, entry, "empty key")
    return key, value


def parse_scalar_params(raw: str) -> ParsedParams:
    """Decode ``k=v,k=v`` into a dict; last write wins on duplicate keys."""
    params: ParsedParams = {}
    for entry in _entries(raw):
        key, value = _split_entry("params", entry)
        params[key] = value.strip()
    return params


def parse_list_params(raw: str) -> ParsedListParams:
    """Decode ``k=v1;v2;v3,k2=v`` into a dict of ordered value lists.

    A value without ``;`` yields a one-element list. Sub-values are kept as
    given; only the key and the value as a whole are trimmed.
    """
    params: ParsedListParams = {}
    for entry in _entries(raw):
        key, value = _split_entry("list_params", entry)
        params[key] = value.strip().split(VALUE_SEPARATOR)
    return params


def parse_workspaces(raw: str) -> list[WorkspaceBinding]:
    """Decode ``name=kind;shortName;reference`` entries, preserving order."""
    bindings: list[WorkspaceBinding] = []
    for entry in _entries(raw):
        name, rest = _split_entry("workspaces", entry)
        fields = rest.split(VALUE_SEPARATOR)
        if len(fields) != len(WORKSPACE_FIELDS):
            raise MalformedEncodingError(
                "workspaces",
                entry,
                f"expected {len(WORKSPACE_FIELDS)} {VALUE_SEPARATOR!r}-separated fields "
                f"({', '.join(WORKSPACE_FIELDS)}), got {len(fields)}",
            )
        kind, short_name, reference = (f.strip() for f in fields)
        bindings.append(
            WorkspaceBinding(
                name=name,
                kind=kind,
                short_name=short_name,
                reference=reference,
            )
        )
    return bindings
