# tests/unit/logging/test_unit_context.py — v1
"""Tests for logging/context.py — contextvars-backed log context."""

from __future__ import annotations

from stagetime.logging.context import (
    clear_context,
    clear_invocation_context,
    get_context,
    set_invocation_context,
    set_request_context,
)


class TestLogContext:
    def test_empty(self):
        assert get_context().as_dict() == {}

    def test_request_then_invocation(self):
        set_request_context("abcd1234", "revisionrun-abcd1234")
        set_invocation_context("build", "2")
        ctx = get_context()
        assert ctx.commit_id == "abcd1234"
        assert ctx.invocation == "build"
        assert ctx.stage == "2"

    def test_clear_invocation_keeps_request(self):
        set_request_context("abcd1234")
        set_invocation_context("build", "2")
        clear_invocation_context()
        assert get_context().as_dict() == {"commit_id": "abcd1234"}

    def test_clear_all(self):
        set_request_context("abcd1234")
        clear_context()
        assert get_context().commit_id is None
