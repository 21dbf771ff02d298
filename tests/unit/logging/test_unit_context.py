# tests/unit/logging/test_unit_context.py - v3
"""Tests for logging/context.py."""

from __future__ import annotations

from myday.logging.context import (
    LogContext,
    clear_context,
    get_context,
    set_report_context,
    set_session_context,
    set_step_context,
)


class TestLogContext:
    def test_as_dict_drops_none(self):
        ctx = LogContext(report_id="r1")
        assert ctx.as_dict() == {"report_id": "r1"}


class TestContextVars:
    def test_default_empty(self):
        assert get_context().as_dict() == {}

    def test_set_report_context(self):
        set_report_context("r1", "s1")
        ctx = get_context()
        assert ctx.report_id == "r1"
        assert ctx.session_id == "s1"

    def test_set_session_context(self):
        set_report_context("r1")
        set_session_context("summary_abc")
        ctx = get_context()
        assert ctx.report_id == "r1"
        assert ctx.session_id == "summary_abc"
        set_session_context(None)
        assert get_context().session_id is None

    def test_set_step_context(self):
        set_step_context("assess_quality")
        assert get_context().step == "assess_quality"
        set_step_context(None)
        assert get_context().step is None

    def test_clear(self):
        set_report_context("r1")
        set_step_context("x")
        clear_context()
        assert get_context().as_dict() == {}
