"""Tests for the recursion-depth guard and deep-input truncation."""

import logging

import pytest

from ganchos import ConfigError, HtmlRenderer, NestingError, Parser, markdown
from ganchos.parsing.nesting import NestingGuard


class TestNestingGuard:
    """Unit tests for NestingGuard."""

    @pytest.mark.parametrize("limit", [0, -1])
    def test_rejects_non_positive_limit(self, limit: int) -> None:
        with pytest.raises(ConfigError, match="max_nesting"):
            NestingGuard(limit)

    def test_enter_within_limit(self) -> None:
        guard = NestingGuard(limit=2)
        with guard.enter() as allowed:
            assert allowed
            assert guard.depth == 1
        assert guard.depth == 0

    def test_refused_past_limit(self) -> None:
        guard = NestingGuard(limit=1)
        with guard.enter() as outer, guard.enter() as inner:
            assert (outer, inner) == (True, False)
            assert guard.depth == 1
        assert guard.truncations == 1

    def test_peak_tracks_deepest_level(self) -> None:
        guard = NestingGuard(limit=5)
        with guard.enter(), guard.enter():
            pass
        with guard.enter():
            pass
        assert guard.peak == 2

    def test_depth_restored_on_exception(self) -> None:
        guard = NestingGuard(limit=3)
        with pytest.raises(KeyError), guard.enter(), guard.enter():
            raise KeyError("x")
        assert guard.depth == 0
        guard.check_balanced()

    def test_check_balanced_raises_when_unwound(self) -> None:
        guard = NestingGuard(limit=3)
        ctx = guard.enter()
        ctx.__enter__()
        with pytest.raises(NestingError) as exc_info:
            guard.check_balanced()
        assert exc_info.value.depth == 1


class TestDeepInput:
    """Deeply nested markdown is truncated silently."""

    def test_deep_blockquotes_render_up_to_limit(self) -> None:
        out = markdown("> " * 100 + "x\n")
        # the top level takes one slot; each quote body takes one more
        assert out.count("<blockquote>") == 16
        assert "x" not in out

    def test_custom_limit(self) -> None:
        parser = Parser(HtmlRenderer(), max_nesting=3)
        out = parser.render("> > > > > x\n")
        assert out.count("<blockquote>") == 3
        assert parser.nesting.truncations == 1
        assert parser.nesting.peak == 3

    def test_shallow_input_untouched(self) -> None:
        parser = Parser(HtmlRenderer())
        assert parser.render("> *a*\n") == "<blockquote>\n<p><em>a</em></p>\n</blockquote>\n"
        assert parser.nesting.truncations == 0

    def test_truncation_logged_at_debug(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.DEBUG, logger="ganchos"):
            Parser(HtmlRenderer(), max_nesting=2).render("> > > x\n")
        assert any("truncat" in record.getMessage() for record in caplog.records)
