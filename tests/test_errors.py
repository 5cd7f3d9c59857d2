"""Error-path and malformed input tests.

Malformed markdown never raises; it degrades to literal text. Errors are
reserved for configuration mistakes, internal faults and exceptions raised
by renderer hooks, which propagate unchanged.
"""

import pytest

from ganchos import (
    ALL_EXTENSIONS,
    ConfigError,
    Extension,
    GanchosError,
    HtmlRenderer,
    NestingError,
    ParseConfig,
    Parser,
    Renderer,
    markdown,
)

# =========================================================================
# Exception hierarchy
# =========================================================================


class TestHierarchy:
    """All library errors share one base class."""

    def test_config_error_is_ganchos_error(self) -> None:
        assert issubclass(ConfigError, GanchosError)

    def test_nesting_error_is_ganchos_error(self) -> None:
        assert issubclass(NestingError, GanchosError)

    def test_nesting_error_message(self) -> None:
        err = NestingError(2)
        assert err.depth == 2
        assert "depth=2" in str(err)


# =========================================================================
# Configuration mistakes
# =========================================================================


class TestConfigErrors:
    """Bad configuration is rejected up front."""

    def test_unknown_extension(self) -> None:
        with pytest.raises(ConfigError, match="smartypants"):
            Extension.from_names(["smartypants"])

    def test_negative_nesting(self) -> None:
        with pytest.raises(ConfigError):
            ParseConfig(max_nesting=-1)

    def test_caught_as_base_class(self) -> None:
        with pytest.raises(GanchosError):
            markdown("x", ["nope"])


# =========================================================================
# Hook exceptions
# =========================================================================


class Exploding(Renderer):
    """Raises from a nested span hook."""

    def paragraph(self, ob, text):
        ob.append(text)

    def block_quote(self, ob, text):
        ob.append(text)

    def double_emphasis(self, ob, text):
        raise RuntimeError("hook failed")


class TestHookExceptions:
    """Exceptions from hooks reach the caller and leave no state behind."""

    def test_propagates_unchanged(self) -> None:
        with pytest.raises(RuntimeError, match="hook failed"):
            Parser(Exploding()).render("> > **x**\n")

    def test_guard_unwound_after_exception(self) -> None:
        parser = Parser(Exploding())
        with pytest.raises(RuntimeError):
            parser.render("> > **x**\n")
        assert parser.nesting.depth == 0


# =========================================================================
# Malformed input degrades to text
# =========================================================================


class TestMalformedInput:
    """Unclosed and broken constructs render literally."""

    @pytest.mark.parametrize(
        ("source", "expected"),
        [
            ("*a", "<p>*a</p>\n"),
            ("**a", "<p>**a</p>\n"),
            ("[a](b", "<p>[a](b</p>\n"),
            ("[a][missing]", "<p>[a][missing]</p>\n"),
            ("![a](", "<p>![a](</p>\n"),
            ("a & b", "<p>a &amp; b</p>\n"),
            ("<not a tag", "<p>&lt;not a tag</p>\n"),
            ("trailing \\", "<p>trailing \\</p>\n"),
        ],
    )
    def test_literal_fallback(self, source: str, expected: str) -> None:
        assert markdown(source) == expected

    def test_unclosed_fence_runs_to_end(self) -> None:
        out = markdown("```\nno close\n", Extension.FENCED_CODE)
        assert out == "<pre><code>no close\n</code></pre>\n"

    @pytest.mark.parametrize(
        "source",
        ["", "\n", "\n\n\n", "   ", "\t", "\r\n", ">", "-", "1.", "#", "|", "```", "<", "&", "[", "]:", "\\"],
    )
    def test_degenerate_documents(self, source: str) -> None:
        markdown(source, ALL_EXTENSIONS)

    def test_carriage_returns(self) -> None:
        assert markdown("a\r\nb\r\n") == markdown("a\nb\n")

    def test_empty_document(self) -> None:
        assert markdown("") == ""
        assert Parser(HtmlRenderer()).render("") == ""
