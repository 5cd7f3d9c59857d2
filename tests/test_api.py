"""Tests for the high-level Ganchos API."""

import pytest

from ganchos import (
    ConfigError,
    Extension,
    HtmlFlag,
    HtmlRenderer,
    Markdown,
    Parser,
    Renderer,
    __version__,
    markdown,
    render,
)


class TestRenderFunction:
    """Tests for the render() function."""

    def test_render_html(self) -> None:
        assert render("Hello", HtmlRenderer()) == "<p>Hello</p>\n"

    def test_none_renderer_renders_nothing(self) -> None:
        assert render("# Hello", None) == ""

    def test_bytes_input_decoded(self) -> None:
        assert render("# Olá".encode(), HtmlRenderer()) == "<h1>Olá</h1>\n"

    def test_extension_names(self) -> None:
        out = render("~~x~~", HtmlRenderer(), ["strikethrough"])
        assert out == "<p><del>x</del></p>\n"

    def test_single_extension_name(self) -> None:
        assert render("~~x~~", HtmlRenderer(), "strikethrough") == "<p><del>x</del></p>\n"

    def test_unknown_extension_name(self) -> None:
        with pytest.raises(ConfigError):
            render("x", HtmlRenderer(), ["tabels"])

    def test_document_hooks_wrap_output(self) -> None:
        class Page(Renderer):
            def doc_header(self, ob):
                ob.append("<body>")

            def paragraph(self, ob, text):
                ob.append(text)

            def doc_footer(self, ob):
                ob.append("</body>")

        assert render("hi", Page()) == "<body>hi</body>"
        assert render("", Page()) == "<body></body>"

    def test_user_data_on_renderer(self) -> None:
        """Renderers carry their own state across hook calls."""

        class Counter(Renderer):
            def __init__(self) -> None:
                self.paragraphs = 0

            def paragraph(self, ob, text):
                self.paragraphs += 1

        counter = Counter()
        render("a\n\nb\n\nc", counter)
        assert counter.paragraphs == 3

    def test_instance_level_hook(self) -> None:
        """A hook assigned on the instance counts as implemented."""
        renderer = Renderer()
        renderer.paragraph = lambda ob, text: ob.append(f"<{text}>")
        assert render("x", renderer) == "<x>"

    def test_hook_exceptions_propagate(self) -> None:
        class Broken(Renderer):
            def emphasis(self, ob, text):
                raise ValueError("bad hook")

            def paragraph(self, ob, text):
                ob.append(text)

        with pytest.raises(ValueError, match="bad hook"):
            render("*a*", Broken())


class TestParser:
    """Tests for using Parser directly."""

    def test_references_exposed(self) -> None:
        parser = Parser(HtmlRenderer())
        parser.render("[x]\n\n[x]: /target 'T'\n")
        ref = parser.references.find("X")
        assert (ref.link, ref.title) == ("/target", "T")

    def test_nesting_back_to_zero(self) -> None:
        parser = Parser(HtmlRenderer())
        parser.render("> > > *deep*")
        assert parser.nesting.depth == 0
        assert parser.nesting.peak > 1


class TestMarkdownFunction:
    """Tests for the markdown() shortcut."""

    def test_basic(self) -> None:
        assert markdown("*hi*") == "<p><em>hi</em></p>\n"

    def test_html_flags(self) -> None:
        assert markdown("***", html_flags=HtmlFlag.USE_XHTML) == "<hr />\n"


class TestMarkdownClass:
    """Tests for the Markdown class."""

    def test_basic_usage(self) -> None:
        md = Markdown()
        assert md("# Hello **World**") == "<h1>Hello <strong>World</strong></h1>\n"

    def test_all_extensions(self) -> None:
        md = Markdown(extensions="all")
        assert md.config.extensions == Extension.from_names(["all"])
        assert md("~~x~~") == "<p><del>x</del></p>\n"

    def test_extension_list(self) -> None:
        md = Markdown(extensions=["tables"])
        assert md("a | b\n---|---\n").startswith("<table>")

    def test_render_alias(self) -> None:
        md = Markdown()
        assert md.render("x") == md("x")

    def test_render_many(self) -> None:
        md = Markdown(html_flags=HtmlFlag.TOC)
        assert md.render_many(["# a", "# b"]) == ['<h1 id="toc_0">a</h1>\n', '<h1 id="toc_0">b</h1>\n']

    def test_custom_renderer_reused(self) -> None:
        class Collect(Renderer):
            def __init__(self) -> None:
                self.headers: list[str] = []

            def header(self, ob, text, level):
                self.headers.append(text)

        collect = Collect()
        md = Markdown(renderer=collect)
        md("# one")
        md("# two")
        assert collect.headers == ["one", "two"]

    def test_max_nesting(self) -> None:
        md = Markdown(max_nesting=1)
        # the paragraph body is the second level and is cut, leaving it empty
        assert md("*a*") == ""

    def test_invalid_max_nesting(self) -> None:
        with pytest.raises(ConfigError):
            Markdown(max_nesting=0)

    @pytest.mark.parametrize("limit", [0, -3])
    def test_invalid_max_nesting_on_render(self, limit: int) -> None:
        with pytest.raises(ConfigError):
            render("hello", HtmlRenderer(), max_nesting=limit)

    def test_invalid_max_nesting_on_parser(self) -> None:
        with pytest.raises(ConfigError, match="max_nesting"):
            Parser(HtmlRenderer(), max_nesting=0)

    def test_config_does_not_leak(self) -> None:
        Markdown(extensions="all")("x")
        assert markdown("~~x~~") == "<p>~~x~~</p>\n"


def test_version() -> None:
    assert __version__ == "0.1.0"
