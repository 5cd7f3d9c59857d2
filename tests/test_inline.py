"""Tests for the inline scanning loop and the simple span handlers."""

from ganchos import AutolinkType, Extension, Renderer, render


class TestNormalText:
    """Tests for plain text flow."""

    def test_plain_paragraph(self, run) -> None:
        assert run("hello world") == "[p:hello world]"

    def test_no_hooks_means_no_output(self) -> None:
        """The base renderer skips every block."""
        assert render("# a\n\nb *c*", Renderer()) == ""

    def test_normal_text_hook_sees_plain_runs(self) -> None:
        class Upper(Renderer):
            def paragraph(self, ob, text):
                ob.append(text)

            def normal_text(self, ob, text):
                ob.append(text.upper())

        assert render("abc def", Upper()) == "ABC DEF"


class TestEscape:
    """Tests for backslash escapes."""

    def test_escaped_punctuation_is_literal(self, run) -> None:
        assert run(r"\*not em\*") == "[p:*not em*]"

    def test_escape_tilde(self, run) -> None:
        assert run(r"\~\~x\~\~", Extension.STRIKETHROUGH) == "[p:~~x~~]"

    def test_non_escapable_keeps_backslash(self, run) -> None:
        assert run(r"\q") == r"[p:\q]"

    def test_backslash_at_end(self, run) -> None:
        assert run("end\\") == "[p:end\\]"


class TestEntity:
    """Tests for entity references."""

    def test_named_entity(self, run, trace) -> None:
        assert run("a &amp; b") == "[p:a {&amp;} b]"
        assert trace.find("entity") == [("entity", "&amp;")]

    def test_numeric_entity(self, run) -> None:
        assert run("&#169;") == "[p:{&#169;}]"

    def test_lone_ampersand(self, run, trace) -> None:
        assert run("AT&T; & co") == "[p:AT{&T;} & co]"
        assert run("a & b") == "[p:a & b]"

    def test_empty_name_is_not_entity(self, run, trace) -> None:
        assert run("&; &#;") == "[p:&; &#;]"
        assert trace.find("entity") == []


class TestAngleTags:
    """Tests for raw inline tags and angle autolinks."""

    def test_raw_tag(self, run, trace) -> None:
        assert run("a <b>bold</b>") == "[p:a (tag:<b>)bold(tag:</b>)]"

    def test_uri_autolink(self, run, trace) -> None:
        assert run("<http://x.com/a>") == "[p:(auto:http://x.com/a)]"
        assert trace.find("autolink") == [("autolink", "http://x.com/a", AutolinkType.NORMAL)]

    def test_email_autolink(self, run, trace) -> None:
        run("mail <me@example.com> now")
        assert trace.find("autolink") == [("autolink", "me@example.com", AutolinkType.EMAIL)]

    def test_autolink_is_unescaped(self, run, trace) -> None:
        run(r"<http://x.com/a\_b>")
        assert trace.find("autolink")[0][1] == "http://x.com/a_b"

    def test_unclosed_angle_is_text(self, run) -> None:
        assert run("a < b") == "[p:a < b]"

    def test_declined_tag_stays_literal(self) -> None:
        class NoTags(Renderer):
            def paragraph(self, ob, text):
                ob.append(text)

            def raw_html_tag(self, ob, tag):
                return False

        assert render("<i>x</i>", NoTags()) == "<i>x</i>"


class TestCodeSpan:
    """Tests for backtick code spans."""

    def test_simple(self, run, trace) -> None:
        assert run("use `x = 1` here") == "[p:use (code:x = 1) here]"

    def test_double_backticks_allow_single_inside(self, run, trace) -> None:
        run("``a ` b``")
        assert trace.find("codespan") == [("codespan", "a ` b")]

    def test_one_layer_of_padding_trimmed(self, run, trace) -> None:
        run("``  `x`  ``")
        assert trace.find("codespan") == [("codespan", " `x` ")]

    def test_padding_only_on_one_side_kept(self, run, trace) -> None:
        run("` x`")
        assert trace.find("codespan") == [("codespan", " x")]

    def test_blank_content_is_empty(self, run, trace) -> None:
        run("a `  ` b")
        assert trace.find("codespan") == [("codespan", "")]

    def test_closing_run_must_match_exactly(self, run, trace) -> None:
        """A longer or shorter backtick run does not close the span."""
        run("`a``b`")
        assert trace.find("codespan") == [("codespan", "a``b")]

    def test_unclosed_is_literal(self, run, trace) -> None:
        assert run("``a") == "[p:``a]"
        assert trace.find("codespan") == []

    def test_emphasis_not_parsed_inside(self, run) -> None:
        assert run("`*a*`") == "[p:(code:*a*)]"


class TestLineBreak:
    """Tests for hard line breaks."""

    def test_two_spaces_before_newline(self, run, trace) -> None:
        assert run("a  \nb") == "[p:a(br)b]"

    def test_more_spaces_all_trimmed(self, run) -> None:
        assert run("a     \nb") == "[p:a(br)b]"

    def test_one_space_is_soft(self, run, trace) -> None:
        assert run("a \nb") == "[p:a \nb]"
        assert trace.find("linebreak") == []

    def test_without_hook_newline_is_text(self) -> None:
        class Plain(Renderer):
            def paragraph(self, ob, text):
                ob.append(text)

        assert render("a  \nb", Plain()) == "a  \nb"
