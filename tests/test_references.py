"""Tests for the first pass: reference definitions and input normalization."""

from ganchos.parsing.references import LinkRef, ReferenceTable, match_reference, scan_references


class TestMatchReference:
    """Tests for recognizing a single definition line."""

    def test_simple_definition(self) -> None:
        """A bare id and link form a definition ending at the newline."""
        data = "[id]: http://x.com\nrest"
        end, ref = match_reference(data, 0)
        assert ref == LinkRef("id", "http://x.com")
        assert data[end] == "\n"

    def test_up_to_three_leading_spaces(self) -> None:
        assert match_reference("   [a]: /x\n", 0) is not None
        assert match_reference("    [a]: /x\n", 0) is None

    def test_angle_bracketed_link(self) -> None:
        """Angle brackets around the target are stripped."""
        _, ref = match_reference("[a]: <http://x.com>\n", 0)
        assert ref.link == "http://x.com"

    def test_trailing_angle_kept_without_opener(self) -> None:
        _, ref = match_reference("[a]: http://x.com>\n", 0)
        assert ref.link == "http://x.com>"

    def test_same_line_titles(self) -> None:
        """Double quotes, single quotes and parentheses all delimit titles."""
        for line in ('[a]: /u "T i"\n', "[a]: /u 'T i'\n", "[a]: /u (T i)\n"):
            _, ref = match_reference(line, 0)
            assert ref.title == "T i", line

    def test_title_on_next_line(self) -> None:
        """A title alone on the following line belongs to the definition."""
        data = '[a]: /u\n   "Next line"\nafter\n'
        end, ref = match_reference(data, 0)
        assert ref.title == "Next line"
        assert data[end + 1 :] == "after\n"

    def test_next_line_without_title_is_left_alone(self) -> None:
        data = "[a]: /u\nplain text\n"
        end, ref = match_reference(data, 0)
        assert ref.title == ""
        assert end == data.index("\n")

    def test_unterminated_same_line_title_rejects_definition(self) -> None:
        """A broken title rejects the whole definition."""
        assert match_reference('[a]: /u "broken\n', 0) is None

    def test_mismatched_title_quotes_reject_definition(self) -> None:
        assert match_reference("[a]: /u \"title'\n", 0) is None

    def test_junk_after_link_rejects(self) -> None:
        assert match_reference("[a]: /u junk\n", 0) is None

    def test_not_a_definition(self) -> None:
        assert match_reference("[a] /u\n", 0) is None
        assert match_reference("[a]:\n", 0) is None
        assert match_reference("text [a]: /u\n", 0) is None

    def test_link_on_next_line(self) -> None:
        _, ref = match_reference("[a]:\n  http://x.com\n", 0)
        assert ref.link == "http://x.com"

    def test_crlf_line_ending(self) -> None:
        data = '[a]: /u\r\n"Title"\r\nnext'
        end, ref = match_reference(data, 0)
        assert ref.title == "Title"
        assert data[end + 1 :] == "next"


class TestScanReferences:
    """Tests for the whole first pass."""

    def test_definition_removed_and_recorded(self) -> None:
        text, refs = scan_references("See [1].\n  [1]: http://x.com\n")
        assert "http://x.com" not in text
        assert refs.find("1").link == "http://x.com"

    def test_tabs_expanded(self) -> None:
        text, _ = scan_references("a\tb\n\tc\n")
        assert text == "a   b\n    c\n"

    def test_line_endings_normalized(self) -> None:
        """CRLF and LFCR pairs collapse to one newline; lone CR counts as one."""
        text, _ = scan_references("a\r\nb\n\rc\rd")
        assert text == "a\nb\nc\nd\n"

    def test_final_newline_added(self) -> None:
        text, _ = scan_references("abc")
        assert text == "abc\n"

    def test_empty_input(self) -> None:
        text, refs = scan_references("")
        assert text == ""
        assert len(refs) == 0

    def test_blank_lines_preserved(self) -> None:
        text, _ = scan_references("a\n\n\nb\n")
        assert text == "a\n\n\nb\n"

    def test_multiple_definitions(self) -> None:
        _, refs = scan_references("[b]: /b\n[A]: /a\n")
        assert [ref.id for ref in refs] == ["A", "b"]


class TestReferenceTable:
    """Tests for case-insensitive lookup."""

    def test_lookup_ignores_case(self) -> None:
        table = ReferenceTable([LinkRef("Foo", "/foo")])
        assert table.find("foo").link == "/foo"
        assert table.find("FOO").link == "/foo"
        assert "fOo" in table

    def test_missing_id(self) -> None:
        table = ReferenceTable([LinkRef("a", "/a")])
        assert table.find("b") is None
        assert "b" not in table
        assert 1 not in table

    def test_duplicate_ids_first_definition_wins(self) -> None:
        table = ReferenceTable(
            [LinkRef("x", "/first"), LinkRef("X", "/second"), LinkRef("x", "/third")]
        )
        assert table.find("x").link == "/first"
        assert len(table) == 3

    def test_empty_table(self) -> None:
        table = ReferenceTable()
        assert table.find("anything") is None
        assert list(table) == []
