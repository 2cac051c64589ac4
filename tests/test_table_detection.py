"""Unit tests for the shared table classifier."""

# pylint: disable=missing-class-docstring,missing-function-docstring

from ai_readable.document.model import Document
from ai_readable.tables.detection import has_table_class, is_table_related, looks_like_text_table


def make_document(body: str) -> Document:
    return Document(f"<html><body>{body}</body></html>", "https://example.com/")


# ===========================================================================
# has_table_class
# ===========================================================================


class TestHasTableClass:

    def test_case_insensitive_substring(self):
        doc = make_document('<div class="Pricing-Table">x</div>')
        assert has_table_class(doc.select_one("div")) is True

    def test_each_hint(self):
        for hint in ("grid", "chart", "graph", "benchmark", "metrics", "stats"):
            doc = make_document(f'<div class="my-{hint}-block">x</div>')
            assert has_table_class(doc.select_one("div")) is True, hint

    def test_no_class(self):
        doc = make_document("<div>x</div>")
        assert has_table_class(doc.select_one("div")) is False

    def test_unrelated_class(self):
        doc = make_document('<div class="hero banner">x</div>')
        assert has_table_class(doc.select_one("div")) is False


# ===========================================================================
# Text tables
# ===========================================================================


class TestLooksLikeTextTable:

    def test_keyword_lines_and_separator(self):
        doc = make_document("<div>Model vs Model\nCategory  Score\nAccuracy  90</div>")
        assert looks_like_text_table(doc.select_one("div")) is True

    def test_needs_keyword(self):
        doc = make_document("<div>Name  Score\nAlice  90\nBob  80</div>")
        assert looks_like_text_table(doc.select_one("div")) is False

    def test_needs_enough_lines(self):
        doc = make_document("<div>Category  Score\nAccuracy  90</div>")
        assert looks_like_text_table(doc.select_one("div")) is False

    def test_needs_column_separator(self):
        doc = make_document("<div>Category one\nCategory two\nCategory three</div>")
        assert looks_like_text_table(doc.select_one("div")) is False

    def test_tab_separator(self):
        doc = make_document("<div>Category\tScore\nAccuracy\t90\nSpeed\t80</div>")
        assert looks_like_text_table(doc.select_one("div")) is True


# ===========================================================================
# is_table_related
# ===========================================================================


class TestIsTableRelated:

    def test_table_element(self):
        doc = make_document("<table><tr><td>x</td></tr></table>")
        assert is_table_related(doc.select_one("table")) is True

    def test_table_class(self):
        doc = make_document('<section class="benchmark-results"><p>x</p></section>')
        assert is_table_related(doc.select_one("section")) is True

    def test_pipe_pre(self):
        doc = make_document("<pre>| a | b |\n|---|---|</pre>")
        assert is_table_related(doc.select_one("pre")) is True

    def test_plain_pre(self):
        doc = make_document("<pre>print('hello')</pre>")
        assert is_table_related(doc.select_one("pre")) is False

    def test_text_table_only_for_div(self):
        text = "Model vs Model\nCategory  Score\nAccuracy  90"
        doc = make_document(f"<div>{text}</div><p>{text}</p>")
        assert is_table_related(doc.select_one("div")) is True
        assert is_table_related(doc.select_one("p")) is False

    def test_table_descendant(self):
        doc = make_document("<section><div><table><tr><td>x</td></tr></table></div></section>")
        assert is_table_related(doc.select_one("section")) is True

    def test_table_class_descendant(self):
        doc = make_document('<div><span class="stats">42</span></div>')
        assert is_table_related(doc.select_one("div")) is True

    def test_plain_paragraph(self):
        doc = make_document("<p>Just some <b>prose</b> here.</p>")
        assert is_table_related(doc.select_one("p")) is False
