"""End-to-end tests for translate_website and the command-line entry point."""

# pylint: disable=missing-class-docstring,missing-function-docstring

import sys

from ai_readable.content.assemble import main, section_divider, translate_html, translate_website
from ai_readable.document.model import Document

URL = "https://example.com/"

PRICING_TABLE_TEXT = (
    "\n"
    "+----------+----------+\n"
    "| Plan     | Price    |\n"
    "+----------+----------+\n"
    "| Pro      | 10       |\n"
    "+----------+----------+\n"
)

LANDING_PAGE = """<html><head><title>Acme</title></head><body>
<header><nav><a href="/">Home</a><a href="/pricing">Pricing</a></nav></header>
<button>Get Started</button>
<h1>Acme Rockets</h1>
<p>We build reusable rockets for everyone.</p>
<h2>Plans</h2>
<table><tr><th>Plan</th><th>Price</th></tr><tr><td>Pro</td><td>$10</td></tr></table>
<footer><a href="/privacy">Privacy</a></footer>
</body></html>"""


# ===========================================================================
# Full translation
# ===========================================================================


class TestTranslateWebsite:

    def test_landing_page(self):
        expected = "\n".join(
            [
                "",
                '<span class="brand-name">ACME ROCKETS</span>',
                "[Home](https://example.com/)",
                "[Pricing](https://example.com/pricing)",
                '<span class="cta-highlight">[Get Started]</span>',
                "",
                "",
                "",
                "# Acme Rockets",
                "",
                "We build reusable rockets for everyone.",
                "",
                "",
                "",
                "## Plans",
                "",
                PRICING_TABLE_TEXT,
                "",
                "",
                "",
                "",
                "[Privacy](https://example.com/privacy)",
                "",
            ]
        )
        assert translate_html(LANDING_PAGE, URL) == expected

    def test_framed_by_newlines(self):
        text = translate_html(LANDING_PAGE, URL)
        assert text.startswith("\n")
        assert text.endswith("\n")

    def test_cross_origin_link_in_paragraph(self):
        html = '<h1>Docs Hub</h1><p>Read the <a href="https://other.com/x">Docs</a> before you start.</p>'
        assert "Read the [Docs]($https://other.com/x) before you start." in translate_html(html, URL)

    def test_each_table_emitted_once(self):
        html = (
            "<h2>Plans</h2>"
            "<table><tr><th>Plan</th><th>Price</th></tr><tr><td>Pro</td><td>$10</td></tr></table>"
            "<h2>Scores</h2>"
            "<pre>| Model | Score |\n|---|---|\n| A | 90 |</pre>"
        )
        text = translate_html(html, URL)
        assert text.count(PRICING_TABLE_TEXT) == 1
        assert text.count("| Model | Score |") == 1
        assert text.index("## Plans") < text.index(PRICING_TABLE_TEXT) < text.index("## Scores")
        assert text.index("## Scores") < text.index("| Model | Score |")
        assert "TABLE_MARKER" not in text

    def test_preformatted_preferred_when_no_better_match(self):
        html = (
            "<pre>| Model | Score |\n|---|---|\n| A | 90 |</pre>"
            "<table><tr><th>Model</th><th>Score</th></tr><tr><td>A</td><td>90</td></tr></table>"
            '<h2 class="benchmark-title">Benchmark Results</h2>'
        )
        text = translate_html(html, URL)
        assert "| Model | Score |\n|---|---|\n| A | 90 |" in text
        assert "+----------+" not in text

    def test_no_line_repeats_with_overlapping_cta_selectors(self):
        html = (
            '<nav><a href="/">Home</a></nav>'
            '<button class="btn cta" role="button">Get Started</button>'
            "<h1>Acme</h1><p>Acme builds rockets for everyone.</p>"
        )
        lines = [line for line in translate_html(html, URL).split("\n") if line]
        assert len(lines) == len(set(lines))
        assert lines.count('<span class="cta-highlight">[Get Started]</span>') == 1

    def test_no_heading_page(self):
        html = (
            "<p>This is the first long paragraph of text.</p>"
            '<p class="stats">Revenue grew 40 percent this year overall.</p>'
            "<p>This is the second long paragraph of text.</p>"
        )
        text = translate_html(html, URL)
        assert "This is the first long paragraph of text." in text
        assert "This is the second long paragraph of text." in text
        assert "Revenue grew" not in text

    def test_unresolved_marker_kept_as_token(self):
        text = translate_html('<h2 class="stats-heading">Quarterly stats</h2>', URL)
        assert "[TABLE_MARKER:1]" in text

    def test_section_dividers(self):
        text = translate_website(Document(LANDING_PAGE, URL), section_dividers=True)
        navigation = text.index(section_divider("NAVIGATION"))
        main_content = text.index(section_divider("MAIN CONTENT"))
        footer = text.index(section_divider("FOOTER"))
        assert navigation < main_content < footer

    def test_no_dividers_by_default(self):
        assert "section-divider" not in translate_website(Document(LANDING_PAGE, URL), section_dividers=False)

    def test_sparse_page_fallback(self):
        html = (
            "<span>Just a lonely sentence of text here</span>"
            '<span style="display:none">Hidden sentence that is long enough</span>'
        )
        assert translate_html(html, URL) == "\n\n\n\nJust a lonely sentence of text here\n"

    def test_empty_page(self):
        assert translate_html("", URL) == "\n\n\n\n"


# ===========================================================================
# CLI
# ===========================================================================


class TestMain:

    def test_writes_output_file(self, tmp_path, monkeypatch):
        html_path = tmp_path / "page.html"
        html_path.write_text(LANDING_PAGE, encoding="utf-8")
        out_path = tmp_path / "out" / "page.txt"
        monkeypatch.setattr(sys, "argv", ["assemble", str(html_path), "--url", URL, "-o", str(out_path)])
        assert main() == 0
        assert out_path.read_text(encoding="utf-8") == translate_html(LANDING_PAGE, URL)

    def test_prints_to_stdout(self, tmp_path, monkeypatch, capsys):
        html_path = tmp_path / "page.html"
        html_path.write_text("<h1>Hello World</h1>", encoding="utf-8")
        monkeypatch.setattr(sys, "argv", ["assemble", str(html_path)])
        assert main() == 0
        assert "# Hello World" in capsys.readouterr().out

    def test_missing_file(self, tmp_path, monkeypatch):
        monkeypatch.setattr(sys, "argv", ["assemble", str(tmp_path / "missing.html")])
        assert main() == 1
