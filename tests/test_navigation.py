"""Unit tests for brand, navigation, CTA and footer extraction."""

# pylint: disable=missing-class-docstring,missing-function-docstring

from ai_readable.content.navigation import (
    extract_navigation,
    get_brand_name,
    get_footer_links,
    get_navigation_links,
    get_primary_ctas,
    is_cta,
    should_skip_link,
)
from ai_readable.document.model import Document


def make_document(body: str, title: str = "") -> Document:
    head = f"<head><title>{title}</title></head>" if title else ""
    return Document(f"<html>{head}<body>{body}</body></html>", "https://example.com/")


# ===========================================================================
# Brand
# ===========================================================================


class TestBrandName:

    def test_from_h1(self):
        assert get_brand_name(make_document("<h1>Acme Corp</h1>")) == "ACME CORP"

    def test_from_logo(self):
        assert get_brand_name(make_document('<div class="logo">Acme</div><p>Body</p>')) == "ACME"

    def test_empty_match_skipped(self):
        doc = make_document('<h1>  </h1><div class="brand">Acme</div>')
        assert get_brand_name(doc) == "ACME"

    def test_from_title_pipe(self):
        assert get_brand_name(make_document("<p>x</p>", title="Acme Rockets | Home")) == "ACME ROCKETS"

    def test_from_title_dash(self):
        assert get_brand_name(make_document("<p>x</p>", title="Acme - Home")) == "ACME"

    def test_symbol_only_match_skipped(self):
        doc = make_document('<h1>***</h1><div class="logo">Acme</div>')
        assert get_brand_name(doc) == "ACME"

    def test_none_when_nothing_found(self):
        assert get_brand_name(make_document("<p>x</p>")) is None


# ===========================================================================
# Navigation links
# ===========================================================================


class TestNavigationLinks:

    def test_links_resolved_and_filtered(self):
        doc = make_document(
            '<nav><a href="/">Home</a><a href="/about">About</a>'
            '<a href="/privacy">Privacy Policy</a><a>No href</a><a href="/x">  </a></nav>'
        )
        assert get_navigation_links(doc) == ["[Home](https://example.com/)", "[About](https://example.com/about)"]

    def test_cross_origin_not_marked(self):
        doc = make_document('<header><a href="https://other.com/blog">Blog</a></header>')
        assert get_navigation_links(doc) == ["[Blog](https://other.com/blog)"]

    def test_capped(self):
        links = "".join(f'<a href="/p{i}">Page {i}</a>' for i in range(15))
        assert len(get_navigation_links(make_document(f"<nav>{links}</nav>"))) == 10

    def test_links_outside_menus_ignored(self):
        assert get_navigation_links(make_document('<p><a href="/x">Inline</a></p>')) == []

    def test_skip_patterns(self):
        for text in ("Cookie settings", "Terms of use", "Login", "Sign up", "Cart (2)"):
            assert should_skip_link(text) is True, text
        assert should_skip_link("Pricing") is False


# ===========================================================================
# CTAs
# ===========================================================================


class TestPrimaryCtas:

    def test_buttons_and_links(self):
        doc = make_document('<button>Get Started</button><a class="btn" href="/demo">Book a demo</a><button>Close</button>')
        assert get_primary_ctas(doc) == [
            '<span class="cta-highlight">[Get Started]</span>',
            '<span class="cta-highlight">[Book a demo](https://example.com/demo)</span>',
        ]

    def test_element_matching_several_selectors_counted_once(self):
        doc = make_document('<button class="btn cta">Get Started</button><a class="button" href="/demo">Book a demo</a>')
        assert get_primary_ctas(doc) == [
            '<span class="cta-highlight">[Get Started]</span>',
            '<span class="cta-highlight">[Book a demo](https://example.com/demo)</span>',
        ]

    def test_capped(self):
        buttons = "".join(f"<button>Get plan {i}</button>" for i in range(6))
        assert len(get_primary_ctas(make_document(buttons))) == 3

    def test_is_cta(self):
        assert is_cta("Request a Demo") is True
        assert is_cta("Close") is False


# ===========================================================================
# Footer
# ===========================================================================


class TestFooterLinks:

    def test_first_footer_only(self):
        doc = make_document(
            '<footer><a href="/privacy">Privacy</a><a>No href</a></footer>'
            '<footer><a href="/other">Other</a></footer>'
        )
        assert get_footer_links(doc) == ["[Privacy](https://example.com/privacy)"]

    def test_capped(self):
        links = "".join(f'<a href="/f{i}">Link {i}</a>' for i in range(25))
        assert len(get_footer_links(make_document(f"<footer>{links}</footer>"))) == 20

    def test_no_footer(self):
        assert get_footer_links(make_document("<p>x</p>")) == []


class TestExtractNavigation:

    def test_combined(self):
        doc = make_document('<nav><a href="/">Home</a></nav><h1>Acme</h1><button>Try it free</button>')
        navigation = extract_navigation(doc)
        assert navigation.brand == "ACME"
        assert navigation.links == ["[Home](https://example.com/)"]
        assert navigation.ctas == ['<span class="cta-highlight">[Try it free]</span>']
