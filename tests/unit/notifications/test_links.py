"""Tests for notification hyperlink markup."""

import pytest

from journal.modules.notifications.links import (
    ContentSegment,
    Hyperlink,
    extract_hyperlinks,
    has_hyperlinks,
    normalize_url,
    parse_hyperlinks,
    render_html,
    to_plain_text,
)


pytestmark = pytest.mark.unit

CONTENT = (
    "Submissions are open. Read hyperLink:[the guidelines](legalinsight.com/submit) "
    "or hyperLink:[email us](https://legalinsight.com/contact)."
)


class TestParseHyperlinks:
    """Tests for parse_hyperlinks."""

    def test_splits_text_and_links(self):
        """Text and links alternate in order."""
        segments = parse_hyperlinks(CONTENT)

        assert [s.kind for s in segments] == ["text", "link", "text", "link", "text"]
        assert segments[1] == ContentSegment(
            kind="link", text="the guidelines", url="https://legalinsight.com/submit"
        )
        assert segments[3].url == "https://legalinsight.com/contact"
        assert segments[4].text == "."

    def test_plain_content_is_one_segment(self):
        """Content without links is a single text segment."""
        assert parse_hyperlinks("No links here") == [
            ContentSegment(kind="text", text="No links here")
        ]

    def test_empty_content(self):
        assert parse_hyperlinks("") == [ContentSegment(kind="text", text="")]

    def test_link_only(self):
        """No empty text segments surround a lone link."""
        segments = parse_hyperlinks("hyperLink:[Home](example.com)")

        assert segments == [ContentSegment(kind="link", text="Home", url="https://example.com")]

    def test_incomplete_markup_is_text(self):
        """Broken markup is left as text."""
        content = "hyperLink:[Home](example.com"

        assert parse_hyperlinks(content) == [ContentSegment(kind="text", text=content)]


@pytest.mark.parametrize(
    ("url", "expected"),
    [
        ("example.com", "https://example.com"),
        ("http://example.com", "http://example.com"),
        ("https://example.com/a?b=c", "https://example.com/a?b=c"),
    ],
)
def test_normalize_url(url: str, expected: str):
    """Scheme-less URLs get https://."""
    assert normalize_url(url) == expected


def test_has_hyperlinks():
    assert has_hyperlinks(CONTENT) is True
    assert has_hyperlinks("hyperLink:[]()") is False
    assert has_hyperlinks("plain") is False


def test_extract_hyperlinks_keeps_urls_as_written():
    """Extracted URLs are not normalized."""
    assert extract_hyperlinks(CONTENT) == [
        Hyperlink(text="the guidelines", url="legalinsight.com/submit"),
        Hyperlink(text="email us", url="https://legalinsight.com/contact"),
    ]


def test_to_plain_text():
    """Links are replaced by their text."""
    assert to_plain_text(CONTENT) == (
        "Submissions are open. Read the guidelines or email us."
    )


class TestRenderHtml:
    """Tests for render_html."""

    def test_renders_links_in_new_tab(self):
        html = render_html("See hyperLink:[docs](example.com/docs)")

        assert html == (
            'See <a href="https://example.com/docs" target="_blank" '
            'rel="noopener noreferrer">docs</a>'
        )

    def test_escapes_text_and_urls(self):
        """Markup in text and URLs is escaped."""
        html = render_html('<b>hi</b> hyperLink:[a&b](example.com/?q="x")')

        assert "<b>" not in html
        assert "&lt;b&gt;hi&lt;/b&gt;" in html
        assert ">a&amp;b</a>" in html
        assert 'href="https://example.com/?q=&quot;x&quot;"' in html
