"""Tests for storefront_sanitize.escape — entity escaping."""

from __future__ import annotations

import pytest

from storefront_sanitize.escape import escape_html, escape_text


class TestEscapeHtml:
    def test_all_metacharacters(self) -> None:
        assert escape_html("<b>&\"'") == "&lt;b&gt;&amp;&quot;&#x27;"

    def test_plain_text_unchanged(self) -> None:
        assert escape_html("hello world") == "hello world"

    def test_existing_entities_escaped_again(self) -> None:
        assert escape_html("&amp;") == "&amp;amp;"

    def test_non_ascii_unchanged(self) -> None:
        assert escape_html("café — ü") == "café — ü"

    def test_empty(self) -> None:
        assert escape_html("") == ""


class TestEscapeText:
    def test_mixed_markup(self) -> None:
        assert escape_text("<b>&\"'") == "&lt;b&gt;&amp;&quot;&#x27;"

    @pytest.mark.parametrize("value", [None, ""])
    def test_empty_values(self, value: str | None) -> None:
        assert escape_text(value) == ""

    def test_no_tag_awareness(self) -> None:
        assert escape_text('<a href="x">y</a>') == "&lt;a href=&quot;x&quot;&gt;y&lt;/a&gt;"
