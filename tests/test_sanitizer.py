"""Tests for storefront_sanitize.sanitizer — the public entrypoint."""

from __future__ import annotations

import logging

import pytest

from storefront_sanitize import (
    InvalidOptionsError,
    SanitizeOptions,
    Sanitizer,
    create_safe_html,
    sanitize_html,
)
from storefront_sanitize import sanitizer as sanitizer_mod

# ---------------------------------------------------------------------------
# sanitize_html — documented behaviour
# ---------------------------------------------------------------------------


class TestSanitizeHtml:
    @pytest.mark.parametrize("value", [None, ""])
    def test_empty_input(self, value: str | None) -> None:
        assert sanitize_html(value) == ""

    def test_script_block_removed(self) -> None:
        html = "<p>ok</p><script>alert(1)</script><b>bold</b>"
        assert sanitize_html(html) == "<p>ok</p><b>bold</b>"

    def test_script_body_with_lookalike_end_tag(self) -> None:
        html = "<p>a</p><script>var s = '</scripts>'; steal(document.cookie)</script><p>b</p>"
        out = sanitize_html(html)
        assert "steal" not in out
        assert out == "<p>a</p><p>b</p>"

    def test_attribute_allowlist(self) -> None:
        html = '<a href="javascript:alert(1)" onclick="x()" title="t">link</a>'
        assert sanitize_html(html) == '<a title="t">link</a>'

    def test_target_blank(self) -> None:
        out = sanitize_html('<a href="https://x.com" target="_blank">go</a>')
        assert 'target="_blank"' in out
        assert 'rel="noopener noreferrer"' in out

    def test_style_unsafe_url_removed(self) -> None:
        out = sanitize_html('<div style="color:red;background:url(data:text/html,x)">x</div>')
        assert out == '<div style="color:red;background:">x</div>'

    def test_style_with_javascript_rejected_whole(self) -> None:
        out = sanitize_html('<div style="color:red;background:url(javascript:alert(1))">x</div>')
        assert out == "<div>x</div>"

    def test_style_expression_rejected(self) -> None:
        assert sanitize_html('<div style="width:expression(alert(1))">x</div>') == "<div>x</div>"

    def test_escape_mode(self) -> None:
        out = sanitize_html("<foo>bar</foo>", {"strip_tags": False})
        assert "&lt;foo&gt;bar&lt;/foo&gt;" in out

    def test_escape_mode_camel_case_key(self) -> None:
        assert sanitize_html("<foo>bar</foo>", {"stripTags": False}) == "&lt;foo&gt;bar&lt;/foo&gt;"

    def test_self_closing_normalized(self) -> None:
        html = '<img src="https://x.com/a.png" onerror="x()">'
        assert sanitize_html(html) == '<img src="https://x.com/a.png" />'

    def test_style_block_removed_in_escape_mode(self) -> None:
        html = "<style>body{display:none}</style><p>x</p>"
        assert sanitize_html(html, {"strip_tags": False}) == "<p>x</p>"

    def test_script_never_allowed_by_override(self) -> None:
        html = "<script>alert(1)</script><p>x</p>"
        assert sanitize_html(html, {"allowed_tags": {"script", "p"}}) == "<p>x</p>"

    def test_allowed_tags_override(self) -> None:
        assert sanitize_html("<p><b>x</b></p>", {"allowed_tags": {"b"}}) == "<b>x</b>"

    def test_allowed_attributes_override(self) -> None:
        options = {"allowed_attributes": {"p": {"data-x"}}}
        assert sanitize_html('<p id="i" data-x="1">x</p>', options) == '<p data-x="1">x</p>'

    def test_product_description(self) -> None:
        html = (
            '<h2 class="title">Trail Shoe</h2>'
            '<p>Light &amp; <strong>grippy</strong>.</p>'
            '<ul><li data-sku="TS-1">Size 42</li></ul>'
            '<img src="/media/shoe.jpg" alt="Shoe" loading="lazy">'
        )
        assert sanitize_html(html) == (
            '<h2 class="title">Trail Shoe</h2>'
            "<p>Light &amp; <strong>grippy</strong>.</p>"
            '<ul><li data-sku="TS-1">Size 42</li></ul>'
            '<img src="/media/shoe.jpg" alt="Shoe" loading="lazy" />'
        )

    def test_svg_icon_stripped_by_default(self) -> None:
        icon = '<svg viewBox="0 0 24 24" onload="x()"><path d="M0 0h24"/></svg>'
        assert sanitize_html(icon) == ""

    def test_svg_icon_with_custom_allowlist(self) -> None:
        icon = '<svg viewBox="0 0 24 24" onload="x()"><path d="M0 0h24"/></svg>'
        options = SanitizeOptions(
            allowed_tags={"svg", "path"},
            allowed_attributes={"svg": {"viewbox"}, "path": {"d"}},
        )
        assert sanitize_html(icon, options) == '<svg viewbox="0 0 24 24"><path d="M0 0h24"></svg>'

    def test_non_string_rejected(self) -> None:
        with pytest.raises(TypeError):
            sanitize_html(b"<p>x</p>")  # type: ignore[arg-type]

    def test_invalid_options(self) -> None:
        with pytest.raises(InvalidOptionsError):
            sanitize_html("<p>x</p>", {"strip": False})


# ---------------------------------------------------------------------------
# Sanitizer
# ---------------------------------------------------------------------------


class TestSanitizer:
    def test_default_options(self) -> None:
        s = Sanitizer()
        assert s.options == SanitizeOptions()
        assert s.sanitize("<p>x</p>") == "<p>x</p>"

    def test_reusable(self) -> None:
        s = Sanitizer({"strip_tags": False})
        assert s.sanitize("<x>") == "&lt;x&gt;"
        assert s.sanitize("<y>") == "&lt;y&gt;"

    def test_repr(self) -> None:
        assert repr(Sanitizer()).startswith("Sanitizer(options=")

    def test_already_clean_input_single_pass(self, monkeypatch: pytest.MonkeyPatch) -> None:
        s = Sanitizer()
        calls: list[str] = []
        original = s._run_pass

        def counting(html: str) -> str:
            calls.append(html)
            return original(html)

        monkeypatch.setattr(s, "_run_pass", counting)
        assert s.sanitize("<p>clean</p>") == "<p>clean</p>"
        assert len(calls) == 1

    def test_unsettled_input_returns_empty(
        self, monkeypatch: pytest.MonkeyPatch, caplog: pytest.LogCaptureFixture
    ) -> None:
        s = Sanitizer()
        monkeypatch.setattr(s, "_run_pass", lambda html: html + "x")
        with caplog.at_level(logging.WARNING, logger="storefront_sanitize"):
            assert s.sanitize("<p>a</p>") == ""
        assert any("did not settle" in r.getMessage() for r in caplog.records)

    def test_settles_within_max_passes(self, monkeypatch: pytest.MonkeyPatch) -> None:
        s = Sanitizer()
        steps = iter(["b", "c", "c"])
        monkeypatch.setattr(s, "_run_pass", lambda html: next(steps))
        assert s.sanitize("a") == "c"
        assert sanitizer_mod.MAX_PASSES >= 3


# ---------------------------------------------------------------------------
# create_safe_html
# ---------------------------------------------------------------------------


class TestCreateSafeHtml:
    def test_shape(self) -> None:
        assert create_safe_html("<p>x</p>") == {"__html": "<p>x</p>"}

    def test_sanitizes_inside(self) -> None:
        result = create_safe_html("<p onclick='x()'>x</p><script>y</script>")
        assert result == {"__html": "<p>x</p>"}

    def test_none(self) -> None:
        assert create_safe_html(None) == {"__html": ""}
