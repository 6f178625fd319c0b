"""Sanitize entrypoint: pre-passes, tag scanning, and the public helpers."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from storefront_sanitize._internal.prepass import (
    strip_event_handlers,
    strip_script_blocks,
    strip_script_urls,
)
from storefront_sanitize._internal.scanner import scan_and_filter
from storefront_sanitize.config import SanitizeOptions, resolve_options
from storefront_sanitize.log import get_logger
from storefront_sanitize.types import SafeHtml

_log = get_logger("sanitizer")

# Ordinary markup settles after one rewriting pass plus one confirming pass.
# Input that is still changing after this many passes is treated as hostile.
MAX_PASSES = 4


class Sanitizer:
    """A sanitizer bound to one resolved set of options.

    Instances hold no per-call state and can be shared between threads.

    Args:
        options: A :class:`SanitizeOptions`, a mapping of its fields, or
            ``None`` for the defaults.

    Raises:
        InvalidOptionsError: If *options* is a mapping that fails validation.
    """

    def __init__(self, options: SanitizeOptions | Mapping[str, Any] | None = None) -> None:
        self._options = resolve_options(options)
        self._allowed_tags = self._options.effective_tags()
        self._allowed_attributes = self._options.effective_attributes()

    @property
    def options(self) -> SanitizeOptions:
        return self._options

    def _run_pass(self, html: str) -> str:
        html = strip_script_blocks(html)
        html = strip_event_handlers(html)
        html = strip_script_urls(html)
        return scan_and_filter(
            html,
            self._allowed_tags,
            self._allowed_attributes,
            strip_tags=self._options.strip_tags,
        )

    def sanitize(self, html: str | None) -> str:
        """Return *html* with everything outside the allowlists removed or escaped.

        The pipeline is repeated until its output stops changing, which makes
        the result a fixed point: sanitizing it again returns it unchanged.
        Input that has not settled after :data:`MAX_PASSES` passes yields
        ``""``.

        Raises:
            TypeError: If *html* is neither a string nor ``None``.
        """
        if html is None:
            return ""
        if not isinstance(html, str):
            raise TypeError(f"html must be a str or None, got {type(html).__name__}")

        current = html
        for _ in range(MAX_PASSES):
            if not current:
                return ""
            result = self._run_pass(current)
            if result == current:
                return result
            current = result
        _log.warning(
            "input of %d characters did not settle after %d passes; returning empty output",
            len(html),
            MAX_PASSES,
        )
        return ""

    def __repr__(self) -> str:
        return f"Sanitizer(options={self._options!r})"


_default_sanitizer = Sanitizer()


def sanitize_html(
    html: str | None,
    options: SanitizeOptions | Mapping[str, Any] | None = None,
) -> str:
    """Sanitize untrusted HTML for injection into a rendered page.

    Args:
        html: Untrusted markup. ``None`` and ``""`` give ``""``.
        options: Optional overrides; see :class:`SanitizeOptions`.

    Returns:
        Markup containing only allowlisted tags and attributes, with no
        script blocks, event handlers or script URLs.

    Example::

        >>> sanitize_html('<p>ok</p><script>alert(1)</script><b>bold</b>')
        '<p>ok</p><b>bold</b>'
    """
    sanitizer = _default_sanitizer if options is None else Sanitizer(options)
    return sanitizer.sanitize(html)


def create_safe_html(html: str | None) -> SafeHtml:
    """Sanitize *html* and wrap it for a raw-markup injection API.

    Returns ``{"__html": sanitize_html(html)}``.
    """
    return {"__html": sanitize_html(html)}
