"""Inline CSS filtering.

This is a flat-text filter, not a CSS parser. A declaration string that
mentions any dangerous token anywhere is rejected as a whole; otherwise
only ``url(...)`` references with an unsafe scheme are cut out and the
surrounding declarations are left as they are.
"""

from __future__ import annotations

import re

from storefront_sanitize.log import get_logger
from storefront_sanitize.policy import DANGEROUS_CSS_TOKENS
from storefront_sanitize.urls import is_safe_url

_log = get_logger("style")

_URL_OPEN = re.compile(r"url\s*+\(\s*+", re.IGNORECASE)
_URL_INNER = re.compile(r"[^\"')]*+")
_URL_CLOSE = re.compile(r"\s*+\)")
_QUOTES = "\"'"


def find_url_references(style: str) -> list[tuple[int, int, str]]:
    """Return ``(start, end, url)`` for every ``url(...)`` in *style*.

    The inner value may be wrapped in single or double quotes but may not
    itself contain quotes or ``)``. When a candidate fails to close, the
    search resumes where its inner value stopped: any ``url(`` nested in
    that stretch would stop at the same character and fail the same way.
    """
    refs: list[tuple[int, int, str]] = []
    n = len(style)
    pos = 0
    while True:
        opened = _URL_OPEN.search(style, pos)
        if opened is None:
            return refs
        i = opened.end()
        if i < n and style[i] in _QUOTES:
            i += 1
        inner_end = _URL_INNER.match(style, i).end()  # type: ignore[union-attr]
        j = inner_end
        if j < n and style[j] in _QUOTES:
            j += 1
        closed = _URL_CLOSE.match(style, j)
        if inner_end == i or closed is None:
            pos = max(inner_end, opened.end())
            continue
        refs.append((opened.start(), closed.end(), style[i:inner_end]))
        pos = closed.end()


def sanitize_style(style: str | None) -> str:
    """Filter an inline ``style`` declaration string.

    Returns ``""`` when the declaration contains a dangerous CSS token
    (``expression``, ``behavior``, ``-moz-binding``, ``javascript``).
    Otherwise every ``url(...)`` whose target fails
    :func:`~storefront_sanitize.urls.is_safe_url` is removed and the rest of
    the text is returned unchanged.

    Example::

        >>> sanitize_style("color:red;background:url(data:text/html,x)")
        'color:red;background:'
    """
    if not style:
        return ""

    lowered = style.lower()
    for token in DANGEROUS_CSS_TOKENS:
        if token in lowered:
            _log.debug("rejected style declaration containing %r", token)
            return ""

    parts: list[str] = []
    last = 0
    for start, end, url in find_url_references(style):
        if is_safe_url(url):
            continue
        _log.debug("removed unsafe url() reference %r", url)
        parts.append(style[last:start])
        last = end
    if not parts:
        return style
    parts.append(style[last:])
    return "".join(parts)
