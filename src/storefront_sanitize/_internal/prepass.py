"""Raw-text strippers that run before the tag scanner.

These remove constructs the scanner would also reject, but they do it on
the raw input and regardless of the caller's allowlists. Each function is
a single forward pass over the text.
"""

from __future__ import annotations

import re

from storefront_sanitize.log import get_logger

_log = get_logger("prepass")

_BLOCK_OPEN = re.compile(r"<(script|style)\b", re.IGNORECASE | re.ASCII)
_BLOCK_CLOSE = {
    "script": re.compile(r"</script(?=[\s/>])", re.IGNORECASE | re.ASCII),
    "style": re.compile(r"</style(?=[\s/>])", re.IGNORECASE | re.ASCII),
}

# Anchored at the first character of a whitespace run so that a long run
# is scanned once, not once per character.
_HANDLER_HEAD = re.compile(r"(?<!\s)\s++on\w++\s*+=\s*+", re.IGNORECASE | re.ASCII)
_SCRIPT_URL = re.compile(
    r"(?<!\s)\s++(?:href|src)\s*+=\s*+[\"']?+\s*+javascript:[^\"'>\s]*+",
    re.IGNORECASE | re.ASCII,
)
_BARE_VALUE = re.compile(r"[^\s>]*+")


def strip_script_blocks(text: str) -> str:
    """Remove ``<script>`` and ``<style>`` elements together with their content.

    A block runs from ``<script`` to the ``>`` that ends the next
    ``</script`` end tag (likewise for ``style``). Only an end tag whose name
    is followed by whitespace, ``/`` or ``>`` closes the block, so
    ``</scripts>`` inside a script body does not. When the closing tag is
    missing, everything from the opening tag to the end of the text is
    removed.
    """
    parts: list[str] = []
    pos = 0
    n = len(text)
    while pos < n:
        opened = _BLOCK_OPEN.search(text, pos)
        if opened is None:
            break
        parts.append(text[pos : opened.start()])
        element = opened.group(1).lower()
        closed = _BLOCK_CLOSE[element].search(text, opened.end())
        end = text.find(">", closed.end()) if closed else -1
        if end == -1:
            _log.debug("unterminated <%s> block at offset %d", element, opened.start())
            pos = n
            break
        _log.debug("removed <%s> block at offset %d", element, opened.start())
        pos = end + 1
    if not parts:
        return text
    parts.append(text[pos:])
    return "".join(parts)


def strip_event_handlers(text: str) -> str:
    """Remove every whitespace-led ``on<word>=value`` assignment in *text*.

    Works on raw text, inside or outside tags. The value may be
    double-quoted, single-quoted or bare; a quote with no partner later in
    the text is treated as the start of a bare value.
    """
    last_quote = {'"': text.rfind('"'), "'": text.rfind("'")}
    parts: list[str] = []
    pos = 0
    while True:
        head = _HANDLER_HEAD.search(text, pos)
        if head is None:
            break
        start = head.end()
        quote = text[start : start + 1]
        if quote in last_quote and start < last_quote[quote]:
            end = text.index(quote, start + 1) + 1
        else:
            end = _BARE_VALUE.match(text, start).end()  # type: ignore[union-attr]
        parts.append(text[pos : head.start()])
        pos = end
    if not parts:
        return text
    parts.append(text[pos:])
    return "".join(parts)


def strip_script_urls(text: str) -> str:
    """Remove whitespace-led ``href=``/``src=`` assignments of ``javascript:`` URLs."""
    return _SCRIPT_URL.sub("", text)
