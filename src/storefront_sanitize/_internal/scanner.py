"""Lexical tag scanner.

Walks the input once, left to right, and rewrites every tag-shaped region
``<[/]name attrs>`` according to the tag allowlist. It does not build a
tree and does not check that tags are balanced or nested: each region is
judged on its own.

Regions are recognised by an explicit state machine. ``name`` is ASCII
``[A-Za-z][A-Za-z0-9]*`` and ``attrs`` runs to the first ``>``; a ``<``
met before that ``>`` means the earlier ``<`` did not open a tag. Such a
stray ``<`` is written out as ``&lt;`` so that removing a neighbouring
region can never splice a new tag together out of the leftovers.
Comments, declarations and processing instructions (``<!--...-->``,
``<!...>``, ``<?...>``) are handled like disallowed tags.
"""

from __future__ import annotations

import re
import string
from collections.abc import Mapping
from enum import Enum, auto

from storefront_sanitize.attributes import filter_attributes
from storefront_sanitize.escape import escape_html
from storefront_sanitize.log import get_logger
from storefront_sanitize.policy import (
    ALLOWED_ATTRIBUTES,
    ALLOWED_TAGS,
    FORBIDDEN_TAGS,
    SELF_CLOSING_TAGS,
)

_log = get_logger("scanner")

_LETTERS = frozenset(string.ascii_letters)
_ALNUM = frozenset(string.ascii_letters + string.digits)
_TAG_END = re.compile(r"[<>]")


class _State(Enum):
    TEXT = auto()
    TAG_OPEN = auto()
    END_TAG_OPEN = auto()
    TAG_NAME = auto()
    ATTRIBUTES = auto()
    MARKUP_DECLARATION = auto()


def scan_and_filter(
    text: str,
    allowed_tags: frozenset[str] = ALLOWED_TAGS,
    allowed_attributes: Mapping[str, frozenset[str]] = ALLOWED_ATTRIBUTES,
    *,
    strip_tags: bool = True,
) -> str:
    """Rewrite every tag region in *text* against the allowlists.

    Args:
        text: Markup to filter.
        allowed_tags: Lowercase tag names to keep. ``script`` and ``style``
            are rejected even when listed.
        allowed_attributes: Attribute allowlist passed to
            :func:`~storefront_sanitize.attributes.filter_attributes`.
        strip_tags: Drop disallowed regions when ``True``; emit them
            escaped when ``False``.

    Returns:
        The filtered markup. Text outside tag regions is copied through,
        except for stray ``<`` characters, which are escaped.
    """
    allowed_tags = allowed_tags - FORBIDDEN_TAGS

    def reject(region: str) -> str:
        return "" if strip_tags else escape_html(region)

    def emit_tag(region: str, tag_name: str, attr_text: str, closing: bool) -> str:
        if tag_name not in allowed_tags:
            _log.debug("rejected disallowed tag <%s>", tag_name)
            return reject(region)
        if closing:
            return f"</{tag_name}>"
        attrs = filter_attributes(tag_name, attr_text, allowed_attributes)
        return f"<{tag_name}{attrs}{' />' if tag_name in SELF_CLOSING_TAGS else '>'}"

    out: list[str] = []
    n = len(text)
    last_gt = text.rfind(">")
    i = 0
    state = _State.TEXT
    region_start = 0
    name_start = 0
    attr_start = 0
    tag_name = ""
    closing = False

    while True:
        if state is _State.TEXT:
            lt = text.find("<", i)
            if lt == -1:
                out.append(text[i:])
                break
            out.append(text[i:lt])
            region_start = lt
            closing = False
            i = lt + 1
            state = _State.TAG_OPEN
            continue

        ch = text[i] if i < n else ""

        if state is _State.TAG_OPEN:
            if ch in _LETTERS:
                name_start = i
                state = _State.TAG_NAME
            elif ch == "/":
                closing = True
                i += 1
                state = _State.END_TAG_OPEN
            elif ch in ("!", "?"):
                state = _State.MARKUP_DECLARATION
            else:
                out.append("&lt;")
                state = _State.TEXT

        elif state is _State.END_TAG_OPEN:
            if ch in _LETTERS:
                name_start = i
                state = _State.TAG_NAME
            else:
                out.append("&lt;")
                i = region_start + 1
                state = _State.TEXT

        elif state is _State.TAG_NAME:
            if ch in _ALNUM:
                i += 1
            else:
                tag_name = text[name_start:i].lower()
                attr_start = i
                state = _State.ATTRIBUTES

        elif state is _State.ATTRIBUTES:
            delimiter = _TAG_END.search(text, i)
            if delimiter is None or delimiter.group() == "<":
                out.append("&lt;")
                i = region_start + 1
            else:
                end = delimiter.end()
                region = text[region_start:end]
                out.append(emit_tag(region, tag_name, text[attr_start : end - 1], closing))
                i = end
            state = _State.TEXT

        else:  # _State.MARKUP_DECLARATION
            if text.startswith("!--", i):
                close = text.find("-->", i + 1)
                end = n if close == -1 else close + 3
            elif i > last_gt:
                end = -1
            else:
                end = text.find(">", i) + 1
            if end == -1:
                out.append("&lt;")
            else:
                _log.debug("rejected markup declaration at offset %d", region_start)
                out.append(reject(text[region_start:end]))
                i = end
            state = _State.TEXT

    return "".join(out)
