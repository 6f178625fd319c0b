"""Attribute tokenizing and allowlist filtering for a single tag."""

from __future__ import annotations

import html
import re
import string
from collections.abc import Mapping
from enum import Enum, auto

from storefront_sanitize.escape import escape_html
from storefront_sanitize.log import get_logger
from storefront_sanitize.policy import (
    ALLOWED_ATTRIBUTES,
    GLOBAL_KEY,
    SAFE_REL,
    URL_ATTRIBUTES,
    URL_LIST_ATTRIBUTES,
)
from storefront_sanitize.style import sanitize_style
from storefront_sanitize.urls import is_safe_srcset, is_safe_url

_log = get_logger("attributes")

_WHITESPACE = " \t\n\r\f"
_NAME_START = frozenset(string.ascii_letters)
_NAME_CHARS = frozenset(string.ascii_letters + string.digits + "-")
_UNQUOTED_END = re.compile(r"[ \t\n\r\f]")
_EVENT_HANDLER = re.compile(r"on[a-z]")


class _State(Enum):
    BEFORE_NAME = auto()
    NAME = auto()
    AFTER_NAME = auto()
    BEFORE_VALUE = auto()
    VALUE_DOUBLE = auto()
    VALUE_SINGLE = auto()
    VALUE_UNQUOTED = auto()


def tokenize_attributes(raw: str) -> list[tuple[str, str]]:
    """Split the text after a tag name into ``(name, value)`` pairs.

    Names are ASCII (``[A-Za-z][A-Za-z0-9-]*``) and returned lowercased;
    any other character found where a name could start is skipped. Values
    may be double-quoted, single-quoted or bare. An unterminated quote runs
    to the end of *raw*. A name without ``=`` gets ``""``. Character
    references in values are decoded.
    """
    attrs: list[tuple[str, str]] = []
    state = _State.BEFORE_NAME
    n = len(raw)
    i = 0
    name_start = 0
    name = ""

    while i < n:
        ch = raw[i]
        if state is _State.BEFORE_NAME:
            if ch in _NAME_START:
                name_start = i
                state = _State.NAME
            i += 1
        elif state is _State.NAME:
            if ch in _NAME_CHARS:
                i += 1
            else:
                name = raw[name_start:i].lower()
                state = _State.AFTER_NAME
        elif state is _State.AFTER_NAME:
            if ch in _WHITESPACE:
                i += 1
            elif ch == "=":
                state = _State.BEFORE_VALUE
                i += 1
            else:
                attrs.append((name, ""))
                state = _State.BEFORE_NAME
        elif state is _State.BEFORE_VALUE:
            if ch in _WHITESPACE:
                i += 1
            elif ch == '"':
                state = _State.VALUE_DOUBLE
                i += 1
            elif ch == "'":
                state = _State.VALUE_SINGLE
                i += 1
            else:
                state = _State.VALUE_UNQUOTED
        else:
            if state is _State.VALUE_UNQUOTED:
                found = _UNQUOTED_END.search(raw, i)
                end = found.start() if found else n
                resume = end
            else:
                end = raw.find('"' if state is _State.VALUE_DOUBLE else "'", i)
                if end == -1:
                    end = n
                resume = end + 1
            attrs.append((name, html.unescape(raw[i:end])))
            i = resume
            state = _State.BEFORE_NAME

    if state is _State.NAME:
        attrs.append((raw[name_start:].lower(), ""))
    elif state in (_State.AFTER_NAME, _State.BEFORE_VALUE):
        attrs.append((name, ""))
    elif state in (_State.VALUE_DOUBLE, _State.VALUE_SINGLE):
        # Opening quote was the last character.
        attrs.append((name, ""))
    return attrs


def is_attribute_allowed(
    tag_name: str,
    attr_name: str,
    allowed_attributes: Mapping[str, frozenset[str]] = ALLOWED_ATTRIBUTES,
) -> bool:
    """Check *attr_name* against the global and per-tag allowlists.

    Global patterns ending in ``*`` match by prefix (``data-*``). Event
    handler names (``on`` followed by a letter) are never allowed.
    """
    attr_name = attr_name.lower()
    if _EVENT_HANDLER.match(attr_name):
        return False
    for pattern in allowed_attributes.get(GLOBAL_KEY, ()):
        if pattern.endswith("*"):
            if attr_name.startswith(pattern[:-1]):
                return True
        elif attr_name == pattern:
            return True
    return attr_name in allowed_attributes.get(tag_name.lower(), ())


def filter_attributes(
    tag_name: str,
    raw: str,
    allowed_attributes: Mapping[str, frozenset[str]] = ALLOWED_ATTRIBUTES,
) -> str:
    """Filter and re-serialize the attributes of one tag.

    Returns zero or more `` name="value"`` fragments, each with a leading
    space, ready to follow the tag name. Only the first occurrence of each
    attribute name is considered. URL attributes with an unsafe scheme and
    styles that filter down to nothing are dropped. ``target="_blank"`` on
    ``a`` gets ``rel="noopener noreferrer"`` appended unless the tag keeps
    its own ``rel``.
    """
    tag_name = tag_name.lower()
    fragments: list[str] = []
    kept: set[str] = set()
    seen: set[str] = set()
    opens_new_window = False

    for name, value in tokenize_attributes(raw):
        if name in seen:
            continue
        seen.add(name)

        if not is_attribute_allowed(tag_name, name, allowed_attributes):
            _log.debug("dropped attribute %r on <%s>", name, tag_name)
            continue
        if name in URL_ATTRIBUTES and not is_safe_url(value):
            _log.debug("dropped unsafe %s=%r on <%s>", name, value, tag_name)
            continue
        if name in URL_LIST_ATTRIBUTES and not is_safe_srcset(value):
            _log.debug("dropped unsafe %s=%r on <%s>", name, value, tag_name)
            continue
        if name == "style":
            value = sanitize_style(value)
            if not value:
                continue
        if tag_name == "a" and name == "target" and value.lower() == "_blank":
            opens_new_window = True

        fragments.append(f' {name}="{escape_html(value)}"')
        kept.add(name)

    if opens_new_window and "rel" not in kept:
        fragments.append(f' rel="{SAFE_REL}"')
    return "".join(fragments)
