"""Default allowlists and deny tables.

Every table here is immutable and built once at import time. Callers that
need a different policy pass overrides through
:class:`~storefront_sanitize.config.SanitizeOptions` instead of mutating
these objects.
"""

from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType

GLOBAL_KEY = "*"

ALLOWED_TAGS: frozenset[str] = frozenset(
    {
        # Text formatting
        "p", "br", "hr", "span", "div", "strong", "b", "em", "i", "u", "s",
        "strike", "del", "ins", "sub", "sup", "small", "mark", "abbr", "code",
        "pre", "blockquote", "q", "cite",
        # Headings
        "h1", "h2", "h3", "h4", "h5", "h6",
        # Lists
        "ul", "ol", "li", "dl", "dt", "dd",
        # Tables
        "table", "thead", "tbody", "tfoot", "tr", "th", "td", "caption",
        "colgroup", "col",
        # Links and media
        "a", "img", "figure", "figcaption", "picture", "source", "video", "audio",
        # Containers
        "section", "article", "aside", "header", "footer", "nav", "main",
        "details", "summary", "time", "address", "wbr",
    }
)  # fmt: skip

ALLOWED_ATTRIBUTES: Mapping[str, frozenset[str]] = MappingProxyType(
    {
        GLOBAL_KEY: frozenset(
            {"class", "id", "style", "title", "lang", "dir", "data-*", "aria-*", "role"}
        ),
        "a": frozenset({"href", "target", "rel", "download"}),
        "img": frozenset({"src", "alt", "width", "height", "loading", "decoding"}),
        "video": frozenset(
            {"src", "poster", "controls", "autoplay", "muted", "loop", "width", "height", "preload"}
        ),
        "audio": frozenset({"src", "controls", "autoplay", "muted", "loop", "preload"}),
        "source": frozenset({"src", "srcset", "type", "media", "sizes"}),
        "picture": frozenset(),
        "td": frozenset({"colspan", "rowspan"}),
        "th": frozenset({"colspan", "rowspan", "scope"}),
        "col": frozenset({"span"}),
        "colgroup": frozenset({"span"}),
        "time": frozenset({"datetime"}),
        "abbr": frozenset({"title"}),
        "blockquote": frozenset({"cite"}),
        "q": frozenset({"cite"}),
        "ol": frozenset({"start", "type", "reversed"}),
        "li": frozenset({"value"}),
    }
)

# Elements whose contents are executable or change how the rest of the
# document is parsed. Never allowed, whatever the caller passes.
FORBIDDEN_TAGS: frozenset[str] = frozenset({"script", "style"})

SELF_CLOSING_TAGS: frozenset[str] = frozenset(
    {"img", "br", "hr", "input", "meta", "link", "col", "source", "wbr"}
)

DANGEROUS_PROTOCOLS: tuple[str, ...] = ("javascript:", "data:", "vbscript:")

DANGEROUS_CSS_TOKENS: tuple[str, ...] = ("expression", "behavior", "-moz-binding", "javascript")

# Attributes holding a single URL.
URL_ATTRIBUTES: frozenset[str] = frozenset({"href", "src", "poster", "cite"})

# Attributes holding a comma-separated list of ``url [descriptor]`` candidates.
URL_LIST_ATTRIBUTES: frozenset[str] = frozenset({"srcset"})

SAFE_REL = "noopener noreferrer"
