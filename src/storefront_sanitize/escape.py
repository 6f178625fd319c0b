"""HTML entity escaping."""

from __future__ import annotations

_ENTITIES = str.maketrans(
    {
        "&": "&amp;",
        "<": "&lt;",
        ">": "&gt;",
        '"': "&quot;",
        "'": "&#x27;",
    }
)


def escape_html(text: str) -> str:
    """Replace the five HTML metacharacters with their entities.

    ``&`` is handled in the same single pass as the others, so existing
    entities are escaped again rather than preserved.
    """
    return text.translate(_ENTITIES)


def escape_text(text: str | None) -> str:
    """Escape *text* for display as plain text. ``None`` and ``""`` give ``""``."""
    if not text:
        return ""
    return escape_html(text)
