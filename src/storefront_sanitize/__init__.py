"""storefront-sanitize: allowlist-based HTML sanitization for storefront content."""

__version__ = "0.1.0"

from storefront_sanitize.config import InvalidOptionsError, SanitizeOptions
from storefront_sanitize.escape import escape_text
from storefront_sanitize.log import get_logger
from storefront_sanitize.sanitizer import Sanitizer, create_safe_html, sanitize_html
from storefront_sanitize.style import sanitize_style
from storefront_sanitize.types import SafeHtml, SanitizeError
from storefront_sanitize.urls import is_safe_url

__all__ = [
    "InvalidOptionsError",
    "SafeHtml",
    "SanitizeError",
    "SanitizeOptions",
    "Sanitizer",
    "create_safe_html",
    "escape_text",
    "get_logger",
    "is_safe_url",
    "sanitize_html",
    "sanitize_style",
]
