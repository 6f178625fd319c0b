"""Shared types for storefront-sanitize."""

from __future__ import annotations

from typing import TypedDict


class SanitizeError(Exception):
    """Base exception for all storefront-sanitize errors."""


SafeHtml = TypedDict("SafeHtml", {"__html": str})
