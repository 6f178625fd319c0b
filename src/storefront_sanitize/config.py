"""Sanitizer options."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from types import MappingProxyType
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from storefront_sanitize.policy import ALLOWED_ATTRIBUTES, ALLOWED_TAGS, FORBIDDEN_TAGS
from storefront_sanitize.types import SanitizeError


class InvalidOptionsError(SanitizeError):
    """Raised when caller-supplied sanitizer options fail validation."""


def _normalize_names(names: Iterable[str], what: str) -> frozenset[str]:
    if isinstance(names, str) or not isinstance(names, Iterable):
        raise ValueError(f"{what} must be a collection of names, got {type(names).__name__}")
    normalized = set()
    for name in names:
        if not isinstance(name, str) or not name.strip():
            raise ValueError(f"{what} entries must be non-empty strings, got {name!r}")
        normalized.add(name.strip().lower())
    return frozenset(normalized)


class SanitizeOptions(BaseModel):
    """Per-call overrides for the sanitizer.

    Unset fields fall back to the tables in :mod:`storefront_sanitize.policy`.
    Names are lowercased on validation. ``script`` and ``style`` are removed
    from any tag allowlist, including an explicit override.

    Args:
        allowed_tags: Tag names to keep. ``None`` uses the default allowlist.
        allowed_attributes: Mapping of tag name (or ``"*"`` for every tag) to
            attribute-name patterns. A pattern ending in ``*`` matches by
            prefix. ``None`` uses the default allowlist.
        strip_tags: Remove disallowed tags when ``True``; render them as
            escaped text when ``False``.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="forbid")

    allowed_tags: frozenset[str] | None = Field(default=None, alias="allowedTags")
    allowed_attributes: Mapping[str, frozenset[str]] | None = Field(
        default=None, alias="allowedAttributes"
    )
    strip_tags: bool = Field(default=True, alias="stripTags")

    @field_validator("allowed_tags", mode="plain")
    @classmethod
    def _check_tags(cls, value: Any) -> Any:
        if value is None:
            return None
        return _normalize_names(value, "allowed_tags")

    @field_validator("allowed_attributes", mode="plain")
    @classmethod
    def _check_attributes(cls, value: Any) -> Any:
        if value is None:
            return None
        if not isinstance(value, Mapping):
            raise ValueError("allowed_attributes must be a mapping of tag name to attribute names")
        table: dict[str, frozenset[str]] = {}
        for tag, names in value.items():
            (key,) = _normalize_names([tag], "allowed_attributes keys")
            table[key] = table.get(key, frozenset()) | _normalize_names(
                names, f"allowed_attributes[{tag!r}]"
            )
        return MappingProxyType(table)

    def effective_tags(self) -> frozenset[str]:
        """Return the tag allowlist in force, without forbidden tags."""
        tags = ALLOWED_TAGS if self.allowed_tags is None else self.allowed_tags
        return tags - FORBIDDEN_TAGS

    def effective_attributes(self) -> Mapping[str, frozenset[str]]:
        """Return the attribute allowlist in force."""
        if self.allowed_attributes is None:
            return ALLOWED_ATTRIBUTES
        return self.allowed_attributes


DEFAULT_OPTIONS = SanitizeOptions()


def resolve_options(options: SanitizeOptions | Mapping[str, Any] | None) -> SanitizeOptions:
    """Coerce ``None``, a mapping, or an instance into :class:`SanitizeOptions`.

    Raises:
        InvalidOptionsError: If a mapping fails validation.
    """
    if options is None:
        return DEFAULT_OPTIONS
    if isinstance(options, SanitizeOptions):
        return options
    if not isinstance(options, Mapping):
        raise InvalidOptionsError(
            f"options must be a SanitizeOptions or a mapping, got {type(options).__name__}"
        )
    try:
        return SanitizeOptions.model_validate(dict(options))
    except ValidationError as exc:
        raise InvalidOptionsError(str(exc)) from exc
