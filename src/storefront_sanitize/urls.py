"""URL scheme checks."""

from __future__ import annotations

from storefront_sanitize.policy import DANGEROUS_PROTOCOLS


def is_safe_url(url: str | None) -> bool:
    """Return ``False`` if *url* uses a scheme that can execute script.

    Empty and ``None`` values are safe. The check is a prefix match on the
    trimmed, lowercased value; relative paths, fragments and any other
    scheme (``http:``, ``mailto:``, ``tel:`` ...) pass. No percent-decoding
    or other normalization is applied.

    Known gaps: browsers also drop a leading C0 control character (such as
    ``"\\x01javascript:"``) and remove tab and newline characters inside
    the scheme (``"java\\tscript:"``). Neither form is detected here.
    """
    if not url:
        return True
    return not url.strip().lower().startswith(DANGEROUS_PROTOCOLS)


def is_safe_srcset(value: str | None) -> bool:
    """Return ``True`` if every candidate URL in a ``srcset`` value is safe.

    Candidates are separated by commas; each is a URL optionally followed
    by a width or density descriptor.
    """
    if not value:
        return True
    for candidate in value.split(","):
        parts = candidate.split()
        if parts and not is_safe_url(parts[0]):
            return False
    return True
