"""Logger namespace for storefront-sanitize.

The library only emits records. Handlers, levels and formatting belong to
the host application; a ``NullHandler`` on the ``storefront_sanitize``
logger keeps it silent until the application configures logging.

Usage::

    from storefront_sanitize.log import get_logger

    log = get_logger("scanner")        # -> storefront_sanitize.scanner
"""

from __future__ import annotations

import logging

_PREFIX = "storefront_sanitize"

logging.getLogger(_PREFIX).addHandler(logging.NullHandler())


def get_logger(name: str) -> logging.Logger:
    """Return a stdlib ``Logger`` under the ``storefront_sanitize.`` namespace.

    If *name* does not start with the prefix, it is auto-prefixed.
    """
    if not name.startswith(f"{_PREFIX}.") and name != _PREFIX:
        name = f"{_PREFIX}.{name}"
    return logging.getLogger(name)
