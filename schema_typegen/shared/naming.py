"""Naming utilities for code generation."""

from __future__ import annotations

import re
from functools import lru_cache

_ACRONYM_BOUNDARY = re.compile(r"([A-Z]+)([A-Z][a-z])")
_CAMEL_BOUNDARY = re.compile(r"([a-z0-9])([A-Z])")
_SEPARATORS = re.compile(r"[^0-9A-Za-z]+")
_MEMBER_KEY_CHARS = re.compile(r"[.-]")


@lru_cache(maxsize=1024)
def singularize(name: str) -> str:
    """Convert a plural table name to singular form.

    The rules are applied in this exact order and deliberately carry no
    irregular-plural table, so previously generated names stay stable:

    1. ``...ies`` -> ``...y``
    2. ``...es``  -> ``...y``  (``boxes`` becomes ``boxy``)
    3. ``...s``   -> drop the ``s``
    4. anything else is returned unchanged
    """
    if name.endswith("ies"):
        return name[:-3] + "y"
    if name.endswith("es"):
        return name[:-2] + "y"
    if name.endswith("s"):
        return name[:-1]
    return name


@lru_cache(maxsize=1024)
def to_pascal_case(value: str) -> str:
    """Convert a string to PascalCase.

    Uses caching for repeated calls with the same input.

    Examples:
        >>> to_pascal_case("status_type")
        'StatusType'
        >>> to_pascal_case("order-items")
        'OrderItems'
        >>> to_pascal_case("userRoles")
        'UserRoles'
        >>> to_pascal_case("HTTPMethod")
        'HttpMethod'
    """
    # Handle already camelCase/PascalCase by inserting underscores before caps
    value = _ACRONYM_BOUNDARY.sub(r"\1_\2", value)
    value = _CAMEL_BOUNDARY.sub(r"\1_\2", value)

    parts = [part for part in _SEPARATORS.split(value) if part]
    return "".join(part.capitalize() for part in parts)


@lru_cache(maxsize=1024)
def sanitize_member_key(value: str) -> str:
    """Turn an enum label into a member key by replacing '.' and '-' with '_'."""
    return _MEMBER_KEY_CHARS.sub("_", value)
