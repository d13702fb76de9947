"""
Input validation utilities.

Handles:
- Field-level checks used by the request models (URLs, slugs, entry IDs, domains)
- Turning pydantic validation errors into one message that names the fields
- Search query sanitization
"""

import re
from typing import Any
from urllib.parse import urlparse

# =============================================================================
# PATTERNS
# =============================================================================

# Contentful entry IDs: letters, digits, '-', '_', '.', at most 64 chars
ENTRY_ID_PATTERN = re.compile(r'^[A-Za-z0-9._-]{1,64}$')

# Lowercase kebab-case: "vision", "text-to-speech"
SLUG_PATTERN = re.compile(r'^[a-z0-9]+(?:-[a-z0-9]+)*$')

# Bare host name, no scheme or path: "example.com", "www.ai-liftoff.dev"
DOMAIN_PATTERN = re.compile(
    r'^(?=.{1,253}$)(?:[A-Za-z0-9](?:[A-Za-z0-9-]{0,61}[A-Za-z0-9])?\.)+[A-Za-z]{2,63}$'
)


# =============================================================================
# FIELD VALIDATORS
# =============================================================================
# Each returns the value unchanged or raises ValueError; pydantic wraps
# the ValueError into a validation error for the field being checked.

def require_http_url(value: str) -> str:
    """
    Require an absolute http(s) URL.

    Raises:
        ValueError: If value has no http/https scheme or no host
    """
    parsed = urlparse(value)
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        raise ValueError(f"must be an absolute http(s) URL, got {value!r}")
    return value


def validate_entry_id(value: str) -> str:
    """
    Raise ValueError if value is not a well-formed entry ID.

    Anything outside the ID alphabet (spaces, slashes, quotes) is either a
    malformed ID or would be spliced into a backend URL path.
    """
    if not ENTRY_ID_PATTERN.match(value):
        raise ValueError(
            "must contain only letters, digits, '.', '-' and '_' (max 64 chars)"
        )
    return value


def validate_slug(value: str) -> str:
    """Raise ValueError unless value is lowercase kebab-case."""
    if not SLUG_PATTERN.match(value):
        raise ValueError(f"must be lowercase kebab-case (e.g. 'text-to-speech'), got {value!r}")
    return value


def validate_domain(value: str) -> str:
    """
    Raise ValueError unless value is a bare domain name.

    Example:
        >>> validate_domain("ai-liftoff.dev")
        'ai-liftoff.dev'
        >>> validate_domain("https://ai-liftoff.dev")
        Traceback (most recent call last):
        ...
        ValueError: must be a bare domain such as 'example.com', got 'https://ai-liftoff.dev'
    """
    if not DOMAIN_PATTERN.match(value):
        raise ValueError(f"must be a bare domain such as 'example.com', got {value!r}")
    return value


# =============================================================================
# ERROR FORMATTING
# =============================================================================

def field_name_from_loc(loc: tuple[Any, ...]) -> str:
    """
    Render a pydantic error location as a dotted field path.

    List indexes are shown in brackets: ("tags", 2) -> "tags[2]".
    """
    parts: list[str] = []
    for item in loc:
        if isinstance(item, int):
            parts.append(f"[{item}]")
        else:
            parts.append(("." if parts else "") + str(item))
    return "".join(parts) or "arguments"


def describe_validation_errors(errors: list[dict[str, Any]]) -> tuple[str, list[str]]:
    """
    Build one human-readable message from pydantic error dicts.

    Args:
        errors: ValidationError.errors() with the operation tag already
            stripped from each loc

    Returns:
        (message, offending field names in order of first appearance)
    """
    fields: list[str] = []
    lines: list[str] = []
    for error in errors:
        name = field_name_from_loc(tuple(error.get("loc", ())))
        if name not in fields:
            fields.append(name)
        if error.get("type") == "missing":
            lines.append(f"{name}: required field is missing")
        else:
            msg = str(error.get("msg", "invalid value"))
            # pydantic prefixes ValueErrors from our validators
            msg = msg.removeprefix("Value error, ")
            lines.append(f"{name}: {msg}")
    return "; ".join(lines), fields


# =============================================================================
# SEARCH QUERY SANITIZATION
# =============================================================================

def sanitize_search_query(query: str) -> str:
    """
    Sanitize user input for full-text entry search.

    Strips control characters and null bytes, collapses whitespace.

    Example:
        >>> sanitize_search_query("text\\x00 to   speech")
        'text to speech'
    """
    if not query:
        return query

    # Strip control characters (ASCII 0-31) and DEL (127)
    sanitized = ''.join(
        char for char in query
        if ord(char) >= 32 and ord(char) != 127
    )
    return " ".join(sanitized.split())
