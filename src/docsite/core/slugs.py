"""Slug derivation for tenant-scoped URL identifiers."""

import re
import secrets
from typing import Final

MAX_SLUG_LENGTH: Final[int] = 200
SLUG_REGEX: Final[str] = r"^[a-z0-9]+(-[a-z0-9]+)*$"

_NON_ALPHANUMERIC: Final[re.Pattern[str]] = re.compile(r"[^a-z0-9]+")
_SLUG_PATTERN: Final[re.Pattern[str]] = re.compile(SLUG_REGEX)


def generate_slug(value: str, max_length: int = MAX_SLUG_LENGTH) -> str:
    """Derive a URL-safe slug from a display name.

    Lowercases, collapses every run of non-alphanumeric characters into a
    single hyphen and trims hyphens from both ends. Deterministic: equal
    inputs always give equal slugs.

    Examples:
        >>> generate_slug("API Docs")
        'api-docs'
        >>> generate_slug("  Hello,   World!  ")
        'hello-world'
        >>> generate_slug("API Docs (Copy)")
        'api-docs-copy'

    Returns an empty string when the value holds no letters or digits;
    callers must treat that as invalid input.
    """
    slug = _NON_ALPHANUMERIC.sub("-", value.lower()).strip("-")
    if len(slug) > max_length:
        slug = slug[:max_length].rstrip("-")
    return slug


def with_suffix(slug: str, suffix: str | int, max_length: int = MAX_SLUG_LENGTH) -> str:
    """Append ``-<suffix>`` to a slug, trimming the base so the result fits."""
    tail = f"-{suffix}"
    base = slug[: max_length - len(tail)].rstrip("-")
    return f"{base}{tail}"


def random_suffix() -> str:
    """Short random hex suffix used when numbered candidates are exhausted."""
    return secrets.token_hex(4)


def is_valid_slug(slug: str) -> bool:
    """Check that a slug has canonical form (as produced by generate_slug)."""
    return 0 < len(slug) <= MAX_SLUG_LENGTH and bool(_SLUG_PATTERN.match(slug))
