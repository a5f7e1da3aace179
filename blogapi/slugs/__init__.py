"""
URL slugs for posts.
"""

from blogapi.slugs.generator import (
    FALLBACK_SLUG,
    MAX_ATTEMPTS,
    SLUG_PATTERN,
    ensure_unique,
    ensure_unique_async,
    generate_slug,
    require_valid_slug,
    slug_candidates,
    validate_slug,
)

__all__ = [
    "FALLBACK_SLUG",
    "MAX_ATTEMPTS",
    "SLUG_PATTERN",
    "generate_slug",
    "validate_slug",
    "require_valid_slug",
    "slug_candidates",
    "ensure_unique",
    "ensure_unique_async",
]
